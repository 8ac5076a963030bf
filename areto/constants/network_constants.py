"""Network configuration constants for Areto."""

DEFAULT_HOST: str = "127.0.0.1"
DEFAULT_PORT: int = 5000
API_PREFIX: str = "/api"
DEFAULT_API_BASE_URL: str = f"http://{DEFAULT_HOST}:{DEFAULT_PORT}{API_PREFIX}"
REQUEST_TIMEOUT_SECONDS: float = 10.0

RATE_LIMIT_MAX_REQUESTS: int = 100
RATE_LIMIT_WINDOW_SECONDS: int = 60
RATE_LIMIT_MESSAGE: str = "Too many requests, please try again later."
