"""Quiz-related constants shared across core, server and UI layers."""

PLACEHOLDER_ICON: str = "📝"
SYSTEM_CREATOR: str = "system"

OPTIONS_PER_QUESTION: int = 4
MIN_TIME_LIMIT_SECONDS: int = 5
MAX_TIME_LIMIT_SECONDS: int = 300
DEFAULT_TIME_LIMIT_SECONDS: int = 30

NO_ANSWER: str = "No answer"
CELEBRATION_THRESHOLD_PERCENT: int = 70
LEADERBOARD_SIZE: int = 10
TIMER_WARNING_SECONDS: int = 10
TIMER_DANGER_SECONDS: int = 5
