"""Error taxonomy shared by the service, the HTTP layer and the client."""

from __future__ import annotations


class AretoError(Exception):
    """Base class for every error raised by the Areto core."""

    status_code: int = 500


class ValidationError(AretoError):
    """Missing or malformed caller input."""

    status_code = 400


class NotFoundError(AretoError):
    """No quiz exists with the requested id."""

    status_code = 404


class ForbiddenError(AretoError):
    """The caller does not own the quiz it tries to change."""

    status_code = 403


class StorageError(AretoError):
    """The persistence layer failed."""

    status_code = 500


class InvalidIdError(StorageError):
    """The supplied id is not in the store's identifier format."""


class RateLimitedError(AretoError):
    """Too many requests from the same source."""

    status_code = 429
