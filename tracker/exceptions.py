"""Application exceptions.

Services raise these; the handlers registered in ``main.py`` turn them into
JSON responses with the matching HTTP status code.
"""


class TrackerError(Exception):
    """Base exception for all tracker errors."""

    status_code = 500

    def __init__(self, message: str = "server error"):
        self.message = message
        super().__init__(message)


class ValidationError(TrackerError):
    """Raised when input is missing or malformed."""

    status_code = 400


class Unauthenticated(TrackerError):
    """Raised when the bearer credential is missing, invalid or expired."""

    status_code = 401

    def __init__(self, message: str = "invalid token"):
        super().__init__(message)


class Forbidden(TrackerError):
    """Raised when the principal's role or scope does not allow the action."""

    status_code = 403

    def __init__(self, message: str = "forbidden"):
        super().__init__(message)


class NotFound(TrackerError):
    """Raised when a resource is absent or not visible to the requester."""

    status_code = 404

    def __init__(self, message: str = "not found"):
        super().__init__(message)


class Conflict(TrackerError):
    """Raised on unique constraint violations, e.g. a duplicate email.

    Reported as 400 to match the rest of the API's client errors.
    """

    status_code = 400


class InternalError(TrackerError):
    """Raised for storage or unexpected failures."""

    status_code = 500
