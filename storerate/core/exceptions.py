"""Application exceptions.

Repositories and services raise these; the handlers registered in
``storerate.main`` turn them into ``{"message": ...}`` JSON responses with
the matching status code.
"""


class StoreRatingError(Exception):
    """Base class for all expected application failures."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StoreRatingError):
    """Raised when input is malformed or out of range."""

    status_code = 400
    default_message = "Invalid input"


class Unauthenticated(StoreRatingError):
    """Raised when a request carries no valid session."""

    status_code = 401
    default_message = "Unauthorized"


class Forbidden(StoreRatingError):
    """Raised when the caller lacks the role or ownership required."""

    status_code = 403
    default_message = "Forbidden"


class NotFound(StoreRatingError):
    """Raised when a referenced entity does not exist."""

    status_code = 404
    default_message = "Not found"


class Conflict(StoreRatingError):
    """Raised when a write would break a uniqueness rule.

    Reported as 400 to keep the contract the web client already handles.
    """

    status_code = 400
    default_message = "Conflict"


class DuplicateEmailError(Conflict):
    default_message = "Email already exists"


class DuplicateRatingError(Conflict):
    default_message = "You have already rated this store"
