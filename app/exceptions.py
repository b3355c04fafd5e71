"""Application exceptions.

Services raise these; the handler registered in main.py turns every AppError
into a ``{"success": false, "message": ...}`` response with the class's status
code. ConfigurationError is deliberately outside that hierarchy: it is only
raised while the process starts and is never translated into a response.
"""


class ConfigurationError(Exception):
    """Settings the application cannot run without are missing or invalid."""


class AppError(Exception):
    """Base class for errors reported to API clients."""

    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    default_message = "Invalid request"


class InvalidOrExpired(AppError):
    """A one-time token or code is unknown, already used, or past its expiry."""

    status_code = 400
    default_message = "Invalid or expired code"


class InvalidCredentials(AppError):
    """Unknown email or wrong password. The two cases are never distinguished."""

    status_code = 401
    default_message = "Invalid credentials"


class Unauthorized(AppError):
    status_code = 401
    default_message = "Not authenticated"


class InvalidToken(Unauthorized):
    default_message = "Invalid or expired token"


class EmailNotVerified(AppError):
    status_code = 403
    default_message = "Please verify your email address before logging in"


class PendingActivation(AppError):
    status_code = 403
    default_message = "Your account is pending activation by an administrator"


class Forbidden(AppError):
    status_code = 403
    default_message = "Not authorized to perform this action"


class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "Resource already exists"


class DeliveryError(AppError):
    """The mail transport refused or failed to deliver a message."""

    status_code = 502
    default_message = "Email could not be sent"
