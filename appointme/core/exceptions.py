"""
Application error taxonomy.

Workflows raise these; the handlers registered in `appointme.main` render them
as `{"success": false, "message": ...}` with the matching status code.
"""


class AppError(Exception):
    status_code: int = 500
    default_message: str = "An internal server error occurred."

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 422
    default_message = "Validation failed"


class AuthError(AppError):
    status_code = 401
    default_message = "Could not validate credentials"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "You are not allowed to perform this action"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Resource not found"


class ConflictError(AppError):
    status_code = 409
    default_message = "The request conflicts with the current state"


class SelfBookingError(ConflictError):
    status_code = 403
    default_message = "You cannot book your own service"


class InternalError(AppError):
    """Persistence failure; the cause is chained and logged, never rendered."""
    status_code = 500


class ExternalServiceError(Exception):
    """Failure of the external text generation service."""

    def __init__(self, reason: str, detail: str = ""):
        self.reason = reason
        self.detail = detail
        super().__init__(f"{reason}: {detail}" if detail else reason)
