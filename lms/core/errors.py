"""Domain error taxonomy. Each error carries the HTTP status and code it maps to."""


class LMSError(Exception):
    """Base class for errors raised by services and auth dependencies."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(LMSError):
    """Missing, malformed or out-of-range input."""

    status_code = 422
    code = "VALIDATION_ERROR"


class ConflictError(LMSError):
    """Duplicate email/name, or an enrollment that already exists."""

    status_code = 409
    code = "CONFLICT"


class UnauthenticatedError(LMSError):
    """No credential was presented."""

    status_code = 401
    code = "UNAUTHENTICATED"


class InvalidTokenError(UnauthenticatedError):
    """Token signature is bad, the token expired, or its subject is gone."""

    code = "INVALID_TOKEN"


class InvalidCredentialsError(LMSError):
    """Login failed. Does not say whether the email exists."""

    status_code = 401
    code = "INVALID_CREDENTIALS"


class ForbiddenError(LMSError):
    """Authenticated, but the caller may not perform this operation."""

    status_code = 403
    code = "FORBIDDEN"


class NotFoundError(LMSError):
    """No matching resource or ledger row."""

    status_code = 404
    code = "NOT_FOUND"


class InternalError(LMSError):
    """Unexpected store failure."""
