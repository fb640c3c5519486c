"""Domain errors raised by the service layer.

Each error carries the HTTP status it maps to; ``main.py`` registers a single
handler that turns any ``AppError`` into ``{"detail": ..., **extra}``.
"""

from typing import Any

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "Internal server error"

    def __init__(self, detail: str | None = None, **extra: Any) -> None:
        self.detail = detail or self.default_detail
        self.extra = extra
        super().__init__(self.detail)

    def to_body(self) -> dict[str, Any]:
        return {"detail": self.detail, **self.extra}


class AuthenticationFailed(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Authentication required"


class PermissionDenied(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Permission denied"


class PlanLimitExceeded(AppError):
    """Subscription denial. Carries ``current_count`` and ``limit``."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Subscription limit exceeded"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict"


class ValidationFailed(AppError):
    """Invalid input. Carries field-level ``errors``."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input"


class InvalidStateTransition(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid state transition"


class ServiceUnavailable(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Service unavailable"
