from .base import (
    AppError,
    InfrastructureError,
    InvalidOperationError,
    NotFoundOrForbiddenError,
    UnauthenticatedError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "InfrastructureError",
    "InvalidOperationError",
    "NotFoundOrForbiddenError",
    "UnauthenticatedError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
