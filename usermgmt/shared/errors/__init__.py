from .base import AppError, DomainError, ServiceUnavailableError, ValidationError
from .http import handle_app_error, register_error_handler
from .validation import body_error, format_pydantic_errors, raise_validation_error

__all__ = [
    "AppError",
    "DomainError",
    "ServiceUnavailableError",
    "ValidationError",
    "body_error",
    "format_pydantic_errors",
    "handle_app_error",
    "raise_validation_error",
    "register_error_handler",
]
