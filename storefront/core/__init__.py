# Core modules

from .config import settings, get_settings, Settings
from .errors import (
    StorefrontError,
    NetworkError,
    AuthError,
    ConflictError,
    ValidationError,
    CheckoutValidationError,
    InvalidCouponError,
    StorefrontAPIError,
    FieldError,
    extract_error_message,
)
from .formatting import format_currency

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "StorefrontError",
    "NetworkError",
    "AuthError",
    "ConflictError",
    "ValidationError",
    "CheckoutValidationError",
    "InvalidCouponError",
    "StorefrontAPIError",
    "FieldError",
    "extract_error_message",
    "format_currency",
]
