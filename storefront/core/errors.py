"""
Storefront error taxonomy

Every failure that reaches the cart store or checkout is one of these
classes, so callers can display ``error.message`` without caring which
transport problem produced it.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .constants import (
    GENERIC_ERROR_MESSAGE,
    NETWORK_ERROR_MESSAGE,
    UNAUTHORIZED_MESSAGE,
    CONFLICT_MESSAGE,
    VALIDATION_ERROR_MESSAGE,
    INVALID_COUPON_MESSAGE,
)


@dataclass(frozen=True)
class FieldError:
    """One itemized validation failure"""
    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class StorefrontError(Exception):
    """Base exception for storefront client errors"""

    default_message = GENERIC_ERROR_MESSAGE

    def __init__(self, message: Optional[str] = None, status: Optional[int] = None):
        self.message = message or self.default_message
        self.status = status
        super().__init__(self.message)


class NetworkError(StorefrontError):
    """No response received (connectivity, timeout, backend down)"""
    default_message = NETWORK_ERROR_MESSAGE

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, status=0)


class AuthError(StorefrontError):
    """Session is no longer valid (401)"""
    default_message = UNAUTHORIZED_MESSAGE

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, status=401)


class ConflictError(StorefrontError):
    """Cart contents changed server-side (stock, removed product)"""
    default_message = CONFLICT_MESSAGE

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, status=409)


class ValidationError(StorefrontError):
    """Request rejected with field-level errors, or failed a local check"""
    default_message = VALIDATION_ERROR_MESSAGE

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[list[FieldError]] = None,
        status: Optional[int] = None,
    ):
        super().__init__(message, status=status)
        self.errors = list(errors or [])

    def field_messages(self) -> list[str]:
        """Itemized ``field: message`` lines, or the top-level message"""
        if self.errors:
            return [str(error) for error in self.errors]
        return [self.message]


class CheckoutValidationError(ValidationError):
    """Order preconditions not met; no request was sent"""


class InvalidCouponError(StorefrontError):
    """Coupon rejected (expired, ineligible, already used)"""
    default_message = INVALID_COUPON_MESSAGE


class StorefrontAPIError(StorefrontError):
    """Any other non-success response"""


def _lookup(value: Any, key: str) -> Any:
    if isinstance(value, dict):
        return value.get(key)
    return getattr(value, key, None)


def extract_error_message(error: Any, fallback: str = GENERIC_ERROR_MESSAGE) -> str:
    """
    Pull a single human-readable message out of an error value.

    Checked in order: a plain string, a ``message`` field, a nested
    ``response.data.message`` field. Anything else yields ``fallback``.
    """
    if isinstance(error, str):
        return error or fallback

    message = _lookup(error, "message")
    if isinstance(message, str) and message:
        return message

    response = _lookup(error, "response")
    data = _lookup(response, "data") if response is not None else None
    nested = _lookup(data, "message") if data is not None else None
    if isinstance(nested, str) and nested:
        return nested

    return fallback


def parse_field_errors(raw: Any) -> list[FieldError]:
    """Convert a backend ``errors`` list into FieldError entries"""
    if not isinstance(raw, list):
        return []

    errors = []
    for entry in raw:
        if isinstance(entry, dict):
            errors.append(FieldError(
                field=str(entry.get("field") or "Validation"),
                message=str(entry.get("message") or VALIDATION_ERROR_MESSAGE),
            ))
        elif isinstance(entry, str):
            errors.append(FieldError(field="Validation", message=entry))
    return errors
