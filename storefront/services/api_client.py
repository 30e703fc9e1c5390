"""
Storefront API Client

HTTP client for the storefront REST backend.
Classifies every failure into the storefront error taxonomy.
"""

import logging
from typing import Optional, Any

import httpx

from ..core.config import Settings
from ..core.constants import (
    CartEndpoints,
    OrderEndpoints,
    NOT_FOUND_MESSAGE,
    SERVER_ERROR_MESSAGE,
    GENERIC_ERROR_MESSAGE,
)
from ..core.errors import (
    StorefrontError,
    NetworkError,
    AuthError,
    ConflictError,
    ValidationError,
    InvalidCouponError,
    StorefrontAPIError,
    parse_field_errors,
)

logger = logging.getLogger(__name__)


def _error_message(payload: Any, status: int) -> str:
    """Pick the backend's message out of an error body"""
    if isinstance(payload, dict):
        for key in ("message", "detail"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    if status == 404:
        return NOT_FOUND_MESSAGE
    if status >= 500:
        return SERVER_ERROR_MESSAGE
    return GENERIC_ERROR_MESSAGE


class StorefrontClient:
    """
    Client for the storefront cart and order APIs.

    Returns decoded JSON exactly as the backend sent it, whether a bare
    object or a ``{success, data}`` envelope. Callers unwrap.
    """

    def __init__(
        self,
        base_url: str,
        auth_token: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize storefront client.

        Args:
            base_url: Base URL of the storefront API (including any /api prefix)
            auth_token: Bearer token for the signed-in user
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests, ASGI apps)
        """
        self.base_url = base_url.rstrip("/")
        self.auth_token = auth_token
        self._http_client = httpx.AsyncClient(timeout=timeout, transport=transport)

        if not auth_token:
            logger.warning("No auth token provided - cart requests will be rejected")

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "StorefrontClient":
        """Create client from application settings"""
        return cls(
            base_url=settings.api_base_url,
            auth_token=settings.get_auth_token(),
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close HTTP client"""
        await self._http_client.aclose()

    def set_auth_token(self, token: Optional[str]) -> None:
        """Swap the bearer token after login or logout"""
        self.auth_token = token

    def _generate_headers(self) -> dict[str, str]:
        """Generate headers including the bearer token if available"""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: Optional[dict] = None,
        params: Optional[dict] = None,
    ) -> Any:
        """Make an HTTP request and classify any failure"""
        url = f"{self.base_url}{path}"
        logger.debug(f"API request: {method} {url} body={body}")

        try:
            response = await self._http_client.request(
                method=method,
                url=url,
                headers=self._generate_headers(),
                json=body,
                params=params,
            )
        except httpx.TimeoutException as e:
            logger.error(f"Request timed out: {method} {url}")
            raise NetworkError() from e
        except httpx.RequestError as e:
            logger.error(f"Network error: {method} {url} - {e}")
            raise NetworkError() from e

        try:
            payload = response.json() if response.content else {}
        except ValueError:
            payload = {}

        if response.status_code >= 400:
            raise self._classify(response.status_code, payload)

        logger.debug(f"API response: {response.status_code} {url}")
        return payload

    def _classify(self, status: int, payload: Any) -> StorefrontError:
        """Map an error response onto the error taxonomy"""
        message = _error_message(payload, status)

        if status == 401:
            logger.warning(f"Unauthorized: {message}")
            return AuthError(message)

        if status == 409:
            logger.warning(f"Conflict: {message}")
            return ConflictError(message)

        errors = parse_field_errors(payload.get("errors")) if isinstance(payload, dict) else []
        if status in (400, 422) and errors:
            logger.warning(f"Validation failed: {message} {errors}")
            return ValidationError(message, errors=errors, status=status)

        logger.error(f"Request failed: {status} - {message}")
        return StorefrontAPIError(message, status=status)

    # ==================== Cart APIs ====================

    async def get_cart(self) -> Any:
        """Get the signed-in user's cart"""
        return await self._request("GET", CartEndpoints.GET)

    async def add_to_cart(self, product_id: str, quantity: int = 1) -> Any:
        """Add item to cart; the backend merges with an existing line"""
        return await self._request(
            "POST",
            CartEndpoints.ADD,
            body={"productId": product_id, "quantity": quantity},
        )

    async def update_cart_item(self, product_id: str, quantity: int) -> Any:
        """Update item quantity in cart"""
        return await self._request(
            "PUT",
            f"{CartEndpoints.UPDATE}/{product_id}",
            body={"quantity": quantity},
        )

    async def remove_from_cart(self, product_id: str) -> Any:
        """Remove item from cart"""
        return await self._request("DELETE", f"{CartEndpoints.REMOVE}/{product_id}")

    async def clear_cart(self) -> Any:
        """Clear entire cart"""
        return await self._request("DELETE", CartEndpoints.CLEAR)

    async def apply_coupon(self, coupon_code: str) -> Any:
        """Apply coupon to cart"""
        try:
            return await self._request(
                "POST",
                CartEndpoints.APPLY_COUPON,
                body={"couponCode": coupon_code},
            )
        except (StorefrontAPIError, ValidationError) as e:
            if e.status is not None and 400 <= e.status < 500:
                raise InvalidCouponError(e.message, status=e.status) from e
            raise

    async def remove_coupon(self) -> Any:
        """Remove coupon from cart"""
        return await self._request("DELETE", CartEndpoints.REMOVE_COUPON)

    # ==================== Order APIs ====================

    async def create_order(self, order_data: dict) -> Any:
        """Create order from the current cart"""
        return await self._request("POST", OrderEndpoints.CREATE, body=order_data)

    async def list_orders(self, page: int = 1, limit: int = 10) -> Any:
        """Get the signed-in user's orders"""
        return await self._request(
            "GET",
            OrderEndpoints.LIST,
            params={"page": page, "limit": limit},
        )

    async def get_order(self, order_id: str) -> Any:
        """Get order details"""
        return await self._request("GET", f"{OrderEndpoints.DETAIL}/{order_id}")
