"""Shared constants for the storefront client"""

from enum import Enum


class ProductType(str, Enum):
    PHYSICAL = "physical"
    DIGITAL = "digital"


class CartEndpoints:
    GET = "/cart"
    ADD = "/cart/add"
    UPDATE = "/cart/update"
    REMOVE = "/cart/remove"
    CLEAR = "/cart/clear"
    APPLY_COUPON = "/cart/apply-coupon"
    REMOVE_COUPON = "/cart/remove-coupon"


class OrderEndpoints:
    CREATE = "/orders"
    LIST = "/orders"
    DETAIL = "/orders"


# User-facing messages
NETWORK_ERROR_MESSAGE = "Network error. Please check your connection."
UNAUTHORIZED_MESSAGE = "You are not authorized. Please login."
NOT_FOUND_MESSAGE = "Resource not found."
SERVER_ERROR_MESSAGE = "Server error. Please try again later."
VALIDATION_ERROR_MESSAGE = "Please check your input and try again."
CONFLICT_MESSAGE = "Your cart changed on the server. Please refresh and try again."
GENERIC_ERROR_MESSAGE = "An error occurred"
UNREADABLE_CART_MESSAGE = "Received an unreadable cart from the server."

INVALID_COUPON_MESSAGE = "Invalid coupon code"
COUPON_REQUIRED_MESSAGE = "Coupon code is required"
ADDRESS_REQUIRED_MESSAGE = "Please select a shipping address"
PAYMENT_METHOD_REQUIRED_MESSAGE = "Please select a payment method"
EMPTY_CART_MESSAGE = "Your cart is empty"

# Client-side routes used after checkout
ORDER_LIST_ROUTE = "/orders"
ORDER_DETAIL_ROUTE = "/orders/{order_id}"
