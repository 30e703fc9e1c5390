"""Cart API routes for mock backend"""

import logging
from fastapi import APIRouter, Depends

from ..models.cart import AddToCartRequest, UpdateCartItemRequest, ApplyCouponRequest
from ..database.carts import cart_db, serialize_cart
from ..database.coupons import coupon_db, CouponRejected
from ..database.products import product_db
from ..errors import APIError
from .deps import require_user, ok

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/cart", tags=["Cart"])


@router.get("")
async def get_cart(user_id: str = Depends(require_user)):
    """Get the user's cart"""
    return ok(serialize_cart(cart_db.get_cart(user_id)))


@router.post("/add")
async def add_to_cart(request: AddToCartRequest, user_id: str = Depends(require_user)):
    """Add an item to the cart"""
    product = product_db.get_product(request.product_id)
    if not product:
        raise APIError(404, "Product not found")

    cart = cart_db.add_item(user_id, product, request.quantity)
    return ok(serialize_cart(cart), f"Added {request.quantity}x {product.name} to cart")


@router.put("/update/{product_id}")
async def update_cart_item(
    product_id: str,
    request: UpdateCartItemRequest,
    user_id: str = Depends(require_user),
):
    """Update item quantity in cart"""
    if cart_db.find_item(cart_db.get_cart(user_id), product_id) and not product_db.get_product(product_id):
        raise APIError(409, "Product is no longer available")

    cart = cart_db.update_item_quantity(user_id, product_id, request.quantity)
    if not cart:
        raise APIError(404, "Item not in cart")
    return ok(serialize_cart(cart), "Cart updated")


@router.delete("/remove/{product_id}")
async def remove_from_cart(product_id: str, user_id: str = Depends(require_user)):
    """Remove an item from the cart"""
    cart = cart_db.remove_item(user_id, product_id)
    if not cart:
        raise APIError(404, "Item not in cart")
    return ok(serialize_cart(cart), "Item removed")


@router.delete("/clear")
async def clear_cart(user_id: str = Depends(require_user)):
    """Clear all items from cart"""
    return ok(serialize_cart(cart_db.clear_cart(user_id)), "Cart cleared")


@router.post("/apply-coupon")
async def apply_coupon(request: ApplyCouponRequest, user_id: str = Depends(require_user)):
    """Apply a coupon to the cart"""
    cart = cart_db.get_cart(user_id)
    if not cart.items:
        raise APIError(400, "Cannot apply a coupon to an empty cart")

    try:
        coupon = coupon_db.validate(request.coupon_code, cart.subtotal)
    except CouponRejected as e:
        raise APIError(e.status_code, e.message) from e

    cart = cart_db.set_coupon(user_id, coupon.code)
    logger.info(f"Coupon {coupon.code} applied for {user_id}: -{cart.discount}")
    return ok(serialize_cart(cart), "Coupon applied")


@router.delete("/remove-coupon")
async def remove_coupon(user_id: str = Depends(require_user)):
    """Remove the applied coupon"""
    return ok(serialize_cart(cart_db.set_coupon(user_id, None)), "Coupon removed")
