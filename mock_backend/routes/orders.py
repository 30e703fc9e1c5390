"""Order API routes for mock backend"""

import logging
from fastapi import APIRouter, Depends

from ..models.order import CreateOrderRequest, PaymentMethod
from ..models.product import ProductType
from ..database.carts import cart_db
from ..database.orders import order_db
from ..errors import APIError
from .deps import require_user, ok

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["Orders"])


@router.post("", status_code=201)
async def create_order(request: CreateOrderRequest, user_id: str = Depends(require_user)):
    """
    Place an order from the user's cart.

    A shipping address is required when the cart holds a physical product
    and ignored otherwise. The cart itself is left for the client to clear.
    """
    cart = cart_db.get_cart(user_id)
    if not cart.items:
        raise APIError(400, "Cart is empty")

    errors = []
    try:
        payment_method = PaymentMethod(request.payment_method)
    except ValueError:
        errors.append({"field": "paymentMethod", "message": "Invalid payment method"})

    has_physical = any(item.product_snapshot.type == ProductType.PHYSICAL for item in cart.items)
    if has_physical and not request.shipping_address:
        errors.append({
            "field": "shippingAddress",
            "message": "Shipping address is required for physical products",
        })

    if errors:
        raise APIError(400, "Validation failed", errors)

    order = order_db.create_order(
        cart=cart,
        payment_method=payment_method,
        shipping_address=request.shipping_address if has_physical else None,
        notes=request.notes,
    )
    logger.info(f"Order {order.order_id} created for {user_id}: {order.total}")
    return ok(order.model_dump(by_alias=True, mode="json"), "Order placed successfully")


@router.get("")
async def list_orders(page: int = 1, limit: int = 10, user_id: str = Depends(require_user)):
    """List the user's orders"""
    page = max(page, 1)
    limit = min(max(limit, 1), 100)
    orders, total = order_db.list_orders(user_id, page=page, limit=limit)
    return {
        "success": True,
        "data": [order.model_dump(by_alias=True, mode="json") for order in orders],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "pages": max((total + limit - 1) // limit, 1),
        },
    }


@router.get("/{order_id}")
async def get_order(order_id: str, user_id: str = Depends(require_user)):
    """Get order details"""
    order = order_db.get_order(user_id, order_id)
    if not order:
        raise APIError(404, "Order not found")
    return ok(order.model_dump(by_alias=True, mode="json"))
