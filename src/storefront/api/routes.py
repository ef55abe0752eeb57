"""FastAPI routes for orders, carts and store catalogues."""

import json

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from storefront.api.schemas import (
    CartSchema,
    CheckoutItemSchema,
    OrderListResponse,
    PlaceOrderRequest,
    PlaceOrderResponse,
    StoreResponse,
)
from storefront.auth import get_auth_context, membership_capability
from storefront.auth.port import AuthContext
from storefront.cart.cart import Cart
from storefront.cart.management import SaveCart
from storefront.errors import InvalidRequest, PersistenceFailure, Unauthenticated
from storefront.order.placement import place_order
from storefront.order.queries import list_orders
from storefront.store.queries import store_catalogue

logger = structlog.get_logger(__name__)


def _require_user(auth: AuthContext) -> str:
    user_id = auth.current_user_id()
    if not user_id:
        raise Unauthenticated()
    return user_id


def _checkout_items(raw) -> list[dict]:
    """Normalise item aliases (``id``, ``productId``) to ``product_id``."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise InvalidRequest()

    items = []
    for entry in raw:
        if not isinstance(entry, dict):
            raise InvalidRequest("Every item needs a product id")
        item = CheckoutItemSchema.model_validate(entry)
        items.append({"product_id": item.product_id, "quantity": item.quantity})
    return items


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", response_model=PlaceOrderResponse)
def create_orders(
    body: PlaceOrderRequest,
    auth: AuthContext = Depends(get_auth_context),
) -> PlaceOrderResponse:
    """Place the checkout as one order per store and empty the caller's cart."""
    user_id = _require_user(auth)
    order_ids = place_order(
        customer_id=user_id,
        address_id=body.address_id,
        items=_checkout_items(body.items),
        payment_method=body.payment_method,
        coupon_code=body.coupon_code,
        is_member=auth.has_capability(membership_capability()),
    )
    return PlaceOrderResponse(order_ids=order_ids)


@order_router.get("", response_model=OrderListResponse)
def get_orders(auth: AuthContext = Depends(get_auth_context)) -> OrderListResponse:
    """List the caller's cash orders and paid card orders, newest first."""
    user_id = _require_user(auth)
    try:
        orders = list_orders(user_id)
    except Exception as exc:
        logger.exception("Failed to load orders", customer_id=user_id)
        raise PersistenceFailure("Could not load orders") from exc
    return OrderListResponse(orders=orders)


# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartSchema)
def get_cart(auth: AuthContext = Depends(get_auth_context)) -> CartSchema:
    user_id = _require_user(auth)
    cart = current_domain.repository_for(Cart).for_customer(user_id)
    return CartSchema(cart=cart.contents() if cart else {})


@cart_router.put("", response_model=CartSchema)
def save_cart(body: CartSchema, auth: AuthContext = Depends(get_auth_context)) -> CartSchema:
    user_id = _require_user(auth)
    current_domain.process(
        SaveCart(customer_id=user_id, contents=json.dumps(body.cart)),
        asynchronous=False,
    )
    cart = current_domain.repository_for(Cart).for_customer(user_id)
    return CartSchema(cart=cart.contents())


# ---------------------------------------------------------------------------
# Store Router
# ---------------------------------------------------------------------------
store_router = APIRouter(prefix="/store", tags=["store"])


@store_router.get("/data", response_model=StoreResponse)
def get_store_data(username: str | None = None):
    """Public catalogue of an active store, looked up by username (case-insensitive)."""
    if not username or not username.strip():
        return JSONResponse(status_code=400, content={"error": "Missing username"})
    return StoreResponse(**store_catalogue(username))
