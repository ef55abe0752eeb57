"""Pydantic request/response schemas for the Storefront API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Request bodies use camelCase field names.
"""

from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Order placement
# ---------------------------------------------------------------------------
class CheckoutItemSchema(BaseModel):
    """Item shape is checked by the placement engine and reported as InvalidRequest."""

    product_id: Any = Field(default=None, validation_alias=AliasChoices("id", "productId", "product_id"))
    quantity: Any = None


class PlaceOrderRequest(BaseModel):
    """Missing fields are reported by the placement engine, not by schema validation."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "addressId": "addr-001",
                    "items": [{"id": "prod-001", "quantity": 2}],
                    "couponCode": "WELCOME10",
                    "paymentMethod": "COD",
                }
            ]
        },
    )

    address_id: str | None = Field(default=None, alias="addressId")
    items: Any = None  # list of CheckoutItemSchema-shaped objects
    coupon_code: str | None = Field(default=None, alias="couponCode")
    payment_method: str | None = Field(default=None, alias="paymentMethod")


class PlaceOrderResponse(BaseModel):
    message: str = "Order placed successfully"
    order_ids: list[str]


# ---------------------------------------------------------------------------
# Order history
# ---------------------------------------------------------------------------
class ProductSnapshotSchema(BaseModel):
    id: str
    store_id: str
    name: str
    price: float
    mrp: float | None = None
    images: list[str] = []
    category: str | None = None


class OrderItemResponse(BaseModel):
    product_id: str
    quantity: int
    price: float
    product: ProductSnapshotSchema | None = None


class AddressResponse(BaseModel):
    id: str
    name: str
    email: str | None = None
    street: str
    city: str
    state: str | None = None
    zip: str
    country: str
    phone: str | None = None


class OrderResponse(BaseModel):
    id: str
    customer_id: str
    store_id: str
    address_id: str
    total: float
    shipping_fee: float | None = 0.0
    payment_method: str
    is_paid: bool
    is_coupon_used: bool
    coupon: dict[str, Any] = {}
    status: str
    created_at: datetime | None = None
    items: list[OrderItemResponse]
    address: AddressResponse | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class CartSchema(BaseModel):
    cart: dict[str, int]


# ---------------------------------------------------------------------------
# Store catalogue
# ---------------------------------------------------------------------------
class RatingResponse(BaseModel):
    id: str
    customer_id: str
    order_id: str
    rating: int
    review: str | None = None
    created_at: datetime | None = None


class StoreProductResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    mrp: float | None = None
    price: float
    images: list[str] = []
    category: str | None = None
    in_stock: bool
    rating: list[RatingResponse] = []


class StoreResponse(BaseModel):
    id: str
    owner_id: str
    name: str
    username: str
    description: str | None = None
    address: str | None = None
    email: str | None = None
    contact: str | None = None
    logo: str | None = None
    status: str
    is_active: bool
    created_at: datetime | None = None
    products: list[StoreProductResponse] = []
