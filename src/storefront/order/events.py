"""Domain events for the Order aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """An order for one store's share of a customer's cart was placed."""

    __version__ = 1

    order_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    store_id = Identifier(required=True)
    address_id = Identifier(required=True)
    total = Float(required=True)
    shipping_fee = Float(default=0.0)
    payment_method = String(required=True)
    is_coupon_used = Boolean(default=False)
    item_count = Integer(required=True)
    placed_at = DateTime(required=True)
