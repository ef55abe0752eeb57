"""Order aggregate — one seller's share of a customer's checkout.

A checkout that spans several stores produces one Order per store. Line
items carry the unit price read from the catalogue at placement time, and
``total`` is final: subtotal, less the coupon discount, plus the shipping
fee when this order was the one charged for it.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.order.events import OrderPlaced

ORDER_HISTORY_LIMIT = 100


class OrderStatus(Enum):
    ORDER_PLACED = "ORDER_PLACED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"


class PaymentMethod(Enum):
    COD = "COD"
    CARD = "CARD"


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)  # Unit price at placement time


@storefront.aggregate
class Order:
    customer_id = Identifier(required=True)
    store_id = Identifier(required=True)
    address_id = Identifier(required=True)
    total = Float(required=True, min_value=0.0)
    shipping_fee = Float(default=0.0)
    payment_method = String(required=True, choices=PaymentMethod)
    is_paid = Boolean(default=False)
    is_coupon_used = Boolean(default=False)
    coupon = Text()  # JSON snapshot of the applied coupon, "{}" when none
    status = String(choices=OrderStatus, default=OrderStatus.ORDER_PLACED.value)
    items = HasMany(OrderItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def place(
        cls,
        customer_id,
        store_id,
        address_id,
        payment_method,
        lines,
        total,
        shipping_fee=0.0,
        coupon=None,
    ):
        """Create an order from already-priced lines.

        Args:
            lines: Iterable of (product_id, quantity, unit_price).
            coupon: Snapshot dict of the applied coupon, or None.
        """
        lines = list(lines)
        if not lines:
            raise ValidationError({"items": ["An order needs at least one item"]})

        now = datetime.now(UTC)
        order = cls(
            customer_id=customer_id,
            store_id=store_id,
            address_id=address_id,
            total=total,
            shipping_fee=shipping_fee,
            payment_method=payment_method,
            is_paid=False,
            is_coupon_used=coupon is not None,
            coupon=json.dumps(coupon or {}),
            status=OrderStatus.ORDER_PLACED.value,
            created_at=now,
            updated_at=now,
        )
        for product_id, quantity, unit_price in lines:
            order.add_items(OrderItem(product_id=product_id, quantity=quantity, price=unit_price))

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                customer_id=str(customer_id),
                store_id=str(store_id),
                address_id=str(address_id),
                total=total,
                shipping_fee=shipping_fee,
                payment_method=payment_method,
                is_coupon_used=order.is_coupon_used,
                item_count=len(lines),
                placed_at=now,
            )
        )
        return order

    def coupon_snapshot(self) -> dict:
        return json.loads(self.coupon) if self.coupon else {}


@storefront.repository(part_of=Order)
class OrderRepository:
    def count_for_customer(self, customer_id) -> int:
        return self._dao.query.filter(customer_id=str(customer_id)).all().total

    def visible_for_customer(self, customer_id, limit: int = ORDER_HISTORY_LIMIT) -> list[Order]:
        """Orders the customer may see, most recent first.

        Cash orders are listed straight away, card orders only once paid.
        """
        cash_orders = (
            self._dao.query.filter(customer_id=str(customer_id), payment_method=PaymentMethod.COD.value)
            .order_by("-created_at")
            .limit(limit)
            .all()
            .items
        )
        paid_card_orders = (
            self._dao.query.filter(
                customer_id=str(customer_id),
                payment_method=PaymentMethod.CARD.value,
                is_paid=True,
            )
            .order_by("-created_at")
            .limit(limit)
            .all()
            .items
        )
        orders = sorted(cash_orders + paid_card_orders, key=lambda order: order.created_at, reverse=True)
        return orders[:limit]
