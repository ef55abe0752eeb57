"""Cart splitting and per-store pricing for order placement.

Pure functions over plain values, so the rules can be exercised without a
domain context:

- Items are grouped by store in the order each store is first seen in the
  cart; items keep their cart order inside a group.
- Each group's subtotal is reduced by the coupon discount (a percentage).
- A flat shipping fee is added to the first group only, and only for
  customers without a membership.
- Each group total is rounded to two decimals.
"""

from dataclasses import dataclass

SHIPPING_FEE = 5.0


@dataclass(frozen=True)
class CartItem:
    product_id: str
    quantity: int


@dataclass(frozen=True)
class PricedItem:
    product_id: str
    store_id: str
    quantity: int
    unit_price: float

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class GroupQuote:
    store_id: str
    items: tuple[PricedItem, ...]
    subtotal: float
    discount: float
    shipping_fee: float
    total: float


def partition_by_store(items) -> dict[str, list[PricedItem]]:
    """Group priced items by store, first-seen store first."""
    groups: dict[str, list[PricedItem]] = {}
    for item in items:
        groups.setdefault(item.store_id, []).append(item)
    return groups


def quote_group(store_id, items, discount_percent=None, shipping_fee=0.0) -> GroupQuote:
    subtotal = sum(item.line_total for item in items)
    discount = subtotal * discount_percent / 100 if discount_percent else 0.0
    total = round(subtotal - discount + shipping_fee, 2)
    return GroupQuote(
        store_id=store_id,
        items=tuple(items),
        subtotal=subtotal,
        discount=discount,
        shipping_fee=shipping_fee,
        total=total,
    )


def quote_groups(items, discount_percent=None, is_member=False) -> list[GroupQuote]:
    """Price every store group of a checkout, charging shipping at most once."""
    quotes = []
    shipping_charged = False
    for store_id, group_items in partition_by_store(items).items():
        shipping_fee = 0.0
        if not is_member and not shipping_charged:
            shipping_fee = SHIPPING_FEE
            shipping_charged = True
        quotes.append(quote_group(store_id, group_items, discount_percent, shipping_fee))
    return quotes
