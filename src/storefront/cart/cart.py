"""Cart aggregate — the per-customer mapping of product to quantity.

There is exactly one cart per customer, keyed by the customer's id. The
ordering flow reads the items from the request and empties the cart once
every order of the request has been written.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer

from storefront.cart.events import CartCleared, CartSaved
from storefront.domain import storefront


@storefront.entity(part_of="Cart")
class CartLine:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.aggregate
class Cart:
    customer_id = Identifier(identifier=True)
    items = HasMany(CartLine)
    updated_at = DateTime()

    @classmethod
    def create(cls, customer_id):
        return cls(customer_id=customer_id, updated_at=datetime.now(UTC))

    def contents(self) -> dict[str, int]:
        return {str(line.product_id): line.quantity for line in self.items}

    def replace_contents(self, contents):
        """Replace every line of the cart with ``{product_id: quantity}``.

        Lines with a zero quantity are dropped, negative quantities are rejected.
        """
        for product_id, quantity in contents.items():
            if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 0:
                raise ValidationError({"quantity": [f"Invalid quantity for product {product_id}"]})

        self._remove_all_lines()
        for product_id, quantity in contents.items():
            if quantity > 0:
                self.add_items(CartLine(product_id=product_id, quantity=quantity))
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartSaved(
                customer_id=str(self.customer_id),
                item_count=len(self.items),
            )
        )

    def clear(self):
        cleared = len(self.items)
        self._remove_all_lines()
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CartCleared(
                customer_id=str(self.customer_id),
                cleared_item_count=cleared,
            )
        )

    def _remove_all_lines(self):
        for line in list(self.items):
            self.remove_items(line)


@storefront.repository(part_of=Cart)
class CartRepository:
    def for_customer(self, customer_id) -> Cart | None:
        try:
            return self.get(str(customer_id))
        except ObjectNotFoundError:
            return None
