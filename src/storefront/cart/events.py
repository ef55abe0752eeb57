"""Domain events for the Cart aggregate."""

from protean.fields import Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Cart")
class CartSaved:
    """The customer's cart contents were replaced."""

    __version__ = 1

    customer_id = Identifier(required=True)
    item_count = Integer(required=True)


@storefront.event(part_of="Cart")
class CartCleared:
    """The customer's cart was emptied, usually because its items were ordered."""

    __version__ = 1

    customer_id = Identifier(required=True)
    cleared_item_count = Integer(required=True)
