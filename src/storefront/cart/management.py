"""Commands and handler for saving and clearing carts.

Saving replaces the whole cart. Clients hold the cart locally and sync it
in one write.
"""

import json

from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront


@storefront.command(part_of="Cart")
class SaveCart:
    customer_id = Identifier(required=True)
    contents = Text(required=True)  # JSON: {product_id: quantity}


@storefront.command(part_of="Cart")
class ClearCart:
    customer_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(SaveCart)
    def save_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_customer(command.customer_id) or Cart.create(customer_id=command.customer_id)

        contents = json.loads(command.contents) if isinstance(command.contents, str) else command.contents
        cart.replace_contents(contents)
        repo.add(cart)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_customer(command.customer_id)
        if cart is None:
            return
        cart.clear()
        repo.add(cart)
