import pytest
from protean.exceptions import ValidationError

from storefront.cart.cart import Cart
from storefront.cart.events import CartCleared, CartSaved


@pytest.fixture()
def cart():
    return Cart.create(customer_id="user-001")


class TestCartContents:
    def test_new_cart_is_empty(self, cart):
        assert cart.contents() == {}

    def test_replace_contents(self, cart):
        cart.replace_contents({"p1": 2, "p2": 1})
        assert cart.contents() == {"p1": 2, "p2": 1}

    def test_replace_drops_previous_lines(self, cart):
        cart.replace_contents({"p1": 2})
        cart.replace_contents({"p3": 4})
        assert cart.contents() == {"p3": 4}

    def test_zero_quantity_removes_line(self, cart):
        cart.replace_contents({"p1": 2, "p2": 0})
        assert cart.contents() == {"p1": 2}

    def test_negative_quantity_is_rejected(self, cart):
        cart.replace_contents({"p1": 2})
        with pytest.raises(ValidationError):
            cart.replace_contents({"p1": -1})
        assert cart.contents() == {"p1": 2}

    def test_non_integer_quantity_is_rejected(self, cart):
        with pytest.raises(ValidationError):
            cart.replace_contents({"p1": "two"})

    def test_save_raises_cart_saved(self, cart):
        cart.replace_contents({"p1": 2, "p2": 1})
        event = next(e for e in cart._events if isinstance(e, CartSaved))
        assert event.item_count == 2


class TestClearCart:
    def test_clear_empties_cart(self, cart):
        cart.replace_contents({"p1": 2, "p2": 1})
        cart.clear()
        assert cart.contents() == {}

    def test_clear_raises_cart_cleared(self, cart):
        cart.replace_contents({"p1": 2, "p2": 1})
        cart.clear()
        event = next(e for e in cart._events if isinstance(e, CartCleared))
        assert event.customer_id == "user-001"
        assert event.cleared_item_count == 2
