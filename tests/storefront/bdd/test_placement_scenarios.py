"""BDD tests for order placement."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

from storefront.cart.cart import Cart
from storefront.errors import OrderingError
from storefront.order.order import Order
from storefront.order.placement import place_order

scenarios("features/order_placement.feature")

CUSTOMER = "user-001"


def _parse_cart(cart: str) -> dict[str, int]:
    """Parse ``"p1:2,p2:1"`` into ``{"p1": 2, "p2": 1}``."""
    contents = {}
    for entry in cart.split(","):
        product_id, _, quantity = entry.strip().partition(":")
        contents[product_id] = int(quantity)
    return contents


@pytest.fixture()
def checkout():
    """Mutable checkout state shared between steps."""
    return {"is_member": False, "order_ids": [], "error": None}


def _check_out(checkout, address, cart, coupon_code=None):
    items = [{"product_id": pid, "quantity": qty} for pid, qty in _parse_cart(cart).items()]
    try:
        checkout["order_ids"] = place_order(
            customer_id=CUSTOMER,
            address_id=str(address.id),
            items=items,
            payment_method="COD",
            coupon_code=coupon_code,
            is_member=checkout["is_member"],
        )
    except OrderingError as exc:
        checkout["error"] = exc


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("the catalogue has products from two stores")
def _(catalogue):
    pass


@given("the customer has a saved address")
def _(address):
    pass


@given(parsers.cfparse('the customer saved the cart "{cart}"'))
def _(cart):
    saved = Cart.create(customer_id=CUSTOMER)
    saved.replace_contents(_parse_cart(cart))
    current_domain.repository_for(Cart).add(saved)


@given(parsers.cfparse('a coupon "{code}" worth {discount:d} percent'))
def _(add_coupon, code, discount):
    add_coupon(code=code, discount=float(discount))


@given(parsers.cfparse('a member coupon "{code}" worth {discount:d} percent'))
def _(add_coupon, code, discount):
    add_coupon(code=code, discount=float(discount), for_member=True)


@given("the customer is a member")
def _(checkout):
    checkout["is_member"] = True


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the customer checks out "{cart}"'))
def _(checkout, address, cart):
    _check_out(checkout, address, cart)


@when(parsers.cfparse('the customer redeems coupon "{code}" on checkout of "{cart}"'))
def _(checkout, address, code, cart):
    _check_out(checkout, address, cart, coupon_code=code)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("{count:d} orders are placed"))
def _(checkout, count):
    assert checkout["error"] is None
    assert len(checkout["order_ids"]) == count
    assert current_domain.repository_for(Order).count_for_customer(CUSTOMER) == count


@then(parsers.cfparse('the order for store "{store_id}" totals {amount:f}'))
def _(checkout, store_id, amount):
    repo = current_domain.repository_for(Order)
    (order,) = [o for o in map(repo.get, checkout["order_ids"]) if str(o.store_id) == store_id]
    assert order.total == pytest.approx(amount)


@then(parsers.cfparse('the checkout is rejected with "{code}"'))
def _(checkout, code):
    assert checkout["error"] is not None
    assert checkout["error"].code == code


@then("no orders are placed")
def _():
    assert current_domain.repository_for(Order).count_for_customer(CUSTOMER) == 0


@then("the customer's cart is empty")
def _():
    assert current_domain.repository_for(Cart).for_customer(CUSTOMER).contents() == {}


@then(parsers.cfparse('the customer\'s cart still holds "{cart}"'))
def _(cart):
    assert current_domain.repository_for(Cart).for_customer(CUSTOMER).contents() == _parse_cart(cart)
