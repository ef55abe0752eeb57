"""Order placement — command, handler and the entry point used by the API.

A checkout may contain products from several stores. It becomes one Order
per store, and every order is written together with the cart reset inside
the handler's unit of work: either all of them land, or none do.

Checks run before anything is written, first failure wins:
    1. address, payment method and at least one item are present
    2. the coupon exists and has not expired
    3. a new-user coupon is only redeemed by a customer without orders
    4. a member coupon is only redeemed by a member
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.coupon.coupon import Coupon
from storefront.domain import storefront
from storefront.errors import (
    CouponIneligible,
    CouponNotFound,
    InvalidRequest,
    OrderingError,
    PersistenceFailure,
    ProductNotFound,
    Unauthenticated,
)
from storefront.order.order import Order, PaymentMethod
from storefront.order.pricing import CartItem, PricedItem, quote_groups
from storefront.product.product import Product

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    """Place one order per store for the items of a customer's checkout."""

    customer_id = Identifier(required=True)
    address_id = Identifier()
    items = Text()  # JSON: list of {product_id, quantity}
    payment_method = String(max_length=20)
    coupon_code = String(max_length=50)
    is_member = Boolean(default=False)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        requested = json.loads(command.items) if command.items else []
        if not command.address_id or not command.payment_method or not requested:
            raise InvalidRequest()

        cart_items = [_cart_item(raw) for raw in requested]
        payment_method = _payment_method(command.payment_method)
        is_member = bool(command.is_member)

        coupon = None
        if command.coupon_code:
            coupon = _redeemable_coupon(command.coupon_code, command.customer_id, is_member)

        priced_items = [_priced_item(item) for item in cart_items]
        quotes = quote_groups(
            priced_items,
            discount_percent=coupon.discount if coupon else None,
            is_member=is_member,
        )

        order_repo = current_domain.repository_for(Order)
        order_ids = []
        for quote in quotes:
            order = Order.place(
                customer_id=command.customer_id,
                store_id=quote.store_id,
                address_id=command.address_id,
                payment_method=payment_method,
                lines=[(item.product_id, item.quantity, item.unit_price) for item in quote.items],
                total=quote.total,
                shipping_fee=quote.shipping_fee,
                coupon=coupon.snapshot() if coupon else None,
            )
            order_repo.add(order)
            order_ids.append(str(order.id))

            logger.info(
                "Order placed",
                order_id=str(order.id),
                customer_id=str(command.customer_id),
                store_id=quote.store_id,
                total=quote.total,
                shipping_fee=quote.shipping_fee,
            )

        _clear_cart(command.customer_id)
        return order_ids


def _cart_item(raw) -> CartItem:
    if not isinstance(raw, dict) or not raw.get("product_id"):
        raise InvalidRequest("Every item needs a product id")

    quantity = raw.get("quantity")
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
        raise InvalidRequest(f"Invalid quantity for product {raw['product_id']}")

    return CartItem(product_id=str(raw["product_id"]), quantity=quantity)


def _payment_method(value: str) -> str:
    try:
        return PaymentMethod(value.upper()).value
    except ValueError:
        raise InvalidRequest(f"Unsupported payment method: {value}") from None


def _redeemable_coupon(code, customer_id, is_member) -> Coupon:
    coupon = current_domain.repository_for(Coupon).find_by_code(code)
    if coupon is None or coupon.is_expired():
        raise CouponNotFound()

    if coupon.for_new_user and current_domain.repository_for(Order).count_for_customer(customer_id) > 0:
        raise CouponIneligible("This coupon is only for new users")

    if coupon.for_member and not is_member:
        raise CouponIneligible("This coupon is only for members")

    return coupon


def _priced_item(item: CartItem) -> PricedItem:
    product = current_domain.repository_for(Product).find_by_id(item.product_id)
    if product is None:
        raise ProductNotFound(item.product_id)
    if product.price is None or not product.store_id:
        raise PersistenceFailure(f"Product {item.product_id} has no price or store")

    return PricedItem(
        product_id=str(product.id),
        store_id=str(product.store_id),
        quantity=item.quantity,
        unit_price=product.price,
    )


def _clear_cart(customer_id):
    repo = current_domain.repository_for(Cart)
    cart = repo.for_customer(customer_id)
    if cart is None:
        return
    cart.clear()
    repo.add(cart)
    logger.info("Cart cleared", customer_id=str(customer_id))


def place_order(
    customer_id,
    address_id,
    items,
    payment_method,
    coupon_code=None,
    is_member=False,
) -> list[str]:
    """Place a checkout and return the ids of the created orders, one per store.

    Args:
        items: Sequence of dicts with product_id and quantity.
        is_member: Whether the customer holds an active membership.

    Raises:
        OrderingError: A subclass naming why the checkout was rejected.
            Failures that are not ordering rules surface as PersistenceFailure.
    """
    if not customer_id:
        raise Unauthenticated()

    if items is not None and not isinstance(items, (list, tuple)):
        raise InvalidRequest()
    items = list(items or [])

    try:
        command = PlaceOrder(
            customer_id=customer_id,
            address_id=address_id or None,
            items=json.dumps(items),
            payment_method=payment_method or None,
            coupon_code=coupon_code or None,
            is_member=bool(is_member),
        )
    except ValidationError as exc:
        raise InvalidRequest() from exc

    logger.info(
        "Placing order",
        customer_id=str(customer_id),
        item_count=len(items),
        coupon_code=coupon_code,
    )
    try:
        return current_domain.process(command, asynchronous=False)
    except OrderingError as exc:
        logger.warning(
            "Order placement rejected",
            customer_id=str(customer_id),
            code=exc.code,
            reason=exc.message,
        )
        raise
    except Exception as exc:
        logger.exception("Order placement failed", customer_id=str(customer_id))
        raise PersistenceFailure() from exc
