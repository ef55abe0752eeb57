"""Errors raised while placing and reading orders.

Each error carries a stable ``code`` naming its kind. The HTTP layer maps
codes to status codes; nothing in the domain knows about HTTP.
"""


class OrderingError(Exception):
    code = "ORDERING_ERROR"
    default_message = "Order processing failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(OrderingError):
    code = "UNAUTHENTICATED"
    default_message = "Unauthorized"


class InvalidRequest(OrderingError):
    code = "INVALID_REQUEST"
    default_message = "missing order details."


class CouponNotFound(OrderingError):
    code = "COUPON_NOT_FOUND"
    default_message = "Invalid or expired coupon code"


class CouponIneligible(OrderingError):
    code = "COUPON_INELIGIBLE"
    default_message = "This coupon cannot be applied to this order"


class ProductNotFound(OrderingError):
    code = "PRODUCT_NOT_FOUND"
    default_message = "Product not found"

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found")


class StoreNotFound(OrderingError):
    code = "STORE_NOT_FOUND"
    default_message = "Store not found"


class PersistenceFailure(OrderingError):
    code = "PERSISTENCE_FAILURE"
    default_message = "Could not save the order, please try again"
