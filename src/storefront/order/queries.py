"""Order history — the orders a customer can see, with items and address.

Read-only: nothing here mutates state, so callers may retry freely.
"""

from protean.utils.globals import current_domain

from storefront.address.address import Address
from storefront.order.order import ORDER_HISTORY_LIMIT, Order
from storefront.product.product import Product


def list_orders(customer_id, limit: int = ORDER_HISTORY_LIMIT) -> list[dict]:
    """Return the customer's visible orders, most recent first.

    Cash-on-delivery orders are always listed; card orders only once paid.
    Each item carries a snapshot of its product (None when the product has
    been removed since) and each order its delivery address (None when the
    address no longer exists).
    """
    orders = current_domain.repository_for(Order).visible_for_customer(customer_id, limit=limit)

    product_repo = current_domain.repository_for(Product)
    address_repo = current_domain.repository_for(Address)

    products = {}
    addresses = {}
    history = []
    for order in orders:
        items = []
        for item in order.items:
            product_id = str(item.product_id)
            if product_id not in products:
                products[product_id] = product_repo.find_by_id(product_id)
            items.append(
                {
                    "product_id": product_id,
                    "quantity": item.quantity,
                    "price": item.price,
                    "product": _product_snapshot(products[product_id]),
                }
            )

        address_id = str(order.address_id)
        if address_id not in addresses:
            addresses[address_id] = address_repo.find_by_id(address_id)

        history.append(
            {
                "id": str(order.id),
                "customer_id": str(order.customer_id),
                "store_id": str(order.store_id),
                "address_id": address_id,
                "total": order.total,
                "shipping_fee": order.shipping_fee,
                "payment_method": order.payment_method,
                "is_paid": bool(order.is_paid),
                "is_coupon_used": bool(order.is_coupon_used),
                "coupon": order.coupon_snapshot(),
                "status": order.status,
                "created_at": order.created_at,
                "items": items,
                "address": _address_snapshot(addresses[address_id]),
            }
        )
    return history


def _product_snapshot(product: Product | None) -> dict | None:
    if product is None:
        return None
    return {
        "id": str(product.id),
        "store_id": str(product.store_id),
        "name": product.name,
        "price": product.price,
        "mrp": product.mrp,
        "images": product.image_urls(),
        "category": product.category,
    }


def _address_snapshot(address: Address | None) -> dict | None:
    if address is None:
        return None
    return {
        "id": str(address.id),
        "name": address.name,
        "email": address.email,
        "street": address.street,
        "city": address.city,
        "state": address.state,
        "zip": address.zip,
        "country": address.country,
        "phone": address.phone,
    }
