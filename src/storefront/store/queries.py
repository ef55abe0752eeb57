"""Public store catalogue — a store with its products and their ratings."""

from protean.utils.globals import current_domain

from storefront.errors import StoreNotFound
from storefront.product.product import Product
from storefront.product.rating import Rating
from storefront.store.store import Store


def store_catalogue(username: str) -> dict:
    """Look up an active store by username, case-insensitively.

    Raises:
        StoreNotFound: No active store uses this username.
    """
    store = current_domain.repository_for(Store).find_active_by_username(username)
    if store is None:
        raise StoreNotFound()

    rating_repo = current_domain.repository_for(Rating)
    products = [
        {
            "id": str(product.id),
            "name": product.name,
            "description": product.description,
            "mrp": product.mrp,
            "price": product.price,
            "images": product.image_urls(),
            "category": product.category,
            "in_stock": bool(product.in_stock),
            "rating": [
                {
                    "id": str(rating.id),
                    "customer_id": str(rating.customer_id),
                    "order_id": str(rating.order_id),
                    "rating": rating.rating,
                    "review": rating.review,
                    "created_at": rating.created_at,
                }
                for rating in rating_repo.for_product(product.id)
            ],
        }
        for product in current_domain.repository_for(Product).for_store(store.id)
    ]

    return {
        "id": str(store.id),
        "owner_id": str(store.owner_id),
        "name": store.name,
        "username": store.username,
        "description": store.description,
        "address": store.address,
        "email": store.email,
        "contact": store.contact,
        "logo": store.logo,
        "status": store.status,
        "is_active": bool(store.is_active),
        "created_at": store.created_at,
        "products": products,
    }
