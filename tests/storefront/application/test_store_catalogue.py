import pytest
from protean import current_domain

from storefront.errors import StoreNotFound
from storefront.product.product import Product
from storefront.product.rating import Rating
from storefront.store.queries import store_catalogue
from storefront.store.store import Store


@pytest.fixture()
def store():
    store = Store.register(
        owner_id="owner-001",
        name="Gadget Hub",
        username="GadgetHub",
        description="Things that plug in",
        email="hello@gadgethub.example",
    )
    store.approve()
    current_domain.repository_for(Store).add(store)
    return store


class TestStoreCatalogue:
    def test_store_details(self, store):
        catalogue = store_catalogue("gadgethub")
        assert catalogue["id"] == str(store.id)
        assert catalogue["name"] == "Gadget Hub"
        assert catalogue["username"] == "gadgethub"
        assert catalogue["is_active"] is True
        assert catalogue["products"] == []

    def test_username_lookup_ignores_case(self, store):
        assert store_catalogue("GADGETHUB")["id"] == str(store.id)

    def test_products_with_ratings(self, store):
        product = Product.create(
            store_id=str(store.id),
            name="Charger",
            price=15.0,
            images=["https://cdn.example/charger.png"],
        )
        current_domain.repository_for(Product).add(product)
        current_domain.repository_for(Product).add(
            Product.create(store_id="another-store", name="Lamp", price=30.0)
        )
        current_domain.repository_for(Rating).add(
            Rating(product_id=str(product.id), customer_id="user-001", order_id="ord-1", rating=4, review="Fast")
        )

        (listed,) = store_catalogue("gadgethub")["products"]
        assert listed["name"] == "Charger"
        assert listed["mrp"] == 15.0
        assert listed["images"] == ["https://cdn.example/charger.png"]
        assert [(r["rating"], r["review"]) for r in listed["rating"]] == [(4, "Fast")]

    def test_unknown_username(self, store):
        with pytest.raises(StoreNotFound):
            store_catalogue("nobody")

    def test_inactive_store_is_not_found(self, store):
        store.is_active = False
        current_domain.repository_for(Store).add(store)
        with pytest.raises(StoreNotFound):
            store_catalogue("gadgethub")

    def test_pending_store_is_not_found(self):
        current_domain.repository_for(Store).add(Store.register(owner_id="owner-002", name="New", username="newshop"))
        with pytest.raises(StoreNotFound):
            store_catalogue("newshop")
