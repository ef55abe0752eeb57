import pytest
from protean import current_domain
from protean.integrations.pytest import DomainFixture

from storefront.address.address import Address
from storefront.coupon.coupon import Coupon
from storefront.product.product import Product
from storefront.store.store import Store, StoreStatus


@pytest.fixture(scope="session")
def storefront_bed():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    bed = DomainFixture(storefront)
    bed.setup()
    setup_db(storefront)
    yield bed
    drop_db(storefront)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def catalogue():
    """Two approved stores, s1 and s2, each with products.

    p1 (10.00) and p3 (2.50) belong to s1, p2 (20.00) to s2.
    """
    store_repo = current_domain.repository_for(Store)
    for store_id, username in (("s1", "gadgets"), ("s2", "books")):
        store_repo.add(
            Store(
                id=store_id,
                owner_id=f"owner-{store_id}",
                name=username.title(),
                username=username,
                status=StoreStatus.APPROVED.value,
                is_active=True,
            )
        )

    product_repo = current_domain.repository_for(Product)
    product_repo.add(Product(id="p1", store_id="s1", name="Headphones", price=10.0, mrp=12.0))
    product_repo.add(Product(id="p2", store_id="s2", name="Novel", price=20.0, mrp=20.0))
    product_repo.add(Product(id="p3", store_id="s1", name="Cable", price=2.5, mrp=3.0))


@pytest.fixture()
def address():
    address = Address.create(
        customer_id="user-001",
        name="Ada Lovelace",
        street="12 Analytical Row",
        city="London",
        zip="N1 9GU",
        country="UK",
        email="ada@example.com",
    )
    current_domain.repository_for(Address).add(address)
    return address


@pytest.fixture()
def add_coupon():
    def _add(code="SAVE10", discount=10.0, **flags):
        coupon = Coupon.create(code=code, discount=discount, **flags)
        current_domain.repository_for(Coupon).add(coupon)
        return coupon

    return _add
