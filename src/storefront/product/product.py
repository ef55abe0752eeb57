"""Product aggregate — a sellable item listed by exactly one store.

The price stored here is the only price the ordering flow trusts; prices
sent by clients are never used.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Float, Identifier, String, Text

from storefront.domain import storefront


@storefront.aggregate
class Product:
    store_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    mrp = Float(min_value=0.0)
    price = Float(required=True, min_value=0.0)
    images = Text()  # JSON array of image URLs
    category = String(max_length=100)
    in_stock = Boolean(default=True)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, store_id, name, price, mrp=None, description=None, images=None, category=None):
        now = datetime.now(UTC)
        return cls(
            store_id=store_id,
            name=name,
            price=price,
            mrp=mrp if mrp is not None else price,
            description=description,
            images=json.dumps(images or []),
            category=category,
            in_stock=True,
            created_at=now,
            updated_at=now,
        )

    def image_urls(self) -> list[str]:
        return json.loads(self.images) if self.images else []


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_by_id(self, product_id) -> Product | None:
        try:
            return self.get(str(product_id))
        except ObjectNotFoundError:
            return None

    def for_store(self, store_id) -> list[Product]:
        return self._dao.query.filter(store_id=str(store_id)).all().items
