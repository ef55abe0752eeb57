"""Address aggregate — a delivery address saved by a customer."""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.aggregate
class Address:
    customer_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    email = String(max_length=255)
    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    zip = String(required=True, max_length=20)
    country = String(required=True, max_length=100)
    phone = String(max_length=30)
    created_at = DateTime()

    @classmethod
    def create(cls, customer_id, name, street, city, zip, country, **details):
        return cls(
            customer_id=customer_id,
            name=name,
            street=street,
            city=city,
            zip=zip,
            country=country,
            created_at=datetime.now(UTC),
            **details,
        )


@storefront.repository(part_of=Address)
class AddressRepository:
    def find_by_id(self, address_id) -> Address | None:
        try:
            return self.get(str(address_id))
        except ObjectNotFoundError:
            return None
