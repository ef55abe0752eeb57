"""Store aggregate — a seller's storefront, addressed publicly by its username."""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Identifier, String, Text

from storefront.domain import storefront


class StoreStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@storefront.aggregate
class Store:
    owner_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    username = String(required=True, max_length=100)  # Always stored lower-case
    description = Text()
    address = Text()
    email = String(max_length=255)
    contact = String(max_length=50)
    logo = String(max_length=500)
    status = String(choices=StoreStatus, default=StoreStatus.PENDING.value)
    is_active = Boolean(default=False)
    created_at = DateTime()

    @classmethod
    def register(cls, owner_id, name, username, **details):
        return cls(
            owner_id=owner_id,
            name=name,
            username=username.strip().lower(),
            status=StoreStatus.PENDING.value,
            is_active=False,
            created_at=datetime.now(UTC),
            **details,
        )

    def approve(self):
        self.status = StoreStatus.APPROVED.value
        self.is_active = True


@storefront.repository(part_of=Store)
class StoreRepository:
    def find_active_by_username(self, username: str) -> Store | None:
        stores = self._dao.query.filter(username=username.strip().lower(), is_active=True).all().items
        return stores[0] if stores else None
