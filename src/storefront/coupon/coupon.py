"""Coupon aggregate — a percentage discount redeemable at checkout.

A coupon may be restricted to customers without any previous order
(``for_new_user``) or to customers holding an active membership
(``for_member``). Codes are stored upper-case and looked up the same way.
"""

from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Float, String, Text

from storefront.coupon.events import CouponCreated
from storefront.domain import storefront


@storefront.aggregate
class Coupon:
    code = String(identifier=True, max_length=50)
    description = Text()
    discount = Float(required=True, min_value=0.0, max_value=100.0)  # Percent
    for_new_user = Boolean(default=False)
    for_member = Boolean(default=False)
    is_public = Boolean(default=False)
    expires_at = DateTime()
    created_at = DateTime()

    @classmethod
    def create(
        cls,
        code,
        discount,
        description=None,
        for_new_user=False,
        for_member=False,
        is_public=False,
        expires_at=None,
    ):
        coupon = cls(
            code=normalize_code(code),
            discount=discount,
            description=description,
            for_new_user=for_new_user,
            for_member=for_member,
            is_public=is_public,
            expires_at=expires_at,
            created_at=datetime.now(UTC),
        )
        coupon.raise_(
            CouponCreated(
                code=coupon.code,
                discount=coupon.discount,
                for_new_user=coupon.for_new_user,
                for_member=coupon.for_member,
            )
        )
        return coupon

    def is_expired(self, as_of=None) -> bool:
        if self.expires_at is None:
            return False
        as_of = as_of or datetime.now(UTC)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return expires_at <= as_of

    def snapshot(self) -> dict:
        """The coupon as copied onto the orders it was applied to."""
        return {
            "code": self.code,
            "description": self.description,
            "discount": self.discount,
            "for_new_user": self.for_new_user,
            "for_member": self.for_member,
        }


def normalize_code(code: str) -> str:
    return code.strip().upper()


@storefront.repository(part_of=Coupon)
class CouponRepository:
    def find_by_code(self, code: str) -> Coupon | None:
        try:
            return self.get(normalize_code(code))
        except ObjectNotFoundError:
            return None
