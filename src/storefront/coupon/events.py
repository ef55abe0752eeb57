"""Domain events for the Coupon aggregate."""

from protean.fields import Boolean, Float, String

from storefront.domain import storefront


@storefront.event(part_of="Coupon")
class CouponCreated:
    """A coupon code was registered and can be redeemed at checkout."""

    __version__ = 1

    code = String(required=True)
    discount = Float(required=True)
    for_new_user = Boolean(default=False)
    for_member = Boolean(default=False)
