"""Commands and handler for coupon management."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, String, Text
from protean.utils.globals import current_domain

from storefront.coupon.coupon import Coupon
from storefront.domain import storefront


@storefront.command(part_of="Coupon")
class CreateCoupon:
    """Register a new coupon code."""

    code = String(required=True, max_length=50)
    discount = Float(required=True, min_value=0.0, max_value=100.0)
    description = Text()
    for_new_user = Boolean(default=False)
    for_member = Boolean(default=False)
    is_public = Boolean(default=False)
    expires_at = DateTime()


@storefront.command_handler(part_of=Coupon)
class ManageCouponHandler:
    @handle(CreateCoupon)
    def create_coupon(self, command):
        repo = current_domain.repository_for(Coupon)
        if repo.find_by_code(command.code) is not None:
            raise ValidationError({"code": ["Coupon code already exists"]})

        coupon = Coupon.create(
            code=command.code,
            discount=command.discount,
            description=command.description,
            for_new_user=command.for_new_user,
            for_member=command.for_member,
            is_public=command.is_public,
            expires_at=command.expires_at,
        )
        repo.add(coupon)
        return coupon.code
