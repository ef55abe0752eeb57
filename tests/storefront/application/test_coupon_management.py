from datetime import UTC, datetime, timedelta

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.coupon.coupon import Coupon
from storefront.coupon.management import CreateCoupon


class TestCreateCoupon:
    def test_create_coupon(self):
        code = current_domain.process(
            CreateCoupon(code="welcome10", discount=10.0, for_new_user=True),
            asynchronous=False,
        )
        assert code == "WELCOME10"

        coupon = current_domain.repository_for(Coupon).find_by_code("Welcome10")
        assert coupon.discount == 10.0
        assert coupon.for_new_user is True
        assert coupon.for_member is False

    def test_create_coupon_with_expiry(self):
        expires_at = datetime.now(UTC) + timedelta(days=7)
        current_domain.process(CreateCoupon(code="WEEK", discount=5.0, expires_at=expires_at), asynchronous=False)
        assert not current_domain.repository_for(Coupon).find_by_code("WEEK").is_expired()

    def test_duplicate_code_is_rejected(self):
        current_domain.process(CreateCoupon(code="SAVE10", discount=10.0), asynchronous=False)
        with pytest.raises(ValidationError):
            current_domain.process(CreateCoupon(code="save10", discount=20.0), asynchronous=False)
        assert current_domain.repository_for(Coupon).find_by_code("SAVE10").discount == 10.0

    def test_missing_code(self):
        assert current_domain.repository_for(Coupon).find_by_code("ABSENT") is None
