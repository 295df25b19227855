"""Application tests for coupon validation, issuance and retirement."""

from datetime import UTC, datetime, timedelta

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from storefront.coupons.coupon import Coupon
from storefront.coupons.management import (
    active_coupon,
    issue_gift_coupon,
    redeemable_coupon,
    retire_coupon,
    validate_coupon,
)


def _active_for(user_id):
    return current_domain.repository_for(Coupon)._dao.query.filter(user_id=user_id, is_active=True).all().items


def _store_coupon(user_id="user-001", code="SAVE20", discount=20, expires_in=timedelta(days=5)):
    coupon = Coupon(
        code=code,
        discount_percentage=discount,
        expires_at=datetime.now(UTC) + expires_in,
        is_active=True,
        user_id=user_id,
    )
    current_domain.repository_for(Coupon).add(coupon)
    return coupon


class TestActiveCoupon:
    def test_none_without_coupon(self):
        assert active_coupon("user-001") is None

    def test_returns_active_coupon(self):
        _store_coupon()
        assert active_coupon("user-001").code == "SAVE20"

    def test_ignores_other_users(self):
        _store_coupon(user_id="user-002")
        assert active_coupon("user-001") is None


class TestValidateCoupon:
    def test_valid(self):
        _store_coupon()
        assert validate_coupon("SAVE20", "user-001").discount_percentage == 20

    def test_unknown_code(self):
        with pytest.raises(ObjectNotFoundError):
            validate_coupon("NOPE", "user-001")

    def test_other_users_coupon(self):
        _store_coupon(user_id="user-002")
        with pytest.raises(ObjectNotFoundError):
            validate_coupon("SAVE20", "user-001")

    def test_expired_coupon_is_retired(self):
        _store_coupon(expires_in=timedelta(days=-1))
        with pytest.raises(ValidationError) as exc:
            validate_coupon("SAVE20", "user-001")
        assert exc.value.messages["coupon_code"] == ["Coupon has expired"]
        assert _active_for("user-001") == []


class TestRedeemableCoupon:
    def test_no_code(self):
        assert redeemable_coupon(None, "user-001") is None
        assert redeemable_coupon("", "user-001") is None

    def test_unknown_code_is_ignored(self):
        assert redeemable_coupon("NOPE", "user-001") is None

    def test_expired_coupon_is_ignored_and_retired(self):
        _store_coupon(expires_in=timedelta(days=-1))
        assert redeemable_coupon("SAVE20", "user-001") is None
        assert _active_for("user-001") == []

    def test_valid_coupon(self):
        _store_coupon()
        assert redeemable_coupon("SAVE20", "user-001").code == "SAVE20"


class TestIssueGiftCoupon:
    def test_issues_gift(self):
        coupon = issue_gift_coupon("user-001")
        assert coupon.code.startswith("GIFT")
        assert coupon.discount_percentage == 10
        assert len(_active_for("user-001")) == 1

    def test_reuses_existing_active_coupon(self):
        first = issue_gift_coupon("user-001")
        second = issue_gift_coupon("user-001")
        assert second.code == first.code
        assert len(_active_for("user-001")) == 1

    def test_replaces_expired_coupon(self):
        _store_coupon(expires_in=timedelta(days=-1))
        coupon = issue_gift_coupon("user-001")

        active = _active_for("user-001")
        assert [c.code for c in active] == [coupon.code]
        assert coupon.code != "SAVE20"


class TestRetireCoupon:
    def test_retire(self):
        _store_coupon()
        retire_coupon("SAVE20", "user-001")
        assert active_coupon("user-001") is None

    def test_retire_unknown_is_noop(self):
        _store_coupon()
        retire_coupon("OTHER", "user-001")
        assert active_coupon("user-001").code == "SAVE20"
