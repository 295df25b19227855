"""Tests for the Coupon aggregate."""

from datetime import UTC, datetime, timedelta

import pytest
from protean.exceptions import ValidationError
from storefront.coupons.coupon import (
    GIFT_CODE_PREFIX,
    GIFT_DISCOUNT_PERCENTAGE,
    GIFT_VALIDITY,
    Coupon,
    generate_gift_code,
)
from storefront.coupons.events import CouponDeactivated, CouponIssued


class TestGiftCode:
    def test_format(self):
        code = generate_gift_code()
        assert code.startswith(GIFT_CODE_PREFIX)
        suffix = code[len(GIFT_CODE_PREFIX) :]
        assert len(suffix) == 6
        assert suffix.isalnum() and suffix.upper() == suffix

    def test_codes_differ(self):
        assert len({generate_gift_code() for _ in range(20)}) > 1


class TestIssueGift:
    def test_gift_terms(self):
        now = datetime(2026, 1, 1, tzinfo=UTC)
        coupon = Coupon.issue_gift(user_id="user-001", now=now)

        assert coupon.discount_percentage == GIFT_DISCOUNT_PERCENTAGE == 10
        assert coupon.expires_at == now + timedelta(days=30)
        assert GIFT_VALIDITY == timedelta(days=30)
        assert coupon.is_active is True
        assert str(coupon.user_id) == "user-001"

    def test_issue_raises_event(self):
        coupon = Coupon.issue_gift(user_id="user-001")
        event = coupon._events[-1]
        assert isinstance(event, CouponIssued)
        assert event.code == coupon.code

    def test_discount_must_be_a_percentage(self):
        with pytest.raises(ValidationError):
            Coupon(
                code="BROKEN",
                discount_percentage=150,
                expires_at=datetime.now(UTC),
                user_id="user-001",
            )


class TestExpiry:
    def test_not_expired_before_expiry(self):
        now = datetime(2026, 1, 1, tzinfo=UTC)
        coupon = Coupon.issue_gift(user_id="user-001", now=now)
        assert coupon.is_expired(now + timedelta(days=29)) is False

    def test_expired_after_expiry(self):
        now = datetime(2026, 1, 1, tzinfo=UTC)
        coupon = Coupon.issue_gift(user_id="user-001", now=now)
        assert coupon.is_expired(now + timedelta(days=31)) is True


class TestDeactivate:
    def test_deactivate(self):
        coupon = Coupon.issue_gift(user_id="user-001")
        coupon.deactivate(reason="redeemed")

        assert coupon.is_active is False
        event = coupon._events[-1]
        assert isinstance(event, CouponDeactivated)
        assert event.reason == "redeemed"

    def test_deactivate_twice_raises_one_event(self):
        coupon = Coupon.issue_gift(user_id="user-001")
        coupon._events.clear()
        coupon.deactivate(reason="redeemed")
        coupon.deactivate(reason="redeemed")
        assert len(coupon._events) == 1
