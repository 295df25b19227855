"""Coupon aggregate: a per-user, time-bounded percentage discount."""

import secrets
import string
from datetime import UTC, datetime, timedelta

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from storefront.coupons.events import CouponDeactivated, CouponIssued
from storefront.domain import storefront

GIFT_CODE_PREFIX = "GIFT"
GIFT_DISCOUNT_PERCENTAGE = 10
GIFT_VALIDITY = timedelta(days=30)

_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_gift_code() -> str:
    return GIFT_CODE_PREFIX + "".join(secrets.choice(_CODE_ALPHABET) for _ in range(6))


@storefront.aggregate
class Coupon:
    code = String(required=True, max_length=50)
    discount_percentage = Integer(required=True, min_value=0, max_value=100)
    expires_at = DateTime(required=True)
    is_active = Boolean(default=True)
    user_id = Identifier(required=True)

    @classmethod
    def issue_gift(cls, user_id, now=None):
        now = now or datetime.now(UTC)
        coupon = cls(
            code=generate_gift_code(),
            discount_percentage=GIFT_DISCOUNT_PERCENTAGE,
            expires_at=now + GIFT_VALIDITY,
            is_active=True,
            user_id=user_id,
        )
        coupon.raise_(
            CouponIssued(
                coupon_id=str(coupon.id),
                user_id=str(user_id),
                code=coupon.code,
                discount_percentage=coupon.discount_percentage,
                expires_at=coupon.expires_at,
            )
        )
        return coupon

    def is_expired(self, now=None) -> bool:
        now = now or datetime.now(UTC)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return expires_at < now

    def deactivate(self, reason):
        if not self.is_active:
            return
        self.is_active = False
        self.raise_(
            CouponDeactivated(
                coupon_id=str(self.id),
                user_id=str(self.user_id),
                code=self.code,
                reason=reason,
            )
        )

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "discount_percentage": self.discount_percentage,
            "expires_at": self.expires_at.isoformat(),
            "is_active": bool(self.is_active),
        }
