"""Coupon lookups, validation, gift issuance and retirement.

A user holds at most one active coupon. Gift issuance checks for an existing
active coupon and hands that one back instead of creating a second.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.coupons.coupon import Coupon
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _active_coupons(**filters) -> list[Coupon]:
    return current_domain.repository_for(Coupon)._dao.query.filter(is_active=True, **filters).all().items


def _retire_if_expired(coupon: Coupon) -> bool:
    if not coupon.is_expired():
        return False
    coupon.deactivate(reason="expired")
    current_domain.repository_for(Coupon).add(coupon)
    logger.info("coupon_expired", code=coupon.code, user_id=str(coupon.user_id))
    return True


def active_coupon(user_id) -> Coupon | None:
    """The user's current active coupon, if any."""
    coupons = _active_coupons(user_id=str(user_id))
    return coupons[0] if coupons else None


def validate_coupon(code, user_id) -> Coupon:
    coupons = _active_coupons(code=code, user_id=str(user_id))
    if not coupons:
        raise ObjectNotFoundError("Coupon not found")

    coupon = coupons[0]
    if _retire_if_expired(coupon):
        raise ValidationError({"coupon_code": ["Coupon has expired"]})
    return coupon


def redeemable_coupon(code, user_id) -> Coupon | None:
    """Look up a coupon for checkout. Expired matches are retired and ignored."""
    if not code:
        return None

    coupons = _active_coupons(code=code, user_id=str(user_id))
    if not coupons or _retire_if_expired(coupons[0]):
        return None
    return coupons[0]


def issue_gift_coupon(user_id) -> Coupon:
    existing = active_coupon(user_id)
    if existing is not None and not _retire_if_expired(existing):
        logger.debug("gift_coupon_reused", user_id=str(user_id), code=existing.code)
        return existing

    coupon = Coupon.issue_gift(user_id=str(user_id))
    current_domain.repository_for(Coupon).add(coupon)
    logger.info("gift_coupon_issued", user_id=str(user_id), code=coupon.code)
    return coupon


def retire_coupon(code, user_id) -> None:
    for coupon in _active_coupons(code=code, user_id=str(user_id)):
        coupon.deactivate(reason="redeemed")
        current_domain.repository_for(Coupon).add(coupon)
