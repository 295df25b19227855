"""Domain events for the Coupon aggregate."""

from protean.fields import DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Coupon")
class CouponIssued:
    """A gift coupon was granted to a shopper."""

    __version__ = 1

    coupon_id = Identifier(required=True)
    user_id = Identifier(required=True)
    code = String(required=True)
    discount_percentage = Integer(required=True)
    expires_at = DateTime(required=True)


@storefront.event(part_of="Coupon")
class CouponDeactivated:
    __version__ = 1

    coupon_id = Identifier(required=True)
    user_id = Identifier(required=True)
    code = String(required=True)
    reason = String(required=True)
