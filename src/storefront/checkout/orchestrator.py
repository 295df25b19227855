"""Checkout orchestration: cart snapshot → provider session → order.

Flow:
    1. create_session: price the submitted products in cents, apply the
       caller's coupon, open a provider checkout session carrying a snapshot
       of the lines in its metadata (split over as many keys as needed).
    2. (the customer pays on the provider's hosted page)
    3. confirm: ask the provider for the session's status; when it is paid,
       retire the coupon and persist an Order from the metadata snapshot.

Checkouts totalling $200 or more earn the shopper a gift coupon. Issuance is
fire-and-forget: a failure there is logged and never fails the checkout.
"""

import json
from dataclasses import dataclass

from protean.core.unit_of_work import UnitOfWork
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from storefront.checkout.order import Order
from storefront.coupons.management import issue_gift_coupon, redeemable_coupon, retire_coupon
from storefront.exceptions import PaymentIncomplete, ServiceUnavailable
from storefront.identity.user import User
from storefront.payments.gateway import GatewayError, LineItem, PaymentGateway
from storefront.shared.money import percent_of, to_major_units, to_minor_units
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

GIFT_THRESHOLD = 20000  # cents

# Providers cap each metadata value; Stripe allows 500 characters.
METADATA_VALUE_LIMIT = 500
SNAPSHOT_KEY = "products"


@dataclass(frozen=True)
class CheckoutProduct:
    """A product line as submitted by the client at checkout."""

    id: str
    name: str
    price: float
    quantity: int
    image: str | None = None


@dataclass(frozen=True)
class CheckoutQuote:
    session_id: str
    total_amount: int  # cents

    def to_dict(self) -> dict:
        return {"id": self.session_id, "total_amount": to_major_units(self.total_amount)}


def price_line_items(products: list[CheckoutProduct]) -> tuple[list[LineItem], int]:
    """Convert products to provider line items and their total in cents."""
    line_items = []
    total = 0
    for product in products:
        unit_amount = to_minor_units(product.price)
        total += unit_amount * product.quantity
        line_items.append(
            LineItem(
                name=product.name,
                unit_amount=unit_amount,
                quantity=product.quantity,
                image=product.image,
            )
        )
    return line_items, total


def snapshot_metadata(products: list[CheckoutProduct]) -> dict[str, str]:
    """Spread the line snapshot over ``products_0``, ``products_1``, ... keys.

    Each value is a JSON array kept within the provider's per-value limit, so
    large carts still fit in session metadata.
    """
    chunks: list[list[dict]] = [[]]
    for product in products:
        line = {"id": product.id, "quantity": product.quantity, "price": product.price}
        candidate = chunks[-1] + [line]
        if chunks[-1] and len(_encode(candidate)) > METADATA_VALUE_LIMIT:
            chunks.append([line])
        else:
            chunks[-1] = candidate
    return {f"{SNAPSHOT_KEY}_{index}": _encode(chunk) for index, chunk in enumerate(chunks)}


def snapshot_lines(metadata: dict) -> list[dict]:
    """Reassemble the line snapshot written by ``snapshot_metadata``."""
    lines = []
    index = 0
    while f"{SNAPSHOT_KEY}_{index}" in metadata:
        lines.extend(json.loads(metadata[f"{SNAPSHOT_KEY}_{index}"]))
        index += 1
    return lines


def _encode(lines: list[dict]) -> str:
    return json.dumps(lines, separators=(",", ":"))


class CheckoutOrchestrator:
    def __init__(self, gateway: PaymentGateway, client_url: str) -> None:
        self.gateway = gateway
        self.client_url = client_url.rstrip("/")

    @property
    def success_url(self) -> str:
        return f"{self.client_url}/purchase-success?session_id={{CHECKOUT_SESSION_ID}}"

    @property
    def cancel_url(self) -> str:
        return f"{self.client_url}/purchase-cancel"

    def create_session(
        self,
        user: User,
        products: list[CheckoutProduct],
        coupon_code: str | None = None,
    ) -> CheckoutQuote:
        if not products:
            raise ValidationError({"products": ["Invalid or empty products array"]})

        line_items, total = price_line_items(products)

        coupon = redeemable_coupon(coupon_code, user.id)
        discounts = []
        try:
            if coupon is not None:
                total -= percent_of(total, coupon.discount_percentage)
                discounts.append(self.gateway.create_discount(coupon.discount_percentage))

            session = self.gateway.create_session(
                line_items=line_items,
                discounts=discounts,
                success_url=self.success_url,
                cancel_url=self.cancel_url,
                metadata={
                    "user_id": str(user.id),
                    "coupon_code": coupon_code or "",
                    **snapshot_metadata(products),
                },
            )
        except GatewayError as exc:
            logger.error("checkout_session_failed", user_id=str(user.id), error=str(exc))
            raise ServiceUnavailable("Payment provider unavailable") from exc

        logger.info(
            "checkout_session_created",
            user_id=str(user.id),
            session_id=session.id,
            total_amount=total,
            coupon_code=coupon.code if coupon else None,
        )

        if total >= GIFT_THRESHOLD:
            self._grant_gift_coupon(user.id)

        return CheckoutQuote(session_id=session.id, total_amount=total)

    def confirm(self, session_id: str) -> Order:
        """Record a paid checkout session as an order. Confirming twice is harmless."""
        try:
            status = self.gateway.retrieve_session(session_id)
        except GatewayError as exc:
            logger.error("checkout_status_lookup_failed", session_id=session_id, error=str(exc))
            raise ServiceUnavailable("Payment provider unavailable") from exc

        if not status.is_paid:
            logger.info("checkout_not_paid", session_id=session_id, payment_status=status.payment_status)
            raise PaymentIncomplete(f"Payment status is {status.payment_status!r}")

        existing = self._order_for_session(session_id)
        if existing is not None:
            return existing

        metadata = status.metadata
        user_id = metadata["user_id"]
        with UnitOfWork():
            if metadata.get("coupon_code"):
                retire_coupon(metadata["coupon_code"], user_id)

            order = Order.place(
                user_id=user_id,
                lines=snapshot_lines(metadata),
                total_amount=to_major_units(status.amount_total),
                provider_session_id=session_id,
            )
            current_domain.repository_for(Order).add(order)

        logger.info("order_placed", order_id=str(order.id), user_id=user_id, session_id=session_id)

        if status.amount_total >= GIFT_THRESHOLD:
            self._grant_gift_coupon(user_id)

        return order

    def _order_for_session(self, session_id: str) -> Order | None:
        results = current_domain.repository_for(Order)._dao.query.filter(provider_session_id=session_id).all()
        return results.items[0] if results.items else None

    def _grant_gift_coupon(self, user_id) -> None:
        try:
            issue_gift_coupon(user_id)
        except Exception:
            logger.exception("gift_coupon_issue_failed", user_id=str(user_id))
