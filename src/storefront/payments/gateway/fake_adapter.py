"""Configurable fake payment gateway for development and testing.

Simulates hosted checkout sessions in memory. Sessions start ``unpaid``;
``complete_payment()`` plays the part of the customer paying on the
provider's page. ``configure(should_succeed=False)`` makes every call fail
the way an unreachable provider would.
"""

from uuid import uuid4

from storefront.payments.gateway.port import (
    CheckoutSession,
    GatewayError,
    LineItem,
    PaymentGateway,
    SessionStatus,
)
from storefront.shared.money import percent_of


class FakeGateway(PaymentGateway):
    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Payment provider unavailable"
        self.calls: list[dict] = []
        self.sessions: dict[str, dict] = {}
        self.discounts: dict[str, int] = {}

    def configure(self, should_succeed: bool, failure_reason: str = "Payment provider unavailable") -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def _check(self) -> None:
        if not self.should_succeed:
            raise GatewayError(self.failure_reason)

    def create_session(
        self,
        line_items: list[LineItem],
        discounts: list[str],
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str],
    ) -> CheckoutSession:
        self.calls.append(
            {
                "method": "create_session",
                "line_items": line_items,
                "discounts": discounts,
                "success_url": success_url,
                "cancel_url": cancel_url,
                "metadata": metadata,
            }
        )
        self._check()

        subtotal = sum(item.unit_amount * item.quantity for item in line_items)
        amount_total = subtotal
        for discount_id in discounts:
            amount_total -= percent_of(amount_total, self.discounts[discount_id])

        session_id = f"cs_fake_{uuid4().hex[:16]}"
        self.sessions[session_id] = {
            "payment_status": "unpaid",
            "amount_total": amount_total,
            "metadata": dict(metadata),
        }
        return CheckoutSession(id=session_id, url=f"https://checkout.fake/{session_id}")

    def retrieve_session(self, session_id: str) -> SessionStatus:
        self.calls.append({"method": "retrieve_session", "session_id": session_id})
        self._check()

        session = self.sessions.get(session_id)
        if session is None:
            raise GatewayError(f"No such checkout session: {session_id}")
        return SessionStatus(
            id=session_id,
            payment_status=session["payment_status"],
            amount_total=session["amount_total"],
            metadata=dict(session["metadata"]),
        )

    def create_discount(self, percent_off: int) -> str:
        self.calls.append({"method": "create_discount", "percent_off": percent_off})
        self._check()

        discount_id = f"coupon_fake_{uuid4().hex[:8]}"
        self.discounts[discount_id] = percent_off
        return discount_id

    def complete_payment(self, session_id: str) -> None:
        """Mark a session as paid, as the provider would after a successful charge."""
        self.sessions[session_id]["payment_status"] = "paid"
