"""Stripe payment gateway adapter.

Uses hosted Checkout Sessions and one-off Stripe coupons. Network retries are
disabled and every call is bounded by the configured timeout; Stripe errors
surface as GatewayError.
"""

import stripe

from storefront.payments.gateway.port import (
    CheckoutSession,
    GatewayError,
    LineItem,
    PaymentGateway,
    SessionStatus,
)


class StripeGateway(PaymentGateway):
    def __init__(self, api_key: str, timeout: float = 10.0, currency: str = "usd") -> None:
        self.currency = currency
        self.client = stripe.StripeClient(
            api_key,
            http_client=stripe.RequestsClient(timeout=timeout),
            max_network_retries=0,
        )

    def create_session(
        self,
        line_items: list[LineItem],
        discounts: list[str],
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str],
    ) -> CheckoutSession:
        params = {
            "payment_method_types": ["card"],
            "mode": "payment",
            "line_items": [self._line_item(item) for item in line_items],
            "discounts": [{"coupon": discount_id} for discount_id in discounts],
            "success_url": success_url,
            "cancel_url": cancel_url,
            "metadata": metadata,
        }
        try:
            session = self.client.checkout.sessions.create(params)
        except stripe.StripeError as exc:
            raise GatewayError(f"Stripe session creation failed: {exc.user_message or exc}") from exc
        return CheckoutSession(id=session.id, url=session.url)

    def retrieve_session(self, session_id: str) -> SessionStatus:
        try:
            session = self.client.checkout.sessions.retrieve(session_id)
        except stripe.StripeError as exc:
            raise GatewayError(f"Stripe session lookup failed: {exc.user_message or exc}") from exc
        return SessionStatus(
            id=session.id,
            payment_status=session.payment_status,
            amount_total=session.amount_total or 0,
            metadata=dict(session.metadata or {}),
        )

    def create_discount(self, percent_off: int) -> str:
        try:
            coupon = self.client.coupons.create({"percent_off": percent_off, "duration": "once"})
        except stripe.StripeError as exc:
            raise GatewayError(f"Stripe coupon creation failed: {exc.user_message or exc}") from exc
        return coupon.id

    def _line_item(self, item: LineItem) -> dict:
        product_data = {"name": item.name}
        if item.image:
            product_data["images"] = [item.image]
        return {
            "price_data": {
                "currency": self.currency,
                "product_data": product_data,
                "unit_amount": item.unit_amount,
            },
            "quantity": item.quantity,
        }
