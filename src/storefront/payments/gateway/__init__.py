"""Payment gateway adapters.

``build_gateway()`` picks the adapter named by ``Settings.payment_gateway``:
- FakeGateway for development and testing
- StripeGateway for production
"""

from storefront.config import Settings
from storefront.payments.gateway.fake_adapter import FakeGateway
from storefront.payments.gateway.port import (
    CheckoutSession,
    GatewayError,
    LineItem,
    PaymentGateway,
    SessionStatus,
)


def build_gateway(settings: Settings) -> PaymentGateway:
    if settings.payment_gateway == "fake":
        return FakeGateway()
    if settings.payment_gateway == "stripe":
        if not settings.stripe_secret_key:
            raise ValueError("STRIPE_SECRET_KEY must be set to use the stripe gateway")
        from storefront.payments.gateway.stripe_adapter import StripeGateway

        return StripeGateway(settings.stripe_secret_key, timeout=settings.gateway_timeout_seconds)
    raise ValueError(f"Unknown payment gateway: {settings.payment_gateway}")


__all__ = [
    "CheckoutSession",
    "FakeGateway",
    "GatewayError",
    "LineItem",
    "PaymentGateway",
    "SessionStatus",
    "build_gateway",
]
