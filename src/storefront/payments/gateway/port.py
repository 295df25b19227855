"""Payment gateway port (abstract interface).

Defines the contract that all payment gateway adapters must implement, so
the checkout flow runs unchanged against FakeGateway (dev/test) and
StripeGateway (production). Amounts are integer minor currency units.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class GatewayError(Exception):
    """The payment provider could not be reached or rejected the request."""


@dataclass(frozen=True)
class LineItem:
    name: str
    unit_amount: int
    quantity: int
    image: str | None = None


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    url: str | None = None


@dataclass(frozen=True)
class SessionStatus:
    """Provider-side view of a checkout session."""

    id: str
    payment_status: str
    amount_total: int
    metadata: dict = field(default_factory=dict)

    @property
    def is_paid(self) -> bool:
        return self.payment_status == "paid"


class PaymentGateway(ABC):
    @abstractmethod
    def create_session(
        self,
        line_items: list[LineItem],
        discounts: list[str],
        success_url: str,
        cancel_url: str,
        metadata: dict[str, str],
    ) -> CheckoutSession:
        """Open a hosted checkout session for the given line items."""
        ...

    @abstractmethod
    def retrieve_session(self, session_id: str) -> SessionStatus:
        """Fetch the current payment status of a checkout session."""
        ...

    @abstractmethod
    def create_discount(self, percent_off: int) -> str:
        """Create a single-use percentage discount and return its provider id."""
        ...
