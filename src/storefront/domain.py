"""Storefront domain: accounts, catalogue, cart, coupons and checkout.

A single Protean domain hosts every aggregate. Elements register themselves
through the decorators below and are discovered by ``storefront.init()``.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

storefront = Domain(name="storefront")
