"""Composition root.

Builds the outward-facing capabilities (cache, payment gateway, image host)
and the services that use them, once per application. Tests build their own
container around fake adapters.
"""

from dataclasses import dataclass

from storefront.cache import Cache, build_cache
from storefront.catalogue.management import CatalogueService
from storefront.checkout.orchestrator import CheckoutOrchestrator
from storefront.config import Settings
from storefront.identity.authentication import Authenticator
from storefront.identity.sessions import SessionStore
from storefront.identity.tokens import TokenService
from storefront.media import ImageHost, build_image_host
from storefront.payments.gateway import PaymentGateway, build_gateway


@dataclass
class Container:
    settings: Settings
    cache: Cache
    gateway: PaymentGateway
    image_host: ImageHost
    tokens: TokenService

    @classmethod
    def build(
        cls,
        settings: Settings | None = None,
        cache: Cache | None = None,
        gateway: PaymentGateway | None = None,
        image_host: ImageHost | None = None,
        tokens: TokenService | None = None,
    ) -> "Container":
        settings = settings or Settings.from_env()
        return cls(
            settings=settings,
            cache=cache or build_cache(settings),
            gateway=gateway or build_gateway(settings),
            image_host=image_host or build_image_host(settings),
            tokens=tokens or TokenService(settings.access_token_secret, settings.refresh_token_secret),
        )

    @property
    def sessions(self) -> SessionStore:
        return SessionStore(self.cache)

    @property
    def authenticator(self) -> Authenticator:
        return Authenticator(self.tokens, self.sessions)

    @property
    def catalogue(self) -> CatalogueService:
        return CatalogueService(self.cache, self.image_host)

    @property
    def checkout(self) -> CheckoutOrchestrator:
        return CheckoutOrchestrator(self.gateway, self.settings.client_url)
