"""Runtime settings, read from the environment once at startup."""

import os
from dataclasses import dataclass

_DEV_ACCESS_SECRET = "dev-access-secret-change-me"
_DEV_REFRESH_SECRET = "dev-refresh-secret-change-me"


@dataclass(frozen=True)
class Settings:
    env: str = "development"
    access_token_secret: str = _DEV_ACCESS_SECRET
    refresh_token_secret: str = _DEV_REFRESH_SECRET
    client_url: str = "http://localhost:5173"
    cache_adapter: str = "memory"
    redis_url: str = "redis://localhost:6379/0"
    payment_gateway: str = "fake"
    stripe_secret_key: str | None = None
    gateway_timeout_seconds: float = 10.0
    image_host: str = "fake"
    cloudinary_url: str | None = None

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @classmethod
    def from_env(cls) -> "Settings":
        env = os.environ.get("PROTEAN_ENV", "development").lower()
        access_secret = os.environ.get("ACCESS_TOKEN_SECRET")
        refresh_secret = os.environ.get("REFRESH_TOKEN_SECRET")

        if env == "production" and not (access_secret and refresh_secret):
            raise ValueError("ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must be set in production")

        return cls(
            env=env,
            access_token_secret=access_secret or _DEV_ACCESS_SECRET,
            refresh_token_secret=refresh_secret or _DEV_REFRESH_SECRET,
            client_url=os.environ.get("CLIENT_URL", cls.client_url).rstrip("/"),
            cache_adapter=os.environ.get("CACHE_ADAPTER", cls.cache_adapter),
            redis_url=os.environ.get("REDIS_URL", cls.redis_url),
            payment_gateway=os.environ.get("PAYMENT_GATEWAY", cls.payment_gateway),
            stripe_secret_key=os.environ.get("STRIPE_SECRET_KEY"),
            gateway_timeout_seconds=float(os.environ.get("GATEWAY_TIMEOUT_SECONDS", cls.gateway_timeout_seconds)),
            image_host=os.environ.get("IMAGE_HOST", cls.image_host),
            cloudinary_url=os.environ.get("CLOUDINARY_URL"),
        )
