"""Image host adapters.

``build_image_host()`` picks the adapter named by ``Settings.image_host``:
- FakeImageHost for development and testing
- CloudinaryImageHost for production
"""

from storefront.config import Settings
from storefront.media.fake_adapter import FakeImageHost
from storefront.media.port import ImageHost, ImageHostError, public_id_from_url


def build_image_host(settings: Settings) -> ImageHost:
    if settings.image_host == "fake":
        return FakeImageHost()
    if settings.image_host == "cloudinary":
        if not settings.cloudinary_url:
            raise ValueError("CLOUDINARY_URL must be set to use the cloudinary image host")
        from storefront.media.cloudinary_adapter import CloudinaryImageHost

        return CloudinaryImageHost(settings.cloudinary_url)
    raise ValueError(f"Unknown image host: {settings.image_host}")


__all__ = ["FakeImageHost", "ImageHost", "ImageHostError", "build_image_host", "public_id_from_url"]
