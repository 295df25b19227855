"""Image host port (abstract interface)."""

from abc import ABC, abstractmethod


class ImageHostError(Exception):
    """The image host could not be reached or rejected the request."""


class ImageHost(ABC):
    @abstractmethod
    def upload(self, data: str, folder: str = "products") -> str:
        """Upload image data (data URI or remote URL) and return its public URL."""
        ...

    @abstractmethod
    def destroy(self, public_id: str, folder: str = "products") -> None:
        """Delete a previously uploaded image."""
        ...


def public_id_from_url(url: str) -> str:
    """Last path segment of a hosted image URL, without its extension."""
    return url.rsplit("/", 1)[-1].split(".", 1)[0]
