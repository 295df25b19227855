"""In-memory image host for development and testing."""

from uuid import uuid4

from storefront.media.port import ImageHost, ImageHostError


class FakeImageHost(ImageHost):
    def __init__(self, base_url: str = "https://images.fake/storefront") -> None:
        self.base_url = base_url.rstrip("/")
        self.should_succeed = True
        self.images: dict[str, str] = {}
        self.destroyed: list[str] = []

    def upload(self, data: str, folder: str = "products") -> str:
        if not self.should_succeed:
            raise ImageHostError("Image host unavailable")
        public_id = uuid4().hex[:12]
        self.images[public_id] = data
        return f"{self.base_url}/{folder}/{public_id}.png"

    def destroy(self, public_id: str, folder: str = "products") -> None:
        if not self.should_succeed:
            raise ImageHostError("Image host unavailable")
        self.images.pop(public_id, None)
        self.destroyed.append(public_id)
