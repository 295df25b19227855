"""Cloudinary image host adapter."""

from urllib.parse import urlparse

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader

from storefront.media.port import ImageHost, ImageHostError


class CloudinaryImageHost(ImageHost):
    def __init__(self, cloudinary_url: str) -> None:
        # cloudinary://<api_key>:<api_secret>@<cloud_name>
        parts = urlparse(cloudinary_url)
        cloudinary.config(
            cloud_name=parts.hostname,
            api_key=parts.username,
            api_secret=parts.password,
            secure=True,
        )

    def upload(self, data: str, folder: str = "products") -> str:
        try:
            response = cloudinary.uploader.upload(data, folder=folder)
        except cloudinary.exceptions.Error as exc:
            raise ImageHostError(f"Cloudinary upload failed: {exc}") from exc
        return response["secure_url"]

    def destroy(self, public_id: str, folder: str = "products") -> None:
        try:
            cloudinary.uploader.destroy(f"{folder}/{public_id}")
        except cloudinary.exceptions.Error as exc:
            raise ImageHostError(f"Cloudinary destroy failed: {exc}") from exc
