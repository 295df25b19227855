"""Catalogue service: product listing, creation, deletion and featuring.

The featured list is memoized in the cache under ``featured_products`` and
rewritten whenever a product's featured flag flips.
"""

import json
import random

from protean.utils.globals import current_domain

from storefront.cache import Cache, CacheError
from storefront.catalogue.product import Product
from storefront.exceptions import ServiceUnavailable
from storefront.media import ImageHost, ImageHostError, public_id_from_url
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

FEATURED_CACHE_KEY = "featured_products"
RECOMMENDATION_SIZE = 3


class CatalogueService:
    def __init__(self, cache: Cache, image_host: ImageHost) -> None:
        self.cache = cache
        self.image_host = image_host

    @property
    def repository(self):
        return current_domain.repository_for(Product)

    def all_products(self) -> list[Product]:
        return self.repository._dao.query.all().items

    def by_category(self, category: str) -> list[Product]:
        return self.repository._dao.query.filter(category=category).all().items

    def _load_featured(self) -> list[dict]:
        products = self.repository._dao.query.filter(is_featured=True).all().items
        return [product.to_dict() for product in products]

    def featured(self) -> list[dict]:
        try:
            cached = self.cache.get(FEATURED_CACHE_KEY)
        except CacheError as exc:
            raise ServiceUnavailable("Product cache unavailable") from exc
        if cached is not None:
            return json.loads(cached)

        featured = self._load_featured()
        try:
            self.cache.set(FEATURED_CACHE_KEY, json.dumps(featured))
        except CacheError as exc:
            raise ServiceUnavailable("Product cache unavailable") from exc
        return featured

    def recommended(self, size: int = RECOMMENDATION_SIZE) -> list[dict]:
        products = self.all_products()
        sample = random.sample(products, k=min(size, len(products)))
        return [
            {
                "id": str(product.id),
                "name": product.name,
                "description": product.description,
                "image": product.image,
                "price": product.price,
            }
            for product in sample
        ]

    def create(self, name, description, price, category, image=None) -> Product:
        image_url = ""
        if image:
            try:
                image_url = self.image_host.upload(image, folder="products")
            except ImageHostError as exc:
                raise ServiceUnavailable("Image host unavailable") from exc

        product = Product.create(
            name=name,
            description=description,
            price=price,
            category=category,
            image=image_url,
        )
        self.repository.add(product)
        logger.info("product_created", product_id=str(product.id), category=category)
        return product

    def delete(self, product_id: str) -> None:
        product = self.repository.get(product_id)

        if product.image:
            try:
                self.image_host.destroy(public_id_from_url(product.image), folder="products")
            except ImageHostError as exc:
                raise ServiceUnavailable("Image host unavailable") from exc

        self.repository._dao.delete(product)
        if product.is_featured:
            self.refresh_featured_cache()
        logger.info("product_deleted", product_id=product_id)

    def toggle_featured(self, product_id: str) -> Product:
        product = self.repository.get(product_id)
        product.toggle_featured()
        self.repository.add(product)
        self.refresh_featured_cache()
        return product

    def refresh_featured_cache(self) -> None:
        """Rewrite the memoized featured list. Failures are logged, not raised."""
        try:
            self.cache.set(FEATURED_CACHE_KEY, json.dumps(self._load_featured()))
        except CacheError as exc:
            logger.error("featured_cache_refresh_failed", error=str(exc))
