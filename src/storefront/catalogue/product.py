"""Product aggregate root."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Float, String, Text

from storefront.catalogue.events import ProductFeatureToggled
from storefront.domain import storefront


@storefront.aggregate
class Product:
    name = String(required=True, max_length=200)
    description = Text()
    price = Float(required=True, min_value=0.0)
    image = String(max_length=1000, default="")
    category = String(required=True, max_length=100)
    is_featured = Boolean(default=False)
    created_at = DateTime()

    @classmethod
    def create(cls, name, description, price, category, image=""):
        return cls(
            name=name,
            description=description,
            price=price,
            category=category,
            image=image or "",
            is_featured=False,
            created_at=datetime.now(UTC),
        )

    def toggle_featured(self):
        self.is_featured = not self.is_featured
        self.raise_(ProductFeatureToggled(product_id=str(self.id), is_featured=self.is_featured))

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "image": self.image,
            "category": self.category,
            "is_featured": bool(self.is_featured),
        }
