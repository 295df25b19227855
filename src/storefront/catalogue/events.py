"""Domain events for the Product aggregate."""

from protean.fields import Boolean, Identifier

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductFeatureToggled:
    __version__ = 1

    product_id = Identifier(required=True)
    is_featured = Boolean(required=True)
