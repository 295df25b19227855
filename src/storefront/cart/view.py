"""Cart view: cart lines joined against the catalogue."""

from dataclasses import asdict, dataclass

from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.identity.user import User


@dataclass(frozen=True)
class CartEntry:
    """A catalogue product as it appears in a cart, with the stored quantity."""

    id: str
    name: str
    description: str | None
    price: float
    image: str | None
    category: str
    is_featured: bool
    quantity: int

    def to_dict(self) -> dict:
        return asdict(self)


def join_cart(cart_lines: list[dict], products: list[Product]) -> list[CartEntry]:
    """Merge cart lines with their products, in cart order.

    Lines whose product is missing from ``products`` are dropped.
    """
    by_id = {str(product.id): product for product in products}
    entries = []
    for line in cart_lines:
        product = by_id.get(str(line["product_id"]))
        if product is None:
            continue
        entries.append(
            CartEntry(
                id=str(product.id),
                name=product.name,
                description=product.description,
                price=product.price,
                image=product.image,
                category=product.category,
                is_featured=bool(product.is_featured),
                quantity=line["quantity"],
            )
        )
    return entries


def view_cart(user: User) -> list[CartEntry]:
    lines = user.cart_lines()
    if not lines:
        return []

    product_ids = [line["product_id"] for line in lines]
    products = current_domain.repository_for(Product)._dao.query.filter(id__in=product_ids).all().items
    return join_cart(lines, products)
