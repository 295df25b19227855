"""User aggregate root with its embedded shopping cart.

The cart lives inside the user record: an ordered list of CartItem entities,
one per product. Every cart mutation rewrites the whole user through the
repository. The user record is versioned: a write from a stale copy fails
with ``ExpectedVersionError``, and the cart command handlers are re-run
against a fresh load, so overlapping requests resolve as last-write-wins.
"""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.identity.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
    UserRegistered,
)

_EMAIL_PATTERN = re.compile(r"^[^@\s;,()<>\[\]\\\"]+@[^@\s;,()<>\[\]\\\"]+\.[^@\s;,()<>\[\]\\\".]+$")


class Role(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


@storefront.entity(part_of="User")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime()


@storefront.aggregate
class User:
    """A shopper or administrator account, with the shopper's cart embedded."""

    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254, unique=True)
    password_hash = String(required=True, max_length=255)
    role = String(choices=Role, default=Role.CUSTOMER.value)
    cart_items = HasMany(CartItem)
    created_at = DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email and not _EMAIL_PATTERN.match(self.email):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @invariant.post
    def cart_holds_one_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.cart_items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"cart_items": ["A product can appear only once in the cart"]})

    @classmethod
    def register(cls, name, email, password_hash):
        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=email.strip().lower(),
            password_hash=password_hash,
            role=Role.CUSTOMER.value,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                name=user.name,
                email=user.email,
                registered_at=now,
            )
        )
        return user

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def promote_to_admin(self):
        self.role = Role.ADMIN.value

    def public_view(self) -> dict:
        return {"id": str(self.id), "name": self.name, "email": self.email, "role": self.role}

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def _cart_item(self, product_id):
        return next((i for i in self.cart_items if str(i.product_id) == str(product_id)), None)

    def add_to_cart(self, product_id):
        """Add one unit of a product, appending a new line if it is not in the cart yet."""
        existing = self._cart_item(product_id)

        if existing:
            existing.quantity += 1
            quantity = existing.quantity
        else:
            self.add_cart_items(
                CartItem(
                    product_id=product_id,
                    quantity=1,
                    added_at=datetime.now(UTC),
                )
            )
            quantity = 1

        self.raise_(
            CartItemAdded(
                user_id=str(self.id),
                product_id=str(product_id),
                quantity=quantity,
            )
        )

    def remove_from_cart(self, product_id=None):
        """Remove one product's line, or empty the whole cart when no product is given."""
        if product_id is None:
            for item in list(self.cart_items):
                self.remove_cart_items(item)
            self.raise_(CartCleared(user_id=str(self.id)))
            return

        existing = self._cart_item(product_id)
        if existing is None:
            return

        self.remove_cart_items(existing)
        self.raise_(CartItemRemoved(user_id=str(self.id), product_id=str(product_id)))

    def set_cart_quantity(self, product_id, quantity):
        """Set a line's quantity; zero drops the line."""
        if quantity < 0:
            raise ValidationError({"quantity": ["Quantity cannot be negative"]})

        existing = self._cart_item(product_id)
        if existing is None:
            raise ObjectNotFoundError(f"Product {product_id} is not in the cart")

        if quantity == 0:
            self.remove_cart_items(existing)
            self.raise_(CartItemRemoved(user_id=str(self.id), product_id=str(product_id)))
            return

        previous_quantity = existing.quantity
        existing.quantity = quantity
        self.raise_(
            CartQuantityUpdated(
                user_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )

    def cart_lines(self) -> list[dict]:
        return [{"product_id": str(item.product_id), "quantity": item.quantity} for item in self.cart_items]
