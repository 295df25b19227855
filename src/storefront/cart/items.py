"""Cart item management: commands and handler.

Each handler loads the user, mutates the embedded cart and writes the whole
user record back. Handlers return the resulting cart lines.

When another request saved the same user in between, the write fails on the
version check and Protean re-runs the handler (``server.version_retry`` in
domain.toml): the mutation is reapplied to the fresh record.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user import User


@storefront.command(part_of="User")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="User")
class RemoveFromCart:
    """Remove one product's line, or clear the cart when product_id is omitted."""

    user_id = Identifier(required=True)
    product_id = Identifier()


@storefront.command(part_of="User")
class UpdateCartQuantity:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)


@storefront.command_handler(part_of=User)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.add_to_cart(command.product_id)
        repo.add(user)
        return user.cart_lines()

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.remove_from_cart(command.product_id or None)
        repo.add(user)
        return user.cart_lines()

    @handle(UpdateCartQuantity)
    def update_cart_quantity(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.set_cart_quantity(command.product_id, command.quantity)
        repo.add(user)
        return user.cart_lines()
