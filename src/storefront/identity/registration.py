"""User registration and role management: commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.passwords import hash_password
from storefront.identity.user import User

MIN_PASSWORD_LENGTH = 6


@storefront.command(part_of="User")
class RegisterUser:
    """Create a shopper account from signup details."""

    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    password = String(required=True, max_length=128)


@storefront.command(part_of="User")
class PromoteToAdmin:
    email = String(required=True, max_length=254)


def find_user_by_email(email):
    """Return the user registered under ``email``, or None."""
    results = current_domain.repository_for(User)._dao.query.filter(email=email.strip().lower()).all()
    return results.items[0] if results.items else None


@storefront.command_handler(part_of=User)
class RegistrationHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        if len(command.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"]})

        if find_user_by_email(command.email) is not None:
            raise ValidationError({"email": ["User already exists"]})

        user = User.register(
            name=command.name,
            email=command.email,
            password_hash=hash_password(command.password),
        )
        current_domain.repository_for(User).add(user)
        return str(user.id)

    @handle(PromoteToAdmin)
    def promote_to_admin(self, command):
        user = find_user_by_email(command.email)
        if user is None:
            raise ObjectNotFoundError(f"No user registered as {command.email}")

        user.promote_to_admin()
        current_domain.repository_for(User).add(user)
        return str(user.id)
