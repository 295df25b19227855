"""Signup, login, logout, refresh and request authentication.

The Authenticator ties the token service to the session store. Cookies are
the API layer's concern; this module only deals in users and token pairs.
"""

from contextlib import contextmanager

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from storefront.cache import CacheError
from storefront.exceptions import Forbidden, ServiceUnavailable, Unauthorized
from storefront.identity.passwords import verify_password
from storefront.identity.registration import RegisterUser, find_user_by_email
from storefront.identity.sessions import SessionStore
from storefront.identity.tokens import TokenPair, TokenService
from storefront.identity.user import User
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def _session_store_available():
    try:
        yield
    except CacheError as exc:
        logger.error("session_store_unavailable", error=str(exc))
        raise ServiceUnavailable("Session store unavailable") from exc


class Authenticator:
    def __init__(self, tokens: TokenService, sessions: SessionStore) -> None:
        self.tokens = tokens
        self.sessions = sessions

    def _start_session(self, user_id: str) -> TokenPair:
        pair = self.tokens.issue(user_id)
        with _session_store_available():
            self.sessions.put(user_id, pair.refresh_token)
        return pair

    def signup(self, name: str, email: str, password: str) -> tuple[User, TokenPair]:
        user_id = current_domain.process(
            RegisterUser(name=name, email=email, password=password),
            asynchronous=False,
        )
        user = current_domain.repository_for(User).get(user_id)
        logger.info("user_signed_up", user_id=user_id)
        return user, self._start_session(user_id)

    def login(self, email: str, password: str) -> tuple[User, TokenPair]:
        user = find_user_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("login_rejected", email=email)
            raise ValidationError({"credentials": ["Invalid credentials"]})

        logger.info("user_logged_in", user_id=str(user.id))
        return user, self._start_session(str(user.id))

    def logout(self, refresh_token: str | None) -> None:
        """Forget the caller's session. Clearing cookies is left to the caller."""
        if not refresh_token:
            return

        try:
            user_id = self.tokens.verify_refresh(refresh_token)
        except Unauthorized:
            logger.info("logout_with_unverifiable_token")
            return

        with _session_store_available():
            self.sessions.delete(user_id)
        logger.info("user_logged_out", user_id=user_id)

    def refresh(self, refresh_token: str | None) -> TokenPair:
        """Exchange the stored refresh token for a new pair, rotating the stored value."""
        if not refresh_token:
            raise Unauthorized("No refresh token provided")

        user_id = self.tokens.verify_refresh(refresh_token)

        with _session_store_available():
            trusted = self.sessions.matches(user_id, refresh_token)
        if not trusted:
            logger.warning("refresh_token_mismatch", user_id=user_id)
            raise Unauthorized("Invalid refresh token")

        return self._start_session(user_id)

    def authenticate(self, access_token: str | None) -> User:
        """Resolve the user an access token was issued to."""
        if not access_token:
            raise Unauthorized("No access token provided")

        user_id = self.tokens.verify_access(access_token)
        try:
            return current_domain.repository_for(User).get(user_id)
        except ObjectNotFoundError as exc:
            raise Unauthorized("User not found") from exc

    @staticmethod
    def require_admin(user: User) -> User:
        if not user.is_admin:
            raise Forbidden("Admins only")
        return user
