"""Signed access and refresh tokens.

Both kinds are HS256 JWTs carrying only the user id, signed with separate
secrets. A ``kind`` claim keeps one from being accepted as the other, and a
random ``jti`` makes every issued token distinct.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import jwt

from storefront.exceptions import InvalidToken, TokenExpired

ACCESS_TOKEN_TTL = timedelta(minutes=15)
REFRESH_TOKEN_TTL = timedelta(days=7)

_ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str


class TokenService:
    def __init__(
        self,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta = ACCESS_TOKEN_TTL,
        refresh_ttl: timedelta = REFRESH_TOKEN_TTL,
    ) -> None:
        self.access_secret = access_secret
        self.refresh_secret = refresh_secret
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    def issue(self, user_id: str) -> TokenPair:
        return TokenPair(
            access_token=self.issue_access(user_id),
            refresh_token=self._sign(user_id, "refresh", self.refresh_secret, self.refresh_ttl),
        )

    def issue_access(self, user_id: str) -> str:
        return self._sign(user_id, "access", self.access_secret, self.access_ttl)

    def verify_access(self, token: str) -> str:
        return self._verify(token, "access", self.access_secret)

    def verify_refresh(self, token: str) -> str:
        return self._verify(token, "refresh", self.refresh_secret)

    def _sign(self, user_id, kind, secret, ttl) -> str:
        now = datetime.now(UTC)
        claims = {
            "userId": str(user_id),
            "kind": kind,
            "jti": uuid4().hex,
            "iat": now,
            "exp": now + ttl,
        }
        return jwt.encode(claims, secret, algorithm=_ALGORITHM)

    def _verify(self, token, kind, secret) -> str:
        try:
            claims = jwt.decode(
                token,
                secret,
                algorithms=[_ALGORITHM],
                options={"require": ["exp", "userId"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpired(f"{kind.capitalize()} token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidToken(f"Invalid {kind} token") from exc

        if claims.get("kind") != kind:
            raise InvalidToken(f"Invalid {kind} token")
        return claims["userId"]
