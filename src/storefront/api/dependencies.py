"""FastAPI dependencies: the container, the calling user, auth cookies."""

from fastapi import Cookie, Depends, Request, Response

from storefront.config import Settings
from storefront.container import Container
from storefront.identity.tokens import ACCESS_TOKEN_TTL, REFRESH_TOKEN_TTL, TokenPair
from storefront.identity.user import User

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


def get_container(request: Request) -> Container:
    return request.app.state.container


def current_user(
    container: Container = Depends(get_container),
    access_token: str | None = Cookie(default=None, alias=ACCESS_COOKIE),
) -> User:
    return container.authenticator.authenticate(access_token)


def admin_user(
    container: Container = Depends(get_container),
    user: User = Depends(current_user),
) -> User:
    return container.authenticator.require_admin(user)


def _set_cookie(response: Response, key: str, value: str, max_age: int, settings: Settings) -> None:
    response.set_cookie(
        key=key,
        value=value,
        max_age=max_age,
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )


def set_auth_cookies(response: Response, pair: TokenPair, settings: Settings) -> None:
    _set_cookie(response, ACCESS_COOKIE, pair.access_token, int(ACCESS_TOKEN_TTL.total_seconds()), settings)
    _set_cookie(response, REFRESH_COOKIE, pair.refresh_token, int(REFRESH_TOKEN_TTL.total_seconds()), settings)


def clear_auth_cookies(response: Response, settings: Settings) -> None:
    for key in (ACCESS_COOKIE, REFRESH_COOKIE):
        response.delete_cookie(key, httponly=True, secure=settings.is_production, samesite="strict")
