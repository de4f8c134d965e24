"""
Cookie transport for the session token.

In production the cookie is ``Secure`` with ``SameSite=None`` so the frontend
can live on another site; elsewhere it is ``SameSite=Lax`` without ``Secure``
so local development works over plain HTTP.
"""

from typing import Optional

from fastapi import Request, Response

from config import settings


def _cookie_options() -> dict:
    return {
        "httponly": True,
        "secure": settings.is_production,
        "samesite": "none" if settings.is_production else "lax",
        "path": "/",
    }


def set_auth_cookie(response: Response, token: str) -> None:
    """Attach the session token to ``response`` as the auth cookie."""
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=settings.AUTH_COOKIE_MAX_AGE,
        **_cookie_options(),
    )


def clear_auth_cookie(response: Response) -> None:
    """Overwrite the auth cookie with an empty value that expires immediately."""
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value="",
        max_age=0,
        **_cookie_options(),
    )


def get_token_from_request(request: Request) -> Optional[str]:
    """
    Read the session token from the request cookies.

    Returns:
        str | None: The token, or None when the cookie is absent or empty
    """
    return request.cookies.get(settings.AUTH_COOKIE_NAME) or None
