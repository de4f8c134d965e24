"""
Authentication middleware for the Wallet Master API.

Authentication runs in two stages. ``resolve_auth_context`` is installed as an
application-wide dependency: it reads the session cookie, verifies it and
stores the resulting AuthContext (or None) on ``request.state.auth``. It never
rejects a request, so public endpoints stay reachable. ``require_auth`` is
added to protected endpoints and turns a missing context into a 401.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import Depends, Request

from app.api.utils.auth_cookie import get_token_from_request
from app.api.utils.auth_token import verify_jwt_token
from app.api.utils.exceptions import AuthenticationRequiredException

logger = logging.getLogger(__name__)


class AuthContext:
    """
    Context object describing the authenticated user of a request.

    Attributes:
        user_id: UUID of the authenticated user
        email: Email of the authenticated user
        name: Display name at the time the session was issued
    """

    def __init__(self, user_id: UUID, email: str, name: Optional[str] = None):
        """
        Initialize AuthContext.

        Args:
            user_id (UUID): UUID of the user
            email (str): User email address
            name (str, optional): User display name
        """
        self.user_id = user_id
        self.email = email
        self.name = name

    @classmethod
    def from_claims(cls, claims: dict) -> Optional["AuthContext"]:
        """
        Build a context from verified session claims.

        Args:
            claims (dict): Payload of a verified session token

        Returns:
            AuthContext | None: None when ``userId`` is missing or not a UUID
        """
        try:
            user_id = UUID(str(claims.get("userId")))
        except ValueError:
            logger.warning("Session token carries an invalid userId claim")
            return None

        return cls(user_id=user_id, email=claims.get("email", ""), name=claims.get("name"))

    def to_claims(self) -> dict:
        """Session claims for issuing a token to this user."""
        return {"userId": str(self.user_id), "email": self.email, "name": self.name}

    def __repr__(self) -> str:
        return f"AuthContext(user_id={self.user_id!s}, email={self.email!r})"


async def resolve_auth_context(request: Request) -> Optional[AuthContext]:
    """
    Resolve the session cookie into an AuthContext.

    Missing, invalid and expired tokens all resolve to None.

    Args:
        request (Request): FastAPI request object

    Returns:
        AuthContext | None: Authenticated user context, if any
    """
    auth = None
    token = get_token_from_request(request)

    if token:
        claims = verify_jwt_token(token)
        if claims:
            auth = AuthContext.from_claims(claims)

    request.state.auth = auth
    return auth


async def require_auth(
    auth: Optional[AuthContext] = Depends(resolve_auth_context),
) -> AuthContext:
    """
    Dependency rejecting requests without an authenticated user.

    Args:
        auth (AuthContext | None): Result of the resolve stage

    Returns:
        AuthContext: Authenticated context

    Raises:
        AuthenticationRequiredException: If no valid session was presented
    """
    if auth is None:
        raise AuthenticationRequiredException()
    return auth
