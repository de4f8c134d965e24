"""
JWT token utilities for authentication.

This module provides functions for creating and verifying the session JWT.
Sessions are stateless: a token is valid as long as its signature checks out
and it has not expired.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError

from config import settings

logger = logging.getLogger(__name__)


def create_jwt_token(claims: dict, expires_in_days: Optional[int] = None) -> str:
    """
    Create a signed session token embedding ``claims`` verbatim.

    Args:
        claims (dict): Session claims, usually ``{userId, email, name}``
        expires_in_days (int, optional): Expiry window, defaults to JWT_EXPIRY_DAYS

    Returns:
        str: Encoded JWT token

    Example:
        >>> token = create_jwt_token({"userId": "user-123", "email": "user@example.com"})
        >>> len(token) > 0
        True
    """
    if expires_in_days is None:
        expires_in_days = settings.JWT_EXPIRY_DAYS

    issued_at = datetime.now(timezone.utc)
    payload = {
        **claims,
        "iat": issued_at,
        "exp": issued_at + timedelta(days=expires_in_days),
    }

    try:
        token = jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
        logger.info(f"JWT token created for user: {claims.get('email')}")
        return token
    except Exception as e:
        logger.error(f"Failed to create JWT token: {str(e)}", exc_info=True)
        raise


def verify_jwt_token(token: Optional[str]) -> Optional[dict]:
    """
    Verify and decode a session token.

    Any failure (bad signature, expired, malformed, empty) yields None.

    Args:
        token (str): JWT token to verify

    Returns:
        dict | None: Token payload, or None if the token is not valid

    Example:
        >>> token = create_jwt_token({"userId": "user-123", "email": "user@example.com"})
        >>> verify_jwt_token(token)["userId"]
        'user-123'
    """
    if not token:
        return None

    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        logger.debug(f"JWT token verified for user: {payload.get('email')}")
        return payload
    except JWTError as e:
        logger.debug(f"Rejected session token: {str(e)}")
        return None
    except Exception as e:
        logger.warning(f"Token verification error: {str(e)}")
        return None
