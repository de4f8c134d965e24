"""
Authentication dependencies for FastAPI routes.

This module provides dependency functions for loading the authenticated user.
"""

import logging
from fastapi import Depends

from app.api.core.auth import AuthContext, require_auth
from app.api.db.database import get_storage
from app.api.db.storage import Storage
from app.api.utils.exceptions import ErrorCode, StorageException, UserNotFoundException
from app.api.v1.models.user import User

logger = logging.getLogger(__name__)


async def get_current_user(
    auth: AuthContext = Depends(require_auth),
    storage: Storage = Depends(get_storage),
) -> User:
    """
    Get the current authenticated user from the store.

    Args:
        auth (AuthContext): Authenticated user context
        storage (Storage): Storage backend

    Returns:
        User: Authenticated user object

    Raises:
        UserNotFoundException: If the session outlived the user record
        StorageException: If the store cannot be read

    Example:
        >>> # In a route:
        >>> @router.get("/me")
        >>> async def get_me(current_user: User = Depends(get_current_user)):
        ...     return {"email": current_user.email}
    """
    try:
        user = await storage.get_user(auth.user_id)
    except StorageException as e:
        raise StorageException("Failed to get user data", error_code=ErrorCode.FETCH_ERROR) from e

    if not user:
        logger.warning(f"User not found for ID: {auth.user_id}")
        raise UserNotFoundException()

    logger.debug(f"User authenticated: {user.email}")
    return user
