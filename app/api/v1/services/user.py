"""
User profile service layer.
"""

import logging
from uuid import UUID

from app.api.core.auth import AuthContext
from app.api.db.storage import Storage
from app.api.utils.exceptions import AccessDeniedException, UserNotFoundException
from app.api.v1.models.user import User

logger = logging.getLogger(__name__)


class UserService:
    """Service class for profile and wallet updates."""

    @staticmethod
    async def get_owned_user(
        user_id: UUID,
        auth: AuthContext,
        storage: Storage,
        denied_message: str = "You can only update your own wallet",
    ) -> User:
        """
        Load a user record the caller is allowed to act on.

        Args:
            user_id (UUID): Target user UUID
            auth (AuthContext): Authenticated caller
            storage (Storage): Storage backend
            denied_message (str): Message used when ownership fails

        Returns:
            User: The target user

        Raises:
            UserNotFoundException: If the user does not exist
            AccessDeniedException: If the user is not the caller
        """
        user = await storage.get_user(user_id)
        if not user:
            raise UserNotFoundException()

        if user.id != auth.user_id:
            logger.warning(f"User {auth.user_id} denied access to user {user_id}")
            raise AccessDeniedException(denied_message)

        return user

    @staticmethod
    async def update_wallet(user_id: UUID, wallet_address: str, storage: Storage) -> User:
        """Link a wallet address to the user."""
        user = await storage.update_user_wallet(user_id, wallet_address)
        if not user:
            raise UserNotFoundException()

        logger.info(f"Wallet address updated for user {user_id}")
        return user

    @staticmethod
    async def update_profile(user_id: UUID, name: str, storage: Storage) -> User:
        """Change the user's display name."""
        user = await storage.update_user(user_id, {"name": name})
        if not user:
            raise UserNotFoundException()

        logger.info(f"Profile updated for user {user_id}")
        return user
