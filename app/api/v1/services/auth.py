import logging

from app.api.db.storage import Storage
from app.api.utils.exceptions import ErrorCode, StorageException
from app.api.v1.models.user import User
from app.api.v1.schemas.auth import GoogleIdentity

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication and user management."""

    @staticmethod
    async def get_or_create_google_user(identity: GoogleIdentity, storage: Storage) -> User:
        """
        Get existing user or create new one from a verified Google identity.

        Returning users are matched on Google ID only and are used as stored;
        their profile is not refreshed from Google.

        Args:
            identity (GoogleIdentity): Verified Google identity
            storage (Storage): Storage backend

        Returns:
            User: Existing or newly created user

        Raises:
            DuplicateUserException: If the email already belongs to another Google account
            StorageException: If the storage backend fails
        """
        user = await storage.get_user_by_google_id(identity.external_id)
        if user:
            logger.info(f"Existing user found: {user.id}")
            return user

        logger.info(f"User not found, creating new user: {identity.email}")
        try:
            user = await storage.create_user(
                {
                    "email": identity.email,
                    "google_id": identity.external_id,
                    "name": identity.name or identity.email.split("@")[0],
                }
            )
        except StorageException as e:
            raise StorageException(
                "Failed to create user account. Please try again.",
                error_code=ErrorCode.USER_CREATION_ERROR,
            ) from e

        logger.info(f"New user created successfully: {user.id}")
        return user
