"""
Storage interface shared by the SQL and in-memory backends.

All lookups return the record or None when it does not exist. Backend
failures surface as StorageException; creating a user whose email or
Google ID is already taken raises DuplicateUserException.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional
from uuid import UUID

from app.api.v1.models.transaction import Transaction
from app.api.v1.models.user import User

# Fields an update may never change.
IMMUTABLE_USER_FIELDS = frozenset({"id", "google_id", "created_at"})
IMMUTABLE_TRANSACTION_FIELDS = frozenset({"id", "user_id", "created_at"})


class Storage(ABC):
    """Repository for users and their transactions."""

    async def initialize(self) -> None:
        """Prepare the backend (create tables, open pools)."""

    async def close(self) -> None:
        """Release backend resources."""

    @abstractmethod
    async def get_user(self, user_id: UUID) -> Optional[User]:
        ...

    @abstractmethod
    async def get_user_by_google_id(self, google_id: str) -> Optional[User]:
        ...

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    async def create_user(self, fields: dict[str, Any]) -> User:
        """Create a user; the email is stored lowercased."""

    @abstractmethod
    async def update_user_wallet(self, user_id: UUID, wallet_address: str) -> Optional[User]:
        ...

    @abstractmethod
    async def update_user(self, user_id: UUID, updates: dict[str, Any]) -> Optional[User]:
        ...

    @abstractmethod
    async def get_transaction(self, transaction_id: UUID) -> Optional[Transaction]:
        ...

    @abstractmethod
    async def get_transactions_by_user_id(self, user_id: UUID) -> list[Transaction]:
        """Return the user's transactions, newest first; equal timestamps are ordered by id, descending."""

    @abstractmethod
    async def create_transaction(self, fields: dict[str, Any]) -> Transaction:
        """Create a transaction in ``pending`` status with ``gasless`` set."""

    @abstractmethod
    async def update_transaction(self, transaction_id: UUID, updates: dict[str, Any]) -> Optional[Transaction]:
        ...
