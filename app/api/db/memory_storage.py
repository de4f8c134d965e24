"""
In-memory storage backend.

Used by the test-suite and for running the API without a database. Mirrors
the SQL backend: newest-first transaction listing, None on missing records,
DuplicateUserException on email or Google ID collisions.
"""

import logging
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from app.api.db.storage import (
    IMMUTABLE_TRANSACTION_FIELDS,
    IMMUTABLE_USER_FIELDS,
    Storage,
)
from app.api.utils.exceptions import DuplicateUserException
from app.api.v1.models.transaction import Transaction, TransactionStatus
from app.api.v1.models.user import User

logger = logging.getLogger(__name__)


class MemoryStorage(Storage):
    """Dictionary backed implementation of the Storage interface."""

    def __init__(self):
        self._users: dict[UUID, User] = {}
        self._transactions: dict[UUID, Transaction] = {}

    async def get_user(self, user_id: UUID) -> Optional[User]:
        return self._users.get(user_id)

    async def get_user_by_google_id(self, google_id: str) -> Optional[User]:
        return next(
            (user for user in self._users.values() if user.google_id == google_id),
            None,
        )

    async def get_user_by_email(self, email: str) -> Optional[User]:
        email = email.lower()
        return next(
            (user for user in self._users.values() if user.email == email),
            None,
        )

    async def create_user(self, fields: dict[str, Any]) -> User:
        email = fields["email"].lower()
        if await self.get_user_by_email(email):
            raise DuplicateUserException(details={"field": "email"})
        if await self.get_user_by_google_id(fields["google_id"]):
            raise DuplicateUserException(details={"field": "googleId"})

        user = User(**{**fields, "email": email})
        self._users[user.id] = user
        logger.info(f"User stored in memory: {user.id}")
        return user

    async def update_user_wallet(self, user_id: UUID, wallet_address: str) -> Optional[User]:
        return await self.update_user(user_id, {"wallet_address": wallet_address})

    async def update_user(self, user_id: UUID, updates: dict[str, Any]) -> Optional[User]:
        user = self._users.get(user_id)
        if not user:
            return None

        for field, value in updates.items():
            if field not in IMMUTABLE_USER_FIELDS:
                setattr(user, field, value)
        user.updated_at = datetime.utcnow()
        return user

    async def get_transaction(self, transaction_id: UUID) -> Optional[Transaction]:
        return self._transactions.get(transaction_id)

    async def get_transactions_by_user_id(self, user_id: UUID) -> list[Transaction]:
        owned = [tx for tx in self._transactions.values() if tx.user_id == user_id]
        return sorted(
            owned,
            key=lambda tx: (tx.created_at, tx.id),
            reverse=True,
        )

    async def create_transaction(self, fields: dict[str, Any]) -> Transaction:
        transaction = Transaction(**{
            **fields,
            "status": TransactionStatus.PENDING.value,
            "gasless": True,
        })
        self._transactions[transaction.id] = transaction
        return transaction

    async def update_transaction(self, transaction_id: UUID, updates: dict[str, Any]) -> Optional[Transaction]:
        transaction = self._transactions.get(transaction_id)
        if not transaction:
            return None

        for field, value in updates.items():
            if field not in IMMUTABLE_TRANSACTION_FIELDS:
                setattr(transaction, field, value)
        transaction.updated_at = datetime.utcnow()
        return transaction
