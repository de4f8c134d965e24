"""
Transaction service layer.

This module provides business logic for recording and updating the
transactions a user submits.
"""

import logging
from typing import Any
from uuid import UUID

from app.api.core.auth import AuthContext
from app.api.db.storage import Storage
from app.api.utils.exceptions import AccessDeniedException, TransactionNotFoundException
from app.api.v1.models.transaction import Transaction
from app.api.v1.schemas.transaction import CreateTransactionRequest

logger = logging.getLogger(__name__)


class TransactionService:
    """Service class for transaction operations."""

    @staticmethod
    async def create_transaction(
        request: CreateTransactionRequest,
        auth: AuthContext,
        storage: Storage,
    ) -> Transaction:
        """
        Record a new pending transaction owned by the caller.

        Args:
            request (CreateTransactionRequest): Validated transaction fields
            auth (AuthContext): Authenticated caller, always the owner
            storage (Storage): Storage backend

        Returns:
            Transaction: Created transaction
        """
        transaction = await storage.create_transaction(
            {
                "user_id": auth.user_id,
                "type": request.type.value,
                "recipient": request.recipient,
                "amount": request.amount,
                "token_symbol": request.token_symbol,
                "batch_operations": request.batch_operations,
            }
        )
        logger.info(f"Transaction {transaction.id} created for user {auth.user_id}")
        return transaction

    @staticmethod
    async def get_owned_transaction(
        transaction_id: UUID,
        auth: AuthContext,
        storage: Storage,
        denied_message: str = "You can only access your own transactions",
    ) -> Transaction:
        """
        Load a transaction and make sure the caller owns it.

        Args:
            transaction_id (UUID): Transaction UUID
            auth (AuthContext): Authenticated caller
            storage (Storage): Storage backend
            denied_message (str): Message used when ownership fails

        Returns:
            Transaction: The caller's transaction

        Raises:
            TransactionNotFoundException: If the transaction does not exist
            AccessDeniedException: If another user owns it
        """
        transaction = await storage.get_transaction(transaction_id)
        if not transaction:
            logger.warning(f"Transaction not found: {transaction_id}")
            raise TransactionNotFoundException()

        if transaction.user_id != auth.user_id:
            logger.warning(f"User {auth.user_id} denied access to transaction {transaction_id}")
            raise AccessDeniedException(denied_message)

        return transaction

    @staticmethod
    async def update_transaction(
        transaction_id: UUID,
        updates: dict[str, Any],
        storage: Storage,
    ) -> Transaction:
        """
        Apply a status update to a transaction already checked for ownership.

        Raises:
            TransactionNotFoundException: If the transaction vanished meanwhile
        """
        transaction = await storage.update_transaction(transaction_id, updates)
        if not transaction:
            raise TransactionNotFoundException()

        logger.info(f"Transaction {transaction_id} updated: {sorted(updates)}")
        return transaction

    @staticmethod
    async def list_transactions(user_id: UUID, storage: Storage) -> list[Transaction]:
        """Return the user's transactions, newest first."""
        transactions = await storage.get_transactions_by_user_id(user_id)
        logger.debug(f"Retrieved {len(transactions)} transactions for user {user_id}")
        return transactions
