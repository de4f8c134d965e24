"""
SQL storage backend built on SQLModel and an async SQLAlchemy engine.

Postgres (asyncpg) in deployment, SQLite (aiosqlite) in tests.
"""

import logging
from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlmodel import SQLModel, desc, select

from app.api.db.storage import (
    IMMUTABLE_TRANSACTION_FIELDS,
    IMMUTABLE_USER_FIELDS,
    Storage,
)
from app.api.utils.exceptions import DuplicateUserException, StorageException
from app.api.v1.models.transaction import Transaction, TransactionStatus
from app.api.v1.models.user import User

logger = logging.getLogger(__name__)


class SQLStorage(Storage):
    """Storage implementation persisting users and transactions in SQL tables."""

    def __init__(self, engine: AsyncEngine):
        """
        Initialize SQLStorage.

        Args:
            engine (AsyncEngine): Engine the store owns and disposes on close
        """
        self.engine = engine
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def initialize(self) -> None:
        """Create database tables."""
        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
            logger.info("Database tables created successfully")
        except SQLAlchemyError as e:
            logger.error(f"Database initialization failed: {str(e)}", exc_info=True)
            raise StorageException("Database initialization failed") from e

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Database engine disposed")

    async def get_user(self, user_id: UUID) -> Optional[User]:
        try:
            async with self.session_factory() as session:
                return await session.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error(f"Error getting user by ID: {str(e)}", exc_info=True)
            raise StorageException() from e

    async def get_user_by_google_id(self, google_id: str) -> Optional[User]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(User).where(User.google_id == google_id))
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error getting user by Google ID: {str(e)}", exc_info=True)
            raise StorageException() from e

    async def get_user_by_email(self, email: str) -> Optional[User]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(select(User).where(User.email == email.lower()))
                return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Error getting user by email: {str(e)}", exc_info=True)
            raise StorageException() from e

    async def create_user(self, fields: dict[str, Any]) -> User:
        user = User(**{**fields, "email": fields["email"].lower()})
        async with self.session_factory() as session:
            try:
                session.add(user)
                await session.commit()
                await session.refresh(user)
                logger.info(f"User stored: {user.id}")
                return user
            except IntegrityError as e:
                await session.rollback()
                logger.warning(f"Duplicate user rejected: {str(e.orig)}")
                raise DuplicateUserException() from e
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Error creating user: {str(e)}", exc_info=True)
                raise StorageException() from e

    async def update_user_wallet(self, user_id: UUID, wallet_address: str) -> Optional[User]:
        return await self.update_user(user_id, {"wallet_address": wallet_address})

    async def update_user(self, user_id: UUID, updates: dict[str, Any]) -> Optional[User]:
        async with self.session_factory() as session:
            try:
                user = await session.get(User, user_id)
                if not user:
                    return None

                for field, value in updates.items():
                    if field not in IMMUTABLE_USER_FIELDS:
                        setattr(user, field, value)
                user.updated_at = datetime.utcnow()

                await session.commit()
                await session.refresh(user)
                return user
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Error updating user: {str(e)}", exc_info=True)
                raise StorageException() from e

    async def get_transaction(self, transaction_id: UUID) -> Optional[Transaction]:
        try:
            async with self.session_factory() as session:
                return await session.get(Transaction, transaction_id)
        except SQLAlchemyError as e:
            logger.error(f"Error getting transaction by ID: {str(e)}", exc_info=True)
            raise StorageException() from e

    async def get_transactions_by_user_id(self, user_id: UUID) -> list[Transaction]:
        try:
            async with self.session_factory() as session:
                statement = (
                    select(Transaction)
                    .where(Transaction.user_id == user_id)
                    .order_by(desc(Transaction.created_at), desc(Transaction.id))
                )
                result = await session.execute(statement)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error getting transactions by user ID: {str(e)}", exc_info=True)
            raise StorageException() from e

    async def create_transaction(self, fields: dict[str, Any]) -> Transaction:
        transaction = Transaction(**{
            **fields,
            "status": TransactionStatus.PENDING.value,
            "gasless": True,
        })
        async with self.session_factory() as session:
            try:
                session.add(transaction)
                await session.commit()
                await session.refresh(transaction)
                return transaction
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Error creating transaction: {str(e)}", exc_info=True)
                raise StorageException() from e

    async def update_transaction(self, transaction_id: UUID, updates: dict[str, Any]) -> Optional[Transaction]:
        async with self.session_factory() as session:
            try:
                transaction = await session.get(Transaction, transaction_id)
                if not transaction:
                    return None

                for field, value in updates.items():
                    if field not in IMMUTABLE_TRANSACTION_FIELDS:
                        setattr(transaction, field, value)
                transaction.updated_at = datetime.utcnow()

                await session.commit()
                await session.refresh(transaction)
                return transaction
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Error updating transaction: {str(e)}", exc_info=True)
                raise StorageException() from e
