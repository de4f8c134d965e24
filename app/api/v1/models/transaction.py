import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Column, JSON
from sqlmodel import Field, SQLModel


class TransactionType(str, Enum):
    """Kinds of on-chain operations a user can submit."""

    TRANSFER = "transfer"
    BATCH = "batch"


class TransactionStatus(str, Enum):
    """Lifecycle of a submitted transaction."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class Transaction(SQLModel, table=True):
    """Transaction model for tracking gasless transfers submitted by a user."""

    __tablename__ = "transactions"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)

    type: str = Field(max_length=20)
    status: str = Field(default=TransactionStatus.PENDING.value, max_length=20, index=True)
    recipient: str = Field(max_length=255)
    amount: str = Field(max_length=78)
    token_symbol: str = Field(default="USDC", max_length=20)
    gasless: bool = Field(default=True)

    hash: Optional[str] = Field(default=None, max_length=255)
    batch_operations: Optional[list] = Field(default=None, sa_column=Column(JSON))
    error_message: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Config:
        json_schema_extra = {
            "example": {
                "type": "transfer",
                "status": "pending",
                "recipient": "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
                "amount": "25.00",
                "token_symbol": "USDC",
            }
        }
