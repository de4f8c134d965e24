"""
Transaction request and response schemas.
"""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import AliasChoices, ConfigDict, Field, field_validator

from app.api.v1.models.transaction import TransactionStatus, TransactionType
from app.api.v1.schemas.user import CamelModel

# Older clients report a confirmed transaction as "success".
LEGACY_STATUS_ALIASES = {"success": TransactionStatus.COMPLETED.value}


class CreateTransactionRequest(CamelModel):
    """Transaction creation request. The owner is always the caller."""

    type: TransactionType = Field(..., description="transfer or batch")
    recipient: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("recipient", "to"),
        description="Recipient address",
    )
    amount: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("amount", "value"),
        description="Amount as a decimal string",
    )
    token_symbol: str = Field(
        default="USDC",
        validation_alias=AliasChoices("tokenSymbol", "token_symbol"),
        description="Token symbol",
    )
    batch_operations: Optional[list[Any]] = Field(
        None,
        validation_alias=AliasChoices("batchOperations", "batch_operations"),
        description="Operations bundled in a batch transaction",
    )

    @field_validator("recipient")
    @classmethod
    def strip_recipient(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("recipient must not be blank")
        return value

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "transfer",
                "recipient": "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed",
                "amount": "25.00",
                "tokenSymbol": "USDC",
            }
        }
    )


class UpdateTransactionRequest(CamelModel):
    """Partial transaction update reported after broadcast or confirmation."""

    status: Optional[TransactionStatus] = Field(None, description="New status")
    hash: Optional[str] = Field(None, description="Transaction hash once broadcast")
    error_message: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("errorMessage", "error_message", "error"),
        description="Failure reason",
    )

    @field_validator("status", mode="before")
    @classmethod
    def normalize_legacy_status(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("status cannot be null")
        if isinstance(value, str):
            return LEGACY_STATUS_ALIASES.get(value, value)
        return value

    def to_updates(self) -> dict[str, Any]:
        """Fields explicitly provided by the client, keyed by model attribute."""
        updates = self.model_dump(exclude_unset=True)
        if updates.get("status") is not None:
            updates["status"] = TransactionStatus(updates["status"]).value
        return updates


class TransactionResponse(CamelModel):
    """Transaction as returned by the API."""

    id: UUID = Field(..., description="Transaction UUID")
    user_id: UUID = Field(..., description="Owner UUID")
    type: str = Field(..., description="transfer or batch")
    status: str = Field(..., description="pending, processing, completed or failed")
    recipient: str = Field(..., description="Recipient address")
    amount: str = Field(..., description="Amount as a decimal string")
    token_symbol: str = Field(..., description="Token symbol")
    gasless: bool = Field(..., description="Whether gas is sponsored")
    hash: Optional[str] = Field(None, description="Transaction hash")
    batch_operations: Optional[list[Any]] = Field(None, description="Batch operations")
    error_message: Optional[str] = Field(None, description="Failure reason")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
