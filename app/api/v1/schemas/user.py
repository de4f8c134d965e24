"""
User request and response schemas.

JSON keys are camelCase on the wire.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

WALLET_ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    def to_json(self) -> dict:
        """Dump as JSON-ready data with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class WalletUpdateRequest(CamelModel):
    """Wallet address update request."""

    wallet_address: str = Field(
        ...,
        pattern=WALLET_ADDRESS_PATTERN,
        min_length=42,
        max_length=42,
        description="Ethereum address (0x + 40 hex characters)",
    )


class ProfileUpdateRequest(CamelModel):
    """Profile update request."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name")


class UserResponse(CamelModel):
    """User as returned by the API."""

    id: UUID = Field(..., description="User UUID")
    email: str = Field(..., description="User email")
    google_id: str = Field(..., description="Google account ID")
    name: Optional[str] = Field(None, description="Display name")
    wallet_address: Optional[str] = Field(None, description="Linked wallet address")
    created_at: datetime = Field(..., description="Creation timestamp")
