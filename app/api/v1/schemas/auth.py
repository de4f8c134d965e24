from typing import Optional

from pydantic import BaseModel, Field, model_validator

from app.api.v1.schemas.user import UserResponse


class GoogleAuthRequest(BaseModel):
    """Google sign-in request. At least one token must be present."""

    access_token: Optional[str] = Field(None, description="Google OAuth access token")
    id_token: Optional[str] = Field(None, description="Google ID token (JWT)")

    @model_validator(mode="after")
    def require_a_token(self) -> "GoogleAuthRequest":
        if not self.access_token and not self.id_token:
            raise ValueError("Either access_token or id_token must be provided")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "access_token": "ya29.a0AfH6SM...",
            }
        }


class GoogleIdentity(BaseModel):
    """Identity returned by Google for a verified token."""

    external_id: str = Field(..., description="Google account ID")
    email: str = Field(..., description="Account email")
    name: Optional[str] = Field(None, description="Display name")
    picture: str = Field(default="", description="Profile picture URL")
    email_verified: bool = Field(default=False, description="Whether Google verified the email")


class SessionValidationResponse(BaseModel):
    """Session validation response."""

    valid: bool = Field(..., description="Whether the session is valid")
    user: UserResponse = Field(..., description="User owning the session")
