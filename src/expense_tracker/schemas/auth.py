"""Pydantic schemas for authentication endpoints."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class _EmailNormalizingModel(BaseModel):
    """Strips string fields and lower-cases the email before any lookup."""

    model_config = ConfigDict(str_strip_whitespace=True)

    @field_validator("email", mode="after", check_fields=False)
    @classmethod
    def lowercase_email(cls, value: str) -> str:
        return value.lower()


class RegisterRequest(_EmailNormalizingModel):
    """Request model for user registration."""

    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")


class LoginRequest(_EmailNormalizingModel):
    """Request model for user login."""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class UpdateProfileRequest(_EmailNormalizingModel):
    """Request model for profile changes. Both fields are required and non-blank."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr


class UserSummary(BaseModel):
    """Public view of a user (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str


class AuthResponse(BaseModel):
    """Response for register and login."""

    success: bool = True
    message: str
    user: UserSummary
    token: str


class CurrentUserResponse(BaseModel):
    success: bool = True
    user: UserSummary


class ProfileUpdateResponse(BaseModel):
    success: bool = True
    message: str
    user: UserSummary


class MessageResponse(BaseModel):
    success: bool = True
    message: str
