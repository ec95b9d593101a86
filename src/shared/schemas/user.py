"""
User Schemas

Request/response models for user and authentication endpoints.
"""

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

from src.shared.schemas.common import BaseSchema


class UserBase(BaseModel):
    """Base user schema."""

    email: EmailStr


class UserCreate(UserBase):
    """Schema for user registration."""

    name: str = Field(min_length=1, max_length=255)
    password: str = Field(
        min_length=8,
        description="Password (minimum 8 characters)",
    )
    password_confirmation: str

    @field_validator("password_confirmation")
    @classmethod
    def passwords_match(cls, value: str, info: ValidationInfo) -> str:
        if "password" in info.data and value != info.data["password"]:
            raise ValueError("The password confirmation does not match.")
        return value


class UserLogin(UserBase):
    """Schema for user login."""

    password: str = Field(min_length=1)


class GoogleLoginRequest(BaseModel):
    """Schema for Google sign-in with an OAuth access token."""

    token: str = Field(min_length=1, description="Google OAuth access token")


class UserResponse(BaseSchema):
    """Public view of a user. Never includes the password hash."""

    id: str
    name: str
    email: str


class AuthResponse(BaseModel):
    """Envelope returned by the login endpoints."""

    success: bool = True
    message: str
    token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    data: UserResponse
