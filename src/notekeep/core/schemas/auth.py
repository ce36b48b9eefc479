"""
Authentication schemas.

API contracts for registration, login and the current-user query. Emptiness
checks live in the service so that they answer with a 400 like every other
domain validation failure.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """User registration request schema."""

    name: str = Field(max_length=255, description="Display name")
    email: str = Field(max_length=255, description="Email address, matched exactly")
    password: str = Field(max_length=128, description="Raw password")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Alice",
                "email": "alice@example.com",
                "password": "pw123",
            }
        }
    )


class LoginRequest(BaseModel):
    """User login request schema."""

    email: str = Field(max_length=255, description="Email address")
    password: str = Field(max_length=128, description="Raw password")

    model_config = ConfigDict(
        json_schema_extra={"example": {"email": "alice@example.com", "password": "pw123"}}
    )


class UserResponse(BaseModel):
    """Public user fields; the password hash never leaves the service."""

    id: int = Field(description="User identifier")
    name: str = Field(description="Display name")
    email: str = Field(description="Email address")
    profile_image: Optional[str] = Field(default=None, description="Stored profile image reference")
    created_at: datetime = Field(description="Account creation timestamp")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "Alice",
                "email": "alice@example.com",
                "profile_image": "profiles/1b9d6bcd.png",
                "created_at": "2025-09-13T10:30:00Z",
            }
        },
    )


class TokenResponse(BaseModel):
    """JWT token response schema."""

    access_token: str = Field(description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(description="Token lifetime in seconds")
    user: UserResponse = Field(description="Authenticated user")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
                "expires_in": 86400,
                "user": {
                    "id": 1,
                    "name": "Alice",
                    "email": "alice@example.com",
                    "profile_image": None,
                    "created_at": "2025-09-13T10:30:00Z",
                },
            }
        }
    )
