"""Pydantic models for authentication and user administration."""
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from studentix.models.db.user import UserRole


class RegisterRequest(BaseModel):
    """User registration request."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=100)
    fullName: str = Field(..., min_length=1, max_length=150)
    role: UserRole


class LoginRequest(BaseModel):
    """User login request."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """User response (public info)."""

    id: int
    email: str
    fullName: str
    role: UserRole
    isActive: bool
    createdAt: datetime | None = None


class AuthResponse(BaseModel):
    """Login response: the user and a bearer token."""

    user: UserResponse
    token: str
    token_type: str = "bearer"
    expires_in: int


class AdminUserUpdateRequest(BaseModel):
    """Partial update of another user's account."""

    fullName: str | None = Field(None, min_length=1, max_length=150)
    email: EmailStr | None = None
    role: UserRole | None = None
    isActive: bool | None = None


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str
