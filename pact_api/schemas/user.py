"""Pydantic schemas for User model and authentication."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, ConfigDict, field_validator


class UserCreate(BaseModel):
    """Schema for registering a new user."""
    email: EmailStr
    username: str
    password: str

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username must not be blank")
        return v

    @field_validator("password")
    @classmethod
    def password_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("password must not be empty")
        return v


class UserLogin(BaseModel):
    """Schema for email/password login."""
    email: EmailStr
    password: str


class UserSummary(BaseModel):
    """Minimal user information embedded in other responses."""
    id: str
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class UserResponse(UserSummary):
    """Schema for user responses (excludes password)."""
    created_at: datetime


class AuthResult(BaseModel):
    """Body returned by login, register and logout; the token travels in a cookie."""
    success: bool = True
