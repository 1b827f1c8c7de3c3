"""Pydantic schemas for Group model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from pact_api.models.group import Role


class GroupCreate(BaseModel):
    """Schema for creating a new group."""
    name: str

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class GroupResponse(BaseModel):
    """Schema for group responses."""
    id: str
    name: str
    created_at: datetime
    role: Optional[Role] = None  # caller's role, when known

    model_config = ConfigDict(from_attributes=True)


class GroupInvite(BaseModel):
    """Schema for adding a user to a group."""
    user_id: str
    role: Role = Role.VIEWER


class GroupMemberResponse(BaseModel):
    """Schema for a membership row."""
    id: str
    user_id: str
    group_id: str
    role: Role
    joined_at: datetime

    model_config = ConfigDict(from_attributes=True)


class GroupMemberDetail(GroupMemberResponse):
    """Membership row with the member's identity."""
    username: str
    email: str
