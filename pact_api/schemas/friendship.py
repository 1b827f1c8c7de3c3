"""Pydantic schemas for Friendship model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from pact_api.models.friendship import FriendshipStatus
from pact_api.schemas.user import UserSummary


class FriendshipResponse(BaseModel):
    """Schema for a friendship edge."""
    id: str
    requester_id: str
    receiver_id: str
    status: FriendshipStatus
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class FriendshipWithUsers(FriendshipResponse):
    """Friendship edge with both parties embedded."""
    requester: Optional[UserSummary] = None
    receiver: Optional[UserSummary] = None
