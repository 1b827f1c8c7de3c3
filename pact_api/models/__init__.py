"""SQLAlchemy models for PACT."""

from pact_api.models.user import User
from pact_api.models.friendship import Friendship, FriendshipStatus
from pact_api.models.group import Group, GroupMember, Role
from pact_api.models.task import Task, TaskPriority, TaskType

__all__ = [
    "User",
    "Friendship",
    "FriendshipStatus",
    "Group",
    "GroupMember",
    "Role",
    "Task",
    "TaskPriority",
    "TaskType",
]
