import enum
import uuid
from datetime import datetime

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Boolean, Enum
from sqlalchemy.orm import relationship

from pact_api.database import Base


class TaskPriority(str, enum.Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class TaskType(str, enum.Enum):
    """
    Visibility class of a task.

    PERSONAL: owner only, no assignee or group
    PRIVATE: owner plus an assignee who is the owner's friend
    SHARED: belongs to a group
    """
    PERSONAL = "PERSONAL"
    PRIVATE = "PRIVATE"
    SHARED = "SHARED"


class Task(Base):
    """Task model covering personal, private and shared tasks."""

    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    priority = Column(Enum(TaskPriority, name="task_priority"), default=TaskPriority.MEDIUM, nullable=False)
    deadline = Column(DateTime, nullable=True)
    completed = Column(Boolean, default=False, nullable=False)
    type = Column(Enum(TaskType, name="task_type"), nullable=False, index=True)
    owner_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    assignee_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    group_id = Column(String(36), ForeignKey("groups.id", ondelete="CASCADE"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    owner = relationship("User", foreign_keys=[owner_id], back_populates="owned_tasks")
    assignee = relationship("User", foreign_keys=[assignee_id], back_populates="assigned_tasks")
    group = relationship("Group", back_populates="tasks")
