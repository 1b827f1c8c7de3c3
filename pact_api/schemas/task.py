"""Pydantic schemas for Task model."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from pact_api.models.task import TaskPriority, TaskType
from pact_api.schemas.user import UserSummary


def _clean_title(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("title must not be blank")
    return v


class TaskCreate(BaseModel):
    """Schema for creating a personal or shared task."""
    title: str
    description: Optional[str] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    deadline: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        return _clean_title(v)


class PrivateTaskCreate(TaskCreate):
    """Schema for creating a task assigned to a friend."""
    assignee_id: str


class TaskUpdate(BaseModel):
    """Schema for updating a task. Only provided fields are changed."""
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[TaskPriority] = None
    deadline: Optional[datetime] = None
    completed: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _clean_title(v)


class TaskResponse(BaseModel):
    """Schema for task responses."""
    id: str
    title: str
    description: Optional[str] = None
    priority: TaskPriority
    deadline: Optional[datetime] = None
    completed: bool
    type: TaskType
    owner_id: str
    assignee_id: Optional[str] = None
    group_id: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PrivateTaskResponse(TaskResponse):
    """Private task with owner and assignee embedded."""
    owner: Optional[UserSummary] = None
    assignee: Optional[UserSummary] = None


class DeleteResult(BaseModel):
    success: bool = True
