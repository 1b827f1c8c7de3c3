"""Task management endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pact_api.api.deps import get_current_user, require_friend_assignee, GroupRoleChecker
from pact_api.database import get_db
from pact_api.models.group import GroupMember, Role
from pact_api.models.user import User
from pact_api.schemas.task import (
    TaskCreate,
    PrivateTaskCreate,
    TaskUpdate,
    TaskResponse,
    PrivateTaskResponse,
    DeleteResult,
)
from pact_api.services import tasks as task_service

router = APIRouter()

# Shared-task role policy
SHARED_TASK_WRITE_ROLES = (Role.ADMIN, Role.EDITOR)
SHARED_TASK_READ_ROLES = (Role.ADMIN, Role.EDITOR)


# Personal tasks

@router.post("/personal", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_personal(
    task_data: TaskCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a personal task owned by the current user."""
    return task_service.create_personal_task(db, current_user.id, task_data)


@router.get("/personal", response_model=List[TaskResponse])
def get_personal(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List the current user's personal tasks.

    Ordered by priority (HIGH first), then by deadline (earliest first).
    """
    return task_service.list_personal_tasks(db, current_user.id)


# Private tasks. Registered before /{task_id} so "private" is never read as an id.

@router.post("/private", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_private(
    task_data: PrivateTaskCreate = Depends(require_friend_assignee),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a task assigned to a friend.

    Raises:
        HTTPException: 403 if the assignee is not an accepted friend
    """
    return task_service.create_private_task(db, current_user.id, task_data)


@router.get("/private", response_model=List[PrivateTaskResponse])
def get_private(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List private tasks the current user owns or is assigned."""
    return task_service.list_private_tasks(db, current_user.id)


@router.patch("/private/{task_id}", response_model=TaskResponse)
def update_private(
    task_id: str,
    task_data: TaskUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update a private task (owner or assignee).

    Raises:
        HTTPException: 404 if not found, 403 if neither owner nor assignee
    """
    return task_service.update_private_task(db, task_id, current_user.id, task_data)


@router.delete("/private/{task_id}", response_model=DeleteResult)
def delete_private(
    task_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Delete a private task (owner only).

    Raises:
        HTTPException: 404 if not found, 403 if not the owner
    """
    task_service.delete_private_task(db, task_id, current_user.id)
    return DeleteResult()


# Shared (group) tasks

@router.post("/group/{group_id}/tasks", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_shared(
    group_id: str,
    task_data: TaskCreate,
    membership: GroupMember = Depends(GroupRoleChecker(SHARED_TASK_WRITE_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Create a task in a group.

    Raises:
        HTTPException: 404 if group not found, 403 unless ADMIN or EDITOR
    """
    return task_service.create_shared_task(db, group_id, membership.user_id, task_data)


@router.get("/group/{group_id}/tasks", response_model=List[TaskResponse])
def get_shared(
    group_id: str,
    membership: GroupMember = Depends(GroupRoleChecker(SHARED_TASK_READ_ROLES)),
    db: Session = Depends(get_db)
):
    """
    List a group's tasks.

    Raises:
        HTTPException: 404 if group not found, 403 unless ADMIN or EDITOR
    """
    return task_service.list_shared_tasks(db, group_id)


# Any task owned by the caller

@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: str,
    task_data: TaskUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update a task owned by the current user. Only provided fields change.

    Raises:
        HTTPException: 404 if not found, 403 if not the owner
    """
    return task_service.update_task(db, task_id, current_user.id, task_data)


@router.delete("/{task_id}", response_model=DeleteResult)
def delete_task(
    task_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Delete a task owned by the current user.

    Raises:
        HTTPException: 404 if not found, 403 if not the owner
    """
    task_service.delete_task(db, task_id, current_user.id)
    return DeleteResult()
