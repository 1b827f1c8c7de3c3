"""Personal, private and shared task operations with ownership checks."""

import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy import case, or_
from sqlalchemy.orm import Session, joinedload

from pact_api.models.task import Task, TaskPriority, TaskType
from pact_api.schemas.task import TaskCreate, PrivateTaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

# Columns that may be omitted from an update but never cleared
_NON_NULLABLE = {"title", "priority", "completed"}

# HIGH > MEDIUM > LOW, independent of how the database sorts enum values
_priority_rank = case(
    (Task.priority == TaskPriority.HIGH, 3),
    (Task.priority == TaskPriority.MEDIUM, 2),
    else_=1,
)

# Priority descending, then earliest deadline first, tasks without a deadline last
_BY_PRIORITY_THEN_DEADLINE = (
    _priority_rank.desc(),
    Task.deadline.is_(None),
    Task.deadline.asc(),
    Task.created_at.asc(),
)


def _get_task_or_404(db: Session, task_id: str) -> Task:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )
    return task


def _get_private_task_or_404(db: Session, task_id: str) -> Task:
    task = _get_task_or_404(db, task_id)
    if task.type != TaskType.PRIVATE:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Task not found"
        )
    return task


def _forbid(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


def _apply_update(db: Session, task: Task, task_data: TaskUpdate) -> Task:
    update_data = task_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is None and field in _NON_NULLABLE:
            continue
        setattr(task, field, value)

    db.commit()
    db.refresh(task)
    return task


# Personal tasks

def create_personal_task(db: Session, owner_id: str, task_data: TaskCreate) -> Task:
    task = Task(
        title=task_data.title,
        description=task_data.description,
        priority=task_data.priority,
        deadline=task_data.deadline,
        type=TaskType.PERSONAL,
        owner_id=owner_id,
    )
    db.add(task)
    db.commit()
    db.refresh(task)

    logger.info("Personal task %s created by %s", task.id, owner_id)
    return task


def list_personal_tasks(db: Session, owner_id: str) -> List[Task]:
    return db.query(Task).filter(
        Task.owner_id == owner_id,
        Task.type == TaskType.PERSONAL,
    ).order_by(*_BY_PRIORITY_THEN_DEADLINE).all()


def update_task(db: Session, task_id: str, user_id: str, task_data: TaskUpdate) -> Task:
    """
    Update a task owned by the user.

    Raises:
        HTTPException: 404 if the task does not exist, 403 if the user is not the owner
    """
    task = _get_task_or_404(db, task_id)
    if task.owner_id != user_id:
        raise _forbid("Only the owner can update this task")
    return _apply_update(db, task, task_data)


def delete_task(db: Session, task_id: str, user_id: str) -> None:
    """
    Delete a task owned by the user.

    Raises:
        HTTPException: 404 if the task does not exist, 403 if the user is not the owner
    """
    task = _get_task_or_404(db, task_id)
    if task.owner_id != user_id:
        raise _forbid("Only the owner can delete this task")

    db.delete(task)
    db.commit()
    logger.info("Task %s deleted by %s", task_id, user_id)


# Private tasks

def create_private_task(db: Session, owner_id: str, task_data: PrivateTaskCreate) -> Task:
    """
    Create a task assigned to a friend.

    The friendship itself is checked by the endpoint's guard.
    """
    task = Task(
        title=task_data.title,
        description=task_data.description,
        priority=task_data.priority,
        deadline=task_data.deadline,
        type=TaskType.PRIVATE,
        owner_id=owner_id,
        assignee_id=task_data.assignee_id,
    )
    db.add(task)
    db.commit()
    db.refresh(task)

    logger.info("Private task %s created by %s for %s", task.id, owner_id, task.assignee_id)
    return task


def list_private_tasks(db: Session, user_id: str) -> List[Task]:
    """PRIVATE tasks the user owns or is assigned, newest first."""
    return db.query(Task).options(
        joinedload(Task.owner),
        joinedload(Task.assignee),
    ).filter(
        Task.type == TaskType.PRIVATE,
        or_(Task.owner_id == user_id, Task.assignee_id == user_id),
    ).order_by(Task.created_at.desc()).all()


def update_private_task(db: Session, task_id: str, user_id: str, task_data: TaskUpdate) -> Task:
    """Owner or assignee may update a private task."""
    task = _get_private_task_or_404(db, task_id)
    if user_id not in (task.owner_id, task.assignee_id):
        raise _forbid("Only the owner or assignee can update this task")
    return _apply_update(db, task, task_data)


def delete_private_task(db: Session, task_id: str, user_id: str) -> None:
    """Only the owner may delete a private task."""
    task = _get_private_task_or_404(db, task_id)
    if task.owner_id != user_id:
        raise _forbid("Only the owner can delete this task")

    db.delete(task)
    db.commit()
    logger.info("Private task %s deleted by %s", task_id, user_id)


# Shared tasks

def create_shared_task(db: Session, group_id: str, owner_id: str, task_data: TaskCreate) -> Task:
    """Create a task in a group. Role checks happen in the endpoint's guard."""
    task = Task(
        title=task_data.title,
        description=task_data.description,
        priority=task_data.priority,
        deadline=task_data.deadline,
        type=TaskType.SHARED,
        owner_id=owner_id,
        group_id=group_id,
    )
    db.add(task)
    db.commit()
    db.refresh(task)

    logger.info("Shared task %s created in group %s by %s", task.id, group_id, owner_id)
    return task


def list_shared_tasks(db: Session, group_id: str) -> List[Task]:
    return db.query(Task).filter(
        Task.group_id == group_id,
        Task.type == TaskType.SHARED,
    ).order_by(*_BY_PRIORITY_THEN_DEADLINE).all()
