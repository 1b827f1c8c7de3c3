"""Group management endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pact_api.api.deps import get_current_user, GroupRoleChecker
from pact_api.database import get_db
from pact_api.models.group import GroupMember, Role
from pact_api.models.user import User
from pact_api.schemas.group import (
    GroupCreate,
    GroupResponse,
    GroupInvite,
    GroupMemberResponse,
    GroupMemberDetail,
)
from pact_api.services import groups as group_service

router = APIRouter()

# Who may do what inside a group
INVITE_ROLES = (Role.ADMIN,)
VIEW_MEMBER_ROLES = (Role.ADMIN, Role.EDITOR, Role.VIEWER)


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
def create_group(
    group_data: GroupCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a new group.

    The authenticated user becomes the first member of the group, as ADMIN.
    """
    group, membership = group_service.create_group(db, group_data.name, current_user.id)
    return GroupResponse(
        id=group.id,
        name=group.name,
        created_at=group.created_at,
        role=membership.role,
    )


@router.get("", response_model=List[GroupResponse])
def list_groups(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List all groups the current user is a member of, with the user's role in each."""
    return [
        GroupResponse(id=group.id, name=group.name, created_at=group.created_at, role=role)
        for group, role in group_service.list_user_groups(db, current_user.id)
    ]


@router.post("/{group_id}/invite", response_model=GroupMemberResponse, status_code=status.HTTP_201_CREATED)
def invite_member(
    group_id: str,
    invite: GroupInvite,
    membership: GroupMember = Depends(GroupRoleChecker(INVITE_ROLES)),
    db: Session = Depends(get_db)
):
    """
    Add a user to a group (admin-only).

    Raises:
        HTTPException: 404 if group or user not found, 403 if not an admin,
            400 if the user is already a member
    """
    return group_service.add_member(db, group_id, invite.user_id, invite.role)


@router.get("/{group_id}/members", response_model=List[GroupMemberDetail])
def list_group_members(
    group_id: str,
    membership: GroupMember = Depends(GroupRoleChecker(VIEW_MEMBER_ROLES)),
    db: Session = Depends(get_db)
):
    """
    List all members of a group with their roles.

    Raises:
        HTTPException: 404 if group not found, 403 if not a member
    """
    return [
        GroupMemberDetail(
            id=member.id,
            user_id=member.user_id,
            group_id=member.group_id,
            role=member.role,
            joined_at=member.joined_at,
            username=user.username,
            email=user.email,
        )
        for member, user in group_service.list_members(db, group_id)
    ]
