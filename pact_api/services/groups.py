"""Groups and memberships."""

import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from pact_api.models.group import Group, GroupMember, Role
from pact_api.models.user import User

logger = logging.getLogger(__name__)


def create_group(db: Session, name: str, creator_id: str) -> Tuple[Group, GroupMember]:
    """
    Create a group with the creator as its first ADMIN member.

    Both rows are written in one commit.
    """
    group = Group(name=name)
    membership = GroupMember(user_id=creator_id, group=group, role=Role.ADMIN)

    db.add(group)
    db.add(membership)
    db.commit()
    db.refresh(group)
    db.refresh(membership)

    logger.info("Group %s created by %s", group.id, creator_id)
    return group, membership


def get_membership(db: Session, group_id: str, user_id: str) -> Optional[GroupMember]:
    return db.query(GroupMember).filter(
        GroupMember.group_id == group_id,
        GroupMember.user_id == user_id,
    ).first()


def list_user_groups(db: Session, user_id: str) -> List[Tuple[Group, Role]]:
    """Groups the user belongs to, paired with the user's role in each."""
    rows = db.query(Group, GroupMember.role).join(
        GroupMember, GroupMember.group_id == Group.id
    ).filter(
        GroupMember.user_id == user_id
    ).order_by(Group.created_at.desc()).all()

    return [(group, role) for group, role in rows]


def add_member(db: Session, group_id: str, user_id: str, role: Role) -> GroupMember:
    """
    Add a user to a group with the given role.

    Raises:
        HTTPException: 404 if the user does not exist, 400 if already a member
    """
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    if get_membership(db, group_id, user_id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User is already a member of this group"
        )

    membership = GroupMember(group_id=group_id, user_id=user_id, role=role)
    db.add(membership)
    db.commit()
    db.refresh(membership)

    logger.info("User %s added to group %s as %s", user_id, group_id, role.value)
    return membership


def list_members(db: Session, group_id: str) -> List[Tuple[GroupMember, User]]:
    """Members of a group in join order."""
    return db.query(GroupMember, User).join(
        User, User.id == GroupMember.user_id
    ).filter(
        GroupMember.group_id == group_id
    ).order_by(GroupMember.joined_at.asc()).all()
