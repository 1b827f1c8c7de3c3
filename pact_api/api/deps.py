"""FastAPI dependencies for authentication and authorization guards."""

import logging
from typing import Iterable, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from pact_api.config import settings
from pact_api.core.security import decode_token
from pact_api.database import get_db
from pact_api.models.group import Group, GroupMember, Role
from pact_api.models.user import User
from pact_api.schemas.task import PrivateTaskCreate
from pact_api.services.friendships import find_accepted_friendship

logger = logging.getLogger(__name__)

# Browsers send the token in a cookie; API clients may use the Authorization header.
# auto_error=False lets us fall back to the cookie.
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Dependency that decodes the JWT and returns the current user.

    The token is read from the auth cookie first, then from a Bearer
    Authorization header.

    Raises:
        HTTPException: 401 if the token is missing, invalid, expired or the user no longer exists
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token = request.cookies.get(settings.COOKIE_NAME)
    if not token and credentials is not None:
        token = credentials.credentials

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = decode_token(token)
        user_id: Optional[str] = payload.get("sub")
    except JWTError:
        raise credentials_exception

    if user_id is None:
        raise credentials_exception

    user = db.query(User).filter(User.id == str(user_id)).first()
    if user is None:
        raise credentials_exception

    return user


def ensure_friends(db: Session, user_id: str, target_id: Optional[str]) -> None:
    """
    Check that two users share an ACCEPTED friendship, in either direction.

    Raises:
        HTTPException: 403 if no target is given or the users are not friends
    """
    if not target_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Target user not specified"
        )

    if not find_accepted_friendship(db, user_id, target_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not friends"
        )


def require_friend_assignee(
    task_data: PrivateTaskCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> PrivateTaskCreate:
    """
    Guard for creating a task assigned to a friend.

    The friendship is checked against the validated assignee_id, the same
    field the task is created with.

    Returns:
        The validated task payload
    """
    ensure_friends(db, current_user.id, task_data.assignee_id)
    return task_data


class GroupRoleChecker:
    """
    Dependency factory resolving the caller's membership in the group from the path.

    Usage: Depends(GroupRoleChecker([Role.ADMIN, Role.EDITOR]))

    The resolved role is stored on request.state.group_role.
    """

    def __init__(self, allowed_roles: Iterable[Role] = tuple(Role)):
        self.allowed_roles = frozenset(allowed_roles)

    def __call__(
        self,
        group_id: str,
        request: Request,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db)
    ) -> GroupMember:
        group = db.query(Group).filter(Group.id == group_id).first()
        if not group:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Group not found"
            )

        membership = db.query(GroupMember).filter(
            GroupMember.group_id == group_id,
            GroupMember.user_id == current_user.id,
        ).first()

        if not membership:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You are not a member of this group"
            )

        request.state.group_role = membership.role

        if membership.role not in self.allowed_roles:
            logger.info(
                "User %s with role %s denied in group %s",
                current_user.id, membership.role.value, group_id,
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires one of roles: {sorted(r.value for r in self.allowed_roles)}"
            )

        return membership
