"""Friend request endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from pact_api.api.deps import get_current_user
from pact_api.database import get_db
from pact_api.models.user import User
from pact_api.schemas.friendship import FriendshipResponse, FriendshipWithUsers
from pact_api.services import friendships as friendship_service

router = APIRouter()


@router.post("/request/{user_id}", response_model=FriendshipResponse, status_code=status.HTTP_201_CREATED)
def send_request(
    user_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Send a friend request to a user.

    Raises:
        HTTPException: 400 for self-requests or if any request between the two exists,
            404 if the user does not exist
    """
    return friendship_service.send_request(db, current_user.id, user_id)


@router.get("/requests", response_model=List[FriendshipWithUsers])
def get_requests(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List pending requests addressed to the current user."""
    return friendship_service.get_incoming_requests(db, current_user.id)


@router.post("/accept/{request_id}", response_model=FriendshipResponse)
def accept(
    request_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Accept a friend request.

    Raises:
        HTTPException: 404 if unknown, 403 if not the receiver, 400 if not pending
    """
    return friendship_service.accept_request(db, request_id, current_user.id)


@router.post("/block/{request_id}", response_model=FriendshipResponse)
def block(
    request_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Block a friend request.

    Raises:
        HTTPException: 404 if unknown, 403 if not the receiver, 400 if not pending
    """
    return friendship_service.block_request(db, request_id, current_user.id)


@router.get("/list", response_model=List[FriendshipWithUsers])
def list_friends(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List accepted friendships of the current user."""
    return friendship_service.list_friends(db, current_user.id)
