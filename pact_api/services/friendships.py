"""Friend requests and the friendship graph."""

import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, joinedload

from pact_api.models.friendship import Friendship, FriendshipStatus
from pact_api.models.user import User

logger = logging.getLogger(__name__)


def _between(user_a: str, user_b: str):
    """Filter matching an edge between two users in either stored direction."""
    return or_(
        and_(Friendship.requester_id == user_a, Friendship.receiver_id == user_b),
        and_(Friendship.requester_id == user_b, Friendship.receiver_id == user_a),
    )


def find_accepted_friendship(db: Session, user_a: str, user_b: str) -> Optional[Friendship]:
    """Return the ACCEPTED edge between two users, if any."""
    return db.query(Friendship).filter(
        Friendship.status == FriendshipStatus.ACCEPTED,
        _between(user_a, user_b),
    ).first()


def send_request(db: Session, from_user_id: str, to_user_id: str) -> Friendship:
    """
    Create a PENDING friend request.

    Any existing edge between the two users blocks a new one, whatever its
    status or direction.

    Raises:
        HTTPException: 400 for self-requests and duplicates, 404 if the target does not exist
    """
    if from_user_id == to_user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot friend yourself"
        )

    target = db.query(User).filter(User.id == to_user_id).first()
    if not target:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    existing = db.query(Friendship).filter(_between(from_user_id, to_user_id)).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Request already exists"
        )

    friendship = Friendship(
        requester_id=from_user_id,
        receiver_id=to_user_id,
        status=FriendshipStatus.PENDING,
    )
    db.add(friendship)
    db.commit()
    db.refresh(friendship)

    logger.info("Friend request %s sent from %s to %s", friendship.id, from_user_id, to_user_id)
    return friendship


def get_incoming_requests(db: Session, user_id: str) -> List[Friendship]:
    """PENDING requests addressed to the user, newest first."""
    return db.query(Friendship).options(
        joinedload(Friendship.requester)
    ).filter(
        Friendship.receiver_id == user_id,
        Friendship.status == FriendshipStatus.PENDING,
    ).order_by(Friendship.created_at.desc()).all()


def _respond(db: Session, request_id: str, user_id: str, new_status: FriendshipStatus) -> Friendship:
    request = db.query(Friendship).filter(Friendship.id == request_id).first()

    if not request:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Request not found"
        )

    if request.receiver_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the receiver can respond to this request"
        )

    if request.status != FriendshipStatus.PENDING:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Request already handled"
        )

    request.status = new_status
    db.commit()
    db.refresh(request)

    logger.info("Friend request %s marked %s by %s", request.id, new_status.value, user_id)
    return request


def accept_request(db: Session, request_id: str, user_id: str) -> Friendship:
    """Accept a PENDING request addressed to the user."""
    return _respond(db, request_id, user_id, FriendshipStatus.ACCEPTED)


def block_request(db: Session, request_id: str, user_id: str) -> Friendship:
    """Block a PENDING request addressed to the user."""
    return _respond(db, request_id, user_id, FriendshipStatus.BLOCKED)


def list_friends(db: Session, user_id: str) -> List[Friendship]:
    """ACCEPTED edges where the user is either party."""
    return db.query(Friendship).options(
        joinedload(Friendship.requester),
        joinedload(Friendship.receiver),
    ).filter(
        Friendship.status == FriendshipStatus.ACCEPTED,
        or_(Friendship.requester_id == user_id, Friendship.receiver_id == user_id),
    ).order_by(Friendship.created_at.desc()).all()
