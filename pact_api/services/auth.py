"""User registration, credential checks and Google sign-in."""

import logging
from typing import Any, Dict

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from pact_api.core.security import hash_password, verify_password, create_access_token
from pact_api.models.user import User

logger = logging.getLogger(__name__)


def issue_token(user: User) -> str:
    """Create an access token for a user (sub must be a string for JWT)."""
    return create_access_token(data={"sub": str(user.id)})


def register_user(db: Session, email: str, username: str, password: str) -> User:
    """
    Create a password account.

    Raises:
        HTTPException: 400 if the email is already registered
    """
    existing_user = db.query(User).filter(User.email == email).first()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    new_user = User(
        email=email,
        username=username,
        hashed_password=hash_password(password)
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)

    logger.info("Registered user %s", new_user.id)
    return new_user


def authenticate_user(db: Session, email: str, password: str) -> User:
    """
    Verify email and password.

    Raises:
        HTTPException: 401 if the user is unknown, has no password or it does not match
    """
    user = db.query(User).filter(User.email == email).first()

    if not user or not verify_password(password, user.hashed_password):
        logger.warning("Rejected login for %s", email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return user


def google_login(db: Session, profile: Dict[str, Any]) -> User:
    """
    Find or create the user behind a Google profile.

    Users are keyed by email. A first-time Google user gets an account with
    no password; an existing password account gets the Google id linked.

    Args:
        db: Database session
        profile: Google userinfo payload (sub, email, email_verified, name)

    Returns:
        The matching or newly created user

    Raises:
        HTTPException: 400 if the profile has no email or it is unverified
    """
    email = profile.get("email")
    if not email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Google profile has no email"
        )

    # An unverified address must never create or link an account
    if profile.get("email_verified") is False:
        logger.warning("Rejected Google sign-in with unverified email %s", email)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Google email is not verified"
        )

    user = db.query(User).filter(User.email == email).first()

    if user is None:
        username = profile.get("name") or email.split("@")[0]
        user = User(email=email, username=username, google_id=profile.get("sub"))
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("Created user %s from Google sign-in", user.id)
    elif user.google_id is None and profile.get("sub"):
        user.google_id = profile["sub"]
        db.commit()
        db.refresh(user)

    return user
