"""Authentication endpoints: password login, registration, logout and Google sign-in."""

import logging
import secrets

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from pact_api.config import settings
from pact_api.core.google_oauth import GoogleOAuthError, build_authorization_url, fetch_profile
from pact_api.database import get_db
from pact_api.schemas.user import UserCreate, UserLogin, AuthResult
from pact_api.services import auth as auth_service

logger = logging.getLogger(__name__)

router = APIRouter()

OAUTH_STATE_COOKIE = "oauth_state"


def set_auth_cookie(response: Response, token: str) -> None:
    """Attach the access token as an HTTP-only cookie."""
    response.set_cookie(
        key=settings.COOKIE_NAME,
        value=token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        httponly=True,
        samesite="lax",
        secure=settings.secure_cookies,
    )


@router.post("/login", response_model=AuthResult)
def login(credentials: UserLogin, response: Response, db: Session = Depends(get_db)):
    """
    Login with email and password.

    On success the access token is set as an HTTP-only cookie.

    Raises:
        HTTPException: 401 if credentials are invalid
    """
    user = auth_service.authenticate_user(db, credentials.email, credentials.password)
    set_auth_cookie(response, auth_service.issue_token(user))
    return AuthResult()


@router.post("/register", response_model=AuthResult, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, response: Response, db: Session = Depends(get_db)):
    """
    Register a new user account and log it in.

    Raises:
        HTTPException: 400 if email already exists
    """
    user = auth_service.register_user(db, user_data.email, user_data.username, user_data.password)
    set_auth_cookie(response, auth_service.issue_token(user))
    return AuthResult()


@router.post("/logout", response_model=AuthResult)
def logout(response: Response):
    """Clear the auth cookie."""
    response.delete_cookie(
        key=settings.COOKIE_NAME,
        httponly=True,
        samesite="lax",
        secure=settings.secure_cookies,
    )
    return AuthResult()


def _require_google() -> None:
    if not settings.google_enabled:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Google login is not configured"
        )


@router.get("/google")
def google_auth():
    """Redirect to Google's consent screen."""
    _require_google()

    state = secrets.token_urlsafe(24)
    redirect = RedirectResponse(build_authorization_url(state), status_code=status.HTTP_302_FOUND)
    redirect.set_cookie(
        key=OAUTH_STATE_COOKIE,
        value=state,
        max_age=600,
        httponly=True,
        samesite="lax",
        secure=settings.secure_cookies,
    )
    return redirect


@router.get("/google/callback")
def google_callback(
    request: Request,
    code: str = Query(...),
    state: str = Query(...),
    db: Session = Depends(get_db)
):
    """
    Finish Google sign-in.

    Verifies the state, exchanges the code for the user's profile, finds or
    creates the user and redirects to the frontend with the auth cookie set.

    Raises:
        HTTPException: 400 on state mismatch, 502 if Google rejects the exchange
    """
    _require_google()

    expected_state = request.cookies.get(OAUTH_STATE_COOKIE)
    if not expected_state or not secrets.compare_digest(expected_state, state):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid OAuth state"
        )

    try:
        profile = fetch_profile(code)
    except GoogleOAuthError as e:
        logger.warning("Google sign-in failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Google sign-in failed"
        )

    user = auth_service.google_login(db, profile)

    redirect = RedirectResponse(settings.FRONTEND_URL, status_code=status.HTTP_302_FOUND)
    set_auth_cookie(redirect, auth_service.issue_token(user))
    redirect.delete_cookie(OAUTH_STATE_COOKIE)
    return redirect
