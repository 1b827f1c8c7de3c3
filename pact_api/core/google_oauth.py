"""Google OAuth 2.0 authorization-code flow."""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import httpx

from pact_api.config import settings

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
SCOPES = ("openid", "email", "profile")


class GoogleOAuthError(Exception):
    """Raised when Google rejects the code exchange or profile lookup."""


def build_authorization_url(state: str) -> str:
    """URL of Google's consent screen for this application."""
    params = {
        "client_id": settings.GOOGLE_CLIENT_ID,
        "redirect_uri": settings.GOOGLE_CALLBACK_URL,
        "response_type": "code",
        "scope": " ".join(SCOPES),
        "state": state,
        "access_type": "online",
        "prompt": "select_account",
    }
    return f"{AUTHORIZE_URL}?{urlencode(params)}"


def fetch_profile(code: str, client: Optional[httpx.Client] = None) -> Dict[str, Any]:
    """
    Exchange an authorization code for the user's Google profile.

    Args:
        code: Authorization code from the callback
        client: Optional httpx client (tests pass one with a mock transport)

    Returns:
        Userinfo payload with at least "sub" and "email"

    Raises:
        GoogleOAuthError: If either request fails or returns a non-JSON body
    """
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=10.0)

    try:
        token_resp = client.post(
            TOKEN_URL,
            data={
                "code": code,
                "client_id": settings.GOOGLE_CLIENT_ID,
                "client_secret": settings.GOOGLE_CLIENT_SECRET,
                "redirect_uri": settings.GOOGLE_CALLBACK_URL,
                "grant_type": "authorization_code",
            },
        )
        if token_resp.status_code != 200:
            raise GoogleOAuthError(f"token exchange failed with status {token_resp.status_code}")

        access_token = token_resp.json().get("access_token")
        if not access_token:
            raise GoogleOAuthError("token response has no access_token")

        profile_resp = client.get(
            USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if profile_resp.status_code != 200:
            raise GoogleOAuthError(f"userinfo failed with status {profile_resp.status_code}")

        return profile_resp.json()
    except (httpx.HTTPError, ValueError) as e:
        # ValueError covers a non-JSON body from either endpoint
        logger.warning("Google OAuth request failed: %s", e)
        raise GoogleOAuthError(str(e)) from e
    finally:
        if owns_client:
            client.close()
