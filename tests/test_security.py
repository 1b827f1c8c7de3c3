# tests/test_security.py

from __future__ import annotations

from datetime import timedelta

import httpx
import pytest
from jose import JWTError, jwt

from pact_api.core.google_oauth import GoogleOAuthError, TOKEN_URL, USERINFO_URL, fetch_profile
from pact_api.core.security import create_access_token, decode_token, hash_password, verify_password


def test_hash_and_verify_password() -> None:
    hashed = hash_password("123456")

    assert hashed != "123456"
    assert verify_password("123456", hashed)
    assert not verify_password("654321", hashed)


def test_same_password_gets_different_salts() -> None:
    assert hash_password("123456") != hash_password("123456")


def test_verify_password_without_hash() -> None:
    assert not verify_password("anything", None)
    assert not verify_password("anything", "plain-text-not-bcrypt")


def test_token_carries_subject() -> None:
    token = create_access_token({"sub": "user-1"})
    assert decode_token(token)["sub"] == "user-1"


def test_expired_token_fails_to_decode() -> None:
    token = create_access_token({"sub": "user-1"}, expires_delta=timedelta(seconds=-5))
    with pytest.raises(JWTError):
        decode_token(token)


def test_token_signed_with_other_key_fails_to_decode() -> None:
    token = jwt.encode({"sub": "user-1"}, "some-other-secret", algorithm="HS256")
    with pytest.raises(JWTError):
        decode_token(token)


def _google(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_fetch_profile_exchanges_code() -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        if str(request.url) == TOKEN_URL:
            assert b"code=the-code" in request.content
            return httpx.Response(200, json={"access_token": "at-1"})
        if str(request.url) == USERINFO_URL:
            assert request.headers["authorization"] == "Bearer at-1"
            return httpx.Response(200, json={"sub": "g-1", "email": "a@test.com", "name": "A"})
        return httpx.Response(404)

    profile = fetch_profile("the-code", client=_google(handler))

    assert profile["email"] == "a@test.com"
    assert seen == [TOKEN_URL, USERINFO_URL]


def test_fetch_profile_rejected_code() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"error": "invalid_grant"})

    with pytest.raises(GoogleOAuthError):
        fetch_profile("bad", client=_google(handler))


def test_fetch_profile_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(GoogleOAuthError):
        fetch_profile("code", client=_google(handler))


@pytest.mark.parametrize("failing_url", [TOKEN_URL, USERINFO_URL])
def test_fetch_profile_non_json_body(failing_url: str) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == failing_url:
            return httpx.Response(200, text="<html>oops</html>")
        if str(request.url) == TOKEN_URL:
            return httpx.Response(200, json={"access_token": "at-1"})
        return httpx.Response(200, json={"sub": "g-1", "email": "a@test.com"})

    with pytest.raises(GoogleOAuthError):
        fetch_profile("code", client=_google(handler))
