# tests/helpers.py

from __future__ import annotations

from fastapi.testclient import TestClient

DEFAULT_PASSWORD = "secret123"


class LoggedIn:
    """A TestClient paired with the user it is logged in as."""

    def __init__(self, client: TestClient, user: dict) -> None:
        self.client = client
        self.user = user

    @property
    def id(self) -> str:
        return self.user["id"]


def register(client: TestClient, email: str, username: str, password: str = DEFAULT_PASSWORD) -> dict:
    """Register through the API (which logs the client in) and return /me."""
    resp = client.post(
        "/auth/register",
        json={"email": email, "username": username, "password": password},
    )
    assert resp.status_code == 201, resp.text
    me = client.get("/me")
    assert me.status_code == 200, me.text
    return me.json()


def befriend(requester: LoggedIn, receiver: LoggedIn) -> dict:
    """Send a friend request and accept it from the other side."""
    sent = requester.client.post(f"/friends/request/{receiver.id}")
    assert sent.status_code == 201, sent.text
    accepted = receiver.client.post(f"/friends/accept/{sent.json()['id']}")
    assert accepted.status_code == 200, accepted.text
    return accepted.json()


def make_group(member: LoggedIn, name: str = "Flatmates") -> dict:
    resp = member.client.post("/groups", json={"name": name})
    assert resp.status_code == 201, resp.text
    return resp.json()
