# tests/test_proxy.py

from __future__ import annotations

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from pact_api.proxy import create_proxy_app

UPSTREAM = "http://api.internal"


class FakeUpstream:
    """Records forwarded requests and answers with a canned response."""

    def __init__(self, response: httpx.Response | None = None, error: Exception | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.response = response or httpx.Response(200, json={"ok": True})
        self.error = error

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


def _proxy(upstream: FakeUpstream) -> TestClient:
    return TestClient(create_proxy_app(UPSTREAM, transport=httpx.MockTransport(upstream)))


def test_forwards_path_query_and_cookie() -> None:
    upstream = FakeUpstream(httpx.Response(200, json=[{"id": "t1"}]))
    client = _proxy(upstream)

    resp = client.get("/tasks/personal?limit=5", headers={"Cookie": "token=abc"})

    assert resp.status_code == 200
    assert resp.json() == [{"id": "t1"}]

    forwarded = upstream.requests[0]
    assert str(forwarded.url) == f"{UPSTREAM}/tasks/personal?limit=5"
    assert forwarded.method == "GET"
    assert forwarded.headers["cookie"] == "token=abc"


def test_forwards_json_body_verbatim() -> None:
    upstream = FakeUpstream(httpx.Response(201, json={"id": "t2"}))
    client = _proxy(upstream)
    payload = {"title": "Prepare slides", "assignee_id": "bob"}

    resp = client.post("/tasks/private", content=json.dumps(payload))

    assert resp.status_code == 201
    forwarded = upstream.requests[0]
    assert json.loads(forwarded.content) == payload
    assert forwarded.headers["content-type"] == "application/json"


def test_relays_error_status_and_body() -> None:
    body = {"statusCode": 403, "message": "You are not friends", "error": "Forbidden"}
    client = _proxy(FakeUpstream(httpx.Response(403, json=body)))

    resp = client.post("/tasks/private", content="{}")

    assert resp.status_code == 403
    assert resp.json() == body


def test_relays_set_cookie() -> None:
    upstream = FakeUpstream(httpx.Response(
        200,
        json={"success": True},
        headers=[("set-cookie", "token=jwt; Path=/; HttpOnly; SameSite=lax")],
    ))
    client = _proxy(upstream)

    resp = client.post("/auth/login", content=json.dumps({"email": "a@test.com", "password": "x"}))

    assert resp.headers["set-cookie"].startswith("token=jwt")


def test_empty_upstream_body_becomes_empty_object() -> None:
    client = _proxy(FakeUpstream(httpx.Response(200, content=b"")))

    assert client.delete("/tasks/1").json() == {}


def test_non_json_upstream_body_is_relayed_as_text() -> None:
    client = _proxy(FakeUpstream(httpx.Response(200, text="Hello World!")))

    assert client.get("/anything").json() == "Hello World!"


def test_missing_path() -> None:
    upstream = FakeUpstream()
    client = _proxy(upstream)

    resp = client.get("/")

    assert resp.status_code == 400
    assert resp.json() == {"message": "Invalid path"}
    assert upstream.requests == []


@pytest.mark.parametrize("method", ["get", "delete"])
def test_transport_failure(method: str) -> None:
    client = _proxy(FakeUpstream(error=httpx.ConnectError("refused")))

    resp = getattr(client, method)("/tasks/personal")

    assert resp.status_code == 500
    assert resp.json() == {"message": "Proxy request failed"}
