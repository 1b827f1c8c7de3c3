# tests/test_friends.py

from __future__ import annotations

from .helpers import befriend


def test_send_request_creates_pending_edge(alice, bob) -> None:
    resp = alice.client.post(f"/friends/request/{bob.id}")

    assert resp.status_code == 201
    body = resp.json()
    assert body["requester_id"] == alice.id
    assert body["receiver_id"] == bob.id
    assert body["status"] == "PENDING"


def test_cannot_friend_yourself(alice) -> None:
    resp = alice.client.post(f"/friends/request/{alice.id}")

    assert resp.status_code == 400
    assert resp.json()["message"] == "You cannot friend yourself"


def test_request_to_unknown_user(alice) -> None:
    resp = alice.client.post("/friends/request/does-not-exist")
    assert resp.status_code == 404


def test_duplicate_request_same_direction_rejected(alice, bob) -> None:
    assert alice.client.post(f"/friends/request/{bob.id}").status_code == 201

    resp = alice.client.post(f"/friends/request/{bob.id}")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Request already exists"


def test_duplicate_request_reverse_direction_rejected(alice, bob) -> None:
    assert alice.client.post(f"/friends/request/{bob.id}").status_code == 201

    resp = bob.client.post(f"/friends/request/{alice.id}")
    assert resp.status_code == 400


def test_request_rejected_after_block(alice, bob) -> None:
    request_id = alice.client.post(f"/friends/request/{bob.id}").json()["id"]
    assert bob.client.post(f"/friends/block/{request_id}").status_code == 200

    assert alice.client.post(f"/friends/request/{bob.id}").status_code == 400
    assert bob.client.post(f"/friends/request/{alice.id}").status_code == 400


def test_request_rejected_when_already_friends(alice, bob) -> None:
    befriend(alice, bob)
    assert bob.client.post(f"/friends/request/{alice.id}").status_code == 400


def test_incoming_requests_lists_pending_for_receiver(alice, bob, carol) -> None:
    alice.client.post(f"/friends/request/{bob.id}")
    carol.client.post(f"/friends/request/{bob.id}")

    resp = bob.client.get("/friends/requests")

    assert resp.status_code == 200
    requesters = {r["requester"]["username"] for r in resp.json()}
    assert requesters == {"alice", "carol"}
    assert all(r["status"] == "PENDING" for r in resp.json())

    # Requests sent are not incoming requests
    assert alice.client.get("/friends/requests").json() == []


def test_only_receiver_can_accept(alice, bob, carol) -> None:
    request_id = alice.client.post(f"/friends/request/{bob.id}").json()["id"]

    assert alice.client.post(f"/friends/accept/{request_id}").status_code == 403
    assert carol.client.post(f"/friends/accept/{request_id}").status_code == 403

    resp = bob.client.post(f"/friends/accept/{request_id}")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ACCEPTED"


def test_only_receiver_can_block(alice, bob) -> None:
    request_id = alice.client.post(f"/friends/request/{bob.id}").json()["id"]

    assert alice.client.post(f"/friends/block/{request_id}").status_code == 403

    resp = bob.client.post(f"/friends/block/{request_id}")
    assert resp.status_code == 200
    assert resp.json()["status"] == "BLOCKED"


def test_accepting_handled_request_fails(alice, bob) -> None:
    request_id = alice.client.post(f"/friends/request/{bob.id}").json()["id"]
    bob.client.post(f"/friends/accept/{request_id}")

    resp = bob.client.post(f"/friends/accept/{request_id}")
    assert resp.status_code == 400
    assert resp.json()["message"] == "Request already handled"

    assert bob.client.post(f"/friends/block/{request_id}").status_code == 400


def test_accepting_blocked_request_fails(alice, bob) -> None:
    request_id = alice.client.post(f"/friends/request/{bob.id}").json()["id"]
    bob.client.post(f"/friends/block/{request_id}")

    assert bob.client.post(f"/friends/accept/{request_id}").status_code == 400


def test_accept_unknown_request(bob) -> None:
    assert bob.client.post("/friends/accept/nope").status_code == 404


def test_list_friends_from_both_sides(alice, bob, carol) -> None:
    befriend(alice, bob)
    carol.client.post(f"/friends/request/{alice.id}")  # still pending

    for side in (alice, bob):
        friends = side.client.get("/friends/list").json()
        assert len(friends) == 1
        assert friends[0]["requester"]["username"] == "alice"
        assert friends[0]["receiver"]["username"] == "bob"

    assert carol.client.get("/friends/list").json() == []


def test_friend_endpoints_require_login(client) -> None:
    assert client.get("/friends/list").status_code == 401
    assert client.post("/friends/request/anyone").status_code == 401
