# tests/test_groups.py

from __future__ import annotations

from .helpers import make_group


def test_creator_becomes_admin(alice) -> None:
    group = make_group(alice, "Book club")

    assert group["name"] == "Book club"
    assert group["role"] == "ADMIN"

    members = alice.client.get(f"/groups/{group['id']}/members").json()
    assert [(m["username"], m["role"]) for m in members] == [("alice", "ADMIN")]


def test_blank_group_name_rejected(alice) -> None:
    resp = alice.client.post("/groups", json={"name": "   "})
    assert resp.status_code == 400


def test_list_groups_only_mine(alice, bob) -> None:
    make_group(alice, "Alice's")
    make_group(bob, "Bob's")

    names = [g["name"] for g in alice.client.get("/groups").json()]
    assert names == ["Alice's"]


def test_admin_invites_member_with_role(alice, bob) -> None:
    group = make_group(alice)

    resp = alice.client.post(
        f"/groups/{group['id']}/invite",
        json={"user_id": bob.id, "role": "EDITOR"},
    )

    assert resp.status_code == 201
    assert resp.json()["role"] == "EDITOR"
    assert resp.json()["user_id"] == bob.id

    bob_groups = bob.client.get("/groups").json()
    assert [(g["id"], g["role"]) for g in bob_groups] == [(group["id"], "EDITOR")]


def test_invite_defaults_to_viewer(alice, bob) -> None:
    group = make_group(alice)

    resp = alice.client.post(f"/groups/{group['id']}/invite", json={"user_id": bob.id})
    assert resp.json()["role"] == "VIEWER"


def test_non_admin_cannot_invite(alice, bob, carol) -> None:
    group = make_group(alice)
    alice.client.post(f"/groups/{group['id']}/invite", json={"user_id": bob.id, "role": "EDITOR"})

    resp = bob.client.post(f"/groups/{group['id']}/invite", json={"user_id": carol.id})
    assert resp.status_code == 403


def test_non_member_cannot_invite_or_view(alice, carol) -> None:
    group = make_group(alice)

    assert carol.client.post(f"/groups/{group['id']}/invite", json={"user_id": carol.id}).status_code == 403
    resp = carol.client.get(f"/groups/{group['id']}/members")
    assert resp.status_code == 403
    assert resp.json()["message"] == "You are not a member of this group"


def test_invite_unknown_user(alice) -> None:
    group = make_group(alice)

    resp = alice.client.post(f"/groups/{group['id']}/invite", json={"user_id": "ghost"})
    assert resp.status_code == 404


def test_invite_existing_member_rejected(alice, bob) -> None:
    group = make_group(alice)
    alice.client.post(f"/groups/{group['id']}/invite", json={"user_id": bob.id})

    resp = alice.client.post(f"/groups/{group['id']}/invite", json={"user_id": bob.id, "role": "ADMIN"})
    assert resp.status_code == 400


def test_unknown_group(alice) -> None:
    assert alice.client.get("/groups/missing/members").status_code == 404
