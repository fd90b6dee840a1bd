"""
Tests for play session lifecycle and session endpoints.
"""
import re
import pytest
from courtside.core.errors import (
    ValidationError, NotFoundError, ForbiddenError, GoneError, ConflictError, ExhaustionError
)
from courtside.models.session import PlaySession, SessionStatus
from courtside.services import group_service, session_service

CODE_PATTERN = re.compile(r"^[A-Z2-9]{4}-[A-Z2-9]{4}$")


@pytest.mark.parametrize("name", [None, "", "   "])
def test_create_session_requires_name(db, alice, name):
    """Blank session names are rejected."""
    with pytest.raises(ValidationError):
        session_service.create_session(db, name, None, alice.id)


def test_create_session(db, alice):
    """A new session is ACTIVE, named, coded and empty."""
    created = session_service.create_session(db, "  Tuesday Night Courts ", None, alice.id)

    assert created.name == "Tuesday Night Courts"
    assert created.status == SessionStatus.ACTIVE
    assert created.participant_count == 0
    assert created.group_id is None
    assert created.group_name is None
    assert CODE_PATTERN.match(created.code)

    stored = db.query(PlaySession).filter(PlaySession.id == created.id).one()
    assert stored.created_by_id == alice.id


def test_session_code_is_immutable(db, alice):
    """Stored codes cannot be reassigned."""
    created = session_service.create_session(db, "Open play", None, alice.id)
    stored = db.query(PlaySession).filter(PlaySession.id == created.id).one()
    with pytest.raises(ValueError):
        stored.code = "ZZZZ-ZZZZ"


def test_create_session_code_race_is_conflict(db, alice, monkeypatch):
    """Two sessions picking the same code surface as a retryable conflict."""
    monkeypatch.setattr(session_service, "generate_unique_code", lambda exists: "ABCD-EFGH")

    session_service.create_session(db, "First", None, alice.id)
    with pytest.raises(ConflictError):
        session_service.create_session(db, "Second", None, alice.id)

    # The database session is still usable after the rollback
    assert db.query(PlaySession).count() == 1


def test_get_session_by_code_is_case_insensitive(db, alice):
    """Codes are matched on their upper-case form."""
    created = session_service.create_session(db, "Open play", None, alice.id)

    found = session_service.get_session_by_code(db, created.code.lower())
    assert found.id == created.id


def test_get_unknown_session(db):
    with pytest.raises(NotFoundError):
        session_service.get_session_by_code(db, "NOPE-NOPE")


def test_join_session(db, alice):
    """Joining adds a guest participant and bumps the count."""
    created = session_service.create_session(db, "Open play", None, alice.id)

    participant = session_service.join_session(db, created.code, "  Dana ")
    assert participant.display_name == "Dana"
    assert participant.type == "GUEST"

    session_service.join_session(db, created.code.lower(), "Eli")
    assert session_service.get_session_by_code(db, created.code).participant_count == 2


@pytest.mark.parametrize("player_name", [None, "", "  "])
def test_join_requires_player_name(db, alice, player_name):
    created = session_service.create_session(db, "Open play", None, alice.id)
    with pytest.raises(ValidationError):
        session_service.join_session(db, created.code, player_name)


def test_join_unknown_session(db):
    with pytest.raises(NotFoundError):
        session_service.join_session(db, "NOPE-NOPE", "Dana")


@pytest.mark.parametrize("player_name", ["Dana", None, "", "   "])
def test_join_closed_session_is_gone(db, alice, player_name):
    """A closed session rejects joins whatever the player name."""
    created = session_service.create_session(db, "Open play", None, alice.id)
    session_service.close_session(db, created.code, alice.id)

    with pytest.raises(GoneError):
        session_service.join_session(db, created.code, player_name)


def test_close_session(db, alice):
    """The creator can close a session; closing again keeps it closed."""
    created = session_service.create_session(db, "Open play", None, alice.id)

    closed = session_service.close_session(db, created.code, alice.id)
    assert closed.status == SessionStatus.CLOSED

    again = session_service.close_session(db, created.code, alice.id)
    assert again.status == SessionStatus.CLOSED


def test_close_session_by_non_creator(db, alice, bob):
    """Only the creator may close, before or after the session is closed."""
    created = session_service.create_session(db, "Open play", None, alice.id)

    with pytest.raises(ForbiddenError):
        session_service.close_session(db, created.code, bob.id)
    assert session_service.get_session_by_code(db, created.code).status == SessionStatus.ACTIVE

    session_service.close_session(db, created.code, alice.id)
    with pytest.raises(ForbiddenError):
        session_service.close_session(db, created.code, bob.id)


def test_close_unknown_session(db, alice):
    with pytest.raises(NotFoundError):
        session_service.close_session(db, "NOPE-NOPE", alice.id)


def test_list_participants(db, alice):
    """Participants come back in join order, all typed GUEST."""
    created = session_service.create_session(db, "Open play", None, alice.id)
    for name in ["Dana", "Eli", "Fay"]:
        session_service.join_session(db, created.code, name)

    participants = session_service.list_participants(db, created.code)
    assert [p.display_name for p in participants] == ["Dana", "Eli", "Fay"]
    assert {p.type for p in participants} == {"GUEST"}


def test_list_my_sessions_newest_first(db, alice, bob):
    """Only the user's own sessions, newest first, with live counts."""
    first = session_service.create_session(db, "First", None, alice.id)
    second = session_service.create_session(db, "Second", None, alice.id)
    session_service.create_session(db, "Bob's", None, bob.id)
    session_service.join_session(db, first.code, "Dana")

    sessions = session_service.list_my_sessions(db, alice.id)
    assert [s.id for s in sessions] == [second.id, first.id]
    assert [s.participant_count for s in sessions] == [0, 1]


def test_list_group_sessions_with_group_name(db, alice):
    """Group sessions carry the group name until the group is deleted."""
    group = group_service.create_group(db, "Tuesday Crew", alice.id)
    created = session_service.create_session(db, "League night", group.id, alice.id)
    assert created.group_name == "Tuesday Crew"

    sessions = session_service.list_group_sessions(db, group.id)
    assert [s.id for s in sessions] == [created.id]
    assert sessions[0].group_name == "Tuesday Crew"

    group_service.delete_group(db, group.id, alice.id)
    sessions = session_service.list_group_sessions(db, group.id)
    assert sessions[0].group_name is None


def test_session_endpoints(client, alice, bob, auth_headers):
    """End-to-end session flow over HTTP."""
    response = client.post("/api/sessions", json={"name": "Open play"}, headers=auth_headers(alice))
    assert response.status_code == 201
    code = response.json()["code"]

    # Lookup and join are public
    response = client.get(f"/api/sessions/{code.lower()}")
    assert response.status_code == 200
    assert response.json()["status"] == "ACTIVE"

    response = client.post(f"/api/sessions/{code}/join", json={"player_name": "Dana"})
    assert response.status_code == 201
    assert response.json()["type"] == "GUEST"

    response = client.post(f"/api/sessions/{code}/join", json={"player_name": " "})
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"

    response = client.get(f"/api/sessions/{code}/participants")
    assert [p["display_name"] for p in response.json()] == ["Dana"]

    response = client.put(f"/api/sessions/{code}/close", headers=auth_headers(bob))
    assert response.status_code == 403

    response = client.put(f"/api/sessions/{code}/close", headers=auth_headers(alice))
    assert response.status_code == 200
    assert response.json()["status"] == "CLOSED"
    assert response.json()["participant_count"] == 1

    response = client.post(f"/api/sessions/{code}/join", json={"player_name": "Eli"})
    assert response.status_code == 410

    response = client.get("/api/sessions/my", headers=auth_headers(alice))
    assert [s["code"] for s in response.json()] == [code]


def test_session_endpoint_errors(client, alice, auth_headers):
    response = client.post("/api/sessions", json={"name": ""}, headers=auth_headers(alice))
    assert response.status_code == 400

    response = client.get("/api/sessions/NOPE-NOPE")
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"

    response = client.put("/api/sessions/NOPE-NOPE/close", headers=auth_headers(alice))
    assert response.status_code == 404


def test_create_session_requires_auth(client):
    response = client.post("/api/sessions", json={"name": "Open play"})
    assert response.status_code in (401, 403)


def test_exhausted_code_space_is_server_error(client, alice, auth_headers, monkeypatch):
    def exhausted(exists):
        raise ExhaustionError("Could not generate a unique code")

    monkeypatch.setattr(session_service, "generate_unique_code", exhausted)

    response = client.post("/api/sessions", json={"name": "Open play"}, headers=auth_headers(alice))
    assert response.status_code == 500
    assert response.json()["code"] == "CODE_SPACE_EXHAUSTED"
