# tests/conftest.py

from __future__ import annotations

import os

# Settings are read at import time, so the environment must be ready first.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pact_api.database import Base, get_db
from pact_api.main import app as api_app
import pact_api.models  # noqa: F401

from .helpers import LoggedIn, register


@pytest.fixture()
def session_factory():
    """
    Fresh in-memory SQLite database per test.

    StaticPool keeps a single connection so every session sees the same data.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def app(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    api_app.dependency_overrides[get_db] = override_get_db
    yield api_app
    api_app.dependency_overrides.clear()


@pytest.fixture()
def make_client(app):
    """Factory for clients with independent cookie jars (one per logged-in user)."""
    clients: list[TestClient] = []

    def _make() -> TestClient:
        client = TestClient(app)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()


@pytest.fixture()
def client(make_client) -> TestClient:
    return make_client()


@pytest.fixture()
def alice(make_client) -> LoggedIn:
    c = make_client()
    return LoggedIn(c, register(c, "alice@test.com", "alice"))


@pytest.fixture()
def bob(make_client) -> LoggedIn:
    c = make_client()
    return LoggedIn(c, register(c, "bob@test.com", "bob"))


@pytest.fixture()
def carol(make_client) -> LoggedIn:
    c = make_client()
    return LoggedIn(c, register(c, "carol@test.com", "carol"))
