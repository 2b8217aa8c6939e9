"""Shared fixtures: a fresh SQLite database per test and API clients in both auth modes."""

import pytest
from fastapi.testclient import TestClient

from artist_roster_api.app.core.config import Settings
from artist_roster_api.app.core.db import get_connection, init_db
from artist_roster_api.app.core.security import hash_password
from artist_roster_api.app.main import create_app

from .constants import ADMIN_PASS, ADMIN_USER, ALLOWED_ORIGIN


def make_settings(database_url: str, **overrides) -> Settings:
    options = dict(
        database_url=database_url,
        secret_key="test-secret",
        cors_origins=[ALLOWED_ORIGIN],
        allow_open_registration=False,
    )
    options.update(overrides)
    return Settings(**options)


@pytest.fixture
def database_url(tmp_path):
    url = str(tmp_path / "roster.db")
    init_db(url)
    return url


@pytest.fixture
def conn(database_url):
    conn = get_connection(database_url)
    yield conn
    conn.close()


@pytest.fixture
def seeded_admin(conn):
    conn.execute(
        "INSERT INTO admins (username, password) VALUES (?, ?)",
        (ADMIN_USER, hash_password(ADMIN_PASS)),
    )
    conn.commit()
    return ADMIN_USER


@pytest.fixture
def token_client(database_url, seeded_admin):
    app = create_app(make_settings(database_url))
    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth_headers(token_client):
    r = token_client.post("/api/login", json={"username": ADMIN_USER, "password": ADMIN_PASS})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def session_client(database_url, seeded_admin):
    # Secure cookies are only sent back over https.
    app = create_app(make_settings(database_url, auth_mode="session"))
    with TestClient(app, base_url="https://testserver") as client:
        yield client
