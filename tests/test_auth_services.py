import pytest

from artist_roster_api.app.core.errors import AuthError, ConflictError
from artist_roster_api.app.schemas.admin import AdminCredentials
from artist_roster_api.app.services.admin_service import AdminService
from artist_roster_api.app.services.session_service import SessionService

from .constants import ADMIN_PASS, ADMIN_USER


@pytest.fixture
def admins(conn):
    return AdminService(conn)


async def test_register_then_authenticate(admins):
    created = await admins.register(AdminCredentials(username="editor", password="pw-1"))
    assert created.username == "editor"
    assert await admins.count_admins() == 1

    identity = await admins.authenticate("editor", "pw-1")
    assert identity.username == "editor"
    assert identity.admin_id == created.id


async def test_register_duplicate_username_conflicts(admins, seeded_admin):
    with pytest.raises(ConflictError) as excinfo:
        await admins.register(AdminCredentials(username=ADMIN_USER, password="other"))
    assert excinfo.value.__cause__ is None
    assert excinfo.value.__suppress_context__
    assert await admins.count_admins() == 1


async def test_password_is_not_stored_in_clear(admins, conn):
    await admins.register(AdminCredentials(username="editor", password="pw-1"))
    row = conn.execute("SELECT password FROM admins WHERE username = 'editor'").fetchone()
    assert row["password"] != "pw-1"


async def test_wrong_password_and_unknown_user_fail_identically(admins, seeded_admin):
    with pytest.raises(AuthError) as wrong_password:
        await admins.authenticate(ADMIN_USER, ADMIN_PASS + "x")
    with pytest.raises(AuthError) as unknown_user:
        await admins.authenticate("nobody", ADMIN_PASS)
    assert wrong_password.value.message == unknown_user.value.message == "Invalid credentials"


async def test_get_admin(admins, seeded_admin):
    assert (await admins.get_admin(ADMIN_USER)).username == ADMIN_USER
    assert await admins.get_admin("nobody") is None


async def test_session_lifecycle(conn):
    sessions = SessionService(conn, ttl_seconds=3600)
    session_id = await sessions.create(ADMIN_USER)

    assert await sessions.resolve(session_id) == ADMIN_USER
    assert await sessions.resolve("unknown") is None

    await sessions.destroy(session_id)
    assert await sessions.resolve(session_id) is None
    # destroying twice is harmless
    await sessions.destroy(session_id)


async def test_expired_session_is_dropped_on_lookup(conn):
    sessions = SessionService(conn, ttl_seconds=-1)
    session_id = await sessions.create(ADMIN_USER)

    assert await sessions.resolve(session_id) is None
    row = conn.execute("SELECT COUNT(*) AS n FROM sessions").fetchone()
    assert row["n"] == 0


async def test_purge_expired_keeps_live_sessions(conn):
    live = SessionService(conn, ttl_seconds=3600)
    stale = SessionService(conn, ttl_seconds=-1)
    keep = await live.create("a")
    await stale.create("b")
    await stale.create("c")

    assert await live.purge_expired() == 2
    assert await live.resolve(keep) == "a"
