"""Session layer tests.

Tests cover:
- Login issuing a 24h session
- Generic failure for wrong password / unknown user
- Logout, expiry and purge
"""

import pydantic
import pytest

from app.core.errors import InvalidCredentials
from app.core.security import now_s
from app.services.sessions import SessionManager
from app.services.users import UserStore

pytestmark = pytest.mark.anyio

DAY = 60 * 60 * 24


@pytest.fixture
async def alice(db):
    return await UserStore(db).register("alice", "secret1")


class TestLogin:
    async def test_login_issues_session(self, db, alice):
        before = now_s()
        session = await SessionManager(db).login("alice", "secret1")

        assert session.user_id == alice.id
        assert session.username == "alice"
        assert session.token
        assert before + DAY <= session.expires_at <= now_s() + DAY

    async def test_each_login_gets_a_new_token(self, db, alice):
        sessions = SessionManager(db)
        first = await sessions.login("alice", "secret1")
        second = await sessions.login("alice", "secret1")
        assert first.token != second.token

    async def test_wrong_password_and_unknown_user_same_error(self, db, alice):
        sessions = SessionManager(db)
        with pytest.raises(InvalidCredentials) as wrong_pw:
            await sessions.login("alice", "nope-nope")
        with pytest.raises(InvalidCredentials) as unknown:
            await sessions.login("mallory", "secret1")
        assert wrong_pw.value.message == unknown.value.message

    async def test_start_for_known_user(self, db, alice):
        session = await SessionManager(db).start(alice)
        assert session.username == "alice"

    async def test_session_value_is_immutable(self, db, alice):
        session = await SessionManager(db).start(alice)
        with pytest.raises(pydantic.ValidationError):
            session.user_id = 999


class TestAuthenticate:
    async def test_valid_token(self, db, alice):
        sessions = SessionManager(db)
        issued = await sessions.login("alice", "secret1")
        resolved = await sessions.authenticate(issued.token)
        assert resolved == issued

    @pytest.mark.parametrize("token", [None, "", "unknown-token"])
    async def test_missing_or_unknown_token(self, db, alice, token):
        assert await SessionManager(db).authenticate(token) is None

    async def test_logout_invalidates(self, db, alice):
        sessions = SessionManager(db)
        issued = await sessions.login("alice", "secret1")
        await sessions.logout(issued.token)
        assert await sessions.authenticate(issued.token) is None

    async def test_logout_without_token_is_harmless(self, db, alice):
        await SessionManager(db).logout(None)

    async def test_expired_session(self, db, alice, monkeypatch):
        sessions = SessionManager(db)
        issued = await sessions.login("alice", "secret1")

        monkeypatch.setattr("app.services.sessions.now_s", lambda: issued.expires_at + 1)
        assert await sessions.authenticate(issued.token) is None

        # expired row was dropped, so it stays gone after the clock "rewinds"
        monkeypatch.undo()
        assert await sessions.authenticate(issued.token) is None


class TestPurge:
    async def test_purge_only_expired(self, db, alice):
        expired = SessionManager(db, ttl_seconds=-10)
        live = SessionManager(db)
        await expired.start(alice)
        await expired.start(alice)
        keep = await live.start(alice)

        assert await live.purge_expired() == 2
        assert await live.authenticate(keep.token) is not None
