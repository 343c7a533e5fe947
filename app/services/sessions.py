"""Session layer: issue, resolve and revoke cookie-backed login sessions."""
import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import InvalidCredentials
from app.core.security import new_session_token, now_s
from app.models.auth_session import AuthSession
from app.models.user import User
from app.schemas.auth import SessionInfo
from app.services.users import UserStore

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60 * 60 * 24


class SessionManager:
    """Maps opaque tokens to users. Rows live in the ``sessions`` table."""

    def __init__(self, db: AsyncSession, ttl_seconds: int = DEFAULT_TTL_SECONDS):
        self.db = db
        self.ttl_seconds = ttl_seconds
        self.users = UserStore(db)

    async def start(self, user: User) -> SessionInfo:
        """Issue a fresh session for an already-verified user."""
        row = AuthSession(
            token=new_session_token(),
            user_id=user.id,
            expires_at=now_s() + self.ttl_seconds,
        )
        self.db.add(row)
        await self.db.commit()
        return SessionInfo(
            token=row.token,
            user_id=user.id,
            username=user.username,
            expires_at=row.expires_at,
        )

    async def login(self, username: str, password: str) -> SessionInfo:
        user = await self.users.verify_credentials(username, password)
        if user is None:
            logger.info("login failed for username=%s", username)
            raise InvalidCredentials()
        session = await self.start(user)
        logger.info("login ok user_id=%s", user.id)
        return session

    async def logout(self, token: str | None) -> None:
        if not token:
            return
        result = await self.db.execute(delete(AuthSession).where(AuthSession.token == token))
        await self.db.commit()
        if result.rowcount:
            logger.info("session revoked")

    async def authenticate(self, token: str | None) -> SessionInfo | None:
        """Resolve a cookie token; None when missing, unknown or expired."""
        if not token:
            return None
        result = await self.db.execute(
            select(AuthSession, User)
            .join(User, User.id == AuthSession.user_id)
            .where(AuthSession.token == token)
        )
        found = result.first()
        if found is None:
            return None
        row, user = found
        if row.expires_at <= now_s():
            await self.logout(token)
            return None
        return SessionInfo(
            token=row.token,
            user_id=user.id,
            username=user.username,
            expires_at=row.expires_at,
        )

    async def purge_expired(self) -> int:
        result = await self.db.execute(
            delete(AuthSession).where(AuthSession.expires_at <= now_s())
        )
        await self.db.commit()
        return result.rowcount
