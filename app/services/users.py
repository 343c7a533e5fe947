"""Credential store: registration, lookup and password verification."""
import logging

from starlette.concurrency import run_in_threadpool
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import DuplicateUserError, ValidationError
from app.core.security import (
    BCRYPT_MAX_BYTES,
    burn_password_check,
    hash_password,
    verify_password,
)
from app.models.user import User

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 64
PASSWORD_MIN_LENGTH = 6


def _normalize_username(username: str | None) -> str:
    # Case is preserved: "Alice" and "alice" are different users
    return (username or "").strip()


def validate_credentials_shape(username: str, password: str) -> None:
    """Raise ValidationError when username/password break the length rules."""
    if len(username) < USERNAME_MIN_LENGTH:
        raise ValidationError(f"Username must be at least {USERNAME_MIN_LENGTH} characters")
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(f"Username must be at most {USERNAME_MAX_LENGTH} characters")
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValidationError("Password is too long")


class UserStore:
    """User records behind an injected AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, user_id: int) -> User | None:
        return await self.db.get(User, user_id)

    async def find_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def register(self, username: str, password: str) -> User:
        username = _normalize_username(username)
        password = password or ""
        validate_credentials_shape(username, password)

        if await self.find_by_username(username) is not None:
            raise DuplicateUserError()

        # bcrypt blocks; run it in a worker thread
        hashed = await run_in_threadpool(hash_password, password)
        user = User(username=username, hashed_password=hashed)
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            # lost a race with a concurrent registration
            await self.db.rollback()
            raise DuplicateUserError()
        await self.db.refresh(user)

        logger.info("registered user id=%s username=%s", user.id, user.username)
        return user

    async def verify_credentials(self, username: str, password: str) -> User | None:
        """Return the user when the password matches; None otherwise."""
        user = await self.find_by_username(_normalize_username(username))
        if user is None:
            await run_in_threadpool(burn_password_check, password or "")
            return None
        if not await run_in_threadpool(verify_password, password or "", user.hashed_password):
            return None
        return user
