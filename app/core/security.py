"""Password hashing and session token minting (server-side sessions)."""
import secrets
import time

from passlib.context import CryptContext

from app.core.config import get_settings

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=get_settings().bcrypt_rounds,
)

# bcrypt hard limit: 72 bytes (UTF-8)
BCRYPT_MAX_BYTES = 72

# Verified against when the username is unknown so both paths cost the same
_DUMMY_HASH = pwd_context.hash("not-a-real-password")


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def burn_password_check(plain: str) -> None:
    """Run a throwaway verify so a missing user takes as long as a wrong password."""
    pwd_context.verify(plain, _DUMMY_HASH)


def new_session_token() -> str:
    """Opaque random token for the auth cookie."""
    return secrets.token_urlsafe(32)


def now_s() -> int:
    return int(time.time())
