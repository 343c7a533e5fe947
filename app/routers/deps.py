"""Shared request dependencies: stores bound to the request's DB session."""
from typing import Annotated

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import TEMPLATES_DIR, get_settings
from app.core.errors import LoginRequired
from app.db.session import get_db
from app.schemas.auth import SessionInfo
from app.services.sessions import SessionManager
from app.services.todos import TodoStore
from app.services.users import UserStore

settings = get_settings()
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def get_session_manager(db: Annotated[AsyncSession, Depends(get_db)]) -> SessionManager:
    return SessionManager(db, ttl_seconds=settings.session_ttl_seconds)


def get_user_store(db: Annotated[AsyncSession, Depends(get_db)]) -> UserStore:
    return UserStore(db)


def get_todo_store(db: Annotated[AsyncSession, Depends(get_db)]) -> TodoStore:
    return TodoStore(db)


async def get_current_session_optional(
    request: Request,
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
) -> SessionInfo | None:
    """Return the current session if the auth cookie is valid; else None."""
    token = request.cookies.get(settings.auth_cookie_name)
    return await sessions.authenticate(token)


async def require_session(
    current: Annotated[SessionInfo | None, Depends(get_current_session_optional)],
) -> SessionInfo:
    if current is None:
        raise LoginRequired("login required")
    return current


CurrentSession = Annotated[SessionInfo, Depends(require_session)]
OptionalSession = Annotated[SessionInfo | None, Depends(get_current_session_optional)]
