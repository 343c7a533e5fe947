"""Auth routes: login, register, logout. Session-based auth via secure cookie."""
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Form
from fastapi.responses import HTMLResponse, RedirectResponse

from app.core.config import get_settings
from app.core.errors import DuplicateUserError, InvalidCredentials, ValidationError
from app.routers.deps import (
    OptionalSession,
    get_session_manager,
    get_user_store,
    templates,
)
from app.schemas.auth import SessionInfo
from app.services.sessions import SessionManager
from app.services.users import UserStore

router = APIRouter()
settings = get_settings()


def _set_auth_cookie(response: RedirectResponse, session: SessionInfo) -> None:
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=session.token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
        path="/",
    )


def _render_form(request: Request, name: str, *, username: str = "", error: str | None = None):
    return templates.TemplateResponse(
        request,
        name,
        {
            "current_user": None,
            "username": username,
            "error": error,
        },
    )


@router.get("/login", response_class=HTMLResponse)
async def login_get(request: Request, current: OptionalSession):
    """Show login form."""
    if current is not None:
        return RedirectResponse(request.url_for("index"), status_code=303)
    return _render_form(request, "login.html")


@router.post("/login", response_class=HTMLResponse)
async def login_post(
    request: Request,
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
):
    """Authenticate and set auth cookie; redirect to home."""
    try:
        session = await sessions.login(username, password)
    except InvalidCredentials as e:
        return _render_form(request, "login.html", username=username, error=e.message)

    response = RedirectResponse(request.url_for("index"), status_code=303)
    _set_auth_cookie(response, session)
    return response


@router.get("/register", response_class=HTMLResponse)
async def register_get(request: Request, current: OptionalSession):
    """Show register form."""
    if current is not None:
        return RedirectResponse(request.url_for("index"), status_code=303)
    return _render_form(request, "register.html")


@router.post("/register", response_class=HTMLResponse)
async def register_post(
    request: Request,
    users: Annotated[UserStore, Depends(get_user_store)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    username: Annotated[str, Form()] = "",
    password: Annotated[str, Form()] = "",
):
    """Create user, set auth cookie (auto-login)."""
    try:
        user = await users.register(username, password)
    except (ValidationError, DuplicateUserError) as e:
        return _render_form(request, "register.html", username=username, error=e.message)

    session = await sessions.start(user)
    response = RedirectResponse(request.url_for("index"), status_code=303)
    _set_auth_cookie(response, session)
    return response


@router.api_route("/logout", methods=["GET", "POST"], response_class=RedirectResponse)
async def logout(
    request: Request,
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
):
    """Drop the server-side session, clear the cookie, go to login."""
    await sessions.logout(request.cookies.get(settings.auth_cookie_name))
    response = RedirectResponse(request.url_for("login_get"), status_code=303)
    # path must match the one used in set_cookie()
    response.delete_cookie(settings.auth_cookie_name, path="/")
    return response
