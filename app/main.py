"""Todo App - FastAPI app entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import STATIC_DIR, get_settings
from app.core.errors import LoginRequired
from app.core.logging import configure_logging
from app.db.base import Base
from app.db.session import engine, AsyncSessionLocal
from app.routers import auth, web
from app.routers.deps import templates
from app.services.sessions import SessionManager

logger = logging.getLogger(__name__)

settings = get_settings()
configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # create tables (async)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database ready (%s)", engine.url.render_as_string(hide_password=True))

    async with AsyncSessionLocal() as db:
        purged = await SessionManager(db).purge_expired()
    if purged:
        logger.info("purged %d expired sessions", purged)

    yield

    await engine.dispose()
    logger.info("database connection closed")


app = FastAPI(
    title=settings.app_name,
    description="Multi-user to-do list",
    lifespan=lifespan,
)

# Mount static files at /static
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

app.include_router(web.router)
app.include_router(auth.router)


@app.exception_handler(LoginRequired)
async def login_required_handler(request: Request, exc: LoginRequired):
    return RedirectResponse(request.url_for("login_get"), status_code=303)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("database error on %s %s", request.method, request.url.path, exc_info=exc)
    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "current_user": None,
            "message": "The service is temporarily unavailable. Please try again later.",
        },
        status_code=503,
    )


@app.get("/health")
async def health():
    try:
        async with AsyncSessionLocal() as db:
            await db.execute(text("SELECT 1"))
    except SQLAlchemyError:
        logger.warning("health check: database unreachable")
        return JSONResponse({"status": "unavailable"}, status_code=503)
    return {"status": "ok"}
