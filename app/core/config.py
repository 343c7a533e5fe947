"""Application configuration from environment."""
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from env / .env."""

    app_name: str = "Todo App"
    environment: str = "development"  # development | production
    debug: bool = False
    log_level: str = "INFO"

    # Database (async driver)
    database_url: str = "sqlite+aiosqlite:///./todo_app.db"

    # Auth cookie (session-based for logged-in users)
    auth_cookie_name: str = "todo_session"
    session_ttl_seconds: int = 60 * 60 * 24  # 24 hours

    # bcrypt work factor; tests lower it
    bcrypt_rounds: int = 12

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def cookie_secure(self) -> bool:
        return self.environment.lower() == "production"


def get_settings() -> Settings:
    return Settings()


# Base path for templates/static (parent of app/)
BASE_DIR = Path(__file__).resolve().parent.parent.parent
TEMPLATES_DIR = BASE_DIR / "app" / "templates"
STATIC_DIR = BASE_DIR / "app" / "static"
