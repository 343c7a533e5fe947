from app.models.user import User
from app.models.todo import Todo
from app.models.auth_session import AuthSession

__all__ = ["User", "Todo", "AuthSession"]
