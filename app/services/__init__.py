from app.services.sessions import SessionManager
from app.services.todos import TodoStore
from app.services.users import UserStore

__all__ = ["SessionManager", "TodoStore", "UserStore"]
