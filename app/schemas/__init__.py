from app.schemas.auth import SessionInfo
from app.schemas.todo import Priority, TodoCreateSchema

__all__ = [
    "Priority",
    "SessionInfo",
    "TodoCreateSchema",
]
