"""Todo store: every query is scoped to the owning user."""
import logging
from datetime import date

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy import case, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ValidationError
from app.models.todo import Todo
from app.schemas.todo import PRIORITY_RANK, TodoCreateSchema

logger = logging.getLogger(__name__)

# Friendly text per form field; pydantic's own messages are for developers
FIELD_ERRORS = {
    "due_date": "Due date must be a valid date (YYYY-MM-DD)",
    "priority": "Priority must be one of: low, medium, high",
}

_priority_rank = case(
    {p.value: rank for p, rank in PRIORITY_RANK.items()},
    value=Todo.priority,
    else_=-1,
)


def _first_error_message(exc: SchemaValidationError) -> str:
    err = exc.errors()[0]
    field = err["loc"][0] if err.get("loc") else None
    if field in FIELD_ERRORS:
        return FIELD_ERRORS[field]
    msg = err.get("msg", "Invalid input")
    return msg.removeprefix("Value error, ")


def parse_todo_id(raw) -> int | None:
    """Todo ids come from the URL; anything non-numeric matches nothing."""
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


class TodoStore:
    """Todo records behind an injected AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        owner_id: int,
        text: str,
        due_date: date | str | None = None,
        priority: str | None = None,
    ) -> Todo:
        try:
            data = TodoCreateSchema(text=text or "", due_date=due_date, priority=priority)
        except SchemaValidationError as e:
            raise ValidationError(_first_error_message(e)) from e

        todo = Todo(
            user_id=owner_id,
            text=data.text,
            due_date=data.due_date,
            priority=data.priority.value,
            completed=False,
        )
        self.db.add(todo)
        await self.db.commit()
        await self.db.refresh(todo)
        logger.debug("created todo id=%s for user_id=%s", todo.id, owner_id)
        return todo

    async def list_by_owner(self, owner_id: int) -> list[Todo]:
        """Soonest due first (undated last), then most urgent priority."""
        result = await self.db.execute(
            select(Todo)
            .where(Todo.user_id == owner_id)
            .order_by(
                Todo.due_date.is_(None),
                Todo.due_date.asc(),
                _priority_rank.desc(),
                Todo.id.asc(),
            )
        )
        return list(result.scalars().all())

    async def find_by_owner_and_id(self, owner_id: int, todo_id) -> Todo | None:
        todo_id = parse_todo_id(todo_id)
        if todo_id is None:
            return None
        result = await self.db.execute(
            select(Todo).where(Todo.id == todo_id, Todo.user_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def toggle(self, owner_id: int, todo_id) -> Todo | None:
        """Flip ``completed``; None when the todo is missing or not owned."""
        todo = await self.find_by_owner_and_id(owner_id, todo_id)
        if todo is None:
            return None
        todo.completed = not todo.completed
        await self.db.commit()
        await self.db.refresh(todo)
        return todo

    async def delete(self, owner_id: int, todo_id) -> bool:
        todo_id = parse_todo_id(todo_id)
        if todo_id is None:
            return False
        result = await self.db.execute(
            delete(Todo).where(Todo.id == todo_id, Todo.user_id == owner_id)
        )
        await self.db.commit()
        return result.rowcount > 0
