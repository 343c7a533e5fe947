"""Web routes: todo list, add, toggle, delete. Jinja2 templates."""
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Form
from fastapi.responses import HTMLResponse, RedirectResponse

from app.core.errors import ValidationError
from app.routers.deps import CurrentSession, get_todo_store, templates
from app.schemas.todo import Priority
from app.services.todos import TodoStore

router = APIRouter()


# ---------- helpers ----------

def _redirect(url, **params) -> RedirectResponse:
    """303 redirect with query params."""
    if params:
        url = url.include_query_params(**params)
    return RedirectResponse(url, status_code=303)


# ---------- routes ----------

@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    current: CurrentSession,
    todos: Annotated[TodoStore, Depends(get_todo_store)],
    error: str | None = None,
):
    items = await todos.list_by_owner(current.user_id)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "current_user": current,
            "todos": items,
            "priorities": [p.value for p in Priority],
            "error": error,
        },
    )


@router.post("/add", response_class=RedirectResponse)
async def add_todo(
    request: Request,
    current: CurrentSession,
    todos: Annotated[TodoStore, Depends(get_todo_store)],
    todo: Annotated[str, Form()] = "",
    due_date: Annotated[str, Form(alias="dueDate")] = "",
    priority: Annotated[str, Form()] = Priority.MEDIUM.value,
):
    try:
        await todos.create(current.user_id, todo, due_date, priority)
    except ValidationError as e:
        return _redirect(request.url_for("index"), error=e.message)
    return _redirect(request.url_for("index"))


@router.post("/toggle/{todo_id}", response_class=RedirectResponse)
async def toggle_todo(
    request: Request,
    todo_id: str,
    current: CurrentSession,
    todos: Annotated[TodoStore, Depends(get_todo_store)],
):
    # missing or foreign todo: nothing happens, same redirect
    await todos.toggle(current.user_id, todo_id)
    return _redirect(request.url_for("index"))


@router.post("/delete/{todo_id}", response_class=RedirectResponse)
async def delete_todo(
    request: Request,
    todo_id: str,
    current: CurrentSession,
    todos: Annotated[TodoStore, Depends(get_todo_store)],
):
    await todos.delete(current.user_id, todo_id)
    return _redirect(request.url_for("index"))
