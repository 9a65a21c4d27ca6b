"""
Todos API

CRUD endpoints over the `todos` table. Errors are raised as AppError
subclasses and normalized by the handlers in backend.core.errors.
"""

from typing import Annotated

from fastapi import APIRouter, Path

from backend.core.logging import log_event
from backend.features.todos import service as todo_service
from backend.models.todo import Todo, TodoCreate, TodoUpdate, TodoDeleted

router = APIRouter(prefix="/api/todos", tags=["todos"])

# Largest value a signed 64-bit INTEGER column can hold
MAX_TODO_ID = 2**63 - 1

TodoId = Annotated[int, Path(description="Todo identifier", le=MAX_TODO_ID)]


@router.get("", response_model=list[Todo])
def list_todos() -> list[Todo]:
    """All todos, newest first."""
    return todo_service.list_todos()


@router.post("", response_model=Todo, status_code=201)
def create_todo(body: TodoCreate) -> Todo:
    todo = todo_service.create_todo(body.title)
    log_event("info", "todo.created", todo_id=todo.id, event_type="todo.created")
    return todo


@router.put("/{todo_id}", response_model=Todo)
def update_todo(todo_id: TodoId, body: TodoUpdate) -> Todo:
    """Partial update: omitted fields keep their stored values."""
    todo = todo_service.update_todo(todo_id, title=body.title, completed=body.completed)
    log_event(
        "info",
        "todo.updated",
        todo_id=todo.id,
        event_type="todo.updated",
        extra={"completed": todo.completed},
    )
    return todo


@router.delete("/{todo_id}", response_model=TodoDeleted)
def delete_todo(todo_id: TodoId) -> TodoDeleted:
    todo = todo_service.delete_todo(todo_id)
    log_event("info", "todo.deleted", todo_id=todo.id, event_type="todo.deleted")
    return TodoDeleted()
