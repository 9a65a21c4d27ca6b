"""
Todo domain service.
- list_todos()
- create_todo(title)
- update_todo(todo_id, title=None, completed=None)
- delete_todo(todo_id)

The only module that reads or writes the `todos` table.
"""

from datetime import datetime, timezone
from typing import Optional
from sqlalchemy import select, insert, update, delete

from backend.core.database import get_db_session, todos as todos_table, TITLE_MAX_LENGTH
from backend.core.errors import ValidationError, NotFoundError
from backend.models.todo import Todo


def normalize_title(title: Optional[str]) -> str:
    """Strip the title and enforce presence and length."""
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValidationError("Title is required")
    if len(cleaned) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
    return cleaned


def _row_to_todo(row) -> Todo:
    return Todo(
        id=row.id,
        title=row.title,
        completed=bool(row.completed),
        created_at=row.created_at,
    )


def _fetch(session, todo_id: int):
    return session.execute(select(todos_table).where(todos_table.c.id == todo_id)).first()


def list_todos() -> list[Todo]:
    """All todos, newest first."""
    with get_db_session() as session:
        rows = session.execute(
            select(todos_table).order_by(todos_table.c.created_at.desc(), todos_table.c.id.desc())
        ).all()
        return [_row_to_todo(row) for row in rows]


def create_todo(title: Optional[str], now: Optional[datetime] = None) -> Todo:
    cleaned = normalize_title(title)
    created_at = now or datetime.now(timezone.utc)
    with get_db_session() as session:
        result = session.execute(
            insert(todos_table).values(
                title=cleaned,
                completed=False,
                created_at=created_at,
            )
        )
        todo_id = result.inserted_primary_key[0]
        return _row_to_todo(_fetch(session, todo_id))


def update_todo(todo_id: int, title: Optional[str] = None, completed: Optional[bool] = None) -> Todo:
    values = {}
    if title is not None:
        values["title"] = normalize_title(title)
    if completed is not None:
        values["completed"] = completed

    with get_db_session() as session:
        if not _fetch(session, todo_id):
            raise NotFoundError("Todo not found")
        if values:
            session.execute(
                update(todos_table).where(todos_table.c.id == todo_id).values(**values)
            )
        return _row_to_todo(_fetch(session, todo_id))


def delete_todo(todo_id: int) -> Todo:
    """Delete a todo and return the removed record."""
    with get_db_session() as session:
        row = _fetch(session, todo_id)
        if not row:
            raise NotFoundError("Todo not found")
        session.execute(delete(todos_table).where(todos_table.c.id == todo_id))
        return _row_to_todo(row)
