from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class Todo(BaseModel):
    """A single task record as stored in the `todos` table."""
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    completed: bool = False
    created_at: datetime


class TodoCreate(BaseModel):
    title: Optional[str] = Field(None, description="Task text; required and non-blank")


class TodoUpdate(BaseModel):
    """Partial update. Omitted (or null) fields keep their stored value."""
    title: Optional[str] = None
    completed: Optional[bool] = None


class TodoDeleted(BaseModel):
    message: str = "Todo deleted successfully"
