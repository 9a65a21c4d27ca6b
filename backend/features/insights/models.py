"""
Recommendation Engine - Data Models

Pydantic models for the recommendations report.
All models frozen (immutable). JSON field names are camelCase.
"""

from pydantic import BaseModel, ConfigDict, Field


class TodoStats(BaseModel):
    """Aggregate counts over one todo snapshot."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_todos: int = Field(0, ge=0, alias="totalTodos")
    completed_todos: int = Field(0, ge=0, alias="completedTodos")
    pending_todos: int = Field(0, ge=0, alias="pendingTodos")
    completion_rate: int = Field(0, ge=0, le=100, alias="completionRate", description="Rounded percentage 0-100")


class RuleOutcome(BaseModel):
    """Messages contributed by a single rule."""
    model_config = ConfigDict(frozen=True)

    insights: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()


class Recommendations(BaseModel):
    """
    Complete recommendations report for a todo snapshot.

    Not stored; computed on demand.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    insights: list[str] = Field(default_factory=list, description="Observations, in rule order")
    suggestions: list[str] = Field(default_factory=list, description="Actions, in rule order")
    stats: TodoStats = Field(default_factory=TodoStats)
