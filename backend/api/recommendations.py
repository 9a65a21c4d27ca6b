"""
Recommendations API

Read-only endpoint that runs the recommendation engine over the current
todo snapshot.

Accepts an optional 'now' query parameter for deterministic testing.
"""

from datetime import datetime
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from backend.core.errors import ValidationError
from backend.core.logging import log_event
from backend.features.insights.models import Recommendations
from backend.features.insights.service import InsightEngine
from backend.features.todos.service import list_todos

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])

_engine = InsightEngine()


def get_insight_engine() -> InsightEngine:
    """Get insight engine instance."""
    return _engine


@router.get("", response_model=Recommendations)
def get_recommendations(
    insight_engine: Annotated[InsightEngine, Depends(get_insight_engine)],
    now: Optional[str] = Query(None, description="Optional ISO timestamp for deterministic testing"),
) -> Recommendations:
    """
    Get insights, suggestions and stats for all todos.

    **Query Params:**
    - now (optional): ISO timestamp whose wall-clock hour drives the
      time-of-day suggestion (default: server local time). The hour is
      read as written, in the offset the timestamp carries; it is not
      converted to server local time. `2025-01-06T10:00:00Z` is a
      10:00 (morning) evaluation, as is `2025-01-06T10:00:00+09:00`.

    **Deterministic:** Same todos + same 'now' always produce the same report.
    """
    now_dt = None
    if now:
        try:
            # fromisoformat only accepts a trailing "Z" from Python 3.11
            now_dt = datetime.fromisoformat(now[:-1] + "+00:00" if now.endswith("Z") else now)
        except ValueError:
            raise ValidationError("Invalid 'now' timestamp format. Use ISO 8601.")

    todos = list_todos()
    report = insight_engine.generate(todos, now=now_dt)

    log_event(
        "info",
        "recommendations.generated",
        event_type="recommendations.generated",
        extra={
            "total_todos": report.stats.total_todos,
            "insights": len(report.insights),
            "suggestions": len(report.suggestions),
        },
    )
    return report
