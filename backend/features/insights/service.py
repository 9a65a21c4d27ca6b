"""
Recommendation Engine - Computation Service

Derives stats, insights and suggestions from a todo snapshot.
All logic is deterministic and side-effect free; the only time input is
the explicit `now` (or one read of the local clock when omitted).
"""

import math
import re
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, Optional, Sequence

from backend.features.insights.models import Recommendations, RuleOutcome, TodoStats
from backend.models.todo import Todo


# Completion-rate bands (strict lower bounds on the rounded rate)
HIGH_COMPLETION_RATE = 80
GOOD_COMPLETION_RATE = 50

# Backlog bands on the pending count
BACKLOG_HEAVY_PENDING = 10

# Time-of-day bands, inclusive local hours
MORNING_HOURS = range(9, 12)
AFTERNOON_HOURS = range(14, 17)
EVENING_START_HOUR = 20

MIN_KEYWORD_LENGTH = 3
MAX_LISTED_KEYWORDS = 3

HIGH_RATE_INSIGHT = "🎉 Excellent! Your completion rate is high and your productivity is outstanding"
HIGH_RATE_SUGGESTION = "Try adding a new, more challenging task"
GOOD_PACE_INSIGHT = "👍 You're moving along at a good pace"
GOOD_PACE_SUGGESTION = "Splitting tasks into smaller pieces makes them easier to finish"
GETTING_STARTED_INSIGHT = "💪 Start with a small task first"
GETTING_STARTED_SUGGESTION = "Aim to complete one task per day"

MORNING_SUGGESTION = "🌅 Mornings are when focus peaks. Work on your most important tasks"
AFTERNOON_SUGGESTION = "🌞 Afternoons suit lighter tasks and tidying up"
EVENING_SUGGESTION = "🌙 Evenings are a good time to prepare for tomorrow and review the day"

BACKLOG_HEAVY_SUGGESTION = "📝 You have quite a few pending tasks. Work through them in order of priority"
ALL_CLEAR_SUGGESTION = "🎯 Every task is complete! Try setting a new goal"

# Anything that is not a letter, digit or whitespace; `\w` admits `_`, so strip it too
_NON_WORD = re.compile(r"[^\w\s]|_")


def keyword_insight(keywords: Sequence[str]) -> str:
    return f"🔍 Frequent keywords: {', '.join(keywords[:MAX_LISTED_KEYWORDS])}"


def keyword_suggestion(keyword: str) -> str:
    return f'Batching "{keyword}" tasks together is more efficient'


def compute_stats(todos: Iterable[Todo]) -> TodoStats:
    """Aggregate counts for a snapshot. Empty input yields all zeros."""
    total = 0
    completed = 0
    for todo in todos:
        total += 1
        if todo.completed:
            completed += 1

    # Round halves up (12.5 -> 13) rather than to even
    rate = math.floor(completed / total * 100 + 0.5) if total else 0

    return TodoStats(
        total_todos=total,
        completed_todos=completed,
        pending_todos=total - completed,
        completion_rate=rate,
    )


def tokenize(title: str) -> list[str]:
    """Lower-case, strip punctuation, split on whitespace, drop short words."""
    cleaned = _NON_WORD.sub("", title.lower())
    return [word for word in cleaned.split() if len(word) >= MIN_KEYWORD_LENGTH]


def find_common_words(titles: Iterable[str]) -> list[str]:
    """
    Words used more than once across all titles, most frequent first.

    Counter keeps first-encounter order and sorted() is stable, so equal
    counts stay in the order the words were first seen.
    """
    counts: Counter = Counter()
    for title in titles:
        counts.update(tokenize(title))

    repeated = [(word, count) for word, count in counts.items() if count > 1]
    repeated = sorted(repeated, key=lambda item: -item[1])
    return [word for word, _ in repeated]


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule may look at for one evaluation."""
    stats: TodoStats
    keywords: tuple[str, ...]
    hour: int


def completion_rate_rule(ctx: RuleContext) -> RuleOutcome:
    rate = ctx.stats.completion_rate
    if rate > HIGH_COMPLETION_RATE:
        return RuleOutcome(insights=(HIGH_RATE_INSIGHT,), suggestions=(HIGH_RATE_SUGGESTION,))
    if rate > GOOD_COMPLETION_RATE:
        return RuleOutcome(insights=(GOOD_PACE_INSIGHT,), suggestions=(GOOD_PACE_SUGGESTION,))
    return RuleOutcome(insights=(GETTING_STARTED_INSIGHT,), suggestions=(GETTING_STARTED_SUGGESTION,))


def keyword_pattern_rule(ctx: RuleContext) -> RuleOutcome:
    if not ctx.keywords:
        return RuleOutcome()
    return RuleOutcome(
        insights=(keyword_insight(ctx.keywords),),
        suggestions=(keyword_suggestion(ctx.keywords[0]),),
    )


def time_of_day_rule(ctx: RuleContext) -> RuleOutcome:
    if ctx.hour in MORNING_HOURS:
        return RuleOutcome(suggestions=(MORNING_SUGGESTION,))
    if ctx.hour in AFTERNOON_HOURS:
        return RuleOutcome(suggestions=(AFTERNOON_SUGGESTION,))
    if ctx.hour >= EVENING_START_HOUR:
        return RuleOutcome(suggestions=(EVENING_SUGGESTION,))
    return RuleOutcome()


def backlog_rule(ctx: RuleContext) -> RuleOutcome:
    pending = ctx.stats.pending_todos
    if pending > BACKLOG_HEAVY_PENDING:
        return RuleOutcome(suggestions=(BACKLOG_HEAVY_SUGGESTION,))
    if pending == 0:
        return RuleOutcome(suggestions=(ALL_CLEAR_SUGGESTION,))
    return RuleOutcome()


@dataclass(frozen=True)
class RecommendationRule:
    name: str
    evaluate: Callable[[RuleContext], RuleOutcome]


# Evaluation order is the output order
DEFAULT_RULES: tuple[RecommendationRule, ...] = (
    RecommendationRule("completion_rate", completion_rate_rule),
    RecommendationRule("keyword_pattern", keyword_pattern_rule),
    RecommendationRule("time_of_day", time_of_day_rule),
    RecommendationRule("backlog", backlog_rule),
)


class InsightEngine:
    """
    Computes recommendations from a todo snapshot.

    Stateless apart from its rule table; safe to share across requests.
    """

    def __init__(self, rules: Sequence[RecommendationRule] = DEFAULT_RULES):
        self.rules = tuple(rules)

    def build_context(self, todos: Sequence[Todo], now: datetime) -> RuleContext:
        return RuleContext(
            stats=compute_stats(todos),
            keywords=tuple(find_common_words(todo.title for todo in todos)),
            hour=now.hour,
        )

    def generate(
        self,
        todos: Iterable[Todo],
        now: Optional[datetime] = None
    ) -> Recommendations:
        """
        Compute stats, insights and suggestions for a snapshot.

        Args:
            todos: Current todos; read only, never mutated
            now: Evaluation time; its wall-clock hour drives the
                time-of-day rule (defaults to local time)

        Returns:
            Recommendations report
        """
        if now is None:
            now = datetime.now()

        ctx = self.build_context(tuple(todos), now)

        insights: list[str] = []
        suggestions: list[str] = []
        for rule in self.rules:
            outcome = rule.evaluate(ctx)
            insights.extend(outcome.insights)
            suggestions.extend(outcome.suggestions)

        return Recommendations(insights=insights, suggestions=suggestions, stats=ctx.stats)


def generate_recommendations(todos: Iterable[Todo], now: Optional[datetime] = None) -> Recommendations:
    """Module-level shortcut using the default rule table."""
    return InsightEngine().generate(todos, now=now)
