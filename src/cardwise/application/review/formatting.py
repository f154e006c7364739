"""Human-readable text for review state."""

import math
from datetime import datetime, timedelta

from cardwise.domain.review.models import KnowledgeLevel, utc

_HOUR = timedelta(hours=1)
_DAY = timedelta(days=1)

KNOWLEDGE_LEVEL_TEXT = {
    KnowledgeLevel.NEW: "New",
    KnowledgeLevel.LEARNING: "Learning",
    KnowledgeLevel.REVIEWING: "Reviewing",
    KnowledgeLevel.MASTERED: "Mastered",
}


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def describe_next_review(next_review_date: datetime, now: datetime) -> str:
    """
    Bucket the time until the next review into a short label.

    Examples: "Due now", "Due in 5 hours", "Due tomorrow", "Due in 4 days",
    "Due in 2 weeks", "Due in 1 month".

    Hours and days are rounded up. The whole span from one to two days out
    reads as "Due tomorrow".
    """
    remaining = utc(next_review_date) - utc(now)

    if remaining <= timedelta(0):
        return "Due now"

    if remaining < _DAY:
        hours = math.ceil(remaining / _HOUR)
        return f"Due in {_plural(hours, 'hour')}"

    if remaining < 2 * _DAY:
        return "Due tomorrow"

    days = math.ceil(remaining / _DAY)
    if days < 7:
        return f"Due in {days} days"
    if days < 30:
        return f"Due in {_plural(days // 7, 'week')}"
    return f"Due in {_plural(days // 30, 'month')}"


def describe_knowledge_level(level: KnowledgeLevel) -> str:
    return KNOWLEDGE_LEVEL_TEXT[KnowledgeLevel(level)]
