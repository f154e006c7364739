"""
Domain models for review scheduling.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum


class KnowledgeLevel(IntEnum):
    """
    Coarse bucket summarizing how well a card is known.

    Values are fixed; the scheduler promotes by adding one.
    """

    NEW = 0
    LEARNING = 1
    REVIEWING = 2
    MASTERED = 3


class Feedback(IntEnum):
    """
    Learner signal given after seeing a card's answer.

    Values are fixed: the SM-2 quality score is ``int(feedback) + 2``,
    so reordering these members changes scheduling.
    """

    CONFUSED = 0
    NOT_SURE = 1
    GOT_IT = 2
    EASY = 3


def utc(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime, treating naive values as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@dataclass
class CardReviewRecord:
    """
    Review state for a single card.

    Attributes:
        card_id: Opaque card identifier.
        knowledge_level: Current knowledge bucket.
        easiness_factor: Per-card difficulty memory, never below 1.3.
        consecutive_correct: Feedback events since the last CONFUSED.
        next_review_date: The card is due once this instant has passed.
        last_review_date: None until the first feedback is processed.
    """

    card_id: str
    knowledge_level: KnowledgeLevel
    easiness_factor: float
    consecutive_correct: int
    next_review_date: datetime
    last_review_date: datetime | None = None


@dataclass(frozen=True)
class ReviewStats:
    """Counts over every known review record."""

    total_cards: int
    new_cards: int
    learning_cards: int
    reviewing_cards: int
    mastered_cards: int
    due_cards: int
    upcoming_cards: int
