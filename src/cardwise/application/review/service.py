"""
Review Service: Application layer orchestrator.

Coordinates reading review records from the store, running them through the
scheduler, and writing the results back.
"""

import logging
import threading
import weakref
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from cardwise.domain.constants import DEFAULT_UPCOMING_WINDOW_DAYS
from cardwise.domain.review.models import (
    CardReviewRecord,
    Feedback,
    KnowledgeLevel,
    ReviewStats,
    utc,
)
from cardwise.domain.review.ports import ReviewStore

from .formatting import describe_knowledge_level, describe_next_review
from .scheduler import ReviewScheduler

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ReviewService:
    """
    Application service for card review scheduling.

    Follows Dependency Inversion: depends on the ReviewStore abstraction,
    not concrete adapter implementations.

    Feedback for a single card is applied under a per-card lock so that the
    read-compute-write cycle cannot lose updates when the service is shared
    between threads (e.g. FastAPI's threadpool). Different cards never block
    each other.
    """

    def __init__(
        self,
        store: ReviewStore,
        scheduler: ReviewScheduler | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """
        Args:
            store: The repository (port) for review records.
            scheduler: Optional custom scheduler; uses default if not provided.
            clock: Optional zero-argument callable returning the current time.
        """
        self._store = store
        self._scheduler = scheduler or ReviewScheduler()
        self._clock = clock or _utcnow
        # Entries disappear once no caller holds the lock
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._locks_guard = threading.Lock()

    def now(self) -> datetime:
        """Current time from the injected clock, as aware UTC."""
        return utc(self._clock())

    def _now(self, now: datetime | None) -> datetime:
        return utc(now) if now else self.now()

    def _lock_for(self, card_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(card_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[card_id] = lock
            return lock

    # --- single card ---

    def get_record(self, card_id: str | int) -> CardReviewRecord:
        """
        Return the stored record, or a fresh default if the card is unknown.

        The default is not persisted; see register_card.
        """
        card_id = str(card_id)
        record = self._store.get(card_id)
        if record is None:
            return self._scheduler.initialize(card_id, self._now(None))
        return record

    def register_card(self, card_id: str | int) -> CardReviewRecord:
        """
        Persist a default record for a card unless one already exists.

        Existing review state is never overwritten.
        """
        card_id = str(card_id)
        with self._lock_for(card_id):
            existing = self._store.get(card_id)
            if existing is not None:
                return existing
            record = self._scheduler.initialize(card_id, self._now(None))
            self._store.put(record)
            logger.debug(f"Registered card {card_id}")
            return record

    def process_feedback(
        self,
        card_id: str | int,
        feedback: Feedback,
        now: datetime | None = None,
    ) -> CardReviewRecord:
        """
        Apply learner feedback to a card and persist the result.

        Store failures propagate to the caller.
        """
        card_id = str(card_id)
        now = self._now(now)
        with self._lock_for(card_id):
            current = self._store.get(card_id)
            if current is None:
                current = self._scheduler.initialize(card_id, now)
            updated = self._scheduler.apply_feedback(current, feedback, now)
            self._store.put(updated)

        logger.debug(
            f"Card {card_id}: {Feedback(feedback).name} -> "
            f"{updated.knowledge_level.name}, ef={updated.easiness_factor:.2f}, "
            f"next={updated.next_review_date.isoformat()}"
        )
        return updated

    def is_due(self, card_id: str | int, now: datetime | None = None) -> bool:
        return self._scheduler.is_due(self.get_record(card_id), self._now(now))

    def forget_card(self, card_id: str | int) -> bool:
        """Remove a card's review state from the store."""
        card_id = str(card_id)
        with self._lock_for(card_id):
            removed = self._store.delete(card_id)
        if removed:
            logger.info(f"Forgot review state for card {card_id}")
        return removed

    # --- text ---

    def describe_next_review(self, card_id: str | int, now: datetime | None = None) -> str:
        now = self._now(now)
        record = self.get_record(card_id)
        return describe_next_review(record.next_review_date, now)

    def describe_knowledge_level(self, card_id: str | int) -> str:
        return describe_knowledge_level(self.get_record(card_id).knowledge_level)

    # --- queries over all cards ---

    def due_cards(self, now: datetime | None = None) -> list[str]:
        """
        Card ids whose next review is at or before ``now``.

        Computed from a fresh store snapshot on every call, ordered by next
        review date and then id.
        """
        now = self._now(now)
        records = self._store.get_all().values()
        due = [r for r in records if utc(r.next_review_date) <= now]
        return [r.card_id for r in sorted(due, key=_schedule_order)]

    def upcoming_cards(
        self,
        now: datetime | None = None,
        window_days: int = DEFAULT_UPCOMING_WINDOW_DAYS,
    ) -> list[str]:
        """
        Card ids due after ``now`` but within ``window_days`` days.

        Never overlaps with due_cards for the same ``now``.
        """
        now = self._now(now)
        horizon = now + timedelta(days=window_days)
        records = self._store.get_all().values()
        upcoming = [r for r in records if now < utc(r.next_review_date) <= horizon]
        return [r.card_id for r in sorted(upcoming, key=_schedule_order)]

    def get_stats(
        self,
        now: datetime | None = None,
        window_days: int = DEFAULT_UPCOMING_WINDOW_DAYS,
    ) -> ReviewStats:
        """
        Count known cards per knowledge level, plus due and upcoming totals.
        """
        now = self._now(now)
        horizon = now + timedelta(days=window_days)
        records = list(self._store.get_all().values())

        levels = [r.knowledge_level for r in records]
        due = 0
        upcoming = 0
        for r in records:
            next_review = utc(r.next_review_date)
            if next_review <= now:
                due += 1
            elif next_review <= horizon:
                upcoming += 1

        return ReviewStats(
            total_cards=len(records),
            new_cards=levels.count(KnowledgeLevel.NEW),
            learning_cards=levels.count(KnowledgeLevel.LEARNING),
            reviewing_cards=levels.count(KnowledgeLevel.REVIEWING),
            mastered_cards=levels.count(KnowledgeLevel.MASTERED),
            due_cards=due,
            upcoming_cards=upcoming,
        )


def _schedule_order(record: CardReviewRecord) -> tuple[datetime, str]:
    return (utc(record.next_review_date), record.card_id)
