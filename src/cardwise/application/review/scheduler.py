"""
Review scheduler: knowledge-level state machine plus SM-2 style spacing.

This is a pure computation module with no I/O. Persistence is handled by
ReviewService through the ReviewStore port.
"""

import math
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from cardwise.domain.constants import (
    CONFUSED_EASINESS_PENALTY,
    DEFAULT_EASINESS_FACTOR,
    EASY_INTERVAL_MULTIPLIER,
    LEARNING_INTERVAL_DAYS,
    MAX_QUALITY,
    MIN_EASINESS_FACTOR,
    NEW_INTERVAL_DAYS,
    NOT_SURE_INTERVAL_MULTIPLIER,
    NOT_SURE_MIN_INTERVAL_DAYS,
    QUALITY_OFFSET,
    RELEARN_DELAY,
    REVIEW_INTERVALS_DAYS,
    SM2_BASE_ADJUSTMENT,
    SM2_LINEAR_COEFFICIENT,
    SM2_QUADRATIC_COEFFICIENT,
)
from cardwise.domain.review.models import CardReviewRecord, Feedback, KnowledgeLevel, utc


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class ReviewScheduler:
    """
    Computes the next review record from the current one and a feedback signal.

    Stateless and side-effect free. Every method that depends on the current
    time takes an explicit ``now``; when omitted, the current UTC time is used.
    """

    def initialize(self, card_id: str, now: datetime | None = None) -> CardReviewRecord:
        """
        Default record for a card that has never been reviewed.

        The record is due immediately. Nothing is persisted.
        """
        now = utc(now) if now else datetime.now(timezone.utc)
        return CardReviewRecord(
            card_id=str(card_id),
            knowledge_level=KnowledgeLevel.NEW,
            easiness_factor=DEFAULT_EASINESS_FACTOR,
            consecutive_correct=0,
            next_review_date=now,
            last_review_date=None,
        )

    def apply_feedback(
        self,
        record: CardReviewRecord,
        feedback: Feedback,
        now: datetime | None = None,
    ) -> CardReviewRecord:
        """
        Apply one feedback event and return the updated record.

        CONFUSED resets the card to LEARNING and schedules a relearn in four
        hours. Any other feedback counts as a recall: the easiness factor is
        adjusted with the SM-2 formula, GOT_IT/EASY promote one level, and the
        next review is pushed out by an interval derived from the new level.

        The input record is not modified.
        """
        now = utc(now) if now else datetime.now(timezone.utc)
        feedback = Feedback(feedback)

        if feedback == Feedback.CONFUSED:
            return replace(
                record,
                knowledge_level=KnowledgeLevel.LEARNING,
                easiness_factor=max(
                    MIN_EASINESS_FACTOR, record.easiness_factor - CONFUSED_EASINESS_PENALTY
                ),
                consecutive_correct=0,
                next_review_date=now + RELEARN_DELAY,
                last_review_date=now,
            )

        consecutive = record.consecutive_correct + 1
        quality = int(feedback) + QUALITY_OFFSET
        easiness = self._compute_easiness(record.easiness_factor, quality)

        level = KnowledgeLevel(record.knowledge_level)
        if feedback >= Feedback.GOT_IT and level < KnowledgeLevel.MASTERED:
            level = KnowledgeLevel(level + 1)

        interval = self._base_interval(level, consecutive, easiness)
        interval = self._adjust_interval(interval, feedback)

        return replace(
            record,
            knowledge_level=level,
            easiness_factor=easiness,
            consecutive_correct=consecutive,
            next_review_date=now + timedelta(days=interval),
            last_review_date=now,
        )

    def is_due(self, record: CardReviewRecord, now: datetime | None = None) -> bool:
        """A never-reviewed card is always due; otherwise due once next_review_date has passed."""
        if record.last_review_date is None:
            return True
        now = utc(now) if now else datetime.now(timezone.utc)
        return utc(record.next_review_date) <= now

    def _compute_easiness(self, easiness: float, quality: int) -> float:
        """
        SM-2 easiness update, clamped to the minimum.

        q=5 adds 0.1, q=4 leaves it unchanged, q=3 subtracts 0.14.
        """
        miss = MAX_QUALITY - quality
        delta = SM2_BASE_ADJUSTMENT - miss * (
            SM2_LINEAR_COEFFICIENT + miss * SM2_QUADRATIC_COEFFICIENT
        )
        return max(MIN_EASINESS_FACTOR, easiness + delta)

    def _base_interval(self, level: KnowledgeLevel, consecutive: int, easiness: float) -> int:
        if level == KnowledgeLevel.NEW:
            return NEW_INTERVAL_DAYS
        if level == KnowledgeLevel.LEARNING:
            return LEARNING_INTERVAL_DAYS

        # Saturates at the longest defined interval
        index = min(consecutive, len(REVIEW_INTERVALS_DAYS) - 1)
        interval = REVIEW_INTERVALS_DAYS[index]
        if level == KnowledgeLevel.MASTERED:
            interval = _round_half_up(interval * easiness)
        return interval

    def _adjust_interval(self, interval: int, feedback: Feedback) -> int:
        if feedback == Feedback.NOT_SURE:
            return max(NOT_SURE_MIN_INTERVAL_DAYS, math.floor(interval * NOT_SURE_INTERVAL_MULTIPLIER))
        if feedback == Feedback.EASY:
            return math.floor(interval * EASY_INTERVAL_MULTIPLIER)
        return interval
