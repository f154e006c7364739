from datetime import datetime, timedelta, timezone

from cardwise.domain.review.models import CardReviewRecord, KnowledgeLevel, utc


def test_utc_assumes_naive_is_utc():
    assert utc(datetime(2024, 1, 1, 8, 0)) == datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)


def test_utc_converts_other_offsets():
    plus_two = timezone(timedelta(hours=2))
    converted = utc(datetime(2024, 1, 1, 10, 0, tzinfo=plus_two))

    assert converted.tzinfo == timezone.utc
    assert converted.hour == 8


def test_record_defaults_to_never_reviewed():
    record = CardReviewRecord(
        card_id="a",
        knowledge_level=KnowledgeLevel.NEW,
        easiness_factor=2.5,
        consecutive_correct=0,
        next_review_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    assert record.last_review_date is None


def test_knowledge_levels_are_ordered():
    assert KnowledgeLevel.NEW < KnowledgeLevel.LEARNING < KnowledgeLevel.REVIEWING < KnowledgeLevel.MASTERED
