from datetime import datetime, timezone

from cardwise.domain.review.models import CardReviewRecord, KnowledgeLevel
from cardwise.infrastructure.adapters.memory_store import InMemoryReviewStore


def make_record(card_id="a"):
    return CardReviewRecord(
        card_id=card_id,
        knowledge_level=KnowledgeLevel.NEW,
        easiness_factor=2.5,
        consecutive_correct=0,
        next_review_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def test_put_get_delete():
    store = InMemoryReviewStore()
    store.put(make_record())

    assert store.get("a").card_id == "a"
    assert store.delete("a") is True
    assert store.get("a") is None
    assert store.delete("a") is False


def test_returned_records_are_copies():
    store = InMemoryReviewStore()
    record = make_record()
    store.put(record)

    record.consecutive_correct = 5
    fetched = store.get("a")
    fetched.easiness_factor = 1.3
    store.get_all()["a"].knowledge_level = KnowledgeLevel.MASTERED

    stored = store.get("a")
    assert stored.consecutive_correct == 0
    assert stored.easiness_factor == 2.5
    assert stored.knowledge_level == KnowledgeLevel.NEW


def test_get_all_snapshot_is_detached():
    store = InMemoryReviewStore({"a": make_record("a")})
    snapshot = store.get_all()
    store.put(make_record("b"))

    assert set(snapshot) == {"a"}
    assert set(store.get_all()) == {"a", "b"}
