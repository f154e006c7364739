"""
In-memory Review Store: process-local adapter.

Implements ReviewStore with a dictionary. Contents are lost on exit.
"""

import threading
from dataclasses import replace

from cardwise.domain.review.models import CardReviewRecord
from cardwise.domain.review.ports import ReviewStore


class InMemoryReviewStore(ReviewStore):
    """
    Keeps review records in a dict guarded by a lock.

    Records are copied on the way in and out so callers cannot mutate
    stored state behind the store's back.
    """

    def __init__(self, records: dict[str, CardReviewRecord] | None = None):
        self._records: dict[str, CardReviewRecord] = {
            str(k): replace(v) for k, v in (records or {}).items()
        }
        self._lock = threading.Lock()

    def get(self, card_id: str) -> CardReviewRecord | None:
        with self._lock:
            record = self._records.get(str(card_id))
        return replace(record) if record is not None else None

    def put(self, record: CardReviewRecord) -> None:
        with self._lock:
            self._records[record.card_id] = replace(record)

    def get_all(self) -> dict[str, CardReviewRecord]:
        with self._lock:
            return {k: replace(v) for k, v in self._records.items()}

    def delete(self, card_id: str) -> bool:
        with self._lock:
            return self._records.pop(str(card_id), None) is not None
