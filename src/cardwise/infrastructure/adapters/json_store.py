"""
JSON File Review Store: Infrastructure adapter for a single JSON document.

Implements ReviewStore by keeping every record in one file:

    {"<card_id>": {"knowledge_level": 1, "easiness_factor": 2.5, ...}, ...}

Timestamps are stored as ISO-8601 strings with microseconds and UTC offset.
"""

import json
import logging
import os
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from typing import Any

from cardwise.domain.review.models import CardReviewRecord, KnowledgeLevel, utc
from cardwise.domain.review.ports import ReviewStore, ReviewStoreError

logger = logging.getLogger(__name__)


def record_to_dict(record: CardReviewRecord) -> dict[str, Any]:
    return {
        "card_id": record.card_id,
        "knowledge_level": int(record.knowledge_level),
        "easiness_factor": record.easiness_factor,
        "consecutive_correct": record.consecutive_correct,
        "next_review_date": utc(record.next_review_date).isoformat(),
        "last_review_date": (
            utc(record.last_review_date).isoformat() if record.last_review_date else None
        ),
    }


def record_from_dict(card_id: str, data: dict[str, Any]) -> CardReviewRecord:
    """Build a record stored under ``card_id``; the document key is authoritative."""
    if not isinstance(data, dict):
        raise TypeError(
            f"record for card {card_id} must be an object, got {type(data).__name__}"
        )

    last_review = data.get("last_review_date")
    return CardReviewRecord(
        card_id=str(card_id),
        knowledge_level=KnowledgeLevel(int(data["knowledge_level"])),
        easiness_factor=float(data["easiness_factor"]),
        consecutive_correct=int(data["consecutive_correct"]),
        next_review_date=utc(datetime.fromisoformat(data["next_review_date"])),
        last_review_date=utc(datetime.fromisoformat(last_review)) if last_review else None,
    )


class JsonFileReviewStore(ReviewStore):
    """
    Persists review records to a JSON file.

    Every write rewrites the whole document, so reads and writes share one
    lock. Writes go through a temporary file and ``os.replace`` so a crash
    never leaves a half-written document behind.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()

    def get(self, card_id: str) -> CardReviewRecord | None:
        with self._lock:
            return self._load().get(str(card_id))

    def put(self, record: CardReviewRecord) -> None:
        with self._lock:
            records = self._load()
            records[record.card_id] = record
            self._save(records)

    def get_all(self) -> dict[str, CardReviewRecord]:
        with self._lock:
            return self._load()

    def delete(self, card_id: str) -> bool:
        with self._lock:
            records = self._load()
            if records.pop(str(card_id), None) is None:
                return False
            self._save(records)
            return True

    def _load(self) -> dict[str, CardReviewRecord]:
        if not self.path.exists():
            return {}

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read review store {self.path}: {e}")
            raise ReviewStoreError(f"Cannot read review store {self.path}: {e}") from e

        if not isinstance(raw, dict):
            raise ReviewStoreError(
                f"Review store {self.path} must contain a JSON object, got {type(raw).__name__}"
            )

        try:
            return {str(cid): record_from_dict(cid, data) for cid, data in raw.items()}
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Malformed record in review store {self.path}: {e}")
            raise ReviewStoreError(f"Malformed record in review store {self.path}: {e}") from e

    def _save(self, records: dict[str, CardReviewRecord]) -> None:
        payload = {cid: record_to_dict(r) for cid, r in sorted(records.items())}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(payload, fh, indent=2, ensure_ascii=False)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(f"Failed to write review store {self.path}: {e}")
            raise ReviewStoreError(f"Cannot write review store {self.path}: {e}") from e
