from datetime import datetime, timezone

import pytest

from cardwise.application.review.scheduler import ReviewScheduler
from cardwise.application.review.service import ReviewService
from cardwise.infrastructure.adapters.memory_store import InMemoryReviewStore

NOW = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def scheduler():
    return ReviewScheduler()


@pytest.fixture
def memory_store():
    return InMemoryReviewStore()


@pytest.fixture
def service(memory_store):
    """Service over an in-memory store with the clock frozen at NOW."""
    return ReviewService(store=memory_store, clock=lambda: NOW)


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config and the default store
    monkeypatch.setenv("HOME", str(home))
    for var in ("CARDWISE_STORE_PATH", "CARDWISE_STORE_BACKEND", "CARDWISE_UPCOMING_WINDOW_DAYS"):
        monkeypatch.delenv(var, raising=False)
    return home
