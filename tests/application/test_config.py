import pytest
from pydantic import ValidationError

from cardwise.application.config import AppConfig, resolve_config
from cardwise.application.factory import get_review_service, get_review_store
from cardwise.application.review.service import ReviewService
from cardwise.infrastructure.adapters.json_store import JsonFileReviewStore
from cardwise.infrastructure.adapters.memory_store import InMemoryReviewStore


def write_config(home, text):
    cfg = home / ".config/cardwise/config.toml"
    cfg.parent.mkdir(parents=True, exist_ok=True)
    cfg.write_text(text)
    return cfg


def test_defaults(mock_home):
    config = resolve_config()

    assert config.store_backend == "json"
    assert config.store_path == mock_home / ".config/cardwise/reviews.json"
    assert config.upcoming_window_days == 3
    assert config.port == 8777


def test_env_overrides_defaults(mock_home, monkeypatch):
    monkeypatch.setenv("CARDWISE_STORE_BACKEND", "memory")
    monkeypatch.setenv("CARDWISE_UPCOMING_WINDOW_DAYS", "7")

    config = resolve_config()

    assert config.store_backend == "memory"
    assert config.upcoming_window_days == 7


def test_toml_file_is_read(mock_home):
    write_config(mock_home, 'upcoming_window_days = 5\nstore_path = "~/cards.json"\n')

    config = resolve_config()

    assert config.upcoming_window_days == 5
    assert config.store_path == mock_home / "cards.json"


def test_env_beats_toml(mock_home, monkeypatch):
    write_config(mock_home, "upcoming_window_days = 5\n")
    monkeypatch.setenv("CARDWISE_UPCOMING_WINDOW_DAYS", "9")

    assert resolve_config().upcoming_window_days == 9


def test_overrides_beat_env_and_none_is_ignored(mock_home, monkeypatch, tmp_path):
    monkeypatch.setenv("CARDWISE_STORE_BACKEND", "memory")

    config = resolve_config({"store_backend": "json", "store_path": tmp_path / "r.json", "port": None})

    assert config.store_backend == "json"
    assert config.store_path == tmp_path / "r.json"
    assert config.port == 8777


def test_invalid_values_rejected(mock_home):
    with pytest.raises(ValidationError):
        AppConfig(store_backend="redis")
    with pytest.raises(ValidationError):
        AppConfig(upcoming_window_days=0)


def test_factory_selects_store(mock_home, tmp_path):
    memory = get_review_store(resolve_config({"store_backend": "memory"}))
    assert isinstance(memory, InMemoryReviewStore)

    json_store = get_review_store(resolve_config({"store_path": tmp_path / "r.json"}))
    assert isinstance(json_store, JsonFileReviewStore)
    assert json_store.path == tmp_path / "r.json"


def test_factory_builds_service(mock_home):
    service = get_review_service(resolve_config({"store_backend": "memory"}))
    assert isinstance(service, ReviewService)
