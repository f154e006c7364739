"""
Review Store Factory
Centralizes the logic for selecting the appropriate store adapter.
"""

import logging

from cardwise.application.config import AppConfig
from cardwise.application.review.service import ReviewService
from cardwise.domain.review.ports import ReviewStore
from cardwise.infrastructure.adapters.json_store import JsonFileReviewStore
from cardwise.infrastructure.adapters.memory_store import InMemoryReviewStore

logger = logging.getLogger(__name__)


def get_review_store(config: AppConfig) -> ReviewStore:
    """
    Returns the ReviewStore implementation selected by config.store_backend.
    """
    if config.store_backend == "memory":
        logger.debug("Store: in-memory")
        return InMemoryReviewStore()

    logger.debug(f"Store: JSON file at {config.store_path}")
    return JsonFileReviewStore(config.store_path)


def get_review_service(config: AppConfig) -> ReviewService:
    return ReviewService(store=get_review_store(config))
