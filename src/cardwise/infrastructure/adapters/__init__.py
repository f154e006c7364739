# Infrastructure Review Store Adapters Package
from .json_store import JsonFileReviewStore
from .memory_store import InMemoryReviewStore

__all__ = ["InMemoryReviewStore", "JsonFileReviewStore"]
