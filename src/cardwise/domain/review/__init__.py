# Domain Review Package
from .models import CardReviewRecord, Feedback, KnowledgeLevel, ReviewStats
from .ports import ReviewStore, ReviewStoreError

__all__ = [
    "CardReviewRecord",
    "Feedback",
    "KnowledgeLevel",
    "ReviewStats",
    "ReviewStore",
    "ReviewStoreError",
]
