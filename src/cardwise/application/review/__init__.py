# Application Review Package
from .scheduler import ReviewScheduler
from .service import ReviewService

__all__ = ["ReviewScheduler", "ReviewService"]
