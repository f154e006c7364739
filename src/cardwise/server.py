import logging
import time
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import datetime
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel, StrictInt, StrictStr

from cardwise.application.config import AppConfig, resolve_config
from cardwise.application.factory import get_review_service
from cardwise.application.feedback import feedback_from_value
from cardwise.application.review.formatting import (
    describe_knowledge_level,
    describe_next_review,
)
from cardwise.application.review.service import ReviewService
from cardwise.consts import VERSION
from cardwise.domain.review.models import CardReviewRecord
from cardwise.domain.review.ports import ReviewStoreError

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cardwise.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"cardwise server v{VERSION} starting up...")
    yield
    # Shutdown
    logger.info("cardwise server shutting down...")


app = FastAPI(
    title="cardwise server",
    description="Spaced-repetition review scheduling for flashcards.",
    version=VERSION,
    lifespan=lifespan,
)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return resolve_config()


@lru_cache(maxsize=1)
def get_service() -> ReviewService:
    """One service per process so per-card locks are shared by every request."""
    return get_review_service(get_config())


ConfigDep = Annotated[AppConfig, Depends(get_config)]
ServiceDep = Annotated[ReviewService, Depends(get_service)]
WindowDays = Annotated[int | None, Query(ge=1)]


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


class ReviewRecordResponse(BaseModel):
    card_id: str
    knowledge_level: int
    knowledge_level_text: str
    easiness_factor: float
    consecutive_correct: int
    last_review_date: datetime | None
    next_review_date: datetime
    next_review_text: str
    is_due: bool

    @classmethod
    def from_record(cls, record: CardReviewRecord, now: datetime) -> "ReviewRecordResponse":
        return cls(
            card_id=record.card_id,
            knowledge_level=int(record.knowledge_level),
            knowledge_level_text=describe_knowledge_level(record.knowledge_level),
            easiness_factor=record.easiness_factor,
            consecutive_correct=record.consecutive_correct,
            last_review_date=record.last_review_date,
            next_review_date=record.next_review_date,
            next_review_text=describe_next_review(record.next_review_date, now),
            is_due=record.last_review_date is None or record.next_review_date <= now,
        )


class FeedbackRequest(BaseModel):
    # Enum name, integer value, or reaction label ("Got it!")
    feedback: StrictStr | StrictInt


class DueResponse(BaseModel):
    due: list[str]
    upcoming: list[str]


class StatsResponse(BaseModel):
    total_cards: int
    new_cards: int
    learning_cards: int
    reviewing_cards: int
    mastered_cards: int
    due_cards: int
    upcoming_cards: int


start_time = time.time()


def _store_unavailable(e: ReviewStoreError) -> HTTPException:
    logger.error(f"Review store failure: {e}")
    return HTTPException(status_code=503, detail=str(e))


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
async def get_version():
    return {"version": VERSION}


@app.get("/reviews/due", response_model=DueResponse)
def list_due(
    service: ServiceDep,
    config: ConfigDep,
    window_days: WindowDays = None,
):
    """
    Cards due now, plus cards coming due within window_days
    (defaults to the configured upcoming window).
    """
    window = window_days or config.upcoming_window_days
    try:
        now = service.now()
        return DueResponse(
            due=service.due_cards(now),
            upcoming=service.upcoming_cards(now, window_days=window),
        )
    except ReviewStoreError as e:
        raise _store_unavailable(e) from e


@app.get("/reviews/stats", response_model=StatsResponse)
def get_stats(
    service: ServiceDep,
    config: ConfigDep,
    window_days: WindowDays = None,
):
    window = window_days or config.upcoming_window_days
    try:
        stats = service.get_stats(window_days=window)
    except ReviewStoreError as e:
        raise _store_unavailable(e) from e
    return StatsResponse(**asdict(stats))


@app.get("/reviews/{card_id}", response_model=ReviewRecordResponse)
def get_review(card_id: str, service: ServiceDep):
    """Review state for a card; unknown cards report the default NEW state."""
    try:
        record = service.get_record(card_id)
    except ReviewStoreError as e:
        raise _store_unavailable(e) from e
    return ReviewRecordResponse.from_record(record, service.now())


@app.post("/reviews/{card_id}", response_model=ReviewRecordResponse)
def register_review(card_id: str, service: ServiceDep):
    """Start tracking a card. Existing review state is returned unchanged."""
    try:
        record = service.register_card(card_id)
    except ReviewStoreError as e:
        raise _store_unavailable(e) from e
    return ReviewRecordResponse.from_record(record, service.now())


@app.post("/reviews/{card_id}/feedback", response_model=ReviewRecordResponse)
def submit_feedback(card_id: str, req: FeedbackRequest, service: ServiceDep):
    """
    Apply learner feedback to a card and return its new schedule.
    """
    try:
        feedback = feedback_from_value(req.feedback)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Invalid feedback: {e}") from e

    try:
        now = service.now()
        record = service.process_feedback(card_id, feedback, now)
        return ReviewRecordResponse.from_record(record, now)
    except ReviewStoreError as e:
        raise _store_unavailable(e) from e
    except Exception as e:
        logger.error(f"Feedback failed for card {card_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e


@app.delete("/reviews/{card_id}")
def forget_review(card_id: str, service: ServiceDep):
    try:
        return {"ok": service.forget_card(card_id)}
    except ReviewStoreError as e:
        raise _store_unavailable(e) from e
