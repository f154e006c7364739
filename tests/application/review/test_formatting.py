from datetime import timedelta

import pytest

from cardwise.application.review.formatting import (
    describe_knowledge_level,
    describe_next_review,
)
from cardwise.domain.review.models import KnowledgeLevel


@pytest.mark.parametrize(
    "remaining, expected",
    [
        (timedelta(0), "Due now"),
        (timedelta(hours=-5), "Due now"),
        (timedelta(minutes=30), "Due in 1 hour"),
        (timedelta(hours=1), "Due in 1 hour"),
        (timedelta(hours=4), "Due in 4 hours"),
        (timedelta(hours=23, minutes=30), "Due in 24 hours"),
        (timedelta(hours=24), "Due tomorrow"),
        (timedelta(hours=25), "Due tomorrow"),
        (timedelta(hours=47, minutes=59), "Due tomorrow"),
        (timedelta(days=2), "Due in 2 days"),
        (timedelta(days=2, hours=1), "Due in 3 days"),
        (timedelta(days=6), "Due in 6 days"),
        (timedelta(days=7), "Due in 1 week"),
        (timedelta(days=14), "Due in 2 weeks"),
        (timedelta(days=29), "Due in 4 weeks"),
        (timedelta(days=30), "Due in 1 month"),
        (timedelta(days=65), "Due in 2 months"),
        (timedelta(days=405), "Due in 13 months"),
    ],
)
def test_describe_next_review_buckets(now, remaining, expected):
    assert describe_next_review(now + remaining, now) == expected


def test_describe_next_review_never_says_one_days(now):
    for hours in range(24, 49):
        text = describe_next_review(now + timedelta(hours=hours), now)
        assert text != "Due in 1 days"


def test_describe_next_review_handles_naive_datetimes(now):
    naive_now = now.replace(tzinfo=None)
    assert describe_next_review(naive_now + timedelta(days=3), naive_now) == "Due in 3 days"


@pytest.mark.parametrize(
    "level, expected",
    [
        (KnowledgeLevel.NEW, "New"),
        (KnowledgeLevel.LEARNING, "Learning"),
        (KnowledgeLevel.REVIEWING, "Reviewing"),
        (KnowledgeLevel.MASTERED, "Mastered"),
    ],
)
def test_describe_knowledge_level(level, expected):
    assert describe_knowledge_level(level) == expected
