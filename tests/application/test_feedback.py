import logging

import pytest

from cardwise.application.feedback import feedback_from_value, reaction_to_feedback
from cardwise.domain.review.models import Feedback


@pytest.mark.parametrize(
    "label, expected",
    [
        ("Confused", Feedback.CONFUSED),
        ("Not sure", Feedback.NOT_SURE),
        ("Got it!", Feedback.GOT_IT),
        ("Review Again", Feedback.EASY),
        ("GOT IT!", Feedback.GOT_IT),
        ("  review again ", Feedback.EASY),
        ("confused", Feedback.CONFUSED),
    ],
)
def test_reaction_labels(label, expected):
    assert reaction_to_feedback(label) == expected


def test_unknown_label_defaults_to_not_sure_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="cardwise.application.feedback"):
        assert reaction_to_feedback("meh") == Feedback.NOT_SURE
    assert "meh" in caplog.text


def test_empty_label_defaults_to_not_sure():
    assert reaction_to_feedback("") == Feedback.NOT_SURE


@pytest.mark.parametrize(
    "value, expected",
    [
        ("got_it", Feedback.GOT_IT),
        ("EASY", Feedback.EASY),
        ("not sure", Feedback.NOT_SURE),
        ("Review Again", Feedback.EASY),
        ("Got it!", Feedback.GOT_IT),
        (0, Feedback.CONFUSED),
        (3, Feedback.EASY),
        ("1", Feedback.NOT_SURE),
        ("whatever", Feedback.NOT_SURE),
    ],
)
def test_feedback_from_value(value, expected):
    assert feedback_from_value(value) == expected


@pytest.mark.parametrize("value", [4, -1, "9", "-1", " +7 ", True, False])
def test_feedback_from_value_rejects_out_of_range_numbers(value):
    with pytest.raises(ValueError):
        feedback_from_value(value)


def test_signed_numeric_strings_match_integers():
    assert feedback_from_value("+2") == feedback_from_value(2) == Feedback.GOT_IT
    assert feedback_from_value(" 0 ") == Feedback.CONFUSED
