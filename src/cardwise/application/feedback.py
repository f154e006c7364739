"""Translate UI reaction labels and API values into Feedback."""

import logging

from cardwise.domain.review.models import Feedback

logger = logging.getLogger(__name__)

REACTION_LABELS = {
    "confused": Feedback.CONFUSED,
    "not sure": Feedback.NOT_SURE,
    "got it!": Feedback.GOT_IT,
    "review again": Feedback.EASY,
}


def reaction_to_feedback(label: str) -> Feedback:
    """
    Map a reaction label ("Confused", "Not sure", "Got it!", "Review Again").

    Matching is case-insensitive. Unrecognized labels fall back to NOT_SURE
    and are logged rather than rejected.
    """
    feedback = REACTION_LABELS.get(label.strip().lower())
    if feedback is None:
        logger.warning(f"Unrecognized reaction label {label!r}, treating as NOT_SURE")
        return Feedback.NOT_SURE
    return feedback


def feedback_from_value(value: str | int) -> Feedback:
    """
    Accept an enum name ("GOT_IT"), an integer value (2) or a reaction label.

    Raises:
        ValueError: If an integer (or numeric string) is outside 0-3, or
            the value is a bool.
    """
    if isinstance(value, bool):
        raise ValueError(f"{value!r} is not a valid Feedback")
    if isinstance(value, int):
        return Feedback(value)

    text = value.strip()
    try:
        number = int(text)
    except ValueError:
        pass
    else:
        return Feedback(number)

    name = text.upper().replace(" ", "_")
    if name in Feedback.__members__:
        return Feedback[name]

    return reaction_to_feedback(text)
