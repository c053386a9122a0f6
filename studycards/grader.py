"""Map raw review outcomes to SM-2 quality ratings."""

from typing import Union

from studycards.constants import CORRECT_QUALITY, INCORRECT_QUALITY


def grade(correct: bool) -> int:
    """Convert a binary swipe to a quality rating.

    A correct swipe is a "good" response rather than a perfect one, and an
    incorrect swipe fails the card without being a total blackout.
    """
    return CORRECT_QUALITY if correct else INCORRECT_QUALITY


def quality_for(outcome: Union[bool, int]) -> int:
    """Quality rating for a raw outcome.

    Binary outcomes go through :func:`grade`. Integer ratings are passed
    through unchanged; range checking happens in the scheduler.
    """
    if isinstance(outcome, bool):
        return grade(outcome)
    return outcome
