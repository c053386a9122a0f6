import math
from datetime import date, datetime, timedelta
from typing import Union

from studycards.constants import (
    EASE_DECIMALS,
    FIRST_INTERVAL,
    INITIAL_EASE_FACTOR,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    MIN_QUALITY,
    PASSING_QUALITY,
    SECOND_INTERVAL,
)
from studycards.errors import InvalidQualityError
from studycards.schemas import CardMemoryState


def as_date(moment: Union[date, datetime]) -> date:
    """Drop the time-of-day component of a timestamp"""
    if isinstance(moment, datetime):
        return moment.date()
    return moment


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero (intervals are never negative)"""
    return int(math.floor(value + 0.5))


class SM2Algorithm:
    """
    SM-2 spaced repetition algorithm for calculating review intervals.
    Based on SuperMemo 2 algorithm by Piotr Wozniak.
    """

    @staticmethod
    def validate_quality(quality) -> int:
        """Reject anything that is not an integer in 0-5"""
        if isinstance(quality, bool) or not isinstance(quality, int):
            raise InvalidQualityError(quality)
        if quality < MIN_QUALITY or quality > MAX_QUALITY:
            raise InvalidQualityError(quality)
        return quality

    @staticmethod
    def next_ease_factor(easiness_factor: float, quality: int) -> float:
        """EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)), floored at 1.3"""
        new_ef = easiness_factor + (0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02))
        if new_ef < MIN_EASE_FACTOR:
            new_ef = MIN_EASE_FACTOR
        return new_ef

    @staticmethod
    def update(state: CardMemoryState, quality: int, now: datetime) -> CardMemoryState:
        """
        Apply one graded review to a card's memory state.

        Args:
            state: Memory state before the review
            quality: Response quality (0-5). 0=total blackout, 5=perfect
            now: Time of the review; only its date matters for scheduling

        Returns:
            New CardMemoryState; the input state is left untouched

        Raises:
            InvalidQualityError: quality is not an integer in 0-5
        """
        quality = SM2Algorithm.validate_quality(quality)
        passed = quality >= PASSING_QUALITY

        if passed:
            new_repetitions = state.repetitions + 1

            # Interval is chosen from the repetition count before this review
            if state.repetitions == 0:
                new_interval = FIRST_INTERVAL
            elif state.repetitions == 1:
                new_interval = SECOND_INTERVAL
            else:
                # A reviewed card never drops back to a zero-day interval
                new_interval = max(FIRST_INTERVAL, round_half_up(state.interval * state.ease_factor))
        else:
            # Failed recall, start over
            new_repetitions = 0
            new_interval = FIRST_INTERVAL

        new_ef = SM2Algorithm.next_ease_factor(state.ease_factor, quality)

        return CardMemoryState(
            ease_factor=round(new_ef, EASE_DECIMALS),
            interval=new_interval,
            repetitions=new_repetitions,
            next_review_at=as_date(now) + timedelta(days=new_interval),
            last_reviewed_at=now,
            total_reviews=state.total_reviews + 1,
            correct_reviews=state.correct_reviews + (1 if passed else 0),
            quality=quality,
        )

    @staticmethod
    def initialize_card(now: Union[date, datetime]) -> CardMemoryState:
        """
        Initialize SM-2 parameters for a card that has never been reviewed.

        Args:
            now: Reference time; the card is due on this date

        Returns:
            CardMemoryState with the default parameters
        """
        return CardMemoryState(
            ease_factor=INITIAL_EASE_FACTOR,
            interval=0,
            repetitions=0,
            next_review_at=as_date(now),
        )

    @staticmethod
    def is_due_for_review(next_review_at: date, now: Union[date, datetime]) -> bool:
        """Check if a card is due for review"""
        return next_review_at <= as_date(now)

    @staticmethod
    def get_days_overdue(next_review_at: date, now: Union[date, datetime]) -> int:
        """Calculate how many days overdue a review is"""
        today = as_date(now)
        if today < next_review_at:
            return 0
        return (today - next_review_at).days
