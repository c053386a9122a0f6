"""Application boundary: grade a review, persist it, and read study queues."""

import logging
from datetime import date, datetime
from typing import Dict, List, Sequence, Union

from studycards.aggregator import summarize
from studycards.constants import MASTERED_REPETITIONS
from studycards.grader import quality_for
from studycards.schemas import Card, CardMemoryState, ProgressStats, ReviewOutcome
from studycards.selector import select_due
from studycards.sm2 import SM2Algorithm
from studycards.store import ProgressStore

logger = logging.getLogger(__name__)


class ReviewService:
    """
    Composes the grader, the SM-2 scheduler and a progress store.

    At most one grading operation may be in flight per (user, card) pair;
    the read-compute-write cycle is not atomic.
    """

    def __init__(self, store: ProgressStore, mastered_threshold: int = MASTERED_REPETITIONS):
        self.store = store
        self.mastered_threshold = mastered_threshold

    def grade_and_schedule(
        self,
        user_id: str,
        card_id: str,
        outcome: Union[bool, int],
        now: datetime,
    ) -> CardMemoryState:
        """
        Grade one review and store the rescheduled memory state.

        Args:
            user_id: Learner
            card_id: Reviewed card
            outcome: True/False for a swipe, or an explicit 0-5 quality
            now: Time of the review

        Returns:
            The persisted CardMemoryState

        Raises:
            InvalidQualityError: explicit quality outside 0-5
            StoreUnavailableError: the store read or write failed
            UnknownCardError: the store does not know the card
        """
        quality = quality_for(outcome)
        # Validate before touching the store
        SM2Algorithm.validate_quality(quality)

        current = self.store.get_progress(user_id, card_id)
        if current is None:
            current = SM2Algorithm.initialize_card(now)

        new_state = SM2Algorithm.update(current, quality, now)
        self.store.put_progress(user_id, card_id, new_state)

        logger.info(
            "Scheduled card %s for user %s: quality=%d interval=%d next=%s",
            card_id, user_id, quality, new_state.interval, new_state.next_review_at,
        )
        return new_state

    def record_review(self, review: ReviewOutcome) -> CardMemoryState:
        """Grade and schedule a ReviewOutcome produced by the UI"""
        return self.grade_and_schedule(review.user_id, review.card_id, review.signal, review.reviewed_at)

    def load_progress(self, pool: Sequence[Card], user_id: str) -> Dict[str, CardMemoryState]:
        """Read the user's progress for every course represented in the pool"""
        register = getattr(self.store, "register_cards", None)
        if register is not None:
            register(pool)

        progress = {}
        for course_id in dict.fromkeys(card.course_id for card in pool):
            progress.update(self.store.list_progress(user_id, course_id))
        return progress

    def get_due_cards(self, pool: Sequence[Card], user_id: str, now: Union[date, datetime]) -> List[Card]:
        """Cards of the pool the user should review now"""
        return select_due(pool, self.load_progress(pool, user_id), now)

    def get_stats(self, pool: Sequence[Card], user_id: str, now: Union[date, datetime]) -> ProgressStats:
        """Total, reviewed, mastered and due counts for the pool"""
        return summarize(pool, self.load_progress(pool, user_id), now, self.mastered_threshold)

    def reset_progress(self, user_id: str, card_id: str) -> bool:
        """Forget everything the user has learned about a card"""
        removed = self.store.delete_progress(user_id, card_id)
        if removed:
            logger.info("Reset progress of card %s for user %s", card_id, user_id)
        return removed
