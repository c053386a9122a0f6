"""Progress summaries over a card pool."""

import enum
from datetime import date, datetime
from typing import Mapping, Optional, Sequence, Union

from studycards.constants import MASTERED_REPETITIONS
from studycards.schemas import Card, CardMemoryState, ProgressStats
from studycards.selector import select_due


class CardStage(str, enum.Enum):
    """Where a card sits in its memory lifecycle"""
    NEW = "new"
    LEARNING = "learning"
    MASTERED = "mastered"
    RELEARNING = "relearning"


def card_stage(
    state: Optional[CardMemoryState],
    mastered_threshold: int = MASTERED_REPETITIONS,
) -> CardStage:
    if state is None:
        return CardStage.NEW
    if state.repetitions >= mastered_threshold:
        return CardStage.MASTERED
    if state.repetitions > 0:
        return CardStage.LEARNING
    # Zero repetitions with history means the last review failed
    if state.total_reviews > 0:
        return CardStage.RELEARNING
    return CardStage.NEW


def summarize(
    pool: Sequence[Card],
    progress: Mapping[str, CardMemoryState],
    now: Union[date, datetime],
    mastered_threshold: int = MASTERED_REPETITIONS,
) -> ProgressStats:
    """
    Count total, reviewed, mastered and due cards.

    Args:
        pool: Cards in scope
        progress: Memory state per card id, as read from the store
        now: Reference time for the due count
        mastered_threshold: Consecutive passing reviews that count as mastered

    Returns:
        ProgressStats
    """
    pool_ids = {card.id for card in pool}
    # Progress for cards outside the pool is orphaned and ignored
    in_pool = [state for card_id, state in progress.items() if card_id in pool_ids]
    mastered = sum(1 for state in in_pool if state.repetitions >= mastered_threshold)

    return ProgressStats(
        total=len(pool),
        reviewed=len(in_pool),
        mastered=mastered,
        due=len(select_due(pool, progress, now)),
    )
