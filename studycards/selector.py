"""Pick the cards that are due for review from a card pool."""

from datetime import date, datetime
from typing import Iterable, List, Mapping, Union

from studycards.schemas import Card, CardMemoryState
from studycards.sm2 import SM2Algorithm


def select_due(
    pool: Iterable[Card],
    progress: Mapping[str, CardMemoryState],
    now: Union[date, datetime],
) -> List[Card]:
    """
    Return the cards in ``pool`` that should be shown now.

    A card is due when it has no progress record yet or its next review date
    has been reached. Pool order is kept and repeated card ids are returned
    once. Progress entries for cards outside the pool are ignored.

    Args:
        pool: Candidate cards
        progress: Memory state per card id
        now: Reference time (date granularity)

    Returns:
        List of due cards
    """
    due = []
    seen = set()
    for card in pool:
        if card.id in seen:
            continue
        seen.add(card.id)

        state = progress.get(card.id)
        if state is None or SM2Algorithm.is_due_for_review(state.next_review_at, now):
            due.append(card)
    return due


def order_by_urgency(
    cards: Iterable[Card],
    progress: Mapping[str, CardMemoryState],
    now: Union[date, datetime],
) -> List[Card]:
    """Most overdue cards first, never-reviewed cards last; ties keep input order"""
    def sort_key(card):
        state = progress.get(card.id)
        if state is None:
            return (1, 0)
        return (0, -SM2Algorithm.get_days_overdue(state.next_review_at, now))

    return sorted(cards, key=sort_key)
