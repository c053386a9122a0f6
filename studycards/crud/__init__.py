from studycards.crud.card import add_cards, get_card, get_course_cards
from studycards.crud.progress import (
    get_progress,
    upsert_progress,
    delete_progress,
    list_progress
)

__all__ = [
    "add_cards",
    "get_card",
    "get_course_cards",
    "get_progress",
    "upsert_progress",
    "delete_progress",
    "list_progress",
]
