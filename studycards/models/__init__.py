from studycards.models.card import Flashcard
from studycards.models.progress import UserFlashcardProgress

__all__ = [
    "Flashcard",
    "UserFlashcardProgress"
]
