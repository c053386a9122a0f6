from sqlalchemy.orm import Session
from studycards.models import Flashcard, UserFlashcardProgress
from studycards.schemas import CardMemoryState
from typing import Dict, Optional

_STATE_FIELDS = (
    "ease_factor",
    "interval",
    "repetitions",
    "next_review_at",
    "last_reviewed_at",
    "quality",
    "total_reviews",
    "correct_reviews",
)

def get_progress(db: Session, user_id: str, card_id: str) -> Optional[UserFlashcardProgress]:
    """Get the progress row for a user and card"""
    return db.query(UserFlashcardProgress).filter(
        UserFlashcardProgress.user_id == user_id,
        UserFlashcardProgress.flashcard_id == card_id
    ).first()

def upsert_progress(db: Session, user_id: str, card_id: str, state: CardMemoryState) -> UserFlashcardProgress:
    """Create or overwrite the SM-2 parameters for a user and card"""
    row = get_progress(db, user_id, card_id)
    if row is None:
        row = UserFlashcardProgress(user_id=user_id, flashcard_id=card_id)
        db.add(row)
    for field in _STATE_FIELDS:
        setattr(row, field, getattr(state, field))
    db.commit()
    db.refresh(row)
    return row

def delete_progress(db: Session, user_id: str, card_id: str) -> bool:
    """Delete the progress row for a user and card; False if there was none"""
    deleted = db.query(UserFlashcardProgress).filter(
        UserFlashcardProgress.user_id == user_id,
        UserFlashcardProgress.flashcard_id == card_id
    ).delete(synchronize_session=False)
    db.commit()
    return deleted > 0

def list_progress(db: Session, user_id: str, course_id: str) -> Dict[str, UserFlashcardProgress]:
    """Get all progress rows of a user for the cards of one course, keyed by card ID"""
    rows = db.query(UserFlashcardProgress).join(Flashcard).filter(
        UserFlashcardProgress.user_id == user_id,
        Flashcard.course_id == course_id
    ).all()
    return {row.flashcard_id: row for row in rows}
