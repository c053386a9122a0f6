from sqlalchemy.orm import Session
from studycards.models import Flashcard
from studycards.schemas import Card
from typing import Iterable, List, Optional

def add_cards(db: Session, cards: Iterable[Card]) -> List[Flashcard]:
    """Insert or refresh externally authored cards"""
    rows = []
    for card in cards:
        row = db.merge(Flashcard(**card.model_dump()))
        rows.append(row)
    db.commit()
    return rows

def get_card(db: Session, card_id: str) -> Optional[Flashcard]:
    """Get card by ID"""
    return db.query(Flashcard).filter(Flashcard.id == card_id).first()

def get_course_cards(db: Session, course_id: str) -> List[Flashcard]:
    """Get all cards of a course, newest first"""
    return db.query(Flashcard).filter(
        Flashcard.course_id == course_id
    ).order_by(Flashcard.created_at.desc(), Flashcard.id).all()
