from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from studycards.database import Base

class UserFlashcardProgress(Base):
    """SM-2 spaced repetition tracking per user and flashcard"""
    __tablename__ = "user_flashcard_progress"
    __table_args__ = (UniqueConstraint("user_id", "flashcard_id", name="uq_progress_user_flashcard"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, nullable=False, index=True)
    flashcard_id = Column(String(36), ForeignKey("flashcards.id"), nullable=False)

    # SM-2 algorithm fields
    ease_factor = Column(Float, nullable=False, default=2.5)  # EF: difficulty rating
    interval = Column(Integer, nullable=False, default=0)  # days until next review
    repetitions = Column(Integer, nullable=False, default=0)  # consecutive successful reviews

    last_reviewed_at = Column(DateTime)
    next_review_at = Column(Date, nullable=False)
    quality = Column(Integer)  # 0-5, latest review

    total_reviews = Column(Integer, nullable=False, default=0)
    correct_reviews = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    flashcard = relationship("Flashcard", back_populates="progress")
