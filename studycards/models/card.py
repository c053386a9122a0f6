from sqlalchemy import Column, String, Integer, Text, DateTime, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from studycards.database import Base

class Flashcard(Base):
    """Flashcard content, authored outside this package"""
    __tablename__ = "flashcards"

    id = Column(String(36), primary_key=True)
    course_id = Column(String, nullable=False, index=True)
    module_id = Column(String)
    lesson_id = Column(String)

    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    difficulty = Column(Integer, nullable=False, default=1)  # 1-3
    explanation = Column(Text)
    context = Column(Text)
    tags = Column(JSON)  # ["cells", "biology", ...]

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    progress = relationship("UserFlashcardProgress", back_populates="flashcard", cascade="all, delete-orphan")
