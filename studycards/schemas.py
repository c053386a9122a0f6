from pydantic import BaseModel, Field, StrictBool, StrictInt, model_validator
from typing import List, Optional
from datetime import date, datetime

from studycards.constants import INITIAL_EASE_FACTOR, MIN_EASE_FACTOR

class Card(BaseModel):
    """Flashcard content supplied by the content collaborator"""
    id: str
    course_id: str
    question: str
    answer: str
    difficulty: int = Field(default=1, ge=1, le=3)
    module_id: Optional[str] = None
    lesson_id: Optional[str] = None
    explanation: Optional[str] = None
    context: Optional[str] = None
    tags: Optional[List[str]] = None

    class Config:
        from_attributes = True
        frozen = True

class CardMemoryState(BaseModel):
    """SM-2 memory parameters for one card and one learner"""
    ease_factor: float = Field(default=INITIAL_EASE_FACTOR, ge=MIN_EASE_FACTOR)
    interval: int = Field(default=0, ge=0)  # days until next review
    repetitions: int = Field(default=0, ge=0)  # consecutive passing reviews
    next_review_at: date
    last_reviewed_at: Optional[datetime] = None
    total_reviews: int = Field(default=0, ge=0)
    correct_reviews: int = Field(default=0, ge=0)
    quality: Optional[int] = None  # quality of the latest review

    class Config:
        from_attributes = True
        frozen = True

    @model_validator(mode="after")
    def check_counters(self):
        if self.correct_reviews > self.total_reviews:
            raise ValueError("correct_reviews cannot exceed total_reviews")
        return self

class ReviewOutcome(BaseModel):
    """A single review event: either a correctness flag or an explicit 0-5 quality"""
    user_id: str
    card_id: str
    reviewed_at: datetime
    correct: Optional[StrictBool] = None
    quality: Optional[StrictInt] = None

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_single_signal(self):
        if (self.correct is None) == (self.quality is None):
            raise ValueError("Provide exactly one of 'correct' or 'quality'")
        return self

    @property
    def signal(self):
        """The raw outcome handed to the grader"""
        return self.correct if self.correct is not None else self.quality

class ProgressStats(BaseModel):
    """Summary counts for a card pool"""
    total: int
    reviewed: int
    mastered: int
    due: int
