"""
Flashcard data models for StudyCards
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime
from enum import Enum
import math


class Difficulty(str, Enum):
    """Difficulty levels for flashcards"""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


def round_percentage(part: int, whole: int) -> int:
    """Percentage of part over whole, rounded half up; 0 when whole is 0"""
    if whole <= 0:
        return 0
    return math.floor(part / whole * 100 + 0.5)


# Persisted records use camelCase keys; Python code and the API use field names
STORED_RECORD_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FlashcardDraft(BaseModel):
    """User submission for a new card or an edit of an existing one"""
    front: str = Field(..., description="Question or term (front of card)")
    back: str = Field(..., description="Answer or definition (back of card)")
    category: str = Field(..., description="Category/deck this card belongs to")
    difficulty: Difficulty = Field(default=Difficulty.MEDIUM, description="Card difficulty level")

    @field_validator("front", "back", "category")
    @classmethod
    def _strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class Flashcard(BaseModel):
    """Single flashcard model"""
    model_config = STORED_RECORD_CONFIG

    id: str
    front: str = Field(..., description="Question or term (front of card)")
    back: str = Field(..., description="Answer or definition (back of card)")
    category: str = Field(..., description="Category/deck this card belongs to")
    difficulty: Difficulty = Field(default=Difficulty.MEDIUM, description="Card difficulty level")
    correct_count: int = Field(default=0, ge=0)
    incorrect_count: int = Field(default=0, ge=0)
    last_reviewed: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def total_attempts(self) -> int:
        return self.correct_count + self.incorrect_count

    def get_accuracy(self) -> int:
        """Calculate accuracy percentage"""
        return round_percentage(self.correct_count, self.total_attempts)

    def reviewed(self, correct: bool, when: Optional[datetime] = None) -> "Flashcard":
        """Return a copy with the review recorded"""
        update = {"last_reviewed": when or datetime.now()}
        if correct:
            update["correct_count"] = self.correct_count + 1
        else:
            update["incorrect_count"] = self.incorrect_count + 1
        return self.model_copy(update=update)

    def edited(self, draft: FlashcardDraft) -> "Flashcard":
        """Return a copy with the editable fields replaced; stats are kept"""
        return self.model_copy(update=draft.model_dump())


# API Request/Response models
class FlashcardResponse(BaseModel):
    """Response carrying a single card"""
    success: bool
    card: Optional[Flashcard] = None
    message: str


class ListFlashcardsResponse(BaseModel):
    """Response listing the visible cards"""
    success: bool
    cards: List[Flashcard]
    total_count: int
    categories: List[str] = Field(default_factory=list)
