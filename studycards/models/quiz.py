"""
Quiz data models for StudyCards
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from enum import Enum

from studycards.models.flashcard import Flashcard


class QuizStatus(str, Enum):
    """Lifecycle of a quiz session"""
    OPEN = "open"
    REVEALED = "revealed"
    COMPLETED = "completed"


class QuizQuestion(BaseModel):
    """Single multiple-choice question built from a card"""
    card: Flashcard
    options: List[str] = Field(default_factory=list, description="Distinct answer options")
    user_answer: Optional[str] = Field(default=None)
    is_correct: Optional[bool] = Field(default=None)

    @property
    def answered(self) -> bool:
        return self.is_correct is not None

    def check_answer(self, user_answer: str) -> bool:
        """Exact match against the back of the card"""
        return user_answer == self.card.back


class QuizResult(BaseModel):
    """Aggregate of a completed quiz session"""
    correct_count: int
    total_questions: int
    accuracy: int
    questions: List[QuizQuestion] = Field(default_factory=list)


# API Request/Response models
class StartQuizRequest(BaseModel):
    """Request to start a quiz on the current filter"""
    search: Optional[str] = Field(default=None, description="Overrides the current search term")
    category: Optional[str] = Field(default=None, description="Overrides the current category")


class SubmitAnswerRequest(BaseModel):
    """Request to answer the current question"""
    answer: str


class QuizStateResponse(BaseModel):
    """Snapshot of the running quiz"""
    success: bool
    status: QuizStatus
    question_number: int
    total_questions: int
    time_left: int
    prompt: Optional[str] = None
    category: Optional[str] = None
    options: List[str] = Field(default_factory=list)
    user_answer: Optional[str] = None
    is_correct: Optional[bool] = None
    correct_answer: Optional[str] = None
    result: Optional[QuizResult] = None
