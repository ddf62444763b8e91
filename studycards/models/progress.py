"""
Study progress data models for StudyCards
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from enum import Enum

from studycards.models.flashcard import STORED_RECORD_CONFIG, Flashcard


class Screen(str, Enum):
    """Screens the controller can be on"""
    MENU = "menu"
    STUDY = "study"
    QUIZ = "quiz"


class StudySession(BaseModel):
    """Record of a finished study session"""
    model_config = STORED_RECORD_CONFIG

    id: str
    deck_id: str = Field(default="all", description="Category studied, or 'all'")
    start_time: datetime
    end_time: Optional[datetime] = None
    cards_studied: int = Field(default=0, ge=0)
    correct_answers: int = Field(default=0, ge=0)
    incorrect_answers: int = Field(default=0, ge=0)


class DeckStatistics(BaseModel):
    """Aggregate statistics across all cards"""
    total_cards: int
    studied_cards: int
    accuracy: int


# API Request/Response models
class StartStudyRequest(BaseModel):
    """Request to start a study session on the current filter"""
    search: Optional[str] = Field(default=None, description="Overrides the current search term")
    category: Optional[str] = Field(default=None, description="Overrides the current category")


class MarkCardRequest(BaseModel):
    """Request to score a card in the study session"""
    card_id: str
    correct: bool


class StudyStateResponse(BaseModel):
    """Snapshot of the running study session"""
    success: bool
    index: int
    total_cards: int
    flipped: bool
    card: Optional[Flashcard] = None
    studied_count: int
    progress: int
    is_complete: bool


class StudySessionResponse(BaseModel):
    """Response after finishing a study session"""
    success: bool
    session: Optional[StudySession] = None
    message: str


class ListStudySessionsResponse(BaseModel):
    """Response listing recorded study sessions"""
    success: bool
    sessions: List[StudySession]
    total_count: int


class StatsResponse(BaseModel):
    """Deck statistics and screen state"""
    success: bool
    screen: Screen
    statistics: DeckStatistics
    categories: List[str]
