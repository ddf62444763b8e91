"""Data models for StudyCards"""

from studycards.models.flashcard import (
    Flashcard, FlashcardDraft, Difficulty, round_percentage,
    FlashcardResponse, ListFlashcardsResponse
)

from studycards.models.quiz import (
    QuizQuestion, QuizResult, QuizStatus,
    StartQuizRequest, SubmitAnswerRequest, QuizStateResponse
)

from studycards.models.progress import (
    StudySession, DeckStatistics, Screen,
    StartStudyRequest, MarkCardRequest,
    StudyStateResponse, StudySessionResponse,
    ListStudySessionsResponse, StatsResponse
)
