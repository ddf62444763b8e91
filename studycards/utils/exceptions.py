"""
Custom exceptions for StudyCards
"""
from fastapi import HTTPException, status


class StudyCardsError(Exception):
    """Base exception for StudyCards."""

    def __init__(self, message: str = "An error occurred"):
        self.message = message
        super().__init__(self.message)


# =============================================================================
# PERSISTENCE EXCEPTIONS
# =============================================================================


class DeserializationError(StudyCardsError):
    """Raised when persisted data cannot be parsed."""
    pass


# =============================================================================
# CARD EXCEPTIONS
# =============================================================================


class CardNotFoundError(StudyCardsError):
    """Raised when a card id is not present in the store."""

    def __init__(self, card_id: str):
        self.card_id = card_id
        super().__init__(f"Card not found: {card_id}")


# =============================================================================
# STUDY & QUIZ EXCEPTIONS
# =============================================================================


class NothingToStudyError(StudyCardsError):
    """Raised when a study session is started on an empty card list."""
    pass


class InsufficientDataError(StudyCardsError):
    """Raised when a quiz is started with too few cards."""

    def __init__(self, available: int, required: int):
        self.available = available
        self.required = required
        super().__init__(
            f"You need at least {required} flashcards to take a quiz (got {available})"
        )


class QuizStateError(StudyCardsError):
    """Raised when a quiz operation is not valid in the current state."""
    pass


class NoActiveSessionError(StudyCardsError):
    """Raised when a study or quiz session is required but none is running."""
    pass


# =============================================================================
# HTTP EXCEPTION HELPERS
# =============================================================================


def not_found(detail: str = "Resource not found") -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def conflict(detail: str = "Request conflicts with current state") -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail)


def internal_error(detail: str = "Internal server error") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail
    )
