"""
API Routes for Study Features (Cards, Study Mode, Quizzes)
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from studycards.models.flashcard import FlashcardDraft, FlashcardResponse, ListFlashcardsResponse
from studycards.models.progress import (
    StartStudyRequest, MarkCardRequest,
    StudyStateResponse, StudySessionResponse,
    ListStudySessionsResponse, StatsResponse
)
from studycards.models.quiz import StartQuizRequest, SubmitAnswerRequest, QuizStateResponse, QuizStatus
from studycards.utils.card_filter import ALL_CATEGORIES, filter_cards
from studycards.utils.exceptions import (
    CardNotFoundError, InsufficientDataError, NoActiveSessionError,
    NothingToStudyError, QuizStateError,
    conflict, internal_error, not_found
)
from studycards.utils.logger import get_logger
from studycards.utils.quiz_engine import QuizEngine
from studycards.utils.study_controller import StudyController, get_study_controller
from studycards.utils.study_engine import StudyEngine
from config import settings

logger = get_logger(__name__)

# Create router
router = APIRouter(prefix=f"/api/{settings.API_VERSION}", tags=["Study Features"])


def _study_state(engine: StudyEngine) -> StudyStateResponse:
    return StudyStateResponse(
        success=True,
        index=engine.index,
        total_cards=len(engine),
        flipped=engine.flipped,
        card=engine.current_card,
        studied_count=len(engine.studied),
        progress=engine.progress,
        is_complete=engine.is_complete
    )


def _quiz_state(engine: QuizEngine) -> QuizStateResponse:
    question = engine.current_question
    revealed = engine.status != QuizStatus.OPEN
    return QuizStateResponse(
        success=True,
        status=engine.status,
        question_number=engine.index + 1,
        total_questions=len(engine.questions),
        time_left=engine.time_left,
        prompt=question.card.front,
        category=question.card.category,
        options=question.options,
        user_answer=question.user_answer,
        is_correct=question.is_correct,
        correct_answer=question.card.back if revealed else None,
        result=engine.result
    )


# =============================================================================
# CARD ENDPOINTS
# =============================================================================

@router.get("/cards", response_model=ListFlashcardsResponse, response_model_by_alias=False)
async def list_cards(
    search: Optional[str] = None,
    category: Optional[str] = None,
    controller: StudyController = Depends(get_study_controller)
):
    """List the cards matching the search term and category"""
    try:
        cards = filter_cards(controller.store.cards, search or "", category or ALL_CATEGORIES)

        return ListFlashcardsResponse(
            success=True,
            cards=cards,
            total_count=len(cards),
            categories=controller.categories()
        )

    except Exception as e:
        logger.error(f"Error listing cards: {e}")
        raise internal_error(str(e))


@router.post("/cards", response_model=FlashcardResponse, response_model_by_alias=False)
async def create_card(body: FlashcardDraft, controller: StudyController = Depends(get_study_controller)):
    """Create a new card"""
    try:
        card = controller.add_card(body)
        return FlashcardResponse(success=True, card=card, message="Card created")

    except Exception as e:
        logger.error(f"Error creating card: {e}")
        raise internal_error(str(e))


@router.get("/cards/{card_id}", response_model=FlashcardResponse, response_model_by_alias=False)
async def get_card(card_id: str, controller: StudyController = Depends(get_study_controller)):
    """Get a specific card"""
    try:
        return FlashcardResponse(success=True, card=controller.get_card(card_id), message="Card found")

    except CardNotFoundError as e:
        raise not_found(e.message)


@router.put("/cards/{card_id}", response_model=FlashcardResponse, response_model_by_alias=False)
async def update_card(
    card_id: str,
    body: FlashcardDraft,
    controller: StudyController = Depends(get_study_controller)
):
    """Edit a card's text, category and difficulty"""
    try:
        card = controller.edit_card(card_id, body)
        return FlashcardResponse(success=True, card=card, message="Card updated")

    except CardNotFoundError as e:
        raise not_found(e.message)
    except Exception as e:
        logger.error(f"Error updating card: {e}")
        raise internal_error(str(e))


@router.delete("/cards/{card_id}")
async def delete_card(card_id: str, controller: StudyController = Depends(get_study_controller)):
    """Delete a card"""
    try:
        controller.delete_card(card_id)
        return {"success": True, "message": "Card deleted"}

    except CardNotFoundError as e:
        raise not_found(e.message)
    except Exception as e:
        logger.error(f"Error deleting card: {e}")
        raise internal_error(str(e))


@router.get("/categories")
async def list_categories(controller: StudyController = Depends(get_study_controller)):
    """List the distinct categories"""
    return {"success": True, "categories": controller.categories()}


@router.get("/stats", response_model=StatsResponse, response_model_by_alias=False)
async def get_stats(controller: StudyController = Depends(get_study_controller)):
    """Deck statistics"""
    return StatsResponse(
        success=True,
        screen=controller.screen,
        statistics=controller.statistics(),
        categories=controller.categories()
    )


# =============================================================================
# STUDY ENDPOINTS
# =============================================================================

@router.post("/study/start", response_model=StudyStateResponse, response_model_by_alias=False)
async def start_study(body: StartStudyRequest, controller: StudyController = Depends(get_study_controller)):
    """Start a study session on the current filter"""
    try:
        engine = controller.start_study(body.search, body.category)
        return _study_state(engine)

    except NothingToStudyError as e:
        raise conflict(e.message)


@router.get("/study", response_model=StudyStateResponse, response_model_by_alias=False)
async def get_study_state(controller: StudyController = Depends(get_study_controller)):
    """Current study card and progress"""
    try:
        return _study_state(controller.require_study())

    except NoActiveSessionError as e:
        raise not_found(e.message)


@router.post("/study/flip", response_model=StudyStateResponse, response_model_by_alias=False)
async def flip_card(controller: StudyController = Depends(get_study_controller)):
    """Toggle between front and back"""
    try:
        engine = controller.require_study()
        engine.flip()
        return _study_state(engine)

    except NoActiveSessionError as e:
        raise not_found(e.message)


@router.post("/study/next", response_model=StudyStateResponse, response_model_by_alias=False)
async def next_card(controller: StudyController = Depends(get_study_controller)):
    """Move to the next card"""
    try:
        engine = controller.require_study()
        engine.next()
        return _study_state(engine)

    except NoActiveSessionError as e:
        raise not_found(e.message)


@router.post("/study/previous", response_model=StudyStateResponse, response_model_by_alias=False)
async def previous_card(controller: StudyController = Depends(get_study_controller)):
    """Move to the previous card"""
    try:
        engine = controller.require_study()
        engine.previous()
        return _study_state(engine)

    except NoActiveSessionError as e:
        raise not_found(e.message)


@router.post("/study/mark", response_model=StudyStateResponse, response_model_by_alias=False)
async def mark_card(body: MarkCardRequest, controller: StudyController = Depends(get_study_controller)):
    """Record whether the card was known and move on"""
    try:
        engine = controller.require_study()
        if body.correct:
            updated = engine.mark_correct(body.card_id)
        else:
            updated = engine.mark_incorrect(body.card_id)

        if updated is None:
            raise not_found(f"Card not found: {body.card_id}")
        return _study_state(engine)

    except HTTPException:
        raise
    except NoActiveSessionError as e:
        raise not_found(e.message)
    except Exception as e:
        logger.error(f"Error marking card: {e}")
        raise internal_error(str(e))


@router.post("/study/finish", response_model=StudySessionResponse, response_model_by_alias=False)
async def finish_study(controller: StudyController = Depends(get_study_controller)):
    """End the study session and record it"""
    try:
        session = controller.finish_study()
        return StudySessionResponse(success=True, session=session, message="Study session recorded")

    except NoActiveSessionError as e:
        raise not_found(e.message)


@router.get("/study/sessions", response_model=ListStudySessionsResponse, response_model_by_alias=False)
async def list_study_sessions(controller: StudyController = Depends(get_study_controller)):
    """List recorded study sessions"""
    sessions = controller.session_store.list_sessions()
    return ListStudySessionsResponse(success=True, sessions=sessions, total_count=len(sessions))


# =============================================================================
# QUIZ ENDPOINTS
# =============================================================================

@router.post("/quiz/start", response_model=QuizStateResponse, response_model_by_alias=False)
async def start_quiz(body: StartQuizRequest, controller: StudyController = Depends(get_study_controller)):
    """Start a quiz on the current filter"""
    try:
        controller.start_quiz(body.search, body.category)
        return _quiz_state(controller.quiz)

    except InsufficientDataError as e:
        raise conflict(e.message)


@router.get("/quiz", response_model=QuizStateResponse, response_model_by_alias=False)
async def get_quiz_state(controller: StudyController = Depends(get_study_controller)):
    """Current question, timer and result"""
    try:
        return _quiz_state(controller.require_quiz())

    except NoActiveSessionError as e:
        raise not_found(e.message)


@router.post("/quiz/answer", response_model=QuizStateResponse, response_model_by_alias=False)
async def submit_answer(body: SubmitAnswerRequest, controller: StudyController = Depends(get_study_controller)):
    """Answer the open question"""
    try:
        engine = controller.require_quiz()
        engine.answer(body.answer)
        return _quiz_state(engine)

    except NoActiveSessionError as e:
        raise not_found(e.message)
    except QuizStateError as e:
        raise conflict(e.message)


@router.post("/quiz/next", response_model=QuizStateResponse, response_model_by_alias=False)
async def next_question(controller: StudyController = Depends(get_study_controller)):
    """Go to the next question, or to the result after the last one"""
    try:
        engine = controller.require_quiz()
        engine.next()
        return _quiz_state(engine)

    except NoActiveSessionError as e:
        raise not_found(e.message)
    except QuizStateError as e:
        raise conflict(e.message)


@router.post("/quiz/restart", response_model=QuizStateResponse, response_model_by_alias=False)
async def restart_quiz(controller: StudyController = Depends(get_study_controller)):
    """Take the quiz again with new questions"""
    try:
        engine = controller.require_quiz()
        engine.restart()
        return _quiz_state(engine)

    except NoActiveSessionError as e:
        raise not_found(e.message)


@router.post("/quiz/stop")
async def stop_quiz(controller: StudyController = Depends(get_study_controller)):
    """Leave the quiz and return to the menu"""
    controller.back_to_menu()
    return {"success": True, "message": "Back to menu"}
