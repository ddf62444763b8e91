"""
Study controller for StudyCards
Owns the screen state, the filter selection and the running study/quiz sessions
"""
import random
from typing import List, Optional

from config import settings
from studycards.models.flashcard import Flashcard, FlashcardDraft
from studycards.models.progress import DeckStatistics, Screen, StudySession
from studycards.models.quiz import QuizQuestion
from studycards.utils.card_filter import ALL_CATEGORIES, filter_cards, study_deck
from studycards.utils.exceptions import CardNotFoundError, NoActiveSessionError
from studycards.utils.flashcard_store import FlashcardStore
from studycards.utils.logger import get_logger
from studycards.utils.quiz_engine import QuizEngine
from studycards.utils.session_store import StudySessionStore
from studycards.utils.storage import create_storage
from studycards.utils.study_engine import StudyEngine
from studycards.utils.timer import AsyncioScheduler, Scheduler

logger = get_logger(__name__)


class StudyController:
    """
    Single owner of everything a presentation layer needs.

    Views read the visible cards, statistics and session state from here and
    call back into it on user input. Only one of study or quiz runs at a time;
    starting either closes the other.
    """

    def __init__(
        self,
        store: FlashcardStore,
        session_store: StudySessionStore,
        scheduler: Scheduler,
        rng: Optional[random.Random] = None
    ):
        self.store = store
        self.session_store = session_store
        self.screen = Screen.MENU
        self.search_term = ""
        self.category = ALL_CATEGORIES
        self.study: Optional[StudyEngine] = None
        self.quiz = QuizEngine(store, scheduler, rng)

    # -------------------------------------------------------------------------
    # Cards
    # -------------------------------------------------------------------------

    def set_filter(self, search_term: Optional[str] = None, category: Optional[str] = None):
        """Update the search term and/or category; None keeps the current value"""
        if search_term is not None:
            self.search_term = search_term
        if category is not None:
            self.category = category or ALL_CATEGORIES

    def visible_cards(self) -> List[Flashcard]:
        return filter_cards(self.store.cards, self.search_term, self.category)

    def categories(self) -> List[str]:
        return self.store.categories()

    def statistics(self) -> DeckStatistics:
        return self.store.statistics()

    def get_card(self, card_id: str) -> Flashcard:
        card = self.store.get(card_id)
        if card is None:
            raise CardNotFoundError(card_id)
        return card

    def add_card(self, draft: FlashcardDraft) -> Flashcard:
        self.store.add(draft)
        return self.store.cards[-1]

    def edit_card(self, card_id: str, draft: FlashcardDraft) -> Flashcard:
        """Replace the text, category and difficulty of a card; stats are kept"""
        card = self.get_card(card_id)
        self.store.update(card.edited(draft))
        return self.get_card(card_id)

    def delete_card(self, card_id: str):
        self.get_card(card_id)
        self.store.delete(card_id)

    # -------------------------------------------------------------------------
    # Study
    # -------------------------------------------------------------------------

    def start_study(self, search_term: Optional[str] = None, category: Optional[str] = None) -> StudyEngine:
        """
        Start studying the visible cards (all cards if none are visible).

        Raises:
            NothingToStudyError: if there are no cards at all
        """
        self._close_sessions()
        self.set_filter(search_term, category)
        cards = study_deck(self.store.cards, self.search_term, self.category)
        self.study = StudyEngine(cards, self.store, self.session_store, deck_id=self.category)
        self.screen = Screen.STUDY
        return self.study

    def require_study(self) -> StudyEngine:
        if self.study is None:
            raise NoActiveSessionError("No study session is running")
        return self.study

    def finish_study(self) -> StudySession:
        """End the study session, record it and return to the menu"""
        session = self.require_study().finish()
        self.study = None
        self.screen = Screen.MENU
        return session

    # -------------------------------------------------------------------------
    # Quiz
    # -------------------------------------------------------------------------

    def start_quiz(self, search_term: Optional[str] = None, category: Optional[str] = None) -> QuizQuestion:
        """
        Start a quiz on the visible cards (all cards if none are visible).

        Raises:
            InsufficientDataError: if there are too few cards for a quiz
        """
        self._close_sessions()
        self.set_filter(search_term, category)
        cards = study_deck(self.store.cards, self.search_term, self.category)
        question = self.quiz.start(cards)
        self.screen = Screen.QUIZ
        return question

    def require_quiz(self) -> QuizEngine:
        if not self.quiz.active:
            raise NoActiveSessionError("No quiz is running")
        return self.quiz

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def back_to_menu(self):
        self._close_sessions()
        self.screen = Screen.MENU

    def _close_sessions(self):
        if self.study is not None:
            self.study.finish()
            self.study = None
        self.quiz.stop()


# Singleton instance
_study_controller = None


def get_study_controller() -> StudyController:
    """Get or create the study controller singleton"""
    global _study_controller
    if _study_controller is None:
        storage = create_storage()
        _study_controller = StudyController(
            store=FlashcardStore(storage),
            session_store=StudySessionStore(storage),
            scheduler=AsyncioScheduler(),
            rng=random.Random(settings.RANDOM_SEED)
        )
    return _study_controller
