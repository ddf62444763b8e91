"""
Self-paced study walk over a list of cards
"""
from typing import List, Optional, Set

from studycards.models.flashcard import Flashcard, round_percentage
from studycards.models.progress import StudySession
from studycards.utils.card_filter import ALL_CATEGORIES
from studycards.utils.exceptions import NothingToStudyError
from studycards.utils.flashcard_store import FlashcardStore, generate_id
from studycards.utils.logger import get_logger
from studycards.utils.session_store import StudySessionStore

logger = get_logger(__name__)


class StudyEngine:
    """
    Walks a fixed ordered list of cards one at a time.

    Scoring a card writes the new counts through the FlashcardStore, adds it to
    the studied set and moves to the next card. The walk never wraps and never
    ends on its own; ``is_complete`` tells the caller the last card was scored.
    """

    def __init__(
        self,
        cards: List[Flashcard],
        store: FlashcardStore,
        session_store: Optional[StudySessionStore] = None,
        deck_id: str = ALL_CATEGORIES
    ):
        if not cards:
            raise NothingToStudyError("No flashcards to study")

        self.store = store
        self.session_store = session_store
        self.deck_id = deck_id
        self._cards = list(cards)
        self.index = 0
        self.flipped = False
        self.studied: Set[str] = set()
        self.correct_answers = 0
        self.incorrect_answers = 0
        self.start_time = store.now()
        self.session: Optional[StudySession] = None
        logger.info(f"Study session started with {len(self._cards)} cards (deck: {deck_id})")

    def __len__(self) -> int:
        return len(self._cards)

    @property
    def card_ids(self) -> List[str]:
        return [c.id for c in self._cards]

    @property
    def current_card(self) -> Flashcard:
        """The card at the current index with its latest stored stats"""
        snapshot = self._cards[self.index]
        return self.store.get(snapshot.id) or snapshot

    @property
    def progress(self) -> int:
        return round_percentage(self.index + 1, len(self._cards))

    @property
    def is_complete(self) -> bool:
        return self.index == len(self._cards) - 1 and self._cards[self.index].id in self.studied

    def flip(self) -> bool:
        self.flipped = not self.flipped
        return self.flipped

    def _move_to(self, index: int) -> bool:
        index = max(0, min(index, len(self._cards) - 1))
        if index == self.index:
            return False
        self.index = index
        self.flipped = False
        return True

    def next(self) -> bool:
        """Move forward one card; returns False at the last card"""
        return self._move_to(self.index + 1)

    def previous(self) -> bool:
        """Move back one card; returns False at the first card"""
        return self._move_to(self.index - 1)

    def mark_correct(self, card_id: str) -> Optional[Flashcard]:
        return self._mark(card_id, correct=True)

    def mark_incorrect(self, card_id: str) -> Optional[Flashcard]:
        return self._mark(card_id, correct=False)

    def _mark(self, card_id: str, correct: bool) -> Optional[Flashcard]:
        updated = self.store.record_review(card_id, correct)
        if updated is None:
            return None

        self.studied.add(card_id)
        if correct:
            self.correct_answers += 1
        else:
            self.incorrect_answers += 1
        self.next()
        return updated

    def finish(self) -> StudySession:
        """Close the session and save it to the history (once)"""
        if self.session is None:
            self.session = StudySession(
                id=generate_id(),
                deck_id=self.deck_id,
                start_time=self.start_time,
                end_time=self.store.now(),
                cards_studied=len(self.studied),
                correct_answers=self.correct_answers,
                incorrect_answers=self.incorrect_answers
            )
            if self.session_store is not None:
                self.session_store.append(self.session)
            logger.info(f"Study session finished: {len(self.studied)}/{len(self._cards)} cards studied")
        return self.session
