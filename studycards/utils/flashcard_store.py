"""
Flashcard Storage Utility for StudyCards
Holds the card collection in memory and persists it on every mutation
"""
import uuid
from datetime import datetime
from typing import Callable, List, Optional

from studycards.models.flashcard import Flashcard, FlashcardDraft, Difficulty, round_percentage
from studycards.models.progress import DeckStatistics
from studycards.utils.codec import dump_records, load_records
from studycards.utils.exceptions import DeserializationError
from studycards.utils.logger import get_logger
from studycards.utils.storage import KeyValueStorage

logger = get_logger(__name__)

FLASHCARDS_KEY = "flashcards"

# (id, front, back, difficulty) of the cards shown before anything is saved
DEFAULT_CATEGORY = "English-Vietnamese"
DEFAULT_CARDS = [
    ("1", "Hello", "Xin chào", Difficulty.EASY),
    ("2", "Thank you", "Cám ơn", Difficulty.EASY),
    ("3", "Goodbye", "Tạm biệt", Difficulty.EASY),
    ("4", "Beautiful", "Đẹp", Difficulty.MEDIUM),
    ("5", "Delicious", "Ngon", Difficulty.MEDIUM),
]


def generate_id() -> str:
    """Generate a new card id"""
    return str(uuid.uuid4())


class FlashcardStore:
    """
    Manages the card collection.
    The whole collection is written under a single storage key after each change.
    """

    def __init__(self, storage: KeyValueStorage, now: Callable[[], datetime] = datetime.now):
        """
        Initialize the flashcard store.

        Args:
            storage: Key-value backend the collection is persisted to
            now: Clock used for createdAt and lastReviewed stamps
        """
        self.storage = storage
        self.now = now
        self._seed_time = now()
        self._cards: List[Flashcard] = self.load()
        logger.info(f"FlashcardStore loaded {len(self._cards)} cards")

    def default_cards(self) -> List[Flashcard]:
        """The seed collection used when nothing valid is persisted"""
        return [
            Flashcard(
                id=card_id,
                front=front,
                back=back,
                category=DEFAULT_CATEGORY,
                difficulty=difficulty,
                created_at=self._seed_time
            )
            for card_id, front, back, difficulty in DEFAULT_CARDS
        ]

    def load(self) -> List[Flashcard]:
        """
        Read the persisted collection.

        Returns:
            The stored cards, or the default cards if nothing is stored
            or the stored data cannot be parsed
        """
        try:
            raw = self.storage.get(FLASHCARDS_KEY)
            if raw is None:
                return self.default_cards()
            return load_records(raw, Flashcard)
        except DeserializationError as e:
            logger.warning(f"Discarding unreadable flashcards, using defaults: {e}")
            return self.default_cards()

    def save(self):
        """Persist the full collection"""
        try:
            self.storage.set(FLASHCARDS_KEY, dump_records(self._cards))
        except Exception as e:
            logger.error(f"Error saving flashcards: {e}")
            raise

    @property
    def cards(self) -> List[Flashcard]:
        return list(self._cards)

    def get(self, card_id: str) -> Optional[Flashcard]:
        """Get a card by ID"""
        for card in self._cards:
            if card.id == card_id:
                return card
        return None

    def _new_id(self) -> str:
        card_id = generate_id()
        while self.get(card_id) is not None:
            card_id = generate_id()
        return card_id

    def add(self, draft: FlashcardDraft) -> None:
        """
        Append a new card built from a draft and persist.

        Args:
            draft: The validated user submission
        """
        card = Flashcard(id=self._new_id(), created_at=self.now(), **draft.model_dump())
        self._cards = [*self._cards, card]
        self.save()
        logger.info(f"Added card {card.id} to category: {card.category}")

    def update(self, card: Flashcard) -> bool:
        """
        Replace the card with the same id and persist.

        The creation time is kept and review counts never go down, so a
        stale copy cannot erase answers recorded since it was read.

        Returns:
            False if no card has that id (the collection is left unchanged)
        """
        replaced = False
        cards = []
        for existing in self._cards:
            if existing.id == card.id and not replaced:
                cards.append(card.model_copy(update={
                    "created_at": existing.created_at,
                    "correct_count": max(existing.correct_count, card.correct_count),
                    "incorrect_count": max(existing.incorrect_count, card.incorrect_count)
                }))
                replaced = True
            else:
                cards.append(existing)
        self._cards = cards
        self.save()

        if replaced:
            logger.info(f"Updated card {card.id}")
        else:
            logger.warning(f"Card not found for update: {card.id}")
        return replaced

    def delete(self, card_id: str) -> bool:
        """
        Remove a card by ID and persist.

        Returns:
            Whether a card was removed
        """
        remaining = [c for c in self._cards if c.id != card_id]
        removed = len(remaining) < len(self._cards)
        self._cards = remaining
        self.save()
        if removed:
            logger.info(f"Deleted card {card_id}")
        else:
            logger.warning(f"Card not found for delete: {card_id}")
        return removed

    def record_review(self, card_id: str, correct: bool) -> Optional[Flashcard]:
        """
        Update a card's review counters.

        Args:
            card_id: The card ID
            correct: Whether the answer was correct

        Returns:
            Updated Flashcard if found, None otherwise
        """
        card = self.get(card_id)
        if card is None:
            logger.warning(f"Card not found for review: {card_id}")
            return None

        updated = card.reviewed(correct, self.now())
        self.update(updated)
        logger.info(f"Recorded review for {card_id} (correct: {correct})")
        return updated

    def categories(self) -> List[str]:
        """Distinct categories in order of first appearance"""
        return list(dict.fromkeys(c.category for c in self._cards))

    def statistics(self) -> DeckStatistics:
        """Get statistics across all cards"""
        total_attempts = sum(c.total_attempts for c in self._cards)
        correct_attempts = sum(c.correct_count for c in self._cards)
        return DeckStatistics(
            total_cards=len(self._cards),
            studied_cards=len([c for c in self._cards if c.total_attempts > 0]),
            accuracy=round_percentage(correct_attempts, total_attempts)
        )
