"""
Quiz Engine for StudyCards
Builds timed multiple-choice quizzes from cards and scores the answers
"""
import random
from typing import List, Optional

from config import settings
from studycards.models.flashcard import Flashcard, round_percentage
from studycards.models.quiz import QuizQuestion, QuizResult, QuizStatus
from studycards.utils.exceptions import InsufficientDataError, QuizStateError
from studycards.utils.flashcard_store import FlashcardStore
from studycards.utils.logger import get_logger
from studycards.utils.timer import Countdown, Scheduler

logger = get_logger(__name__)


def pick_distractors(
    card: Flashcard,
    cards: List[Flashcard],
    rng: random.Random,
    max_distractors: int = 3
) -> List[str]:
    """
    Wrong answers for a card, taken from the backs of other cards in its category.

    Texts equal to the correct answer or to another candidate are skipped
    so that every option of the question is distinct.
    """
    seen = {card.back}
    candidates = []
    for other in cards:
        if other.id == card.id or other.category != card.category or other.back in seen:
            continue
        seen.add(other.back)
        candidates.append(other.back)

    rng.shuffle(candidates)
    return candidates[:max_distractors]


def generate_questions(
    cards: List[Flashcard],
    rng: random.Random,
    max_questions: int = 5,
    max_distractors: int = 3
) -> List[QuizQuestion]:
    """
    Pick up to max_questions random cards and build a question for each.

    Args:
        cards: Cards to draw questions and distractors from
        rng: Random source used for every shuffle
        max_questions: Session length cap
        max_distractors: Wrong options per question (fewer if the category is small)

    Returns:
        Questions in quiz order, each with shuffled options
    """
    pool = list(cards)
    rng.shuffle(pool)

    questions = []
    for card in pool[:max_questions]:
        options = [card.back, *pick_distractors(card, cards, rng, max_distractors)]
        rng.shuffle(options)
        questions.append(QuizQuestion(card=card, options=options))
    return questions


class QuizEngine:
    """
    Runs one quiz session at a time.

    ``start`` opens the first question and starts its countdown. ``answer``
    scores the open question and reveals it, ``next`` opens the following
    question or completes the quiz. When the countdown runs out on an open
    question it is answered with an empty string, which is always wrong.
    """

    def __init__(
        self,
        store: FlashcardStore,
        scheduler: Scheduler,
        rng: Optional[random.Random] = None,
        time_limit: int = settings.QUIZ_TIME_LIMIT,
        min_cards: int = settings.QUIZ_MIN_CARDS,
        max_questions: int = settings.QUIZ_MAX_QUESTIONS,
        max_distractors: int = settings.QUIZ_MAX_DISTRACTORS
    ):
        self.store = store
        self.rng = rng or random.Random(settings.RANDOM_SEED)
        self.min_cards = min_cards
        self.max_questions = max_questions
        self.max_distractors = max_distractors
        self.countdown = Countdown(scheduler, time_limit, on_expire=self._on_timeout)

        self.source: List[Flashcard] = []
        self.questions: List[QuizQuestion] = []
        self.index = 0
        self.status: Optional[QuizStatus] = None
        self.result: Optional[QuizResult] = None

    @property
    def active(self) -> bool:
        return self.status is not None

    @property
    def current_question(self) -> Optional[QuizQuestion]:
        if not self.questions:
            return None
        return self.questions[self.index]

    @property
    def time_left(self) -> int:
        return self.countdown.remaining

    def start(self, cards: List[Flashcard]) -> QuizQuestion:
        """
        Start a new quiz on the given cards.

        Raises:
            InsufficientDataError: if fewer than min_cards cards are given
        """
        if len(cards) < self.min_cards:
            raise InsufficientDataError(len(cards), self.min_cards)

        self.source = list(cards)
        return self._begin()

    def restart(self) -> QuizQuestion:
        """Start over on the same cards with a fresh shuffle"""
        if not self.source:
            raise QuizStateError("No quiz has been started")
        return self._begin()

    def stop(self):
        """Discard the session and its timer"""
        self.countdown.cancel()
        self.questions = []
        self.index = 0
        self.status = None
        self.result = None

    def _begin(self) -> QuizQuestion:
        self.countdown.cancel()
        self.questions = generate_questions(
            self.source, self.rng, self.max_questions, self.max_distractors
        )
        self.index = 0
        self.result = None
        self.status = QuizStatus.OPEN
        self.countdown.start()
        logger.info(f"Quiz started with {len(self.questions)} questions from {len(self.source)} cards")
        return self.current_question

    def answer(self, choice: str) -> QuizQuestion:
        """
        Score the open question.

        Raises:
            QuizStateError: if no question is open
        """
        if self.status != QuizStatus.OPEN:
            raise QuizStateError(f"Cannot answer while the quiz is {self._status_label()}")
        return self._score(choice)

    def _score(self, choice: str) -> QuizQuestion:
        self.countdown.cancel()

        question = self.questions[self.index]
        correct = question.check_answer(choice)
        if self.store.record_review(question.card.id, correct) is None:
            logger.warning(f"Quiz card {question.card.id} is no longer in the store")

        answered = question.model_copy(update={"user_answer": choice, "is_correct": correct})
        self.questions[self.index] = answered
        self.status = QuizStatus.REVEALED
        logger.info(f"Question {self.index + 1}/{len(self.questions)} answered (correct: {correct})")
        return answered

    def _on_timeout(self):
        if self.status != QuizStatus.OPEN:
            return
        logger.info(f"Time ran out on question {self.index + 1}")
        self._score("")

    def next(self) -> QuizStatus:
        """
        Move past the revealed question.

        Raises:
            QuizStateError: if the current question has not been answered
        """
        if self.status != QuizStatus.REVEALED:
            raise QuizStateError(f"Cannot move on while the quiz is {self._status_label()}")

        if self.index < len(self.questions) - 1:
            self.index += 1
            self.status = QuizStatus.OPEN
            self.countdown.start()
        else:
            self.status = QuizStatus.COMPLETED
            self.result = self._build_result()
            logger.info(f"Quiz completed: {self.result.correct_count}/{self.result.total_questions}")
        return self.status

    def _build_result(self) -> QuizResult:
        correct = len([q for q in self.questions if q.is_correct])
        return QuizResult(
            correct_count=correct,
            total_questions=len(self.questions),
            accuracy=round_percentage(correct, len(self.questions)),
            questions=list(self.questions)
        )

    def _status_label(self) -> str:
        return self.status.value if self.status else "not started"
