"""
Study session history storage for StudyCards
"""
from typing import List

from studycards.models.progress import StudySession
from studycards.utils.codec import dump_records, load_records
from studycards.utils.exceptions import DeserializationError
from studycards.utils.logger import get_logger
from studycards.utils.storage import KeyValueStorage

logger = get_logger(__name__)

SESSIONS_KEY = "study_sessions"


class StudySessionStore:
    """Manages the persisted history of finished study sessions"""

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def load(self) -> List[StudySession]:
        """Load all sessions; unreadable history is treated as empty"""
        try:
            raw = self.storage.get(SESSIONS_KEY)
            if raw is None:
                return []
            return load_records(raw, StudySession)
        except DeserializationError as e:
            logger.warning(f"Discarding unreadable study sessions: {e}")
            return []

    def save_all(self, sessions: List[StudySession]):
        """Overwrite the stored history"""
        self.storage.set(SESSIONS_KEY, dump_records(sessions))

    def append(self, session: StudySession):
        """Add a session to the history"""
        self.save_all([*self.load(), session])
        logger.info(
            f"Saved study session {session.id}: {session.cards_studied} cards, "
            f"{session.correct_answers} correct, {session.incorrect_answers} incorrect"
        )

    def list_sessions(self) -> List[StudySession]:
        """Sessions sorted by start time (most recent first)"""
        return sorted(self.load(), key=lambda s: s.start_time, reverse=True)
