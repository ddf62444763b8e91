import os
import random
import tempfile
from datetime import datetime, timedelta

# Settings are read at import time, so point them away from the repo first
_tmp_root = tempfile.mkdtemp(prefix="studycards-tests-")
os.environ.setdefault("DATA_DIR", os.path.join(_tmp_root, "data"))
os.environ.setdefault("LOGS_DIR", os.path.join(_tmp_root, "logs"))
os.environ["STORAGE_BACKEND"] = "memory"

import pytest

from studycards.models.flashcard import Difficulty, Flashcard, FlashcardDraft
from studycards.utils.flashcard_store import FlashcardStore
from studycards.utils.session_store import StudySessionStore
from studycards.utils.storage import MemoryStorage
from studycards.utils.timer import ManualScheduler


class StepClock:
    """Deterministic clock; every call is one second after the previous one"""

    def __init__(self, start=datetime(2024, 5, 1, 9, 0, 0, 123456)):
        self.current = start

    def __call__(self):
        value = self.current
        self.current += timedelta(seconds=1)
        return value


def make_card(card_id, front=None, back=None, category="Spanish", **kwargs):
    return Flashcard(
        id=card_id,
        front=front or f"front-{card_id}",
        back=back or f"back-{card_id}",
        category=category,
        created_at=datetime(2024, 1, 1),
        **kwargs
    )


def draft(front, back, category="Spanish", difficulty=Difficulty.MEDIUM):
    return FlashcardDraft(front=front, back=back, category=category, difficulty=difficulty)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def store(storage, clock):
    return FlashcardStore(storage, now=clock)


@pytest.fixture
def session_store(storage):
    return StudySessionStore(storage)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def spanish_store(storage, clock):
    """A store holding five Spanish cards and nothing else"""
    store = FlashcardStore(storage, now=clock)
    for card in list(store.cards):
        store.delete(card.id)
    for front, back in [("dog", "perro"), ("cat", "gato"), ("house", "casa"),
                        ("water", "agua"), ("bread", "pan")]:
        store.add(draft(front, back))
    return store
