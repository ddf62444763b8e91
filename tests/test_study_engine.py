import pytest

from studycards.utils.exceptions import NothingToStudyError
from studycards.utils.study_engine import StudyEngine


@pytest.fixture
def three_cards(store):
    return store.cards[:3]


def test_empty_list_has_nothing_to_study(store):
    with pytest.raises(NothingToStudyError):
        StudyEngine([], store)


def test_mark_incorrect_advances_and_stops_at_last_card(store, three_cards):
    engine = StudyEngine(three_cards, store)

    engine.mark_incorrect(three_cards[0].id)
    assert engine.index == 1

    engine.mark_incorrect(three_cards[1].id)
    assert engine.index == 2

    engine.mark_incorrect(three_cards[2].id)
    assert engine.index == 2
    assert store.get(three_cards[2].id).incorrect_count == 1


def test_mark_updates_store_and_studied_set(store, three_cards, clock):
    engine = StudyEngine(three_cards, store)
    stamp = clock.current

    updated = engine.mark_correct("1")

    assert updated.correct_count == 1
    assert updated.last_reviewed == stamp
    assert store.get("1").correct_count == 1
    assert engine.studied == {"1"}


def test_remarking_counts_again_but_studied_once(store, three_cards):
    engine = StudyEngine(three_cards, store)

    engine.mark_correct("1")
    engine.previous()
    engine.mark_incorrect("1")

    card = store.get("1")
    assert (card.correct_count, card.incorrect_count) == (1, 1)
    assert engine.studied == {"1"}
    assert (engine.correct_answers, engine.incorrect_answers) == (1, 1)


def test_mark_looks_up_card_in_store_not_session_list(store, three_cards):
    store.record_review("1", correct=True)
    engine = StudyEngine(three_cards, store)

    engine.mark_correct("1")

    assert store.get("1").correct_count == 2


def test_mark_unknown_id_is_a_no_op(store, three_cards):
    engine = StudyEngine(three_cards, store)

    assert engine.mark_correct("missing") is None
    assert engine.index == 0
    assert engine.studied == set()


def test_navigation_is_clamped_and_does_not_score(store, three_cards):
    engine = StudyEngine(three_cards, store)

    assert engine.previous() is False
    assert engine.next() is True
    assert engine.next() is True
    assert engine.next() is False
    assert engine.index == 2
    assert store.statistics().studied_cards == 0


def test_flip_resets_when_moving(store, three_cards):
    engine = StudyEngine(three_cards, store)

    assert engine.flip() is True
    assert engine.flipped
    engine.next()
    assert not engine.flipped


def test_current_card_shows_latest_stats(store, three_cards):
    engine = StudyEngine(three_cards, store)
    store.record_review("1", correct=False)

    assert engine.current_card.incorrect_count == 1


def test_completion_signal(store, three_cards):
    engine = StudyEngine(three_cards, store)

    engine.next()
    engine.next()
    assert not engine.is_complete

    engine.mark_correct(three_cards[2].id)
    assert engine.is_complete
    assert engine.progress == 100


def test_progress(store, three_cards):
    engine = StudyEngine(three_cards, store)

    assert engine.progress == 33
    engine.next()
    assert engine.progress == 67


def test_finish_records_session_once(store, session_store, three_cards):
    engine = StudyEngine(three_cards, store, session_store, deck_id="English-Vietnamese")
    engine.mark_correct("1")
    engine.mark_incorrect("2")

    session = engine.finish()

    assert session.deck_id == "English-Vietnamese"
    assert session.cards_studied == 2
    assert (session.correct_answers, session.incorrect_answers) == (1, 1)
    assert session.end_time > session.start_time
    assert engine.finish() is session
    assert session_store.load() == [session]
