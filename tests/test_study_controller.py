import pytest

from conftest import draft
from studycards.models.progress import Screen
from studycards.utils.exceptions import (
    CardNotFoundError, InsufficientDataError, NoActiveSessionError, NothingToStudyError
)
from studycards.utils.study_controller import StudyController


@pytest.fixture
def controller(store, session_store, scheduler, rng):
    return StudyController(store, session_store, scheduler, rng)


def test_filter_state_drives_visible_cards(controller):
    controller.add_card(draft("dog", "perro"))

    controller.set_filter(search_term="", category="Spanish")
    assert [c.front for c in controller.visible_cards()] == ["dog"]

    controller.set_filter(search_term="NG")
    assert [c.front for c in controller.visible_cards()] == []

    controller.set_filter(category="")
    assert controller.category == "all"
    assert [c.front for c in controller.visible_cards()] == ["Delicious"]

    controller.set_filter(search_term="")
    assert len(controller.visible_cards()) == 6


def test_card_crud(controller):
    card = controller.add_card(draft("dog", "perro"))
    controller.store.record_review(card.id, correct=True)

    edited = controller.edit_card(card.id, draft("big dog", "perrazo", category="Animals"))

    assert (edited.front, edited.category, edited.correct_count) == ("big dog", "Animals", 1)
    assert edited.created_at == card.created_at

    controller.delete_card(card.id)
    with pytest.raises(CardNotFoundError):
        controller.get_card(card.id)
    with pytest.raises(CardNotFoundError):
        controller.edit_card(card.id, draft("a", "b"))
    with pytest.raises(CardNotFoundError):
        controller.delete_card(card.id)


def test_study_uses_filtered_cards_or_falls_back_to_all(controller):
    controller.add_card(draft("dog", "perro"))

    engine = controller.start_study(category="Spanish")
    assert len(engine) == 1
    assert engine.deck_id == "Spanish"
    assert controller.screen == Screen.STUDY

    engine = controller.start_study(search_term="zzz", category="all")
    assert len(engine) == 6


def test_finish_study_records_session(controller, session_store):
    engine = controller.start_study()
    engine.mark_correct(engine.current_card.id)

    session = controller.finish_study()

    assert session.cards_studied == 1
    assert session_store.load() == [session]
    assert controller.screen == Screen.MENU
    with pytest.raises(NoActiveSessionError):
        controller.require_study()


def test_study_with_no_cards(controller):
    for card in controller.store.cards:
        controller.delete_card(card.id)

    with pytest.raises(NothingToStudyError):
        controller.start_study()
    assert controller.screen == Screen.MENU


def test_quiz_needs_four_cards(controller):
    controller.delete_card("1")
    controller.delete_card("2")

    with pytest.raises(InsufficientDataError):
        controller.start_quiz()
    assert controller.screen == Screen.MENU
    with pytest.raises(NoActiveSessionError):
        controller.require_quiz()


def test_starting_quiz_closes_study(controller, session_store, scheduler):
    controller.start_study()

    controller.start_quiz()

    assert controller.study is None
    assert controller.screen == Screen.QUIZ
    assert len(session_store.load()) == 1
    assert scheduler.pending == 1


def test_back_to_menu_stops_quiz_timer(controller, scheduler):
    controller.start_quiz()

    controller.back_to_menu()
    scheduler.advance(60)

    assert controller.screen == Screen.MENU
    assert not controller.quiz.active
    assert controller.statistics().studied_cards == 0
