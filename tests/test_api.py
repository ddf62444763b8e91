import pytest
from fastapi.testclient import TestClient

from studycards.api.app import app
from studycards.utils.study_controller import StudyController, get_study_controller

API = "/api/v1"


@pytest.fixture
def controller(store, session_store, scheduler, rng):
    return StudyController(store, session_store, scheduler, rng)


@pytest.fixture
def client(controller):
    app.dependency_overrides[get_study_controller] = lambda: controller
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root_and_health(client):
    assert client.get("/").json()["message"] == "Welcome to StudyCards API"
    assert client.get(f"{API}/health").json()["status"] == "healthy"


def test_list_default_cards(client):
    response = client.get(f"{API}/cards")

    assert response.status_code == 200
    data = response.json()
    assert data["total_count"] == 5
    assert data["cards"][0]["front"] == "Hello"
    assert data["categories"] == ["English-Vietnamese"]


def test_list_cards_with_search(client):
    data = client.get(f"{API}/cards", params={"search": "THANK"}).json()

    assert [c["back"] for c in data["cards"]] == ["Cám ơn"]


def test_listing_with_a_search_does_not_narrow_later_requests(client):
    assert client.get(f"{API}/cards", params={"search": "hello"}).json()["total_count"] == 1

    assert client.get(f"{API}/cards").json()["total_count"] == 5
    assert client.post(f"{API}/study/start", json={}).json()["total_cards"] == 5


def test_create_update_delete_card(client):
    response = client.post(f"{API}/cards", json={"front": " dog ", "back": "perro", "category": "Spanish"})
    assert response.status_code == 200
    card = response.json()["card"]
    assert card["front"] == "dog"
    assert card["difficulty"] == "medium"
    assert card["correct_count"] == 0

    response = client.put(f"{API}/cards/{card['id']}", json={
        "front": "dog", "back": "el perro", "category": "Spanish", "difficulty": "hard"
    })
    assert response.status_code == 200
    assert response.json()["card"]["back"] == "el perro"
    assert response.json()["card"]["created_at"] == card["created_at"]

    assert client.delete(f"{API}/cards/{card['id']}").status_code == 200
    assert client.get(f"{API}/cards/{card['id']}").status_code == 404


def test_blank_card_is_rejected(client):
    response = client.post(f"{API}/cards", json={"front": "  ", "back": "perro", "category": "Spanish"})

    assert response.status_code == 422


def test_unknown_card_ids_are_404(client):
    body = {"front": "a", "back": "b", "category": "c"}

    assert client.get(f"{API}/cards/missing").status_code == 404
    assert client.put(f"{API}/cards/missing", json=body).status_code == 404
    assert client.delete(f"{API}/cards/missing").status_code == 404


def test_stats(client, controller):
    controller.store.record_review("1", correct=True)
    controller.store.record_review("2", correct=False)

    data = client.get(f"{API}/stats").json()

    assert data["statistics"] == {"total_cards": 5, "studied_cards": 2, "accuracy": 50}
    assert data["screen"] == "menu"


def test_study_flow(client):
    state = client.post(f"{API}/study/start", json={}).json()
    assert state["index"] == 0
    assert state["total_cards"] == 5
    assert state["card"]["front"] == "Hello"

    assert client.post(f"{API}/study/flip").json()["flipped"] is True

    state = client.post(f"{API}/study/mark", json={"card_id": "1", "correct": True}).json()
    assert state["index"] == 1
    assert state["flipped"] is False
    assert state["studied_count"] == 1

    assert client.post(f"{API}/study/previous").json()["card"]["correct_count"] == 1
    assert client.post(f"{API}/study/next").json()["index"] == 1

    response = client.post(f"{API}/study/mark", json={"card_id": "missing", "correct": True})
    assert response.status_code == 404

    session = client.post(f"{API}/study/finish").json()["session"]
    assert session["cards_studied"] == 1
    assert session["correct_answers"] == 1

    sessions = client.get(f"{API}/study/sessions").json()
    assert sessions["total_count"] == 1
    assert client.get(f"{API}/study").status_code == 404


def test_study_with_filter(client):
    client.post(f"{API}/cards", json={"front": "dog", "back": "perro", "category": "Spanish"})

    state = client.post(f"{API}/study/start", json={"category": "Spanish"}).json()

    assert state["total_cards"] == 1
    assert state["card"]["front"] == "dog"


def test_quiz_needs_four_cards(client):
    client.delete(f"{API}/cards/1")
    client.delete(f"{API}/cards/2")

    response = client.post(f"{API}/quiz/start", json={})

    assert response.status_code == 409
    assert "at least 4" in response.json()["detail"]


def test_quiz_flow(client, controller):
    state = client.post(f"{API}/quiz/start", json={}).json()
    assert state["status"] == "open"
    assert state["total_questions"] == 5
    assert state["time_left"] == 30
    assert len(state["options"]) == 4
    assert state["correct_answer"] is None

    for _ in range(5):
        answer = controller.quiz.current_question.card.back
        state = client.post(f"{API}/quiz/answer", json={"answer": answer}).json()
        assert state["status"] == "revealed"
        assert state["is_correct"] is True
        assert state["correct_answer"] == answer

        assert client.post(f"{API}/quiz/answer", json={"answer": answer}).status_code == 409
        state = client.post(f"{API}/quiz/next").json()

    assert state["status"] == "completed"
    assert state["result"]["accuracy"] == 100
    assert state["result"]["correct_count"] == 5

    state = client.post(f"{API}/quiz/restart").json()
    assert state["status"] == "open"
    assert state["question_number"] == 1


def test_quiz_timeout(client, controller, scheduler):
    client.post(f"{API}/quiz/start", json={})
    card_id = controller.quiz.current_question.card.id

    scheduler.advance(30)

    state = client.get(f"{API}/quiz").json()
    assert state["status"] == "revealed"
    assert state["user_answer"] == ""
    assert state["is_correct"] is False
    assert client.get(f"{API}/cards/{card_id}").json()["card"]["incorrect_count"] == 1


def test_quiz_next_before_answer_is_409(client):
    client.post(f"{API}/quiz/start", json={})

    assert client.post(f"{API}/quiz/next").status_code == 409


def test_quiz_stop(client):
    client.post(f"{API}/quiz/start", json={})

    assert client.post(f"{API}/quiz/stop").json()["success"] is True
    assert client.get(f"{API}/quiz").status_code == 404
