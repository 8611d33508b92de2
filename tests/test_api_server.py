"""Tests for the FastAPI progress/class/analytics endpoints."""

import pytest
from fastapi.testclient import TestClient

from kinmen_app.core.content_loader import DEFAULT_COURSE_PATH, load_course_from_file
from kinmen_app.core.progress_manager import ProgressManager
from kinmen_app.server.api_server import create_api_app


@pytest.fixture
def manager():
    return ProgressManager()


@pytest.fixture
def client(manager):
    course = load_course_from_file(DEFAULT_COURSE_PATH)
    return TestClient(create_api_app(manager, course))


def test_course_summary_and_slides(client):
    summary = client.get("/").json()
    assert summary["slide_count"] >= 1

    first = client.get("/slides/0").json()
    assert "<h1>" in first["notes_html"]
    assert first["matchingData"] is None

    last_index = summary["slide_count"] - 1
    matching = client.get(f"/slides/{last_index}").json()
    assert matching["type"] == "matching"
    assert {"left": "菜花", "right": "tshài-hue"} in matching["matchingData"]["pairs"]

    assert client.get(f"/slides/{summary['slide_count']}").status_code == 404
    notes = client.get("/slides/0/notes")
    assert notes.headers["content-type"].startswith("text/html")


def test_progress_lifecycle(client):
    assert client.get("/progress/amy").status_code == 404

    created = client.post("/students", json={"username": "amy"})
    assert created.status_code == 201
    assert client.post("/students", json={"username": "amy"}).status_code == 409
    assert client.post("/students", json={"username": "  "}).status_code == 400

    response = client.put(
        "/progress",
        json={"username": "amy", "dialogue": {"scenarios": {"completed": 2, "total": 7}}},
    )
    assert response.status_code == 200
    progress = response.json()["progress"]
    assert progress["dialogue"]["scenarios"]["completed"] == 2
    assert progress["lastAccess"]

    assert client.put("/progress", json={"username": "amy"}).status_code == 400
    assert client.put("/progress", json={"username": "ghost", "practice": {}}).status_code == 404

    fetched = client.get("/progress/amy").json()
    assert fetched["success"] is True
    assert fetched["progress"]["dialogue"]["scenarios"]["completed"] == 2


def test_record_game(client):
    client.post("/students", json={"username": "amy"})
    response = client.post("/progress/amy/games", json={"game_type": "matching", "score": 80})
    assert response.status_code == 200
    assert response.json()["statistics"]["bestScores"]["matching"] == 80
    assert client.post("/progress/amy/games", json={"game_type": "chess"}).status_code == 400
    assert client.post("/progress/ghost/games", json={"game_type": "matching"}).status_code == 404


def test_classes_and_analytics(client):
    for name in ("amy", "ben"):
        client.post("/students", json={"username": name})
    client.put("/progress", json={"username": "amy", "vocabulary": {"flashcards": {"viewed": 27}}})

    created = client.post("/classes", json={"teacher_username": "ms_lin", "class_name": "三年甲班"})
    assert created.status_code == 201
    class_id = created.json()["class_id"]
    invite_code = created.json()["invite_code"]

    assert client.post("/classes", json={"teacher_username": "ms_lin", "class_name": ""}).status_code == 400
    assert client.post("/classes/join", json={"username": "amy", "invite_code": "KMXXXXXX"}).status_code == 404
    for name in ("amy", "ben"):
        joined = client.post("/classes/join", json={"username": name, "invite_code": invite_code})
        assert joined.json()["class_id"] == class_id

    roster = client.get(f"/classes/{class_id}/students").json()
    assert {s["username"] for s in roster["students"]} == {"amy", "ben"}

    analytics = client.get(f"/classes/{class_id}/analytics").json()
    assert analytics["progressDistribution"] == [1, 0, 0, 0, 1]
    assert len(analytics["timeData"]) == 7

    teacher = client.get("/teachers/ms_lin/analytics").json()
    assert teacher["progressDistribution"] == analytics["progressDistribution"]

    assert client.get("/classes/class_missing/students").status_code == 404
    assert client.get("/classes/class_missing/analytics").status_code == 404


def test_app_without_course(manager):
    client = TestClient(create_api_app(manager))
    assert client.get("/").json() == {"title": None, "slide_count": 0}
    assert client.get("/slides/0").status_code == 404


def test_student_detail(client):
    client.post("/students", json={"username": "amy"})
    client.put(
        "/progress",
        json={
            "username": "amy",
            "vocabulary": {"viewedCards": [1, 2, 13, 26], "masteredCards": [1, 26]},
            "dialogue": {"completedScenarios": ["greeting", "thanks"]},
        },
    )
    client.post("/progress/amy/games", json={"game_type": "matching", "score": 100})

    response = client.get("/students/amy")
    assert response.status_code == 200
    detail = response.json()
    assert detail["vocabulary"]["byCategory"] == {
        "fruit": {"viewed": 2, "mastered": 1, "total": 12},
        "vegetable": {"viewed": 1, "mastered": 0, "total": 13},
        "item": {"viewed": 1, "mastered": 1, "total": 2},
    }
    assert (detail["vocabulary"]["viewed"], detail["vocabulary"]["total"]) == (4, 27)
    assert detail["dialogue"]["completed"] == 2
    assert detail["dialogue"]["scenarios"][0] == {"id": "greeting", "status": "completed"}
    assert detail["games"]["matching"] == {"played": 1, "bestScore": 100}
    assert detail["achievements"]["unlocked"] == ["game_first", "perfect_match"]
    assert detail["achievements"]["total"] == 9

    assert client.get("/students/ghost").status_code == 404


def test_record_vocabulary(client):
    client.post("/students", json={"username": "amy"})
    response = client.post("/progress/amy/vocabulary", json={"vocab_id": 5})
    assert response.status_code == 200
    body = response.json()
    assert body["statistics"]["vocabularyMastered"] == [5]
    assert body["achievements"]["unlocked"] == ["first_word"]
    assert client.post("/progress/amy/vocabulary", json={"vocab_id": 99}).status_code == 400
    assert client.post("/progress/ghost/vocabulary", json={"vocab_id": 5}).status_code == 404
