"""Test coverage for FastAPI endpoints."""
import pytest
from fastapi.testclient import TestClient
from fastapi_app import app


@pytest.fixture
def client():
    return TestClient(app)


class TestHealthEndpoints:
    """Test health and status endpoints."""

    def test_health_check(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_root_endpoint(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "status" in response.json()


class TestQuestionEndpoints:
    """Test question generation endpoints."""

    def test_generate_default_medium(self, client):
        response = client.post("/api/questions/generate", json={})
        assert response.status_code == 200
        data = response.json()
        assert data["difficulty"] == 2
        assert data["difficulty_label"] == "Medium"
        assert data["points"] == 5
        assert data["prompt"]
        assert "answer" not in data

    def test_generate_specific_variant(self, client):
        response = client.post("/api/questions/generate", json={"difficulty": 3, "variant": 7})
        assert response.status_code == 200
        data = response.json()
        assert data["variant"] == "syllogism"
        assert data["options"] == ["All X are Z", "Some W are X", "No X are W", "None of these"]

    def test_free_form_question_has_no_options(self, client):
        response = client.post("/api/questions/generate", json={"difficulty": 1, "variant": 9})
        assert response.json()["options"] is None

    def test_ids_increase(self, client):
        first = client.post("/api/questions/generate", json={}).json()["id"]
        second = client.post("/api/questions/generate", json={}).json()["id"]
        assert second > first

    @pytest.mark.parametrize("payload", [{"difficulty": 0}, {"difficulty": 4}, {"variant": 10}])
    def test_invalid_request_rejected(self, client, payload):
        response = client.post("/api/questions/generate", json=payload)
        assert response.status_code == 422


class TestAnswerEndpoints:
    """Test answer checking."""

    def test_correct_answer(self, client):
        question = client.post("/api/questions/generate", json={"difficulty": 3, "variant": 7}).json()

        response = client.post("/api/answers/check", json={
            "question_id": question["id"],
            "answer": " A "
        })

        assert response.status_code == 200
        data = response.json()
        assert data["correct"] is True
        assert data["points_earned"] == 10
        assert data["correct_answer"] == "a"

    def test_wrong_answer(self, client):
        question = client.post("/api/questions/generate", json={"difficulty": 3, "variant": 8}).json()

        response = client.post("/api/answers/check", json={
            "question_id": question["id"],
            "answer": "b"
        })

        data = response.json()
        assert data["correct"] is False
        assert data["points_earned"] == 0
        assert data["correct_answer"] == "d"

    def test_unknown_question(self, client):
        response = client.post("/api/answers/check", json={"question_id": -1, "answer": "1"})
        assert response.status_code == 404

    def test_oldest_questions_evicted(self, client, monkeypatch):
        import fastapi_app

        monkeypatch.setattr(fastapi_app, "MAX_STORED_QUESTIONS", 2)
        ids = [
            client.post("/api/questions/generate", json={}).json()["id"]
            for _ in range(3)
        ]

        assert len(fastapi_app.questions) == 2
        first = client.post("/api/answers/check", json={"question_id": ids[0], "answer": "x"})
        last = client.post("/api/answers/check", json={"question_id": ids[2], "answer": "x"})
        assert first.status_code == 404
        assert last.status_code == 200


class TestScoreEndpoints:
    """Test score listing."""

    def test_lists_score_log(self, client, score_log):
        score_log.append_lines(["TimedExam | score: 20 | date: today"])

        response = client.get("/api/scores")

        assert response.status_code == 200
        assert response.json() == {"scores": ["TimedExam | score: 20 | date: today"]}

    def test_empty_log(self, client, score_log):
        assert client.get("/api/scores").json() == {"scores": []}

    def test_unreadable_log_warns(self, client, tmp_path, monkeypatch):
        import fastapi_app
        from score_store import ScoreStore

        monkeypatch.setattr(fastapi_app, "store", ScoreStore(tmp_path))

        data = client.get("/api/scores").json()
        assert data["scores"] == []
        assert "warning" in data


class TestUtilityEndpoints:
    """Test utility endpoints."""

    def test_validate_answer(self, client):
        response = client.get("/api/utils/validate-answer?answer=%20Test%20")
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["normalized"] == "test"
        assert data["length"] == 4

    def test_validate_empty_answer(self, client):
        response = client.get("/api/utils/validate-answer?answer=")
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False

    def test_difficulty_levels(self, client):
        response = client.get("/api/utils/difficulty-levels")
        assert response.status_code == 200
        levels = response.json()["levels"]
        assert levels["easy"] == {"value": 1, "points": 2}
        assert levels["medium"] == {"value": 2, "points": 5}
        assert levels["hard"] == {"value": 3, "points": 10}
