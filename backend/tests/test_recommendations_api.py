"""
backend/tests/test_recommendations_api.py
Integration tests for GET /api/recommendations.
"""

from backend.features.insights import service as svc


def add(client, title, completed=False):
    todo = client.post("/api/todos", json={"title": title}).json()
    if completed:
        client.put(f"/api/todos/{todo['id']}", json={"completed": True})
    return todo


class TestRecommendationsAPI:
    def test_empty_store(self, client):
        resp = client.get("/api/recommendations", params={"now": "2025-01-06T12:00:00"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["stats"] == {
            "totalTodos": 0,
            "completedTodos": 0,
            "pendingTodos": 0,
            "completionRate": 0,
        }
        assert body["insights"] == [svc.GETTING_STARTED_INSIGHT]
        assert body["suggestions"] == [svc.GETTING_STARTED_SUGGESTION, svc.ALL_CLEAR_SUGGESTION]

    def test_report_reflects_stored_todos(self, client):
        add(client, "Buy milk", completed=True)
        add(client, "buy Milk today")
        add(client, "Walk dog")

        resp = client.get("/api/recommendations", params={"now": "2025-01-06T10:30:00"})
        body = resp.json()

        assert body["stats"] == {
            "totalTodos": 3,
            "completedTodos": 1,
            "pendingTodos": 2,
            "completionRate": 33,
        }
        assert svc.keyword_insight(["buy", "milk"]) in body["insights"]
        assert body["suggestions"][-1] == svc.MORNING_SUGGESTION

    def test_high_completion_in_afternoon(self, client):
        for title in ["alpha", "bravo", "charlie", "delta", "echo"]:
            add(client, title, completed=True)

        body = client.get("/api/recommendations", params={"now": "2025-01-06T15:00:00"}).json()
        assert body["stats"]["completionRate"] == 100
        assert body["insights"] == [svc.HIGH_RATE_INSIGHT]
        assert body["suggestions"] == [
            svc.HIGH_RATE_SUGGESTION,
            svc.AFTERNOON_SUGGESTION,
            svc.ALL_CLEAR_SUGGESTION,
        ]

    def test_same_now_is_deterministic(self, client):
        add(client, "Write report")
        add(client, "Review report", completed=True)
        params = {"now": "2025-01-06T21:00:00"}
        assert client.get("/api/recommendations", params=params).json() == \
            client.get("/api/recommendations", params=params).json()

    def test_utc_now_uses_utc_wall_clock_hour(self, client):
        add(client, "Buy milk")
        body = client.get("/api/recommendations", params={"now": "2025-01-06T10:00:00Z"}).json()
        assert svc.MORNING_SUGGESTION in body["suggestions"]

    def test_offset_now_uses_its_own_wall_clock_hour(self, client):
        add(client, "Buy milk")
        # 15:00 in +09:00 is 06:00 UTC; the afternoon band still applies
        body = client.get("/api/recommendations", params={"now": "2025-01-06T15:00:00+09:00"}).json()
        assert svc.AFTERNOON_SUGGESTION in body["suggestions"]

    def test_invalid_now_is_400(self, client):
        resp = client.get("/api/recommendations", params={"now": "yesterday"})
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "validation_error"

    def test_without_now_uses_server_clock(self, client):
        add(client, "Buy milk")
        resp = client.get("/api/recommendations")
        assert resp.status_code == 200
        assert resp.json()["stats"]["totalTodos"] == 1
