"""
API tests for the request log and health check.
"""

from fastapi.testclient import TestClient


class TestRequestLog:

    def test_requests_are_recorded(self, client: TestClient, sample_entries):
        client.get("/api/items", params={"type": "income"})
        client.get("/api/items/not-a-uuid")

        response = client.get("/api/logs")
        assert response.status_code == 200
        assert int(response.headers["X-Total-Count"]) == 2

        logs = response.json()
        by_path = {log["path"]: log for log in logs}
        assert by_path["/api/items"]["status_code"] == 200
        assert by_path["/api/items"]["query_string"] == "type=income"
        assert by_path["/api/items/not-a-uuid"]["status_code"] == 400
        assert all(log["processing_time"] is not None for log in logs)

    def test_status_filter(self, client: TestClient):
        client.get("/api/items/not-a-uuid")
        client.get("/api/items")

        logs = client.get("/api/logs", params={"status_min": 400}).json()
        assert [log["status_code"] for log in logs] == [400]

    def test_inverted_status_range(self, client: TestClient):
        response = client.get("/api/logs", params={"status_min": 500, "status_max": 400})
        assert response.status_code == 400

    def test_log_and_health_requests_are_not_recorded(self, client: TestClient):
        assert client.get("/health").json() == {"status": "ok"}
        client.get("/api/logs")

        response = client.get("/api/logs")
        assert response.json() == []
        assert response.headers["X-Total-Count"] == "0"
