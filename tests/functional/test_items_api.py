"""
API tests for ledger entry CRUD and listing.
"""

import uuid
from decimal import Decimal

from fastapi.testclient import TestClient


def entry_payload(**overrides):
    payload = {
        "type": "income",
        "amount": "55.50",
        "category": "salary",
        "description": "March pay",
        "date": "2024-03-01",
    }
    payload.update(overrides)
    return payload


class TestEntryCRUD:
    """Create, fetch, replace and delete"""

    def test_create_and_fetch(self, client: TestClient):
        response = client.post("/api/items", json=entry_payload())
        assert response.status_code == 201

        created = response.json()
        assert uuid.UUID(created["id"])
        assert Decimal(created["amount"]) == Decimal("55.50")
        assert created["type"] == "income"
        assert created["date"] == "2024-03-01"
        assert created["created_at"].endswith("+00:00")

        response = client.get(f"/api/items/{created['id']}")
        assert response.status_code == 200
        assert response.json()["category"] == "salary"

    def test_description_is_optional(self, client: TestClient):
        payload = entry_payload()
        del payload["description"]
        response = client.post("/api/items", json=payload)
        assert response.status_code == 201
        assert response.json()["description"] == ""

    def test_replace(self, client: TestClient, sample_entries):
        entry_id = sample_entries[1].id
        response = client.put(
            f"/api/items/{entry_id}",
            json=entry_payload(type="expense", amount="21.99", category="groceries", date="2024-01-11"),
        )
        assert response.status_code == 200

        replaced = response.json()
        assert replaced["id"] == entry_id
        assert Decimal(replaced["amount"]) == Decimal("21.99")
        assert replaced["category"] == "groceries"
        assert replaced["description"] == "March pay"

    def test_delete(self, client: TestClient, sample_entries):
        entry_id = sample_entries[0].id
        response = client.delete(f"/api/items/{entry_id}")
        assert response.status_code == 204

        response = client.get(f"/api/items/{entry_id}")
        assert response.status_code == 404
        assert response.json()["detail"] == "item not found"

    def test_malformed_id_is_bad_request(self, client: TestClient):
        for method in ("get", "delete"):
            response = getattr(client, method)("/api/items/not-a-uuid")
            assert response.status_code == 400
            assert response.json()["detail"] == "id must be a valid UUID"

        response = client.put("/api/items/not-a-uuid", json=entry_payload())
        assert response.status_code == 400

    def test_stray_hyphen_id_is_bad_request(self, client: TestClient, sample_entries):
        raw = sample_entries[0].id.replace("-", "")
        hyphenated_per_digit = "-".join(raw)
        response = client.get(f"/api/items/{hyphenated_per_digit}")
        assert response.status_code == 400
        assert response.json()["detail"] == "id must be a valid UUID"

    def test_unknown_id_is_not_found(self, client: TestClient):
        response = client.put(f"/api/items/{uuid.uuid4()}", json=entry_payload())
        assert response.status_code == 404

    def test_invalid_payload_wins_over_unknown_id(self, client: TestClient):
        response = client.put(f"/api/items/{uuid.uuid4()}", json=entry_payload(type="gift"))
        assert response.status_code == 400
        assert response.json()["detail"] == "type must be 'income' or 'expense'"


class TestEntryValidation:
    """Payload rules surface as 400 with the rule's message"""

    def test_invalid_type(self, client: TestClient):
        response = client.post("/api/items", json=entry_payload(type="gift"))
        assert response.status_code == 400
        assert response.json()["detail"] == "type must be 'income' or 'expense'"

    def test_non_positive_amount(self, client: TestClient):
        for amount in ("0", "-10.00"):
            response = client.post("/api/items", json=entry_payload(amount=amount))
            assert response.status_code == 400
            assert response.json()["detail"] == "amount must be greater than zero"

    def test_blank_category(self, client: TestClient):
        response = client.post("/api/items", json=entry_payload(category="  "))
        assert response.status_code == 400
        assert response.json()["detail"] == "category must not be empty"

    def test_malformed_date_is_decoding_error(self, client: TestClient):
        response = client.post("/api/items", json=entry_payload(date="2024-13-01"))
        assert response.status_code == 422

    def test_missing_amount_is_decoding_error(self, client: TestClient):
        payload = entry_payload()
        del payload["amount"]
        response = client.post("/api/items", json=payload)
        assert response.status_code == 422


class TestListing:
    """Filtered, sorted and paginated listing"""

    def test_default_listing(self, client: TestClient, sample_entries):
        response = client.get("/api/items")
        assert response.status_code == 200

        body = response.json()
        assert body["total_count"] == 5
        assert [item["date"] for item in body["items"]] == [
            "2024-02-15", "2024-02-03", "2024-01-20", "2024-01-10", "2024-01-05",
        ]

    def test_pagination(self, client: TestClient, sample_entries):
        body = client.get("/api/items", params={"limit": 2, "offset": 4}).json()
        assert len(body["items"]) == 1
        assert body["total_count"] == 5

    def test_out_of_range_limit_uses_default(self, client: TestClient, sample_entries):
        body = client.get("/api/items", params={"limit": 5000}).json()
        assert len(body["items"]) == 5

    def test_offset_beyond_bigint_is_rejected(self, client: TestClient, sample_entries):
        response = client.get("/api/items", params={"offset": 10**20})
        assert response.status_code == 422

    def test_offset_past_the_end_is_empty(self, client: TestClient, sample_entries):
        body = client.get("/api/items", params={"offset": 2**62}).json()
        assert body == {"items": [], "total_count": 0}

    def test_filter_by_type_and_category(self, client: TestClient, sample_entries):
        body = client.get("/api/items", params={"type": "expense", "category": "food"}).json()
        assert body["total_count"] == 2
        assert {item["category"] for item in body["items"]} == {"food"}

    def test_date_range(self, client: TestClient, sample_entries):
        body = client.get("/api/items", params={"from": "2024-02-01", "to": "2024-02-28"}).json()
        assert body["total_count"] == 2

    def test_sort_by_amount_ascending(self, client: TestClient, sample_entries):
        body = client.get("/api/items", params={"sort_by": "amount", "order": "asc"}).json()
        amounts = [Decimal(item["amount"]) for item in body["items"]]
        assert amounts == sorted(amounts)

    def test_empty_result(self, client: TestClient, sample_entries):
        body = client.get("/api/items", params={"category": "travel"}).json()
        assert body == {"items": [], "total_count": 0}

    def test_invalid_parameters(self, client: TestClient):
        cases = [
            ({"sort_by": "description"}, "sort_by must be one of: date, amount, category, type"),
            ({"order": "sideways"}, "order must be 'asc' or 'desc'"),
            ({"type": "refund"}, "type must be 'income' or 'expense'"),
            ({"from": "2024-02-01", "to": "2024-01-01"}, "'from' date must not be after 'to' date"),
        ]
        for params, message in cases:
            response = client.get("/api/items", params=params)
            assert response.status_code == 400
            assert response.json()["detail"] == message

    def test_malformed_date_parameter(self, client: TestClient):
        response = client.get("/api/items", params={"from": "01/02/2024"})
        assert response.status_code == 422
