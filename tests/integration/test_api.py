import json
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from openai import OpenAIError

from strukly.api.app import create_app, get_assistant, get_extractor, get_store
from strukly.llm import ChatAssistant, ReceiptExtractor


def completion(content):
    mock_choice = MagicMock()
    mock_choice.message.content = content
    mock_response = MagicMock()
    mock_response.choices = [mock_choice]
    return mock_response


@pytest.fixture
def openai_client():
    return MagicMock()


@pytest.fixture
def client(store, openai_client):
    app = create_app()
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_extractor] = lambda: ReceiptExtractor(openai_client)
    app.dependency_overrides[get_assistant] = lambda: ChatAssistant(openai_client, history_limit=2)
    return TestClient(app)


def receipt_payload(**overrides):
    payload = {
        "userId": "merchant-1",
        "storeName": "Warung Bu Sri",
        "date": "2025-03-01",
        "totalAmount": 30000,
        "items": [{"name": "Nasi Goreng", "quantity": 2, "unitPrice": 15000}],
        "category": "Food",
    }
    payload.update(overrides)
    return payload


class TestExtractionRoute:

    def test_returns_model_json_verbatim(self, client, openai_client):
        body = {"merchant": "Warung", "total_amount": 30000, "items": [{"name": "nasi goreng", "quantity": 2, "price": 15000}]}
        openai_client.chat.completions.create.return_value = completion("```json\n" + json.dumps(body) + "\n```")

        response = client.post("/api/chat/ocr", json={"image": "data:image/jpeg;base64,QUJD"})

        assert response.status_code == 200
        assert response.json() == body

    def test_missing_image(self, client, openai_client):
        response = client.post("/api/chat/ocr", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "Image missing"}
        openai_client.chat.completions.create.assert_not_called()

    def test_unparseable_output(self, client, openai_client):
        openai_client.chat.completions.create.return_value = completion("Tidak bisa membaca struk.")
        response = client.post("/api/chat/ocr", json={"image": "QUJD"})
        assert response.status_code == 500
        assert response.json()["error"] == "Server Error"
        assert response.json()["details"]

    def test_vendor_failure(self, client, openai_client):
        openai_client.chat.completions.create.side_effect = OpenAIError("quota exceeded")
        response = client.post("/api/chat/ocr", json={"image": "QUJD"})
        assert response.status_code == 500
        assert "quota exceeded" in response.json()["details"]


class TestChatRoute:

    def test_reply(self, client, openai_client):
        openai_client.chat.completions.create.return_value = completion("Halo! Saya Strukly AI.")
        response = client.post("/api/chat", json={
            "message": "Halo",
            "history": [{"sender": "user", "text": "a"}, {"sender": "bot", "text": "b"}, {"sender": "user", "text": "c"}],
        })
        assert response.status_code == 200
        assert response.json() == {"response": "Halo! Saya Strukly AI."}
        messages = openai_client.chat.completions.create.call_args.kwargs["messages"]
        assert [m["content"] for m in messages[1:]] == ["b", "c", "Halo"]

    def test_missing_message(self, client):
        response = client.post("/api/chat", json={"history": []})
        assert response.status_code == 400

    def test_vendor_failure_returns_fallback(self, client, openai_client):
        openai_client.chat.completions.create.side_effect = OpenAIError("secret vendor detail")
        response = client.post("/api/chat", json={"message": "Halo"})
        assert response.status_code == 500
        assert response.json() == {"response": "Maaf, saya sedang pusing. Coba lagi nanti ya."}


class TestReceiptRoutes:

    def test_create_get_update_delete(self, client):
        created = client.post("/api/receipts", json=receipt_payload())
        assert created.status_code == 201
        receipt = created.json()
        assert receipt["items"][0]["lineTotal"] == 30000
        receipt_id = receipt["id"]

        fetched = client.get(f"/api/receipts/{receipt_id}", params={"userId": "merchant-1"})
        assert fetched.json()["storeName"] == "Warung Bu Sri"

        updated = client.patch(f"/api/receipts/{receipt_id}", params={"userId": "merchant-1"}, json={"totalAmount": 45000})
        assert updated.status_code == 200
        assert updated.json()["totalAmount"] == 45000

        account = client.get("/api/accounts/merchant-1").json()
        assert account["totalReceipts"] == 1
        assert account["totalRevenue"] == 45000

        deleted = client.delete(f"/api/receipts/{receipt_id}", params={"userId": "merchant-1"})
        assert deleted.status_code == 204
        assert client.get("/api/accounts/merchant-1").json()["totalRevenue"] == 0

    def test_other_owner_sees_not_found(self, client):
        receipt_id = client.post("/api/receipts", json=receipt_payload()).json()["id"]
        assert client.get(f"/api/receipts/{receipt_id}", params={"userId": "merchant-2"}).status_code == 404
        response = client.delete(f"/api/receipts/{receipt_id}", params={"userId": "merchant-2"})
        assert response.status_code == 404
        assert response.json()["retryable"] is False

    def test_invalid_date_rejected(self, client):
        response = client.post("/api/receipts", json=receipt_payload(date="01/03/2025"))
        assert response.status_code == 422

    def test_list_and_search(self, client):
        client.post("/api/receipts", json=receipt_payload(storeName="Kedai Kopi"))
        client.post("/api/receipts", json=receipt_payload(storeName="Warung Soto"))

        listing = client.get("/api/receipts", params={"userId": "merchant-1", "limit": 1}).json()
        assert len(listing["receipts"]) == 1
        assert listing["nextCursor"] == listing["receipts"][0]["id"]

        found = client.get("/api/receipts/search", params={"userId": "merchant-1", "q": "kopi"}).json()
        assert [r["storeName"] for r in found] == ["Kedai Kopi"]

    def test_unknown_account(self, client):
        assert client.get("/api/accounts/nobody").status_code == 404


class TestRevenueRoute:

    def test_explicit_range(self, client):
        client.post("/api/receipts", json=receipt_payload(date="2025-03-01", totalAmount=50000, category="Food"))
        client.post("/api/receipts", json=receipt_payload(date="2025-03-01", totalAmount=30000, category="Drink"))
        client.post("/api/receipts", json=receipt_payload(date="2025-03-02", totalAmount=20000, category=None))
        client.post("/api/receipts", json=receipt_payload(date="2025-04-01", totalAmount=99000))

        stats = client.get("/api/revenue", params={"userId": "merchant-1", "start": "2025-03-01", "end": "2025-03-31"}).json()

        assert stats == {
            "totalRevenue": 100000,
            "totalReceipts": 3,
            "averageTransaction": 33333,
            "monthlyRevenue": {"2025-03": 100000},
            "dailyRevenue": {"2025-03-01": 80000, "2025-03-02": 20000},
            "categoryBreakdown": {"Food": 50000, "Drink": 30000},
        }

    def test_period_preset(self, client, monkeypatch):
        monkeypatch.setenv("RECEIPT_REFERENCE_DATE", "20250314")
        client.post("/api/receipts", json=receipt_payload(date="2025-03-10", totalAmount=10000))
        client.post("/api/receipts", json=receipt_payload(date="2025-02-28", totalAmount=5000))

        week = client.get("/api/revenue", params={"userId": "merchant-1", "period": "week"}).json()
        year = client.get("/api/revenue", params={"userId": "merchant-1", "period": "year"}).json()

        assert week["totalRevenue"] == 10000
        assert year["totalRevenue"] == 15000

    def test_unknown_period(self, client):
        response = client.get("/api/revenue", params={"userId": "merchant-1", "period": "decade"})
        assert response.status_code == 400


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
