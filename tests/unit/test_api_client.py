import json

import httpx
import pytest

from strukly.api.client import StruklyApiClient
from strukly.exceptions import AssistantError, ExtractionError
from strukly.models import ChatTurn


def client_for(handler):
    return StruklyApiClient("http://strukly.test/", transport=httpx.MockTransport(handler))


def test_detect_posts_data_url():
    seen = {}

    def handler(request):
        seen['path'] = request.url.path
        seen['body'] = json.loads(request.content)
        return httpx.Response(200, json={"merchant": "Warung", "items": [{"name": "kopi", "quantity": 1, "price": 5000}]})

    result = client_for(handler).detect(b"abc", "image/png")

    assert seen['path'] == "/api/chat/ocr"
    assert seen['body'] == {"image": "data:image/png;base64,YWJj"}
    assert result.merchant == "Warung"
    assert result.items[0].unit_price == 5000


def test_detect_non_2xx_raises():
    client = client_for(lambda request: httpx.Response(500, json={"error": "Server Error", "details": "boom"}))
    with pytest.raises(ExtractionError) as exc:
        client.detect(b"abc")
    assert "boom" in exc.value.details


def test_detect_transport_error_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ExtractionError):
        client_for(handler).detect(b"abc")


def test_chat_returns_reply_and_sends_history():
    seen = {}

    def handler(request):
        seen['body'] = json.loads(request.content)
        return httpx.Response(200, json={"response": "Halo!"})

    reply = client_for(handler).chat("Hai", [ChatTurn(sender="user", text="tes")])
    assert reply == "Halo!"
    assert seen['body'] == {"message": "Hai", "history": [{"sender": "user", "text": "tes"}]}


def test_chat_server_fallback_is_displayed():
    client = client_for(lambda request: httpx.Response(500, json={"response": "Maaf, saya sedang pusing. Coba lagi nanti ya."}))
    assert client.chat("Hai", []) == "Maaf, saya sedang pusing. Coba lagi nanti ya."


def test_chat_without_text_raises():
    client = client_for(lambda request: httpx.Response(400, json={"error": "Message required"}))
    with pytest.raises(AssistantError):
        client.chat("", [])


def test_detect_non_finite_price_raises():
    client = client_for(lambda request: httpx.Response(200, json={"merchant": "Warung", "items": [{"name": "kopi", "price": "NaN"}]}))
    with pytest.raises(ExtractionError):
        client.detect(b"abc")
