import asyncio
import json

import httpx

from app.services.notification_service import NotificationService


def run(coro):
    return asyncio.run(coro)


def test_simulated_when_not_configured():
    service = NotificationService(api_url="")

    result = run(service.send_welcome_email("juan.perez@example.com"))

    assert service.is_configured() is False
    assert result["success"] is True
    assert result["simulated"] is True


def test_posts_welcome_email_to_provider():
    requests = []

    def handler(request: httpx.Request):
        requests.append(request)
        return httpx.Response(202, json={"id": "msg-123"})

    service = NotificationService(
        api_url="https://mail.example.com/send",
        api_key="secret",
        sender="hola@example.com",
        transport=httpx.MockTransport(handler)
    )

    result = run(service.send_welcome_email("juan.perez@example.com"))

    assert result == {"success": True, "message_id": "msg-123"}
    assert len(requests) == 1
    sent = json.loads(requests[0].content)
    assert sent["to"] == "juan.perez@example.com"
    assert sent["from"] == "hola@example.com"
    assert "juan.perez@example.com" in sent["text"]
    assert requests[0].headers["Authorization"] == "Bearer secret"


def test_provider_error_is_reported_not_raised():
    service = NotificationService(
        api_url="https://mail.example.com/send",
        api_key="secret",
        transport=httpx.MockTransport(lambda request: httpx.Response(503, text="unavailable"))
    )

    result = run(service.send_welcome_email("juan.perez@example.com"))

    assert result["success"] is False
    assert "503" in result["error"]


def test_timeout_is_reported_not_raised():
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    service = NotificationService(
        api_url="https://mail.example.com/send",
        transport=httpx.MockTransport(handler)
    )

    result = run(service.send_welcome_email("juan.perez@example.com"))

    assert result == {"success": False, "error": "Email API timeout"}
