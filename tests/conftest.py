import os

# Settings are read at import time
os.environ.setdefault("STORE_BACKEND", "memory")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.pop("EMAIL_API_URL", None)

import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.services.notification_service import get_notifier


class RecordingNotifier:
    """Stands in for the email provider and remembers every recipient."""

    def __init__(self, fail: bool = False):
        self.sent = []
        self.fail = fail

    async def send_welcome_email(self, email: str):
        self.sent.append(email)
        if self.fail:
            raise RuntimeError("email provider unreachable")
        return {"success": True, "message_id": f"test-{len(self.sent)}"}


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def client(notifier):
    app.dependency_overrides[get_notifier] = lambda: notifier
    # Entering the client runs the lifespan, which builds a fresh in-memory store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def juan():
    return {
        "nombre": "Juan Pérez",
        "correo": "juan.perez@example.com",
        "contraseña": "Password1!",
        "edad": 30,
        "pais": "Chile",
        "telefono": "+56-123-456-7890"
    }
