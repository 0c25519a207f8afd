import json

import pytest
from fastapi.testclient import TestClient

from app.core.config import settings
from app.main import app
from app.services.notification_service import get_notifier


@pytest.fixture
def users_file(tmp_path, monkeypatch, notifier):
    path = tmp_path / "data" / "users.json"
    monkeypatch.setattr(settings, "STORE_BACKEND", "json")
    monkeypatch.setattr(settings, "USERS_FILE", str(path))
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield path
    app.dependency_overrides.clear()


def test_first_boot_creates_document_and_persists_changes(users_file, juan):
    assert not users_file.exists()

    with TestClient(app) as client:
        assert json.loads(users_file.read_text(encoding="utf-8")) == []

        created = client.post("/usuarios", json=juan).json()
        stored = users_file.read_text(encoding="utf-8")
        assert json.loads(stored) == [created]
        assert '\n  {\n    "id": ' in stored
        assert "Juan Pérez" in stored

        client.put(f"/usuarios/{created['id']}", json={"pais": "Perú"})
        assert json.loads(users_file.read_text(encoding="utf-8"))[0]["pais"] == "Perú"

        assert client.delete(f"/usuarios/{created['id']}").status_code == 204
        assert json.loads(users_file.read_text(encoding="utf-8")) == []


def test_existing_document_survives_restart(users_file, juan):
    with TestClient(app) as client:
        created = client.post("/usuarios", json=juan).json()

    with TestClient(app) as client:
        assert client.get("/usuarios").json() == [created]


def test_document_with_non_object_entries(users_file):
    users_file.parent.mkdir(parents=True)
    users_file.write_text("[1]", encoding="utf-8")

    with TestClient(app) as client:
        listed = client.get("/usuarios")
        assert listed.status_code == 500
        assert listed.json() == {"error": "Error al leer el archivo"}

        updated = client.put("/usuarios/1", json={"nombre": "Ana"})
        assert updated.status_code == 500
        assert updated.json() == {"error": "Error al procesar el archivo"}

        assert client.get("/health").status_code == 503
