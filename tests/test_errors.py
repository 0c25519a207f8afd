from app.core.exceptions import NotFoundError, StorageError
from app.main import app


def test_404_not_found(client):
    response = client.get("/non-existent-route")
    assert response.status_code == 404
    data = response.json()
    assert data == {"error": "Not Found"}


def test_405_method_not_allowed(client):
    response = client.patch("/usuarios/1", json={})
    assert response.status_code == 405
    assert "error" in response.json()


def test_validation_error_structure(client):
    response = client.post("/usuarios", json={"nombre": "Ana", "edad": "treinta"})
    assert response.status_code == 422
    data = response.json()
    assert data["error"] == "Input validation failed"
    assert len(data["details"]) > 0


def test_non_integer_id_is_a_validation_error(client):
    response = client.delete("/usuarios/abc")
    assert response.status_code == 422
    assert data_error(response) == "Input validation failed"


def test_custom_exception(client):
    @app.get("/test-custom-error")
    def trigger_custom_error():
        raise NotFoundError(message="Item not found")

    response = client.get("/test-custom-error")
    assert response.status_code == 404
    assert response.json() == {"error": "Item not found"}


def test_storage_error_hides_details(client):
    @app.get("/test-storage-error")
    def trigger_storage_error():
        raise StorageError(details="Cannot read /var/data/users.json: permission denied")

    response = client.get("/test-storage-error")
    assert response.status_code == 500
    assert response.json() == {"error": "Error al procesar el archivo"}


def data_error(response):
    return response.json()["error"]
