import pytest

from spgen.charsets import SYMBOLS
from spgen.config import ServiceConfig
from spgen.entropy import STRENGTH_LABELS, calculate_entropy
from spgen.server import PasswordService, create_app

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


def test_generate_defaults(client):
    response = client.post("/api/v1/generate", json={})
    assert response.status_code == 200
    data = response.get_json()
    assert set(data) == {"password", "entropy", "strength", "length"}
    assert data["length"] == 16
    assert len(data["password"]) == 16
    assert data["strength"] in STRENGTH_LABELS
    assert data["entropy"] == pytest.approx(calculate_entropy(data["password"]))


def test_generate_respects_flags(client):
    response = client.post(
        "/api/v1/generate",
        json={"length": 40, "includeSymbols": False, "includeUppercase": False},
    )
    assert response.status_code == 200
    password = response.get_json()["password"]
    assert len(password) == 40
    assert not any(c in SYMBOLS for c in password)
    assert not any(c.isupper() for c in password)


def test_generate_non_boolean_flag_uses_default(client):
    response = client.post(
        "/api/v1/generate", json={"length": 20, "includeDigits": "no"}
    )
    assert response.status_code == 200
    assert any(c.isdigit() for c in response.get_json()["password"])


def test_generate_without_classes_is_rejected(client):
    response = client.post(
        "/api/v1/generate",
        json={
            "includeUppercase": False,
            "includeLowercase": False,
            "includeDigits": False,
            "includeSymbols": False,
        },
    )
    assert response.status_code == 400
    assert "character type" in response.get_json()["error"]


def test_generate_length_too_short_for_classes(client):
    response = client.post("/api/v1/generate", json={"length": 2})
    assert response.status_code == 400
    assert "too short" in response.get_json()["error"]


@pytest.mark.parametrize("length", ["16", 16.5, True, 0, -1, 129])
def test_generate_invalid_length(client, length):
    response = client.post("/api/v1/generate", json={"length": length})
    assert response.status_code == 400
    assert "length" in response.get_json()["error"]


def test_generate_max_length_from_service_config():
    client = create_app(ServiceConfig(max_length=32)).test_client()
    assert client.post("/api/v1/generate", json={"length": 32}).status_code == 200
    assert client.post("/api/v1/generate", json={"length": 33}).status_code == 400


def test_generate_requires_body(client):
    response = client.post("/api/v1/generate")
    assert response.status_code == 400
    assert response.get_json()["error"] == "No body provided"


def test_generate_rejects_non_object_body(client):
    response = client.post("/api/v1/generate", json=[1, 2, 3])
    assert response.status_code == 400


def test_generate_wrong_method(client):
    response = client.get("/api/v1/generate")
    assert response.status_code == 405
    assert response.get_json()["error"] == "Method Not Allowed"


def test_unknown_path(client):
    response = client.get("/nope")
    assert response.status_code == 404
    assert response.get_json()["error"] == "Not Found"


def test_preflight_and_cors_headers(client):
    response = client.options("/api/v1/generate")
    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert response.headers["Access-Control-Allow-Methods"] == "GET, POST, OPTIONS"
    assert response.headers["Access-Control-Allow-Headers"] == "Content-Type"


def test_cors_headers_on_errors(client):
    response = client.get("/nope")
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test_index(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.get_json()["name"] == "spgen"


def test_qr_returns_png(client):
    response = client.post("/api/v1/qr", json={"password": "aB3!xY7?"})
    assert response.status_code == 200
    assert response.mimetype == "image/png"
    assert response.data.startswith(PNG_SIGNATURE)


@pytest.mark.parametrize("body", [{}, {"password": ""}, {"password": 42}])
def test_qr_requires_password(client, body):
    response = client.post("/api/v1/qr", json=body)
    assert response.status_code == 400
    assert response.get_json()["error"] == "Password is required"


def test_qr_export_failure_is_server_error(client):
    response = client.post("/api/v1/qr", json={"password": "x" * 3000})
    assert response.status_code == 500
    assert "error" in response.get_json()


def test_password_service_uses_given_config():
    config = ServiceConfig(host="127.0.0.1", port=8123)
    service = PasswordService(config)
    assert service.config is config
    assert service.app.config["SPGEN_SERVICE"] is config
