"""Tests for the FastAPI adapter."""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from echo_service.entities import CORS_HEADERS, INTERNAL_ERROR_MESSAGE, INVALID_INPUT_MESSAGE, ServiceConfig
from echo_service.server.main import EchoServiceAPI, create_app, get_app


def assert_cors_headers(resp: Any) -> None:
    for name, value in CORS_HEADERS.items():
        assert resp.headers[name] == value


def test_chat_endpoint(client: TestClient) -> None:
    resp = client.post("/", json={"message": "Hello"})
    assert resp.status_code == 200
    assert resp.json() == {"botMessage": "Echo: Hello"}
    assert_cors_headers(resp)


def test_chat_endpoint_keeps_whitespace(client: TestClient) -> None:
    resp = client.post("/", json={"message": "  Hello  "})
    assert resp.status_code == 200
    assert resp.json() == {"botMessage": "Echo:   Hello  "}


@pytest.mark.parametrize("payload", [{}, {"message": 123}, {"message": ""}, {"message": "   "}])
def test_chat_endpoint_rejects_invalid_message(client: TestClient, payload: dict[str, Any]) -> None:
    resp = client.post("/", json=payload)
    assert resp.status_code == 400
    assert resp.json() == {"error": INVALID_INPUT_MESSAGE}
    assert_cors_headers(resp)


def test_chat_endpoint_malformed_json(client: TestClient) -> None:
    resp = client.post("/", content=b'{"message": ', headers={"Content-Type": "application/json"})
    assert resp.status_code == 500
    assert resp.json() == {"error": INTERNAL_ERROR_MESSAGE}
    assert_cors_headers(resp)


def test_preflight(client: TestClient) -> None:
    resp = client.options(
        "/",
        headers={
            "Origin": "https://frontend.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        },
    )
    assert resp.status_code == 204
    assert resp.content == b""
    assert_cors_headers(resp)


def test_framework_errors_carry_cors_headers(client: TestClient) -> None:
    not_found = client.post("/missing", json={"message": "Hello"})
    assert not_found.status_code == 404
    assert_cors_headers(not_found)

    not_allowed = client.put("/", json={"message": "Hello"})
    assert not_allowed.status_code == 405
    assert_cors_headers(not_allowed)


def test_repeated_requests_are_identical(client: TestClient) -> None:
    first = client.post("/", json={"message": "again"})
    second = client.post("/", json={"message": "again"})
    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()


def test_health_endpoint(client: TestClient) -> None:
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy", "service": "echo-service-test", "version": "0.0.1"}
    assert_cors_headers(resp)


def test_prefixed_routes(prefixed_service_config: ServiceConfig) -> None:
    api = EchoServiceAPI(service_config=prefixed_service_config)
    with TestClient(api.app) as client:
        resp = client.post("/api/chat", json={"message": "Hello"})
        assert resp.status_code == 200
        assert resp.json() == {"botMessage": "Echo: Hello"}

        assert client.options("/api/chat").status_code == 204
        assert client.get("/api/chat/health").json()["status"] == "healthy"
        assert client.post("/", json={"message": "Hello"}).status_code == 404


def test_injected_request_handler(test_service_config: ServiceConfig) -> None:
    from echo_service.entities import HandlerResponse

    class StaticHandler:
        def handle(self, request):
            return HandlerResponse(status_code=200, headers={"Content-Type": "application/json"}, body='{"ok":true}')

    api = EchoServiceAPI(service_config=test_service_config, request_handler=StaticHandler())
    with TestClient(api.app) as client:
        resp = client.post("/", json={"message": "ignored"})
        assert resp.json() == {"ok": True}
        assert_cors_headers(resp)


def test_create_app_uses_given_config(prefixed_service_config: ServiceConfig) -> None:
    app = create_app(prefixed_service_config)
    paths = {route.path for route in app.routes}
    assert "/api/chat" in paths
    assert "/api/chat/health" in paths


def test_get_app_reads_environment(monkeypatch: Any) -> None:
    monkeypatch.setenv("API_PREFIX", "/api/chat/")
    monkeypatch.setenv("SERVICE_NAME", "from-env")
    app = get_app()
    with TestClient(app) as client:
        assert client.post("/api/chat", json={"message": "env"}).json() == {"botMessage": "Echo: env"}
        assert client.get("/api/chat/health").json()["service"] == "from-env"


def test_chat_endpoint_echoes_lone_surrogate(client: TestClient) -> None:
    resp = client.post("/", content=b'{"message": "hi \\ud800"}', headers={"Content-Type": "application/json"})
    assert resp.status_code == 200
    assert resp.json() == {"botMessage": "Echo: hi \ud800"}


@pytest.mark.parametrize("body", [b'"Hello"', b"42", b"null", b"true"])
def test_chat_endpoint_scalar_body_is_internal_error(client: TestClient, body: bytes) -> None:
    resp = client.post("/", content=body, headers={"Content-Type": "application/json"})
    assert resp.status_code == 500
    assert resp.json() == {"error": INTERNAL_ERROR_MESSAGE}
    assert_cors_headers(resp)
