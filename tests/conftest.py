"""Shared test fixtures for the entire test suite."""

import pytest
from fastapi.testclient import TestClient

from echo_service import structured_logging
from echo_service.entities import HandlerRequest, ServiceConfig
from echo_service.server.main import EchoServiceAPI
from echo_service.services import EchoRequestHandler
from echo_service.structured_logging import LoggingContext, configure_structlog


@pytest.fixture(autouse=True)
def reset_correlation_id():
    """Start every test without a correlation ID in context."""
    token = structured_logging._correlation_id.set(None)
    yield
    structured_logging._correlation_id.reset(token)


@pytest.fixture
def json_logging():
    """Configure structlog to render JSON at DEBUG level."""
    configure_structlog(LoggingContext(stream="stdout", logging_level="DEBUG", log_format="json", context="test"))


@pytest.fixture
def test_service_config():
    """Provide a test service configuration."""
    return ServiceConfig(
        environment="development",
        service_name="echo-service-test",
        service_version="0.0.1",
    )


@pytest.fixture
def prefixed_service_config():
    """Provide a configuration that mounts the chat route under /api/chat."""
    return ServiceConfig(
        environment="development",
        service_name="echo-service-test",
        service_version="0.0.1",
        api_prefix="/api/chat",
    )


@pytest.fixture
def echo_handler():
    """Provide a fresh echo request handler."""
    return EchoRequestHandler()


@pytest.fixture
def post_json(echo_handler):
    """Run a JSON body through the handler as a POST request."""

    def _post(body):
        return echo_handler.handle(HandlerRequest(method="POST", body=body))

    return _post


@pytest.fixture
def api(test_service_config):
    """Create an API instance with the test configuration."""
    return EchoServiceAPI(service_config=test_service_config)


@pytest.fixture
def client(api):
    """Provide a test client bound to the API."""
    with TestClient(api.app) as test_client:
        yield test_client
