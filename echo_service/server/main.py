"""Main application module for the echo service.

This module builds the FastAPI application that serves the chat request handler.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Awaitable, Callable, Optional

import uvicorn
from fastapi import FastAPI, Request, Response

from ..entities import CORS_HEADERS, HandlerRequest, HealthResponse, ServiceConfig
from ..services import EchoRequestHandler, IRequestHandler
from ..structured_logging import configure_structlog, get_logger

logger = get_logger("MAIN")


def create_lifespan(service_config: ServiceConfig) -> Any:
    """Create a lifespan context manager for the API instance."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Log application startup and shutdown."""
        logger.info("Application starting up...", service=service_config.service_name)
        yield
        logger.info("Application shutting down...", service=service_config.service_name)

    return lifespan


class EchoServiceAPI:
    """FastAPI adapter around the chat request handler."""

    def __init__(
        self, service_config: Optional[ServiceConfig] = None, request_handler: Optional[IRequestHandler] = None
    ) -> None:
        """Initialize the API.

        Args:
            service_config: Optional service configuration. If not provided, will be loaded from environment.
            request_handler: Optional request handler. Defaults to ``EchoRequestHandler``.
        """
        self.service_config = service_config or ServiceConfig()
        self.request_handler = request_handler or EchoRequestHandler()

        logger.info(
            "Booting with config",
            environment=self.service_config.environment,
            service_name=self.service_config.service_name,
            service_version=self.service_config.service_version,
            api_prefix=self.service_config.api_prefix or "/",
        )

        self.app = FastAPI(
            title="Echo Service",
            version=self.service_config.service_version,
            lifespan=create_lifespan(self.service_config),
        )

        self._setup_middleware()
        self._setup_routes()

    @property
    def chat_path(self) -> str:
        """Path of the chat route: the configured prefix, or the root when none is set."""
        return self.service_config.api_prefix or "/"

    @property
    def health_path(self) -> str:
        """Path of the health route, under the same prefix as the chat route."""
        return f"{self.service_config.api_prefix}/health"

    def _setup_middleware(self) -> None:
        @self.app.middleware("http")
        async def apply_cors_headers(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
            # Covers responses the framework generates itself, such as 404 and 405
            response = await call_next(request)
            response.headers.update(CORS_HEADERS)
            return response

    def _setup_routes(self) -> None:
        @self.app.api_route(self.chat_path, methods=["POST", "OPTIONS"])
        async def chat(request: Request) -> Response:
            """Echo the ``message`` of a JSON body; answer CORS preflights with 204."""
            body = await request.body()
            result = self.request_handler.handle(HandlerRequest(method=request.method, body=body))
            return Response(content=result.body, status_code=result.status_code, headers=result.headers)

        @self.app.get(self.health_path)
        async def health() -> HealthResponse:
            return HealthResponse(
                status="healthy",
                service=self.service_config.service_name,
                version=self.service_config.service_version,
            )


def create_app(service_config: Optional[ServiceConfig] = None) -> FastAPI:
    """Return a FastAPI application for the given configuration."""
    return EchoServiceAPI(service_config=service_config).app


def get_app() -> FastAPI:
    """Return a fully configured FastAPI application."""
    # Configure structured logging
    configure_structlog()
    return create_app()


def run() -> None:
    """Serve the application with uvicorn using host and port from the environment."""
    service_config = ServiceConfig()
    uvicorn.run(
        "echo_service.server.main:get_app",
        factory=True,
        host=service_config.host,
        port=service_config.port,
    )


# Public API exports
__all__ = ["get_app", "create_app", "run", "EchoServiceAPI"]
