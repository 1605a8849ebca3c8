"""Data entities for the echo service."""

from .config import ServiceConfig
from .errors import (
    INTERNAL_ERROR_MESSAGE,
    INVALID_INPUT_MESSAGE,
    EchoServiceError,
    InternalServiceError,
    InvalidInputError,
)
from .headers import CONTENT_TYPE_JSON, CORS_HEADERS, HEADER_CONTENT_TYPE
from .http import HandlerRequest, HandlerResponse
from .schemas import ChatRequest, ChatResponse, ErrorResponse, HealthResponse

__all__ = [
    "ServiceConfig",
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "HealthResponse",
    "HandlerRequest",
    "HandlerResponse",
    "EchoServiceError",
    "InvalidInputError",
    "InternalServiceError",
    "INVALID_INPUT_MESSAGE",
    "INTERNAL_ERROR_MESSAGE",
    "CORS_HEADERS",
    "CONTENT_TYPE_JSON",
    "HEADER_CONTENT_TYPE",
]
