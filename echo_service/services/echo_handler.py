"""Chat request handling: validate one message and echo it back with a fixed prefix."""

import json
from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from pydantic import BaseModel, ValidationError
from structlog.stdlib import BoundLogger

from ..entities import (
    CONTENT_TYPE_JSON,
    CORS_HEADERS,
    HEADER_CONTENT_TYPE,
    ChatRequest,
    ChatResponse,
    HandlerRequest,
    HandlerResponse,
    InvalidInputError,
)
from ..server.error_handlers import ErrorHandler
from ..structured_logging import CorrelationContext, get_logger

ECHO_PREFIX = "Echo: "
PREFLIGHT_METHOD = "OPTIONS"


def build_bot_message(message: str) -> str:
    """Prefix the user's message, exactly as received."""
    return f"{ECHO_PREFIX}{message}"


def parse_body(body: Union[bytes, str]) -> Any:
    """Decode a JSON request body. An empty body parses as an empty object.

    Only objects and arrays are accepted at the top level; scalars raise ``ValueError``.
    """
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    if not body.strip():
        return {}
    payload = json.loads(body)
    if not isinstance(payload, (dict, list)):
        raise ValueError(f"JSON body must be an object or an array, got {type(payload).__name__}")
    return payload


def json_response(status_code: int, model: BaseModel) -> HandlerResponse:
    """Serialize a model as a JSON response carrying the CORS headers.

    Non-ASCII characters are escaped, so lone surrogates in an echoed message still serialize.
    """
    headers = dict(CORS_HEADERS)
    headers[HEADER_CONTENT_TYPE] = CONTENT_TYPE_JSON
    return HandlerResponse(
        status_code=status_code,
        headers=headers,
        body=json.dumps(model.model_dump(by_alias=True), separators=(",", ":")),
    )


class IRequestHandler(ABC):
    """Interface for handling a single chat request."""

    @abstractmethod
    def handle(self, request: HandlerRequest) -> HandlerResponse:
        """Produce exactly one response for the request.

        Args:
            request: The inbound request, already adapted from the hosting environment

        Returns:
            The response to send back, CORS headers included
        """
        pass


class EchoRequestHandler(IRequestHandler):
    """Stateless handler that echoes the ``message`` field of a JSON body."""

    def __init__(self, logger: Optional[BoundLogger] = None):
        """Initialize the handler.

        Args:
            logger: Logger for diagnostic output. Defaults to the module logger.
        """
        self.logger = logger or get_logger("ECHO_HANDLER")

    def handle(self, request: HandlerRequest) -> HandlerResponse:
        with CorrelationContext() as correlation_id:
            if request.method.upper() == PREFLIGHT_METHOD:
                return HandlerResponse(status_code=204, headers=dict(CORS_HEADERS))

            try:
                chat_request = self._parse_chat_request(request.body)
                chat_response = ChatResponse(bot_message=build_bot_message(chat_request.message))
                self._log_diagnostic("Sending bot message", bot_message=chat_response.bot_message)
                return json_response(200, chat_response)
            except InvalidInputError as err:
                status_code, error_response = ErrorHandler.handle_validation_error(err, correlation_id)
                return json_response(status_code, error_response)
            except Exception as err:  # noqa: BLE001
                status_code, error_response = ErrorHandler.handle_unexpected_error(
                    err, "chat request handling", correlation_id
                )
                return json_response(status_code, error_response)

    def _parse_chat_request(self, body: Union[bytes, str]) -> ChatRequest:
        payload = parse_body(body)
        self._log_diagnostic("Received request body", body=payload)
        try:
            return ChatRequest.model_validate(payload)
        except ValidationError as err:
            raise InvalidInputError(str(err)) from err

    def _log_diagnostic(self, event: str, **fields: Any) -> None:
        try:
            self.logger.info(event, **fields)
        except Exception:  # noqa: BLE001
            # A failing log sink never changes the response
            pass
