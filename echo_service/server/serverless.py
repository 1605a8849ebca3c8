"""Serverless function entry point (Netlify Functions / AWS Lambda proxy events)."""

import base64
from typing import Any, Optional, Union

from ..entities import HandlerRequest, HandlerResponse
from ..services import EchoRequestHandler, IRequestHandler, json_response
from ..structured_logging import CorrelationContext, configure_structlog
from .error_handlers import ErrorHandler

configure_structlog()


def event_to_request(event: dict[str, Any]) -> HandlerRequest:
    """Translate an API-gateway style event into a handler request.

    Raises:
        binascii.Error: When a body flagged as base64 does not decode.
    """
    http_context = (event.get("requestContext") or {}).get("http") or {}
    method = event.get("httpMethod") or http_context.get("method") or "POST"

    body: Union[bytes, str] = event.get("body") or ""
    if event.get("isBase64Encoded") and body:
        body = base64.b64decode(body, validate=True)

    return HandlerRequest(method=method, body=body)


def response_to_result(response: HandlerResponse) -> dict[str, Any]:
    return {
        "statusCode": response.status_code,
        "headers": dict(response.headers),
        "body": response.body,
    }


def handler(
    event: dict[str, Any], context: Any = None, request_handler: Optional[IRequestHandler] = None
) -> dict[str, Any]:
    """Function entry point: run one event through the chat request handler."""
    request_handler = request_handler or EchoRequestHandler()

    with CorrelationContext() as correlation_id:
        try:
            request = event_to_request(event)
        except Exception as err:  # noqa: BLE001
            status_code, error_response = ErrorHandler.handle_unexpected_error(
                err, "serverless event adaptation", correlation_id
            )
            return response_to_result(json_response(status_code, error_response))

    return response_to_result(request_handler.handle(request))
