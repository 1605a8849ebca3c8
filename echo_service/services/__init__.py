"""Application services for handling chat requests."""

from .echo_handler import ECHO_PREFIX, EchoRequestHandler, IRequestHandler, build_bot_message, json_response

__all__ = [
    "ECHO_PREFIX",
    "EchoRequestHandler",
    "IRequestHandler",
    "build_bot_message",
    "json_response",
]
