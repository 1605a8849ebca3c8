"""Framework-neutral request and response shapes passed to and from the request handler."""

from dataclasses import dataclass, field
from typing import Union


@dataclass
class HandlerRequest:
    """An inbound HTTP request as seen by the request handler.

    Attributes:
        method: HTTP method, e.g. ``POST`` or ``OPTIONS``.
        body: Raw request body. Text bodies are accepted as-is.
    """

    method: str
    body: Union[bytes, str] = b""


@dataclass
class HandlerResponse:
    """The response produced for a single request."""

    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""
