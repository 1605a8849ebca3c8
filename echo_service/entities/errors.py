"""Error types surfaced by the chat endpoint."""

INVALID_INPUT_MESSAGE = "Message parameter is missing or invalid."
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred."


class EchoServiceError(Exception):
    """Base class for errors that map onto an HTTP error response."""

    status_code = 500
    public_message = INTERNAL_ERROR_MESSAGE


class InvalidInputError(EchoServiceError):
    """The request carried a missing, non-string or blank message."""

    status_code = 400
    public_message = INVALID_INPUT_MESSAGE


class InternalServiceError(EchoServiceError):
    """Anything else that went wrong while handling a request."""

    status_code = 500
    public_message = INTERNAL_ERROR_MESSAGE
