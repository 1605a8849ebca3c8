"""Centralized error handling for the echo service."""

from typing import Any

from ..entities import EchoServiceError, ErrorResponse, InternalServiceError, InvalidInputError
from ..structured_logging import get_logger

logger = get_logger("ERROR_HANDLERS")


class ErrorHandler:
    """Convert failures into a status code and a client-safe error body, logging the cause."""

    @staticmethod
    def handle_validation_error(
        err: InvalidInputError, correlation_id: str, **context: Any
    ) -> tuple[int, ErrorResponse]:
        """Handle invalid client input with consistent logging."""
        logger.error(
            "Validation error",
            correlation_id=correlation_id,
            error_type=type(err).__name__,
            error=str(err),
            **context,
        )
        return err.status_code, ErrorResponse(error=err.public_message)

    @staticmethod
    def handle_unexpected_error(
        err: Exception, operation: str, correlation_id: str, **context: Any
    ) -> tuple[int, ErrorResponse]:
        """Convert unexpected errors into a generic response; the cause is only logged."""
        logger.error(
            f"Unexpected error during {operation}",
            correlation_id=correlation_id,
            error_type=type(err).__name__,
            error=str(err),
            exc_info=err,
            **context,
        )
        fallback: EchoServiceError = InternalServiceError()
        return fallback.status_code, ErrorResponse(error=fallback.public_message)
