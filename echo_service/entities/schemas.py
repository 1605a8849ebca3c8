"""Request and response schemas for the chat endpoint."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChatRequest(BaseModel):
    """Schema for an inbound chat message."""

    model_config = ConfigDict(strict=True)

    message: str

    @field_validator("message")
    @classmethod
    def message_must_not_be_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message must contain at least one non-whitespace character")
        # The untrimmed value is kept
        return value


class ChatResponse(BaseModel):
    """Schema for the echoed reply."""

    model_config = ConfigDict(populate_by_name=True)

    bot_message: str = Field(alias="botMessage")


class ErrorResponse(BaseModel):
    """Schema for error bodies."""

    error: str


class HealthResponse(BaseModel):
    """Schema for the health endpoint."""

    status: str
    service: str
    version: str
