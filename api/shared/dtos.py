"""Shared DTOs for the chat API."""
from pydantic import BaseModel, Field


class BaseDTO(BaseModel):
    """Base DTO with common configuration."""

    class Config:
        from_attributes = True


class StatusResponse(BaseDTO):
    """Health check response DTO."""
    status: str = Field(description="Service status")


class MessageResponse(BaseDTO):
    """Plain confirmation message."""
    message: str = Field(description="Confirmation message")

