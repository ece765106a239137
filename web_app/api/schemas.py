"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from datetime import datetime


class ShortenRequest(BaseModel):
    """Request to shorten a payload."""

    content: str = Field(..., description="The text to store")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"content": "import { Effect } from \"effect\"\n\nEffect.runSync(Effect.succeed(1))"}
            ]
        }
    }


class ShortenResponse(BaseModel):
    """Response after shortening a payload."""

    id: str = Field(..., description="Content-derived identifier")
    url: str = Field(..., description="Share link for the payload")
    size: int = Field(..., description="Stored payload size in bytes")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "id": "3f1b2a9c0d4e",
                    "url": "http://localhost:9200/s/3f1b2a9c0d4e",
                    "size": 56,
                }
            ]
        }
    }


class RetrieveResponse(BaseModel):
    """Response with a stored payload."""

    id: str
    content: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    store: str = Field(..., description="Backing store status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    detail: str = Field(..., description="Error message")
