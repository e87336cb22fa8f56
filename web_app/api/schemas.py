"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class EncodeRequest(BaseModel):
    """Request to shorten a URL."""

    url: Optional[str] = Field(None, description="The destination to shorten; https:// is assumed when no scheme is given")
    slug: Optional[str] = Field(None, description="Optional custom slug (letters, numbers, hyphens, underscores)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "url": "https://example.com/very/long/path/to/resource",
                    "slug": None
                },
                {
                    "url": "github.com/user/repo",
                    "slug": "myrepo"
                }
            ]
        }
    }


class EncodeResponse(BaseModel):
    """Response after shortening a URL."""

    slug: str = Field(..., description="The allocated slug")
    short_url: str = Field(..., description="The complete short URL")
    destination: str = Field(..., description="The normalized destination")
    created_at: datetime = Field(..., description="Creation timestamp")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "slug": "aZ3kQ9x",
                    "short_url": "https://short.link/aZ3kQ9x",
                    "destination": "https://example.com/very/long/path",
                    "created_at": "2024-01-01T12:00:00Z"
                }
            ]
        }
    }


class DecodeResponse(BaseModel):
    """Response with short link details."""

    slug: str
    destination: str
    custom: bool
    created_at: datetime


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status")
    database: str = Field(..., description="Database status")
    cache: str = Field(..., description="Cache status")
    timestamp: datetime = Field(..., description="Check timestamp")


class ErrorResponse(BaseModel):
    """Error response."""

    error: str = Field(..., description="Error summary")
    messages: List[str] = Field(default_factory=list, description="Individual error messages")
