"""
Auth DTO
========

Pydantic models for the admin session and client log endpoints.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """DTO for the admin login."""
    password: str = Field(..., description="Administrator password")

    model_config = ConfigDict(json_schema_extra={"example": {"password": "change-me"}})


class SessionResponse(BaseModel):
    authenticated: bool = Field(..., description="Whether the caller holds a valid admin session")


class ClientLogRequest(BaseModel):
    """DTO for a log entry sent by the browser."""
    level: str = Field("info", description="debug, info, warn/warning or error")
    message: str = Field(..., description="Log message")
    metadata: Optional[Dict[str, Any]] = Field(None, description="Free-form context")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "level": "error",
                "message": "Checkout form failed to submit",
                "metadata": {"page": "/cart"},
            }
        }
    )


class StatusResponse(BaseModel):
    """Generic acknowledgement."""
    status: str
    message: Optional[str] = None
