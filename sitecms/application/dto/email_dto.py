"""
Email DTO
=========

Pydantic models for SMTP configuration, templates, placeholders and email logs.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SmtpSettingsRequest(BaseModel):
    host: str
    port: int = 587
    username: str
    password: Optional[str] = Field(None, description="Leave empty or masked to keep the stored password")
    encryption: str = Field("tls", description="none, ssl or tls")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "host": "smtp.example.com",
                "port": 587,
                "username": "shop@example.com",
                "password": "app-password",
                "encryption": "tls",
            }
        }
    )


class SmtpSettingsResponse(BaseModel):
    host: str
    port: int
    username: str
    password: str = Field(..., description="Masked when a password is stored")
    encryption: str
    is_configured: bool


class EmailSettingsRequest(BaseModel):
    administrator_email: str


class EmailSettingsResponse(BaseModel):
    administrator_email: Optional[str] = None


class EmailTemplateUpdateRequest(BaseModel):
    subject: Optional[str] = None
    body: Optional[str] = None
    enabled: Optional[bool] = None


class EmailTemplateResponse(BaseModel):
    type: str
    subject: str
    body: str
    enabled: bool


class PlaceholderResponse(BaseModel):
    syntax: str = Field(..., description="Placeholder as written in templates, e.g. {{order_id}}")
    description: str


class SendResultResponse(BaseModel):
    success: bool
    error_message: Optional[str] = None


class EmailLogResponse(BaseModel):
    id: str
    reference_id: str = Field(..., description="Order or appointment ID")
    template_type: str
    recipient: str
    subject: str
    status: str = Field(..., description="sent or failed")
    error_message: Optional[str] = None
    sent_at: datetime
