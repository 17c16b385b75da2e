"""
Settings DTO
============

Pydantic models for website settings, fonts, uploaded assets and social
networks.
"""
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SettingUpdateRequest(BaseModel):
    """DTO for updating one setting. The value type depends on the key."""
    value: Any = Field(..., description="New value (string, boolean or object depending on the key)")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"value": "My Shop"},
                {"value": True},
                {"value": {"light": "#FFFFFF", "dark": "#1A202C"}},
            ]
        }
    )


class SettingResponse(BaseModel):
    key: str
    value: Any
    updated_at: Optional[datetime] = None


class ThemeColorResponse(BaseModel):
    value: str
    display_name: str
    hex_value: str


class FontResponse(BaseModel):
    name: str
    category: str
    weights: List[int]
    family: str = Field(..., description="CSS font-family value")
    google_fonts_url: str


class AssetResponse(BaseModel):
    """DTO for an uploaded icon, logo or loader."""
    key: str
    value: Any = Field(..., description="Stored setting value (url, metadata and loader type)")


class SocialNetworkItem(BaseModel):
    type: str = Field(..., description="instagram, facebook, linkedin, email or phone")
    url: str = Field("", description="Profile URL, mailto: or tel: link")
    label: str = Field(..., description="Displayed label")
    enabled: bool = False

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "instagram",
                "url": "https://instagram.com/myshop",
                "label": "Instagram",
                "enabled": True,
            }
        }
    )


class SocialNetworksUpdateRequest(BaseModel):
    networks: List[SocialNetworkItem]


class SocialNetworkResponse(SocialNetworkItem):
    url_placeholder: Optional[str] = None
