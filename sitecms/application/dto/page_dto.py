"""
Page DTO
========

Pydantic models for the menu and page content endpoints.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class MenuItemCreateRequest(BaseModel):
    text: str = Field(..., description="Menu label (1-50 characters)")
    url: Optional[str] = Field(None, description="Internal path or http(s) URL; derived from the text when omitted")

    model_config = ConfigDict(json_schema_extra={"example": {"text": "About us", "url": "/about-us"}})


class MenuItemUpdateRequest(BaseModel):
    text: Optional[str] = None
    url: Optional[str] = None


class MenuReorderRequest(BaseModel):
    ordered_ids: List[str] = Field(..., description="Every menu item id, in the new order")


class MenuItemResponse(BaseModel):
    id: str
    text: str
    url: str
    position: int
    created_at: datetime
    updated_at: datetime


class PageContentRequest(BaseModel):
    content: str = Field(..., description="Page body HTML")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "content": '<h2>Welcome</h2><div class="callout-block" data-variant="tip">'
                           "<p>Open every day</p></div>",
            }
        }
    )


class PageContentResponse(BaseModel):
    id: str
    menu_item_id: str
    content: str
    blocks: List[Dict[str, Any]] = Field(default_factory=list, description="Custom blocks found in the content")
    created_at: datetime
    updated_at: datetime


class PublicPageResponse(BaseModel):
    menu_item_id: str
    title: str
    url: str
    html: str
    blocks: List[Dict[str, Any]]
    updated_at: Optional[datetime] = None


class ImageUploadResponse(BaseModel):
    url: str = Field(..., description="Public URL of the stored image")
