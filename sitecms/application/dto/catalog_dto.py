"""
Catalog DTO
===========

Pydantic models for categories and products.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreateRequest(BaseModel):
    name: str = Field(..., description="Category name (max 100 characters)")
    description: Optional[str] = None
    display_order: int = Field(0, description="Sort key, lowest first")


class CategoryUpdateRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    display_order: Optional[int] = None


class CatalogReorderRequest(BaseModel):
    ordered_ids: List[str] = Field(..., description="Every category or product id, in the new order")


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    display_order: int
    created_at: datetime
    updated_at: datetime


class ProductCreateRequest(BaseModel):
    name: str = Field(..., description="Product name (max 200 characters)")
    price: float = Field(..., description="Unit price in euros, greater than 0")
    description: Optional[str] = None
    image_url: Optional[str] = None
    display_order: int = 0
    category_ids: List[str] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Lavender soap",
                "price": 6.5,
                "description": "Hand-made with organic lavender",
                "image_url": "/api/v1/public/product-images/3f2a.png",
                "display_order": 1,
                "category_ids": ["5b0f7c1e-2b61-4d8c-9d55-0d4b3c3f6a11"],
            }
        }
    )


class ProductUpdateRequest(BaseModel):
    name: Optional[str] = None
    price: Optional[float] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    display_order: Optional[int] = None
    category_ids: Optional[List[str]] = None


class ProductResponse(BaseModel):
    id: str
    name: str
    price: float
    description: Optional[str] = None
    image_url: Optional[str] = None
    display_order: int
    category_ids: List[str]
    created_at: datetime
    updated_at: datetime
