"""
Order DTO
=========

Pydantic models for checkout and order management.
"""
from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class OrderItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(1, description="Quantity between 1 and 99")


class OrderCreateRequest(BaseModel):
    """DTO for the public checkout."""
    first_name: str
    last_name: str
    email: str
    phone: str = Field(..., description="French phone number")
    items: List[OrderItemRequest]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "first_name": "Marie",
                "last_name": "Dupont",
                "email": "marie.dupont@example.com",
                "phone": "06 12 34 56 78",
                "items": [{"product_id": "5b0f7c1e-2b61-4d8c-9d55-0d4b3c3f6a11", "quantity": 2}],
            }
        }
    )


class OrderCreatedResponse(BaseModel):
    id: str


class OrderItemResponse(BaseModel):
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    total: float


class OrderResponse(BaseModel):
    id: str
    customer_first_name: str
    customer_last_name: str
    customer_email: str
    customer_phone: str
    items: List[OrderItemResponse]
    total_price: float
    status: str
    created_at: datetime
    updated_at: datetime


class OrderStatusUpdateRequest(BaseModel):
    status: str = Field(..., description="NEW, CONFIRMED or COMPLETED")
