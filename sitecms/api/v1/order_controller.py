"""
Order Controller
================

Admin endpoints for orders. The public checkout lives in the public
controller.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from sitecms.api.v1.dependencies import get_order_service
from sitecms.api.v1.security import require_admin
from sitecms.application.dto.auth_dto import StatusResponse
from sitecms.application.dto.order_dto import OrderItemResponse, OrderResponse, OrderStatusUpdateRequest
from sitecms.application.services.order_service import OrderService
from sitecms.core.errors import NotFoundError
from sitecms.domain.models.order import Order

router = APIRouter(tags=["orders"], dependencies=[Depends(require_admin)])


def order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        customer_first_name=order.customer_first_name,
        customer_last_name=order.customer_last_name,
        customer_email=order.customer_email,
        customer_phone=order.customer_phone,
        items=[
            OrderItemResponse(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                total=item.total,
            )
            for item in order.items
        ],
        total_price=order.total_price,
        status=order.status.value,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


@router.get("", response_model=List[OrderResponse], summary="List orders", description="Orders, newest first.")
async def list_orders(service: OrderService = Depends(get_order_service)) -> List[OrderResponse]:
    return [order_response(order) for order in service.list_orders()]


@router.get("/{order_id}", response_model=OrderResponse, summary="Get an order")
async def get_order(order_id: str, service: OrderService = Depends(get_order_service)) -> OrderResponse:
    try:
        return order_response(service.get_order(order_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put(
    "/{order_id}/status",
    response_model=OrderResponse,
    summary="Change the status of an order",
    description="NEW can move to CONFIRMED or COMPLETED, CONFIRMED to COMPLETED.",
)
async def update_order_status(
    order_id: str,
    request: OrderStatusUpdateRequest,
    service: OrderService = Depends(get_order_service),
) -> OrderResponse:
    try:
        order = service.update_status(order_id, request.status)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return order_response(order)


@router.delete("/{order_id}", response_model=StatusResponse, summary="Delete an order")
async def delete_order(order_id: str, service: OrderService = Depends(get_order_service)) -> StatusResponse:
    try:
        service.delete_order(order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return StatusResponse(status="deleted")
