"""
Public Controller
=================

Unauthenticated endpoints used by the public website: site settings, menu
and pages, the product catalog and checkout, the booking page and the
uploaded files.
"""
from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import FileResponse

from sitecms.api.v1.appointment_controller import appointment_response, required_fields_dto
from sitecms.api.v1.catalog_controller import product_response
from sitecms.api.v1.dependencies import (
    get_appointment_service,
    get_catalog_service,
    get_file_storage,
    get_order_service,
    get_page_service,
    get_settings_service,
)
from sitecms.api.v1.page_controller import menu_item_response
from sitecms.api.v1.settings_controller import social_network_response
from sitecms.application.dto.appointment_dto import (
    AppointmentCreateRequest,
    AppointmentResponse,
    PublicActivityResponse,
    TimeSlotResponse,
)
from sitecms.application.dto.catalog_dto import ProductResponse
from sitecms.application.dto.order_dto import OrderCreateRequest, OrderCreatedResponse
from sitecms.application.dto.page_dto import MenuItemResponse, PublicPageResponse
from sitecms.application.dto.settings_dto import FontResponse, SocialNetworkResponse
from sitecms.application.services.appointment_service import AppointmentService
from sitecms.application.services.catalog_service import CatalogService
from sitecms.application.services.order_service import OrderService
from sitecms.application.services.page_service import PageService
from sitecms.application.services.settings_service import SettingsService
from sitecms.core.errors import NotFoundError
from sitecms.infrastructure.storage.file_storage import FileStorage, StorageFolders
from sitecms.utils.datetime_utils import local

router = APIRouter(tags=["public"])


def serve_file(storage: FileStorage, folder: str, filename: str) -> FileResponse:
    path = storage.path_for(folder, filename)
    if path is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    return FileResponse(path)


# ============================================================================
# Site
# ============================================================================

@router.get("/settings", response_model=Dict[str, Any], summary="Public website settings")
async def get_public_settings(service: SettingsService = Depends(get_settings_service)) -> Dict[str, Any]:
    return service.get_public_settings()


@router.get("/fonts", response_model=List[FontResponse], summary="Available fonts")
async def list_fonts(service: SettingsService = Depends(get_settings_service)) -> List[FontResponse]:
    return [
        FontResponse(
            name=font.name,
            category=font.category,
            weights=list(font.weights),
            family=font.family,
            google_fonts_url=service.google_fonts_url(font),
        )
        for font in service.list_fonts()
    ]


@router.get("/social-networks", response_model=List[SocialNetworkResponse], summary="Enabled social networks")
async def list_social_networks(
    service: SettingsService = Depends(get_settings_service),
) -> List[SocialNetworkResponse]:
    return [social_network_response(network) for network in service.get_social_networks(enabled_only=True)]


@router.get("/menu", response_model=List[MenuItemResponse], summary="Site menu")
async def list_menu(service: PageService = Depends(get_page_service)) -> List[MenuItemResponse]:
    return [menu_item_response(item) for item in service.list_menu_items()]


@router.get(
    "/pages/{menu_item_id}",
    response_model=PublicPageResponse,
    summary="Rendered page",
    description="Sanitized page HTML with its parsed blocks; product lists come with their products.",
)
async def get_public_page(menu_item_id: str, service: PageService = Depends(get_page_service)) -> PublicPageResponse:
    try:
        return PublicPageResponse(**service.get_public_page(menu_item_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# ============================================================================
# Shop
# ============================================================================

@router.get("/products", response_model=List[ProductResponse], summary="Product listing")
async def list_products(
    category_ids: Optional[List[str]] = Query(None, description="Products in any of these categories"),
    sort_by: str = Query("displayOrder", description="displayOrder, name, price or createdAt"),
    max_products: Optional[int] = Query(None, ge=1),
    service: CatalogService = Depends(get_catalog_service),
) -> List[ProductResponse]:
    products = service.list_products(category_ids, sort_by, max_products)
    return [product_response(product) for product in products]


@router.post(
    "/orders",
    response_model=OrderCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Place an order",
    description="Checkout from the cart. Refused while selling is disabled.",
)
async def create_order(
    request: OrderCreateRequest,
    service: OrderService = Depends(get_order_service),
) -> OrderCreatedResponse:
    try:
        order = service.create_order(
            request.first_name,
            request.last_name,
            request.email,
            request.phone,
            [item.model_dump() for item in request.items],
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return OrderCreatedResponse(id=order.id)


# ============================================================================
# Booking
# ============================================================================

@router.get("/activities", response_model=List[PublicActivityResponse], summary="Bookable activities")
async def list_activities(
    service: AppointmentService = Depends(get_appointment_service),
) -> List[PublicActivityResponse]:
    return [
        PublicActivityResponse(
            id=activity.id,
            name=activity.name,
            duration_minutes=activity.duration_minutes,
            color=activity.color,
            price=activity.price,
            description=activity.description,
            required_fields=required_fields_dto(activity.required_fields),
            minimum_booking_notice_hours=activity.minimum_booking_notice_hours,
        )
        for activity in service.list_activities()
    ]


@router.get(
    "/appointments/slots",
    response_model=List[TimeSlotResponse],
    summary="Free time slots for an activity on a day",
)
async def get_available_slots(
    activity_id: str,
    date: date,
    service: AppointmentService = Depends(get_appointment_service),
) -> List[TimeSlotResponse]:
    try:
        slots = service.get_available_slots(activity_id, date)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return [TimeSlotResponse(**slot) for slot in slots]


@router.post(
    "/appointments",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Book an appointment",
    description="""
    Book a pending appointment. The time must fall within the opening hours,
    respect the activity's minimum notice and not overlap another booking.
    A date without offset is read in the site timezone.
    """
)
async def book_appointment(
    request: AppointmentCreateRequest,
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentResponse:
    try:
        appointment = service.book_appointment(
            request.activity_id,
            request.client_info.model_dump(),
            local(request.date_time),
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return appointment_response(appointment)


# ============================================================================
# Files
# ============================================================================

@router.get("/icons/{filename}", response_class=FileResponse, summary="Website icon or logo")
async def get_icon(filename: str, storage: FileStorage = Depends(get_file_storage)) -> FileResponse:
    return serve_file(storage, StorageFolders.ICONS, filename)


@router.get("/loaders/{filename}", response_class=FileResponse, summary="Custom loader")
async def get_loader(filename: str, storage: FileStorage = Depends(get_file_storage)) -> FileResponse:
    return serve_file(storage, StorageFolders.LOADERS, filename)


@router.get("/product-images/{filename}", response_class=FileResponse, summary="Product image")
async def get_product_image(filename: str, storage: FileStorage = Depends(get_file_storage)) -> FileResponse:
    return serve_file(storage, StorageFolders.PRODUCT_IMAGES, filename)


@router.get("/page-content-images/{filename}", response_class=FileResponse, summary="Page content image")
async def get_page_content_image(filename: str, storage: FileStorage = Depends(get_file_storage)) -> FileResponse:
    return serve_file(storage, StorageFolders.PAGE_CONTENT_IMAGES, filename)
