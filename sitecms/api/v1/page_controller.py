"""
Page Controller
===============

Admin endpoints for the site menu and page content.
"""
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from sitecms.api.v1.dependencies import get_page_service
from sitecms.api.v1.security import require_admin
from sitecms.application.dto.auth_dto import StatusResponse
from sitecms.application.dto.page_dto import (
    ImageUploadResponse,
    MenuItemCreateRequest,
    MenuItemResponse,
    MenuItemUpdateRequest,
    MenuReorderRequest,
    PageContentRequest,
    PageContentResponse,
)
from sitecms.application.services.page_service import PageService
from sitecms.core.errors import NotFoundError
from sitecms.domain.models.menu_item import MenuItem
from sitecms.domain.models.page_blocks import parse_blocks
from sitecms.domain.models.page_content import PageContent

menu_router = APIRouter(tags=["menu"], dependencies=[Depends(require_admin)])
pages_router = APIRouter(tags=["pages"], dependencies=[Depends(require_admin)])


def menu_item_response(menu_item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        id=menu_item.id,
        text=menu_item.text,
        url=menu_item.url,
        position=menu_item.position,
        created_at=menu_item.created_at,
        updated_at=menu_item.updated_at,
    )


def page_content_response(page: PageContent) -> PageContentResponse:
    return PageContentResponse(
        id=page.id,
        menu_item_id=page.menu_item_id,
        content=page.content,
        blocks=[block.to_dict() for block in parse_blocks(page.content)],
        created_at=page.created_at,
        updated_at=page.updated_at,
    )


@menu_router.get("", response_model=List[MenuItemResponse], summary="List menu items")
async def list_menu_items(service: PageService = Depends(get_page_service)) -> List[MenuItemResponse]:
    return [menu_item_response(item) for item in service.list_menu_items()]


@menu_router.post(
    "",
    response_model=MenuItemResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a menu item",
    description="Append a menu item at the end of the menu. Without a URL, one is derived from the text.",
)
async def add_menu_item(
    request: MenuItemCreateRequest,
    service: PageService = Depends(get_page_service),
) -> MenuItemResponse:
    try:
        return menu_item_response(service.add_menu_item(request.text, request.url))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@menu_router.put("/reorder", response_model=List[MenuItemResponse], summary="Reorder the menu")
async def reorder_menu_items(
    request: MenuReorderRequest,
    service: PageService = Depends(get_page_service),
) -> List[MenuItemResponse]:
    try:
        return [menu_item_response(item) for item in service.reorder_menu_items(request.ordered_ids)]
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@menu_router.put("/{menu_item_id}", response_model=MenuItemResponse, summary="Update a menu item")
async def update_menu_item(
    menu_item_id: str,
    request: MenuItemUpdateRequest,
    service: PageService = Depends(get_page_service),
) -> MenuItemResponse:
    try:
        menu_item = service.update_menu_item(menu_item_id, text=request.text, url=request.url)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return menu_item_response(menu_item)


@menu_router.delete(
    "/{menu_item_id}",
    response_model=StatusResponse,
    summary="Remove a menu item",
    description="Remove a menu item together with its page content; remaining items are renumbered.",
)
async def remove_menu_item(menu_item_id: str, service: PageService = Depends(get_page_service)) -> StatusResponse:
    try:
        service.remove_menu_item(menu_item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return StatusResponse(status="deleted")


@pages_router.post(
    "/images",
    response_model=ImageUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload an image for page content",
)
async def upload_page_image(
    file: UploadFile = File(...),
    service: PageService = Depends(get_page_service),
) -> ImageUploadResponse:
    content = await file.read()
    try:
        return ImageUploadResponse(url=service.upload_image(file.filename or "", content))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@pages_router.get("/{menu_item_id}", response_model=PageContentResponse, summary="Get page content")
async def get_page_content(
    menu_item_id: str,
    service: PageService = Depends(get_page_service),
) -> PageContentResponse:
    try:
        page = service.get_page_content(menu_item_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if page is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No content for menu item '{menu_item_id}'"
        )
    return page_content_response(page)


@pages_router.put(
    "/{menu_item_id}",
    response_model=PageContentResponse,
    summary="Save page content",
    description="Sanitize and store the page HTML. Custom blocks are returned parsed.",
)
async def save_page_content(
    menu_item_id: str,
    request: PageContentRequest,
    service: PageService = Depends(get_page_service),
) -> PageContentResponse:
    try:
        page = service.save_page_content(menu_item_id, request.content)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return page_content_response(page)


@pages_router.delete("/{menu_item_id}", response_model=StatusResponse, summary="Delete page content")
async def delete_page_content(menu_item_id: str, service: PageService = Depends(get_page_service)) -> StatusResponse:
    if not service.delete_page_content(menu_item_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No content for menu item '{menu_item_id}'"
        )
    return StatusResponse(status="deleted")
