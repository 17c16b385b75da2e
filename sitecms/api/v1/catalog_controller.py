"""
Catalog Controller
==================

Admin endpoints for categories and products.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status

from sitecms.api.v1.dependencies import get_catalog_service
from sitecms.api.v1.security import require_admin
from sitecms.application.dto.auth_dto import StatusResponse
from sitecms.application.dto.catalog_dto import (
    CatalogReorderRequest,
    CategoryCreateRequest,
    CategoryResponse,
    CategoryUpdateRequest,
    ProductCreateRequest,
    ProductResponse,
    ProductUpdateRequest,
)
from sitecms.application.dto.page_dto import ImageUploadResponse
from sitecms.application.services.catalog_service import CatalogService
from sitecms.core.errors import NotFoundError
from sitecms.domain.models.product import Category, Product

categories_router = APIRouter(tags=["categories"], dependencies=[Depends(require_admin)])
products_router = APIRouter(tags=["products"], dependencies=[Depends(require_admin)])


def category_response(category: Category) -> CategoryResponse:
    return CategoryResponse(
        id=category.id,
        name=category.name,
        description=category.description,
        display_order=category.display_order,
        created_at=category.created_at,
        updated_at=category.updated_at,
    )


def product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        price=product.price,
        description=product.description,
        image_url=product.image_url,
        display_order=product.display_order,
        category_ids=list(product.category_ids),
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


@categories_router.get("", response_model=List[CategoryResponse], summary="List categories")
async def list_categories(service: CatalogService = Depends(get_catalog_service)) -> List[CategoryResponse]:
    return [category_response(category) for category in service.list_categories()]


@categories_router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
)
async def create_category(
    request: CategoryCreateRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> CategoryResponse:
    try:
        category = service.create_category(request.name, request.description, request.display_order)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return category_response(category)


@categories_router.put("/reorder", response_model=List[CategoryResponse], summary="Reorder categories")
async def reorder_categories(
    request: CatalogReorderRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> List[CategoryResponse]:
    try:
        return [category_response(category) for category in service.reorder_categories(request.ordered_ids)]
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@categories_router.get("/{category_id}", response_model=CategoryResponse, summary="Get a category")
async def get_category(category_id: str, service: CatalogService = Depends(get_catalog_service)) -> CategoryResponse:
    try:
        return category_response(service.get_category(category_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@categories_router.put("/{category_id}", response_model=CategoryResponse, summary="Update a category")
async def update_category(
    category_id: str,
    request: CategoryUpdateRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> CategoryResponse:
    try:
        category = service.update_category(category_id, **request.model_dump(exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return category_response(category)


@categories_router.delete(
    "/{category_id}",
    response_model=StatusResponse,
    summary="Delete a category",
    description="Delete a category; products keep existing but lose the category.",
)
async def delete_category(category_id: str, service: CatalogService = Depends(get_catalog_service)) -> StatusResponse:
    try:
        service.delete_category(category_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return StatusResponse(status="deleted")


@products_router.get("", response_model=List[ProductResponse], summary="List products")
async def list_products(
    category_ids: Optional[List[str]] = Query(None),
    sort_by: str = "displayOrder",
    service: CatalogService = Depends(get_catalog_service),
) -> List[ProductResponse]:
    return [product_response(product) for product in service.list_products(category_ids, sort_by)]


@products_router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
)
async def create_product(
    request: ProductCreateRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> ProductResponse:
    try:
        product = service.create_product(**request.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return product_response(product)


@products_router.post(
    "/images",
    response_model=ImageUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a product image",
)
async def upload_product_image(
    file: UploadFile = File(...),
    service: CatalogService = Depends(get_catalog_service),
) -> ImageUploadResponse:
    content = await file.read()
    try:
        return ImageUploadResponse(url=service.upload_image(file.filename or "", content))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@products_router.put("/reorder", response_model=List[ProductResponse], summary="Reorder products")
async def reorder_products(
    request: CatalogReorderRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> List[ProductResponse]:
    try:
        return [product_response(product) for product in service.reorder_products(request.ordered_ids)]
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@products_router.get("/{product_id}", response_model=ProductResponse, summary="Get a product")
async def get_product(product_id: str, service: CatalogService = Depends(get_catalog_service)) -> ProductResponse:
    try:
        return product_response(service.get_product(product_id))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@products_router.put("/{product_id}", response_model=ProductResponse, summary="Update a product")
async def update_product(
    product_id: str,
    request: ProductUpdateRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> ProductResponse:
    try:
        product = service.update_product(product_id, **request.model_dump(exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return product_response(product)


@products_router.delete("/{product_id}", response_model=StatusResponse, summary="Delete a product")
async def delete_product(product_id: str, service: CatalogService = Depends(get_catalog_service)) -> StatusResponse:
    try:
        service.delete_product(product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return StatusResponse(status="deleted")
