"""
Catalog Service
===============

Application service for categories and products.
"""
from typing import Any, List, Optional

from sitecms.application.use_cases.catalog.manage_categories import (
    CreateCategoryUseCase,
    DeleteCategoryUseCase,
    ReorderCategoriesUseCase,
    UpdateCategoryUseCase,
)
from sitecms.application.use_cases.catalog.manage_products import (
    CreateProductUseCase,
    DeleteProductUseCase,
    ListProductsUseCase,
    ReorderProductsUseCase,
    UpdateProductUseCase,
    UploadProductImageUseCase,
)
from sitecms.core.errors import NotFoundError
from sitecms.domain.models.product import Category, Product
from sitecms.domain.repositories.catalog_repository import CategoryRepository, ProductRepository
from sitecms.infrastructure.storage.file_storage import FileStorage


class CatalogService:
    def __init__(
        self,
        product_repository: ProductRepository,
        category_repository: CategoryRepository,
        file_storage: FileStorage,
    ):
        self._products = product_repository
        self._categories = category_repository
        self._create_category = CreateCategoryUseCase(category_repository)
        self._update_category = UpdateCategoryUseCase(category_repository)
        self._delete_category = DeleteCategoryUseCase(category_repository, product_repository)
        self._reorder_categories = ReorderCategoriesUseCase(category_repository)
        self._create_product = CreateProductUseCase(product_repository, category_repository)
        self._update_product = UpdateProductUseCase(product_repository, category_repository)
        self._delete_product = DeleteProductUseCase(product_repository)
        self._reorder_products = ReorderProductsUseCase(product_repository)
        self._list_products = ListProductsUseCase(product_repository)
        self._upload_image = UploadProductImageUseCase(file_storage)

    # Categories

    def list_categories(self) -> List[Category]:
        return self._categories.find_all()

    def get_category(self, category_id: str) -> Category:
        category = self._categories.find_by_id(category_id)
        if category is None:
            raise NotFoundError(f"Category '{category_id}' not found")
        return category

    def create_category(self, name: str, description: Optional[str] = None, display_order: int = 0) -> Category:
        return self._create_category.execute(name, description, display_order)

    def update_category(self, category_id: str, **changes: Any) -> Category:
        return self._update_category.execute(category_id, **changes)

    def delete_category(self, category_id: str) -> None:
        """Delete a category and detach it from its products."""
        self._delete_category.execute(category_id)

    def reorder_categories(self, ordered_ids: List[str]) -> List[Category]:
        return self._reorder_categories.execute(ordered_ids)

    # Products

    def list_products(
        self,
        category_ids: Optional[List[str]] = None,
        sort_by: str = "displayOrder",
        max_products: Optional[int] = None,
    ) -> List[Product]:
        """
        List products.

        Args:
            category_ids: Keep products in any of these categories (all when empty)
            sort_by: displayOrder, name, price or createdAt
            max_products: Truncate the list
        """
        return self._list_products.execute(category_ids, sort_by, max_products)

    def get_product(self, product_id: str) -> Product:
        product = self._products.find_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product '{product_id}' not found")
        return product

    def create_product(self, **fields: Any) -> Product:
        return self._create_product.execute(**fields)

    def update_product(self, product_id: str, **changes: Any) -> Product:
        return self._update_product.execute(product_id, **changes)

    def delete_product(self, product_id: str) -> None:
        self._delete_product.execute(product_id)

    def reorder_products(self, ordered_ids: List[str]) -> List[Product]:
        """Set every product's display order from its index in ``ordered_ids``."""
        return self._reorder_products.execute(ordered_ids)

    def upload_image(self, original_name: str, content: bytes) -> str:
        return self._upload_image.execute(original_name, content)
