"""
Product Use Cases
=================

Product CRUD, product image upload and the public product listing.
"""
import logging
import re
from typing import List, Optional

from sitecms.core.errors import NotFoundError
from sitecms.domain.models.product import PRODUCT_LIST_SORTS, Product, sort_products
from sitecms.domain.repositories.catalog_repository import CategoryRepository, ProductRepository
from sitecms.infrastructure.storage.file_storage import FileStorage, StorageFolders

logger = logging.getLogger(__name__)

PRODUCT_IMAGE_PATTERN = re.compile(r"\.(jpg|jpeg|png|gif|webp)$", re.IGNORECASE)
PRODUCT_IMAGE_MAX_BYTES = 5 * 1024 * 1024
PRODUCT_IMAGES_ROUTE = "/api/v1/public/product-images"


def _check_categories_exist(categories: CategoryRepository, category_ids: Optional[List[str]]) -> None:
    if not category_ids:
        return
    found = {category.id for category in categories.find_by_ids(list(category_ids))}
    missing = [category_id for category_id in category_ids if category_id not in found]
    if missing:
        raise ValueError(f"Unknown category id(s): {', '.join(missing)}")


class CreateProductUseCase:
    def __init__(self, product_repository: ProductRepository, category_repository: CategoryRepository):
        self._products = product_repository
        self._categories = category_repository

    def execute(
        self,
        name: str,
        price: float,
        description: Optional[str] = None,
        image_url: Optional[str] = None,
        display_order: int = 0,
        category_ids: Optional[List[str]] = None,
    ) -> Product:
        """
        Raises:
            ValueError: If a field is invalid or a category does not exist
        """
        _check_categories_exist(self._categories, category_ids)
        product = Product(
            name=name,
            price=price,
            description=description,
            image_url=image_url,
            display_order=display_order,
            category_ids=list(category_ids or []),
        )
        created = self._products.create(product)
        logger.info("Product '%s' created", created.name)
        return created


class UpdateProductUseCase:
    def __init__(self, product_repository: ProductRepository, category_repository: CategoryRepository):
        self._products = product_repository
        self._categories = category_repository

    def execute(self, product_id: str, **changes) -> Product:
        """
        Apply a partial update (name, price, description, image_url,
        display_order, category_ids).

        Raises:
            NotFoundError: If the product does not exist
            ValueError: If a value is invalid or a category does not exist
        """
        product = self._products.find_by_id(product_id)
        if product is None:
            raise NotFoundError(f"Product '{product_id}' not found")
        _check_categories_exist(self._categories, changes.get("category_ids"))
        product.update(**changes)
        return self._products.update(product)


class ReorderProductsUseCase:
    def __init__(self, product_repository: ProductRepository):
        self._repository = product_repository

    def execute(self, ordered_ids: List[str]) -> List[Product]:
        """
        Raises:
            ValueError: If the ids are not exactly the existing products
        """
        existing = {product.id for product in self._repository.find_all()}
        if len(ordered_ids) != len(set(ordered_ids)) or set(ordered_ids) != existing:
            raise ValueError("Reorder must list every existing product exactly once")
        self._repository.update_display_orders({product_id: index for index, product_id in enumerate(ordered_ids)})
        logger.info("Reordered %d product(s)", len(ordered_ids))
        return self._repository.find_all()


class DeleteProductUseCase:
    def __init__(self, product_repository: ProductRepository):
        self._products = product_repository

    def execute(self, product_id: str) -> None:
        if not self._products.delete(product_id):
            raise NotFoundError(f"Product '{product_id}' not found")


class ListProductsUseCase:
    """Products filtered by any of ``category_ids``, sorted and truncated."""

    def __init__(self, product_repository: ProductRepository):
        self._products = product_repository

    def execute(
        self,
        category_ids: Optional[List[str]] = None,
        sort_by: str = "displayOrder",
        max_products: Optional[int] = None,
    ) -> List[Product]:
        category_ids = [category_id for category_id in (category_ids or []) if category_id]
        if category_ids:
            products = self._products.find_by_category_ids(category_ids)
        else:
            products = self._products.find_all()
        if sort_by not in PRODUCT_LIST_SORTS:
            sort_by = "displayOrder"
        products = sort_products(products, sort_by)
        if max_products is not None and max_products > 0:
            products = products[:max_products]
        return products


class UploadProductImageUseCase:
    """Store a product image and return its public URL."""

    def __init__(self, file_storage: FileStorage):
        self._storage = file_storage

    def execute(self, original_name: str, content: bytes) -> str:
        if not PRODUCT_IMAGE_PATTERN.search(original_name or ""):
            raise ValueError("Product images must be jpg, jpeg, png, gif or webp files")
        if not content:
            raise ValueError("Uploaded file is empty")
        if len(content) > PRODUCT_IMAGE_MAX_BYTES:
            raise ValueError("Product images cannot exceed 5MB")
        filename = self._storage.save(StorageFolders.PRODUCT_IMAGES, original_name, content)
        logger.info("Product image stored as %s", filename)
        return f"{PRODUCT_IMAGES_ROUTE}/{filename}"
