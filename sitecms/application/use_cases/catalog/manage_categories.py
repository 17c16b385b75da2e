"""
Category Use Cases
==================
"""
import logging
from typing import List, Optional

from sitecms.core.errors import NotFoundError
from sitecms.domain.models.product import Category
from sitecms.domain.repositories.catalog_repository import CategoryRepository, ProductRepository

logger = logging.getLogger(__name__)


class CreateCategoryUseCase:
    def __init__(self, category_repository: CategoryRepository):
        self._repository = category_repository

    def execute(self, name: str, description: Optional[str] = None, display_order: int = 0) -> Category:
        category = Category(name=name, description=description, display_order=display_order)
        return self._repository.create(category)


class UpdateCategoryUseCase:
    def __init__(self, category_repository: CategoryRepository):
        self._repository = category_repository

    def execute(
        self,
        category_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        display_order: Optional[int] = None,
    ) -> Category:
        """
        Raises:
            NotFoundError: If the category does not exist
            ValueError: If a new value is invalid
        """
        category = self._repository.find_by_id(category_id)
        if category is None:
            raise NotFoundError(f"Category '{category_id}' not found")
        category.update(name=name, description=description, display_order=display_order)
        return self._repository.update(category)


class ReorderCategoriesUseCase:
    def __init__(self, category_repository: CategoryRepository):
        self._repository = category_repository

    def execute(self, ordered_ids: List[str]) -> List[Category]:
        """
        Give each category the position of its id in ``ordered_ids``.

        Raises:
            ValueError: If the ids are not exactly the existing categories
        """
        existing = {category.id for category in self._repository.find_all()}
        if len(ordered_ids) != len(set(ordered_ids)) or set(ordered_ids) != existing:
            raise ValueError("Reorder must list every existing category exactly once")
        self._repository.update_display_orders({category_id: index for index, category_id in enumerate(ordered_ids)})
        return self._repository.find_all()


class DeleteCategoryUseCase:
    """Delete a category and detach it from every product."""

    def __init__(self, category_repository: CategoryRepository, product_repository: ProductRepository):
        self._categories = category_repository
        self._products = product_repository

    def execute(self, category_id: str) -> None:
        if self._categories.find_by_id(category_id) is None:
            raise NotFoundError(f"Category '{category_id}' not found")
        detached = self._products.remove_category(category_id)
        self._categories.delete(category_id)
        logger.info("Category '%s' deleted and detached from %d product(s)", category_id, detached)
