"""
Catalog Repository Interfaces
=============================

Abstract interfaces for category and product data access.
Implementations should be in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from sitecms.domain.models.product import Category, Product


class CategoryRepository(ABC):
    """
    Abstract repository for category persistence operations.
    """

    @abstractmethod
    def create(self, category: Category) -> Category:
        """
        Create a new category.

        Args:
            category: Category entity to create

        Returns:
            Created category entity
        """
        pass

    @abstractmethod
    def update(self, category: Category) -> Category:
        """
        Update an existing category.

        Args:
            category: Category entity with updated data

        Returns:
            Updated category entity

        Raises:
            NotFoundError: If the category does not exist
        """
        pass

    @abstractmethod
    def find_by_id(self, category_id: str) -> Optional[Category]:
        """
        Find a category by its ID.

        Returns:
            Category entity if found, None otherwise
        """
        pass

    @abstractmethod
    def find_all(self) -> List[Category]:
        """Find all categories, ordered by display order then name."""
        pass

    @abstractmethod
    def find_by_ids(self, category_ids: List[str]) -> List[Category]:
        pass

    @abstractmethod
    def update_display_orders(self, display_orders: Dict[str, int]) -> None:
        """
        Set the display order of several categories.

        Args:
            display_orders: Mapping of category ID to its new display order
        """
        pass

    @abstractmethod
    def delete(self, category_id: str) -> bool:
        """
        Delete a category.

        Returns:
            True if the category was found and deleted, False otherwise
        """
        pass

    @abstractmethod
    def delete_all(self) -> int:
        pass


class ProductRepository(ABC):
    """
    Abstract repository for product persistence operations.
    """

    @abstractmethod
    def create(self, product: Product) -> Product:
        """
        Create a new product.

        Args:
            product: Product entity to create

        Returns:
            Created product entity
        """
        pass

    @abstractmethod
    def update(self, product: Product) -> Product:
        """
        Update an existing product.

        Raises:
            NotFoundError: If the product does not exist
        """
        pass

    @abstractmethod
    def find_by_id(self, product_id: str) -> Optional[Product]:
        pass

    @abstractmethod
    def find_all(self) -> List[Product]:
        """Find all products, ordered by display order."""
        pass

    @abstractmethod
    def update_display_orders(self, display_orders: Dict[str, int]) -> None:
        pass

    @abstractmethod
    def find_by_category_ids(self, category_ids: List[str]) -> List[Product]:
        """
        Find the products belonging to at least one of the categories.

        Args:
            category_ids: Category identifiers

        Returns:
            List of product entities
        """
        pass

    @abstractmethod
    def remove_category(self, category_id: str) -> int:
        """
        Detach a category from every product referencing it.

        Returns:
            Number of products modified
        """
        pass

    @abstractmethod
    def delete(self, product_id: str) -> bool:
        pass

    @abstractmethod
    def delete_all(self) -> int:
        pass
