"""
Order Repository Interface
==========================

Abstract interface for order data access.
Implementations should be in the infrastructure layer.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from sitecms.domain.models.order import Order


class OrderRepository(ABC):
    """
    Abstract repository for order persistence operations.
    """

    @abstractmethod
    def create(self, order: Order) -> Order:
        """
        Create a new order.

        Args:
            order: Order entity to create

        Returns:
            Created order entity
        """
        pass

    @abstractmethod
    def update(self, order: Order) -> Order:
        """
        Update an existing order.

        Args:
            order: Order entity with updated data

        Returns:
            Updated order entity

        Raises:
            NotFoundError: If the order does not exist
        """
        pass

    @abstractmethod
    def find_by_id(self, order_id: str) -> Optional[Order]:
        """
        Find an order by its ID.

        Args:
            order_id: Unique order identifier

        Returns:
            Order entity if found, None otherwise
        """
        pass

    @abstractmethod
    def find_all(self) -> List[Order]:
        """
        Find all orders, newest first.

        Returns:
            List of order entities
        """
        pass

    @abstractmethod
    def delete(self, order_id: str) -> bool:
        """
        Delete an order.

        Returns:
            True if the order was found and deleted, False otherwise
        """
        pass
