"""
Menu and Page Repository Interfaces
===================================

Abstract interfaces for menu items and the page content attached to them.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from sitecms.domain.models.menu_item import MenuItem
from sitecms.domain.models.page_content import PageContent


class MenuItemRepository(ABC):
    """Abstract repository for menu item persistence operations."""

    @abstractmethod
    def create(self, menu_item: MenuItem) -> MenuItem:
        pass

    @abstractmethod
    def update(self, menu_item: MenuItem) -> MenuItem:
        """
        Update an existing menu item.

        Raises:
            NotFoundError: If the menu item does not exist
        """
        pass

    @abstractmethod
    def find_by_id(self, menu_item_id: str) -> Optional[MenuItem]:
        pass

    @abstractmethod
    def find_all(self) -> List[MenuItem]:
        """Find all menu items ordered by position."""
        pass

    @abstractmethod
    def count(self) -> int:
        pass

    @abstractmethod
    def update_positions(self, positions: dict) -> None:
        """
        Set the position of several menu items.

        Args:
            positions: Mapping of menu item ID to its new position
        """
        pass

    @abstractmethod
    def delete(self, menu_item_id: str) -> bool:
        pass

    @abstractmethod
    def delete_all(self) -> int:
        pass


class PageContentRepository(ABC):
    """Abstract repository for page contents, one per menu item."""

    @abstractmethod
    def find_by_menu_item_id(self, menu_item_id: str) -> Optional[PageContent]:
        pass

    @abstractmethod
    def find_all(self) -> List[PageContent]:
        pass

    @abstractmethod
    def save(self, page_content: PageContent) -> PageContent:
        """
        Create or replace the page of a menu item.

        Args:
            page_content: Page content to store

        Returns:
            Stored page content
        """
        pass

    @abstractmethod
    def delete_by_menu_item_id(self, menu_item_id: str) -> bool:
        pass

    @abstractmethod
    def delete_all(self) -> int:
        pass
