"""
Menu Use Cases
==============

Header menu management: add, edit, remove and reorder menu items.
"""
import logging
from typing import List, Optional

from sitecms.core.errors import NotFoundError
from sitecms.domain.models.menu_item import MenuItem
from sitecms.domain.repositories.page_repository import MenuItemRepository, PageContentRepository

logger = logging.getLogger(__name__)


class AddMenuItemUseCase:
    """New items go to the end of the menu."""

    def __init__(self, menu_item_repository: MenuItemRepository):
        self._repository = menu_item_repository

    def execute(self, text: str, url: str) -> MenuItem:
        menu_item = MenuItem(text=text, url=url, position=self._repository.count())
        created = self._repository.create(menu_item)
        logger.info("Menu item '%s' added at position %d", created.text, created.position)
        return created


class UpdateMenuItemUseCase:
    def __init__(self, menu_item_repository: MenuItemRepository):
        self._repository = menu_item_repository

    def execute(self, menu_item_id: str, text: Optional[str] = None, url: Optional[str] = None) -> MenuItem:
        """
        Change the text and/or URL of a menu item.

        Raises:
            NotFoundError: If the menu item does not exist
            ValueError: If the new text or URL is invalid
        """
        menu_item = self._repository.find_by_id(menu_item_id)
        if menu_item is None:
            raise NotFoundError(f"Menu item '{menu_item_id}' not found")
        if text is not None:
            menu_item = menu_item.with_text(text)
        if url is not None:
            menu_item = menu_item.with_url(url)
        return self._repository.update(menu_item)


class RemoveMenuItemUseCase:
    """
    Delete a menu item together with its page content.

    Remaining items are renumbered so positions stay contiguous.
    """

    def __init__(self, menu_item_repository: MenuItemRepository, page_content_repository: PageContentRepository):
        self._menu_items = menu_item_repository
        self._page_contents = page_content_repository

    def execute(self, menu_item_id: str) -> None:
        if self._menu_items.find_by_id(menu_item_id) is None:
            raise NotFoundError(f"Menu item '{menu_item_id}' not found")
        self._page_contents.delete_by_menu_item_id(menu_item_id)
        self._menu_items.delete(menu_item_id)
        remaining = self._menu_items.find_all()
        self._menu_items.update_positions({item.id: index for index, item in enumerate(remaining)})
        logger.info("Menu item '%s' removed", menu_item_id)


class ReorderMenuItemsUseCase:
    def __init__(self, menu_item_repository: MenuItemRepository):
        self._repository = menu_item_repository

    def execute(self, ordered_ids: List[str]) -> List[MenuItem]:
        """
        Give each menu item the position of its id in ``ordered_ids``.

        Raises:
            ValueError: If the ids are not exactly the existing menu items
        """
        existing = {item.id for item in self._repository.find_all()}
        if len(ordered_ids) != len(set(ordered_ids)) or set(ordered_ids) != existing:
            raise ValueError("Reorder must list every existing menu item exactly once")
        self._repository.update_positions({item_id: index for index, item_id in enumerate(ordered_ids)})
        return self._repository.find_all()
