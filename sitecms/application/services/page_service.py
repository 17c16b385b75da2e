"""
Page Service
============

Application service for the site menu and the content of its pages.
"""
from typing import Any, Dict, List, Optional

from sitecms.application.use_cases.pages.get_public_page import GetPublicPageUseCase
from sitecms.application.use_cases.pages.manage_menu import (
    AddMenuItemUseCase,
    RemoveMenuItemUseCase,
    ReorderMenuItemsUseCase,
    UpdateMenuItemUseCase,
)
from sitecms.application.use_cases.pages.manage_page_content import (
    DeletePageContentUseCase,
    GetPageContentUseCase,
    SavePageContentUseCase,
    UploadPageImageUseCase,
)
from sitecms.core.errors import NotFoundError
from sitecms.domain.models.menu_item import MenuItem, slugify
from sitecms.domain.models.page_content import PageContent
from sitecms.domain.repositories.catalog_repository import ProductRepository
from sitecms.domain.repositories.page_repository import MenuItemRepository, PageContentRepository
from sitecms.infrastructure.storage.file_storage import FileStorage


class PageService:
    def __init__(
        self,
        menu_item_repository: MenuItemRepository,
        page_content_repository: PageContentRepository,
        product_repository: ProductRepository,
        file_storage: FileStorage,
    ):
        self._menu_items = menu_item_repository
        self._add_menu_item = AddMenuItemUseCase(menu_item_repository)
        self._update_menu_item = UpdateMenuItemUseCase(menu_item_repository)
        self._remove_menu_item = RemoveMenuItemUseCase(menu_item_repository, page_content_repository)
        self._reorder_menu_items = ReorderMenuItemsUseCase(menu_item_repository)
        self._get_page_content = GetPageContentUseCase(menu_item_repository, page_content_repository)
        self._save_page_content = SavePageContentUseCase(menu_item_repository, page_content_repository)
        self._delete_page_content = DeletePageContentUseCase(page_content_repository)
        self._upload_image = UploadPageImageUseCase(file_storage)
        self._get_public_page = GetPublicPageUseCase(
            menu_item_repository, page_content_repository, product_repository
        )

    def list_menu_items(self) -> List[MenuItem]:
        """Menu items ordered by position."""
        return self._menu_items.find_all()

    def get_menu_item(self, menu_item_id: str) -> MenuItem:
        menu_item = self._menu_items.find_by_id(menu_item_id)
        if menu_item is None:
            raise NotFoundError(f"Menu item '{menu_item_id}' not found")
        return menu_item

    def add_menu_item(self, text: str, url: Optional[str] = None) -> MenuItem:
        """
        Append a menu item.

        Args:
            text: Menu label
            url: Target; derived from the label when omitted
        """
        return self._add_menu_item.execute(text, url or slugify(text or ""))

    def update_menu_item(self, menu_item_id: str, text: Optional[str] = None, url: Optional[str] = None) -> MenuItem:
        return self._update_menu_item.execute(menu_item_id, text=text, url=url)

    def remove_menu_item(self, menu_item_id: str) -> None:
        self._remove_menu_item.execute(menu_item_id)

    def reorder_menu_items(self, ordered_ids: List[str]) -> List[MenuItem]:
        return self._reorder_menu_items.execute(ordered_ids)

    def get_page_content(self, menu_item_id: str) -> Optional[PageContent]:
        return self._get_page_content.execute(menu_item_id)

    def save_page_content(self, menu_item_id: str, content: str) -> PageContent:
        return self._save_page_content.execute(menu_item_id, content)

    def delete_page_content(self, menu_item_id: str) -> bool:
        return self._delete_page_content.execute(menu_item_id)

    def upload_image(self, original_name: str, content: bytes) -> str:
        return self._upload_image.execute(original_name, content)

    def get_public_page(self, menu_item_id: str) -> Dict[str, Any]:
        return self._get_public_page.execute(menu_item_id)
