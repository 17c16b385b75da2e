"""
Page Content Use Cases
======================

Read, save and delete the page attached to a menu item, plus the images
inserted in page content.
"""
import logging
import re
from typing import Optional

from sitecms.core.errors import NotFoundError
from sitecms.domain.models.page_content import PageContent
from sitecms.domain.repositories.page_repository import MenuItemRepository, PageContentRepository
from sitecms.infrastructure.html.sanitizer import sanitize_html
from sitecms.infrastructure.storage.file_storage import FileStorage, StorageFolders

logger = logging.getLogger(__name__)

PAGE_IMAGE_PATTERN = re.compile(r"\.(jpg|jpeg|png|gif|webp|svg)$", re.IGNORECASE)
PAGE_IMAGE_MAX_BYTES = 5 * 1024 * 1024
PAGE_IMAGES_ROUTE = "/api/v1/public/page-content-images"


class GetPageContentUseCase:
    def __init__(self, menu_item_repository: MenuItemRepository, page_content_repository: PageContentRepository):
        self._menu_items = menu_item_repository
        self._page_contents = page_content_repository

    def execute(self, menu_item_id: str) -> Optional[PageContent]:
        """
        Raises:
            NotFoundError: If the menu item does not exist
        """
        if self._menu_items.find_by_id(menu_item_id) is None:
            raise NotFoundError(f"Menu item '{menu_item_id}' not found")
        return self._page_contents.find_by_menu_item_id(menu_item_id)


class SavePageContentUseCase:
    """Create or replace the page of a menu item; the HTML is sanitized first."""

    def __init__(self, menu_item_repository: MenuItemRepository, page_content_repository: PageContentRepository):
        self._menu_items = menu_item_repository
        self._page_contents = page_content_repository

    def execute(self, menu_item_id: str, content: str) -> PageContent:
        if self._menu_items.find_by_id(menu_item_id) is None:
            raise NotFoundError(f"Menu item '{menu_item_id}' not found")
        cleaned = sanitize_html(content)

        existing = self._page_contents.find_by_menu_item_id(menu_item_id)
        if existing is not None:
            page = existing.with_content(cleaned)
        else:
            page = PageContent(menu_item_id=menu_item_id, content=cleaned)
        saved = self._page_contents.save(page)
        logger.info("Saved page content for menu item '%s' (%d chars)", menu_item_id, len(cleaned))
        return saved


class DeletePageContentUseCase:
    def __init__(self, page_content_repository: PageContentRepository):
        self._page_contents = page_content_repository

    def execute(self, menu_item_id: str) -> bool:
        return self._page_contents.delete_by_menu_item_id(menu_item_id)


class UploadPageImageUseCase:
    """Store an image inserted in page content; returns its public URL."""

    def __init__(self, file_storage: FileStorage):
        self._storage = file_storage

    def execute(self, original_name: str, content: bytes) -> str:
        if not PAGE_IMAGE_PATTERN.search(original_name or ""):
            raise ValueError("Page images must be jpg, jpeg, png, gif, webp or svg files")
        if not content:
            raise ValueError("Uploaded file is empty")
        if len(content) > PAGE_IMAGE_MAX_BYTES:
            raise ValueError("Page images cannot exceed 5MB")
        filename = self._storage.save(StorageFolders.PAGE_CONTENT_IMAGES, original_name, content)
        return f"{PAGE_IMAGES_ROUTE}/{filename}"
