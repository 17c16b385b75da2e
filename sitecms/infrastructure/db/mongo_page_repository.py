"""
MongoDB Menu and Page Repositories
==================================

Concrete implementations of MenuItemRepository and PageContentRepository
using MongoDB.
"""
from typing import List, Optional

from pymongo import ASCENDING, ReturnDocument, UpdateOne

from sitecms.core.config import get_settings
from sitecms.core.errors import NotFoundError
from sitecms.domain.constants.page_fields import MenuItemFields, PageContentFields
from sitecms.domain.models.menu_item import MenuItem
from sitecms.domain.models.page_content import PageContent
from sitecms.domain.repositories.page_repository import MenuItemRepository, PageContentRepository
from sitecms.infrastructure.db.mongo_connection import MongoClientManager
from sitecms.utils.datetime_utils import from_storage, now, to_storage


class MongoMenuItemRepository(MenuItemRepository):
    """MongoDB implementation of MenuItemRepository."""

    def __init__(self, client: MongoClientManager, collection_name: Optional[str] = None):
        self._collection = client.get_collection(
            collection_name or get_settings().menu_items_collection
        )

    def _to_entity(self, doc: dict) -> MenuItem:
        """Convert MongoDB document to MenuItem entity."""
        return MenuItem(
            id=doc[MenuItemFields.ID],
            text=doc.get(MenuItemFields.TEXT),
            url=doc.get(MenuItemFields.URL),
            position=int(doc.get(MenuItemFields.POSITION, 0)),
            created_at=from_storage(doc.get(MenuItemFields.CREATED_AT)) or now(),
            updated_at=from_storage(doc.get(MenuItemFields.UPDATED_AT)) or now(),
        )

    def _to_document(self, menu_item: MenuItem) -> dict:
        """Convert MenuItem entity to MongoDB document."""
        return {
            MenuItemFields.ID: menu_item.id,
            MenuItemFields.TEXT: menu_item.text,
            MenuItemFields.URL: menu_item.url,
            MenuItemFields.POSITION: menu_item.position,
            MenuItemFields.CREATED_AT: to_storage(menu_item.created_at),
            MenuItemFields.UPDATED_AT: to_storage(menu_item.updated_at),
        }

    def create(self, menu_item: MenuItem) -> MenuItem:
        self._collection.insert_one(self._to_document(menu_item))
        return menu_item

    def update(self, menu_item: MenuItem) -> MenuItem:
        doc = self._to_document(menu_item)
        result = self._collection.find_one_and_update(
            {MenuItemFields.ID: menu_item.id},
            {"$set": {k: v for k, v in doc.items() if k not in (MenuItemFields.ID, MenuItemFields.CREATED_AT)}},
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            raise NotFoundError(f"Menu item '{menu_item.id}' not found")
        return self._to_entity(result)

    def find_by_id(self, menu_item_id: str) -> Optional[MenuItem]:
        doc = self._collection.find_one({MenuItemFields.ID: menu_item_id})
        return self._to_entity(doc) if doc else None

    def find_all(self) -> List[MenuItem]:
        docs = self._collection.find().sort(MenuItemFields.POSITION, ASCENDING)
        return [self._to_entity(doc) for doc in docs]

    def count(self) -> int:
        return self._collection.count_documents({})

    def update_positions(self, positions: dict) -> None:
        if not positions:
            return
        timestamp = to_storage(now())
        self._collection.bulk_write([
            UpdateOne(
                {MenuItemFields.ID: menu_item_id},
                {"$set": {MenuItemFields.POSITION: position, MenuItemFields.UPDATED_AT: timestamp}},
            )
            for menu_item_id, position in positions.items()
        ])

    def delete(self, menu_item_id: str) -> bool:
        return self._collection.delete_one({MenuItemFields.ID: menu_item_id}).deleted_count > 0

    def delete_all(self) -> int:
        return self._collection.delete_many({}).deleted_count


class MongoPageContentRepository(PageContentRepository):
    """
    MongoDB implementation of PageContentRepository.

    ``menu_item_id`` is unique: saving a page for a menu item replaces the
    previous one while keeping its ID and creation date.
    """

    def __init__(self, client: MongoClientManager, collection_name: Optional[str] = None):
        self._collection = client.get_collection(
            collection_name or get_settings().page_contents_collection
        )

    def _to_entity(self, doc: dict) -> PageContent:
        return PageContent(
            id=doc[PageContentFields.ID],
            menu_item_id=doc.get(PageContentFields.MENU_ITEM_ID),
            content=doc.get(PageContentFields.CONTENT),
            created_at=from_storage(doc.get(PageContentFields.CREATED_AT)) or now(),
            updated_at=from_storage(doc.get(PageContentFields.UPDATED_AT)) or now(),
        )

    def find_by_menu_item_id(self, menu_item_id: str) -> Optional[PageContent]:
        doc = self._collection.find_one({PageContentFields.MENU_ITEM_ID: menu_item_id})
        return self._to_entity(doc) if doc else None

    def find_all(self) -> List[PageContent]:
        return [self._to_entity(doc) for doc in self._collection.find()]

    def save(self, page_content: PageContent) -> PageContent:
        existing = self._collection.find_one({PageContentFields.MENU_ITEM_ID: page_content.menu_item_id})
        doc = {
            PageContentFields.ID: existing[PageContentFields.ID] if existing else page_content.id,
            PageContentFields.MENU_ITEM_ID: page_content.menu_item_id,
            PageContentFields.CONTENT: page_content.content,
            PageContentFields.CREATED_AT: (
                existing[PageContentFields.CREATED_AT] if existing
                else to_storage(page_content.created_at)
            ),
            PageContentFields.UPDATED_AT: to_storage(page_content.updated_at),
        }
        self._collection.replace_one({PageContentFields.ID: doc[PageContentFields.ID]}, doc, upsert=True)
        return self._to_entity(doc)

    def delete_by_menu_item_id(self, menu_item_id: str) -> bool:
        result = self._collection.delete_one({PageContentFields.MENU_ITEM_ID: menu_item_id})
        return result.deleted_count > 0

    def delete_all(self) -> int:
        return self._collection.delete_many({}).deleted_count
