"""
MongoDB Catalog Repositories
============================

Concrete implementations of CategoryRepository and ProductRepository using
MongoDB.
"""
from typing import Dict, List, Optional

from pymongo import ASCENDING, ReturnDocument, UpdateOne

from sitecms.core.config import get_settings
from sitecms.core.errors import NotFoundError
from sitecms.domain.constants.product_fields import CategoryFields, ProductFields
from sitecms.domain.models.product import Category, Product
from sitecms.domain.repositories.catalog_repository import CategoryRepository, ProductRepository
from sitecms.infrastructure.db.mongo_connection import MongoClientManager
from sitecms.utils.datetime_utils import from_storage, now, to_storage


class MongoCategoryRepository(CategoryRepository):
    """
    MongoDB implementation of CategoryRepository.
    """

    def __init__(self, client: MongoClientManager, collection_name: Optional[str] = None):
        self._collection = client.get_collection(
            collection_name or get_settings().categories_collection
        )

    def _to_entity(self, doc: dict) -> Category:
        """Convert MongoDB document to Category entity."""
        return Category(
            id=doc[CategoryFields.ID],
            name=doc.get(CategoryFields.NAME),
            description=doc.get(CategoryFields.DESCRIPTION),
            display_order=doc.get(CategoryFields.DISPLAY_ORDER, 0),
            created_at=from_storage(doc.get(CategoryFields.CREATED_AT)) or now(),
            updated_at=from_storage(doc.get(CategoryFields.UPDATED_AT)) or now(),
        )

    def _to_document(self, category: Category) -> dict:
        """Convert Category entity to MongoDB document."""
        return {
            CategoryFields.ID: category.id,
            CategoryFields.NAME: category.name,
            CategoryFields.DESCRIPTION: category.description,
            CategoryFields.DISPLAY_ORDER: category.display_order,
            CategoryFields.CREATED_AT: to_storage(category.created_at),
            CategoryFields.UPDATED_AT: to_storage(category.updated_at),
        }

    def create(self, category: Category) -> Category:
        self._collection.insert_one(self._to_document(category))
        return category

    def update(self, category: Category) -> Category:
        category.updated_at = now()
        doc = self._to_document(category)
        result = self._collection.find_one_and_update(
            {CategoryFields.ID: category.id},
            {"$set": {k: v for k, v in doc.items() if k not in (CategoryFields.ID, CategoryFields.CREATED_AT)}},
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            raise NotFoundError(f"Category '{category.id}' not found")
        return self._to_entity(result)

    def find_by_id(self, category_id: str) -> Optional[Category]:
        doc = self._collection.find_one({CategoryFields.ID: category_id})
        return self._to_entity(doc) if doc else None

    def find_all(self) -> List[Category]:
        docs = self._collection.find().sort(
            [(CategoryFields.DISPLAY_ORDER, ASCENDING), (CategoryFields.NAME, ASCENDING)]
        )
        return [self._to_entity(doc) for doc in docs]

    def find_by_ids(self, category_ids: List[str]) -> List[Category]:
        docs = self._collection.find({CategoryFields.ID: {"$in": list(category_ids)}})
        return [self._to_entity(doc) for doc in docs]

    def update_display_orders(self, display_orders: Dict[str, int]) -> None:
        if not display_orders:
            return
        timestamp = to_storage(now())
        self._collection.bulk_write([
            UpdateOne(
                {CategoryFields.ID: category_id},
                {"$set": {CategoryFields.DISPLAY_ORDER: order, CategoryFields.UPDATED_AT: timestamp}},
            )
            for category_id, order in display_orders.items()
        ])

    def delete(self, category_id: str) -> bool:
        result = self._collection.delete_one({CategoryFields.ID: category_id})
        return result.deleted_count > 0

    def delete_all(self) -> int:
        return self._collection.delete_many({}).deleted_count


class MongoProductRepository(ProductRepository):
    """
    MongoDB implementation of ProductRepository.

    Category membership is stored as an array of category IDs on the product.
    """

    def __init__(self, client: MongoClientManager, collection_name: Optional[str] = None):
        self._collection = client.get_collection(
            collection_name or get_settings().products_collection
        )

    def _to_entity(self, doc: dict) -> Product:
        """Convert MongoDB document to Product entity."""
        return Product(
            id=doc[ProductFields.ID],
            name=doc.get(ProductFields.NAME),
            price=doc.get(ProductFields.PRICE),
            description=doc.get(ProductFields.DESCRIPTION),
            image_url=doc.get(ProductFields.IMAGE_URL),
            display_order=doc.get(ProductFields.DISPLAY_ORDER, 0),
            category_ids=list(doc.get(ProductFields.CATEGORY_IDS) or []),
            created_at=from_storage(doc.get(ProductFields.CREATED_AT)) or now(),
            updated_at=from_storage(doc.get(ProductFields.UPDATED_AT)) or now(),
        )

    def _to_document(self, product: Product) -> dict:
        """Convert Product entity to MongoDB document."""
        return {
            ProductFields.ID: product.id,
            ProductFields.NAME: product.name,
            ProductFields.PRICE: product.price,
            ProductFields.DESCRIPTION: product.description,
            ProductFields.IMAGE_URL: product.image_url,
            ProductFields.DISPLAY_ORDER: product.display_order,
            ProductFields.CATEGORY_IDS: list(product.category_ids),
            ProductFields.CREATED_AT: to_storage(product.created_at),
            ProductFields.UPDATED_AT: to_storage(product.updated_at),
        }

    def create(self, product: Product) -> Product:
        self._collection.insert_one(self._to_document(product))
        return product

    def update(self, product: Product) -> Product:
        product.updated_at = now()
        doc = self._to_document(product)
        result = self._collection.find_one_and_update(
            {ProductFields.ID: product.id},
            {"$set": {k: v for k, v in doc.items() if k not in (ProductFields.ID, ProductFields.CREATED_AT)}},
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            raise NotFoundError(f"Product '{product.id}' not found")
        return self._to_entity(result)

    def find_by_id(self, product_id: str) -> Optional[Product]:
        doc = self._collection.find_one({ProductFields.ID: product_id})
        return self._to_entity(doc) if doc else None

    def find_all(self) -> List[Product]:
        docs = self._collection.find().sort(
            [(ProductFields.DISPLAY_ORDER, ASCENDING), (ProductFields.NAME, ASCENDING)]
        )
        return [self._to_entity(doc) for doc in docs]

    def update_display_orders(self, display_orders: Dict[str, int]) -> None:
        if not display_orders:
            return
        timestamp = to_storage(now())
        self._collection.bulk_write([
            UpdateOne(
                {ProductFields.ID: product_id},
                {"$set": {ProductFields.DISPLAY_ORDER: order, ProductFields.UPDATED_AT: timestamp}},
            )
            for product_id, order in display_orders.items()
        ])

    def find_by_category_ids(self, category_ids: List[str]) -> List[Product]:
        docs = self._collection.find(
            {ProductFields.CATEGORY_IDS: {"$in": list(category_ids)}}
        ).sort([(ProductFields.DISPLAY_ORDER, ASCENDING), (ProductFields.NAME, ASCENDING)])
        return [self._to_entity(doc) for doc in docs]

    def remove_category(self, category_id: str) -> int:
        result = self._collection.update_many(
            {ProductFields.CATEGORY_IDS: category_id},
            {
                "$pull": {ProductFields.CATEGORY_IDS: category_id},
                "$set": {ProductFields.UPDATED_AT: to_storage(now())},
            },
        )
        return result.modified_count

    def delete(self, product_id: str) -> bool:
        result = self._collection.delete_one({ProductFields.ID: product_id})
        return result.deleted_count > 0

    def delete_all(self) -> int:
        return self._collection.delete_many({}).deleted_count
