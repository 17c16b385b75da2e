"""
MongoDB Order Repository
========================

Concrete implementation of OrderRepository using MongoDB.
"""
from typing import List, Optional

from pymongo import DESCENDING, ReturnDocument

from sitecms.core.config import get_settings
from sitecms.core.errors import NotFoundError
from sitecms.domain.constants.order_fields import OrderFields
from sitecms.domain.models.order import Order, OrderItem, OrderStatus
from sitecms.domain.repositories.order_repository import OrderRepository
from sitecms.infrastructure.db.mongo_connection import MongoClientManager
from sitecms.utils.datetime_utils import from_storage, now, to_storage


class MongoOrderRepository(OrderRepository):
    """
    MongoDB implementation of OrderRepository.

    Items are embedded in the order document; the total is stored for
    reporting but always recomputed from the items when loading.
    """

    def __init__(self, client: MongoClientManager, collection_name: Optional[str] = None):
        self._collection = client.get_collection(
            collection_name or get_settings().orders_collection
        )

    def _to_entity(self, doc: dict) -> Order:
        """Convert MongoDB document to Order entity."""
        items = [
            OrderItem(
                product_id=item[OrderFields.ITEM_PRODUCT_ID],
                product_name=item[OrderFields.ITEM_PRODUCT_NAME],
                quantity=int(item[OrderFields.ITEM_QUANTITY]),
                unit_price=float(item[OrderFields.ITEM_UNIT_PRICE]),
            )
            for item in doc.get(OrderFields.ITEMS, [])
        ]
        return Order(
            id=doc[OrderFields.ID],
            customer_first_name=doc.get(OrderFields.CUSTOMER_FIRST_NAME),
            customer_last_name=doc.get(OrderFields.CUSTOMER_LAST_NAME),
            customer_email=doc.get(OrderFields.CUSTOMER_EMAIL),
            customer_phone=doc.get(OrderFields.CUSTOMER_PHONE),
            items=items,
            status=OrderStatus.from_string(doc.get(OrderFields.STATUS, OrderStatus.NEW.value)),
            created_at=from_storage(doc.get(OrderFields.CREATED_AT)) or now(),
            updated_at=from_storage(doc.get(OrderFields.UPDATED_AT)) or now(),
        )

    def _to_document(self, order: Order) -> dict:
        """Convert Order entity to MongoDB document."""
        return {
            OrderFields.ID: order.id,
            OrderFields.CUSTOMER_FIRST_NAME: order.customer_first_name,
            OrderFields.CUSTOMER_LAST_NAME: order.customer_last_name,
            OrderFields.CUSTOMER_EMAIL: order.customer_email,
            OrderFields.CUSTOMER_PHONE: order.customer_phone,
            OrderFields.ITEMS: [
                {
                    OrderFields.ITEM_PRODUCT_ID: item.product_id,
                    OrderFields.ITEM_PRODUCT_NAME: item.product_name,
                    OrderFields.ITEM_QUANTITY: item.quantity,
                    OrderFields.ITEM_UNIT_PRICE: item.unit_price,
                }
                for item in order.items
            ],
            OrderFields.TOTAL_PRICE: order.total_price,
            OrderFields.STATUS: order.status.value,
            OrderFields.CREATED_AT: to_storage(order.created_at),
            OrderFields.UPDATED_AT: to_storage(order.updated_at),
        }

    def create(self, order: Order) -> Order:
        """Create a new order."""
        self._collection.insert_one(self._to_document(order))
        return order

    def update(self, order: Order) -> Order:
        """Update an existing order."""
        order.updated_at = now()
        doc = self._to_document(order)
        result = self._collection.find_one_and_update(
            {OrderFields.ID: order.id},
            {"$set": {k: v for k, v in doc.items() if k not in (OrderFields.ID, OrderFields.CREATED_AT)}},
            return_document=ReturnDocument.AFTER,
        )
        if not result:
            raise NotFoundError(f"Order '{order.id}' not found")
        return self._to_entity(result)

    def find_by_id(self, order_id: str) -> Optional[Order]:
        """Find an order by its ID."""
        doc = self._collection.find_one({OrderFields.ID: order_id})
        if not doc:
            return None
        return self._to_entity(doc)

    def find_all(self) -> List[Order]:
        """Find all orders, newest first."""
        docs = self._collection.find().sort(OrderFields.CREATED_AT, DESCENDING)
        return [self._to_entity(doc) for doc in docs]

    def delete(self, order_id: str) -> bool:
        """Delete an order."""
        result = self._collection.delete_one({OrderFields.ID: order_id})
        return result.deleted_count > 0
