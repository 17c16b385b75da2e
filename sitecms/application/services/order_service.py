"""
Order Service
=============

Application service for checkout and order management.
"""
from typing import Any, Dict, List

from sitecms.application.use_cases.email.send_order_notifications import SendOrderNotificationEmailsUseCase
from sitecms.application.use_cases.orders.create_order import CreateOrderUseCase
from sitecms.application.use_cases.orders.update_order_status import UpdateOrderStatusUseCase
from sitecms.core.errors import NotFoundError
from sitecms.domain.models.order import Order
from sitecms.domain.repositories.catalog_repository import ProductRepository
from sitecms.domain.repositories.order_repository import OrderRepository
from sitecms.domain.repositories.settings_repository import WebsiteSettingsRepository


class OrderService:
    def __init__(
        self,
        order_repository: OrderRepository,
        product_repository: ProductRepository,
        settings_repository: WebsiteSettingsRepository,
        send_notifications: SendOrderNotificationEmailsUseCase,
    ):
        self._orders = order_repository
        self._create_order = CreateOrderUseCase(
            order_repository, product_repository, settings_repository, send_notifications
        )
        self._update_status = UpdateOrderStatusUseCase(order_repository)

    def create_order(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone: str,
        items: List[Dict[str, Any]],
    ) -> Order:
        """
        Place an order from the public checkout.

        Unit prices and product names are taken from the catalog, never from
        the request.
        """
        return self._create_order.execute(first_name, last_name, email, phone, items)

    def list_orders(self) -> List[Order]:
        """Orders, newest first."""
        return self._orders.find_all()

    def get_order(self, order_id: str) -> Order:
        order = self._orders.find_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order '{order_id}' not found")
        return order

    def update_status(self, order_id: str, new_status: str) -> Order:
        return self._update_status.execute(order_id, new_status)

    def delete_order(self, order_id: str) -> None:
        if not self._orders.delete(order_id):
            raise NotFoundError(f"Order '{order_id}' not found")
