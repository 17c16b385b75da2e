"""
Create Order Use Case
=====================

Public checkout: turns the visitor's cart into an order priced from the
catalog, stores it and sends the notification emails.
"""
import logging
from typing import Any, Dict, List

from sitecms.application.use_cases.email.send_order_notifications import (
    SendOrderNotificationEmailsUseCase,
)
from sitecms.domain.constants.setting_keys import SettingKeys
from sitecms.domain.models.cart import CartItem
from sitecms.domain.models.order import Order, OrderItem
from sitecms.domain.models.website_setting import parse_selling_enabled
from sitecms.domain.repositories.catalog_repository import ProductRepository
from sitecms.domain.repositories.order_repository import OrderRepository
from sitecms.domain.repositories.settings_repository import WebsiteSettingsRepository

logger = logging.getLogger(__name__)


class CreateOrderUseCase:
    def __init__(
        self,
        order_repository: OrderRepository,
        product_repository: ProductRepository,
        settings_repository: WebsiteSettingsRepository,
        send_notifications: SendOrderNotificationEmailsUseCase,
    ):
        self._orders = order_repository
        self._products = product_repository
        self._settings = settings_repository
        self._send_notifications = send_notifications

    def _selling_enabled(self) -> bool:
        setting = self._settings.find_by_key(SettingKeys.SELLING_ENABLED)
        return setting is not None and parse_selling_enabled(setting.value)

    def _order_items(self, cart: List[Dict[str, Any]]) -> List[OrderItem]:
        if not cart:
            raise ValueError("An order must contain at least one item")
        items = []
        for line in cart:
            cart_item = CartItem(line.get("product_id"), line.get("quantity"))
            product = self._products.find_by_id(cart_item.product_id)
            if product is None:
                raise ValueError(f"Product '{cart_item.product_id}' does not exist")
            items.append(OrderItem(
                product_id=product.id,
                product_name=product.name,
                quantity=cart_item.quantity,
                unit_price=product.price,
            ))
        return items

    def execute(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone: str,
        items: List[Dict[str, Any]],
    ) -> Order:
        """
        Place an order.

        Args:
            first_name: Customer first name
            last_name: Customer last name
            email: Customer email
            phone: French phone number
            items: Cart lines as {product_id, quantity}

        Returns:
            The stored order (status NEW)

        Raises:
            ValueError: If selling is disabled, the cart is invalid or the
                customer details are rejected
        """
        if not self._selling_enabled():
            raise ValueError("Online ordering is currently disabled")

        order = Order(
            customer_first_name=first_name,
            customer_last_name=last_name,
            customer_email=email,
            customer_phone=phone,
            items=self._order_items(items),
        )
        created = self._orders.create(order)
        logger.info("Order %s placed (%d item(s), total %.2f)", created.id, len(created.items), created.total_price)

        try:
            notification = self._send_notifications.execute(created)
            if notification.admin_error or notification.purchaser_error:
                logger.warning(
                    "Order %s notification problems: admin=%s purchaser=%s",
                    created.id, notification.admin_error, notification.purchaser_error,
                )
        except Exception as e:
            logger.error("Order %s notifications failed: %s", created.id, e, exc_info=True)
        return created
