"""
Update Order Status Use Case
============================
"""
import logging

from sitecms.core.errors import NotFoundError
from sitecms.domain.models.order import Order, OrderStatus
from sitecms.domain.repositories.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdateOrderStatusUseCase:
    def __init__(self, order_repository: OrderRepository):
        self._repository = order_repository

    def execute(self, order_id: str, new_status: str) -> Order:
        """
        Move an order to ``new_status``.

        Raises:
            NotFoundError: If the order does not exist
            ValueError: If the status is unknown or the transition is forbidden
        """
        target = OrderStatus.from_string(new_status)
        order = self._repository.find_by_id(order_id)
        if order is None:
            raise NotFoundError(f"Order '{order_id}' not found")
        previous = order.status
        order.change_status(target)
        updated = self._repository.update(order)
        logger.info("Order %s status %s -> %s", order_id, previous.value, target.value)
        return updated
