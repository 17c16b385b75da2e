from typing import TYPE_CHECKING

from ...application.services.catalog_service import CatalogService
from ...application.services.order_service import OrderService
from ...application.use_cases.email.send_order_notifications import SendOrderNotificationEmailsUseCase
from ...domain.repositories.catalog_repository import CategoryRepository, ProductRepository
from ...domain.repositories.order_repository import OrderRepository
from ...domain.repositories.settings_repository import WebsiteSettingsRepository
from ...infrastructure.storage.file_storage import FileStorage

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class CommerceProvider:
    """Commerce provider - registers the catalog and order services"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        container.register_singleton(
            CatalogService,
            CatalogService(
                product_repository=container.get(ProductRepository),
                category_repository=container.get(CategoryRepository),
                file_storage=container.get(FileStorage),
            )
        )

        container.register_singleton(
            OrderService,
            OrderService(
                order_repository=container.get(OrderRepository),
                product_repository=container.get(ProductRepository),
                settings_repository=container.get(WebsiteSettingsRepository),
                send_notifications=container.get(SendOrderNotificationEmailsUseCase),
            )
        )
