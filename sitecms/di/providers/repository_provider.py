from typing import TYPE_CHECKING

from ...core.config import get_settings
from ...domain.repositories.appointment_repository import (
    ActivityRepository,
    AppointmentRepository,
    AvailabilityRepository,
)
from ...domain.repositories.catalog_repository import CategoryRepository, ProductRepository
from ...domain.repositories.email_repository import EmailLogRepository, EmailSettingsRepository
from ...domain.repositories.order_repository import OrderRepository
from ...domain.repositories.page_repository import MenuItemRepository, PageContentRepository
from ...domain.repositories.settings_repository import SocialNetworkRepository, WebsiteSettingsRepository
from ...infrastructure.db.mongo_appointment_repository import (
    MongoActivityRepository,
    MongoAppointmentRepository,
    MongoAvailabilityRepository,
)
from ...infrastructure.db.mongo_catalog_repository import MongoCategoryRepository, MongoProductRepository
from ...infrastructure.db.mongo_email_log_repository import MongoEmailLogRepository
from ...infrastructure.db.mongo_order_repository import MongoOrderRepository
from ...infrastructure.db.mongo_page_repository import MongoMenuItemRepository, MongoPageContentRepository
from ...infrastructure.db.mongo_settings_repository import (
    MongoSocialNetworkRepository,
    MongoWebsiteSettingsRepository,
)
from ...infrastructure.email.password_encryption import PasswordEncryption
from ...infrastructure.email.settings_email_repository import SettingsEmailRepository
from ...infrastructure.storage.file_storage import FileStorage

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class RepositoryProvider:
    """Repository registration provider - wires domain interfaces to infrastructure implementations"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        """
        Register all repository implementations.
        Gets database client from database provider and creates repository instances.
        """
        settings = get_settings()
        mongo_client = container.get("mongo_client")

        # Domain interfaces -> Infrastructure implementations
        container.register_singleton(ProductRepository, MongoProductRepository(mongo_client))
        container.register_singleton(CategoryRepository, MongoCategoryRepository(mongo_client))
        container.register_singleton(OrderRepository, MongoOrderRepository(mongo_client))
        container.register_singleton(ActivityRepository, MongoActivityRepository(mongo_client))
        container.register_singleton(AppointmentRepository, MongoAppointmentRepository(mongo_client))
        container.register_singleton(AvailabilityRepository, MongoAvailabilityRepository(mongo_client))
        container.register_singleton(MenuItemRepository, MongoMenuItemRepository(mongo_client))
        container.register_singleton(PageContentRepository, MongoPageContentRepository(mongo_client))
        container.register_singleton(WebsiteSettingsRepository, MongoWebsiteSettingsRepository(mongo_client))
        container.register_singleton(SocialNetworkRepository, MongoSocialNetworkRepository(mongo_client))
        container.register_singleton(EmailLogRepository, MongoEmailLogRepository(mongo_client))

        # Email configuration lives in the website settings collection
        container.register_singleton(
            EmailSettingsRepository,
            SettingsEmailRepository(
                settings_repository=container.get(WebsiteSettingsRepository),
                encryption=PasswordEncryption(settings.smtp_encryption_key),
            ),
        )

        container.register_singleton(FileStorage, FileStorage(settings.public_dir))
