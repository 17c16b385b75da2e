from typing import TYPE_CHECKING

from ...application.services.config_transfer_service import ConfigTransferService
from ...core.config import get_settings
from ...domain.repositories.appointment_repository import ActivityRepository, AvailabilityRepository
from ...domain.repositories.catalog_repository import CategoryRepository, ProductRepository
from ...domain.repositories.page_repository import MenuItemRepository, PageContentRepository
from ...domain.repositories.settings_repository import SocialNetworkRepository, WebsiteSettingsRepository
from ...infrastructure.config_transfer.backup_service import BackupService
from ...infrastructure.config_transfer.zip_exporter import ZipExporter
from ...infrastructure.config_transfer.zip_importer import ZipImporter
from ...infrastructure.storage.file_storage import FileStorage

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class ConfigTransferProvider:
    """Config transfer provider - registers the ZIP exporter, importer and backups"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        settings = get_settings()
        repositories = dict(
            menu_item_repository=container.get(MenuItemRepository),
            page_content_repository=container.get(PageContentRepository),
            settings_repository=container.get(WebsiteSettingsRepository),
            social_network_repository=container.get(SocialNetworkRepository),
            product_repository=container.get(ProductRepository),
            category_repository=container.get(CategoryRepository),
            activity_repository=container.get(ActivityRepository),
            availability_repository=container.get(AvailabilityRepository),
            file_storage=container.get(FileStorage),
        )

        exporter = ZipExporter(**repositories)
        backup_service = BackupService(exporter, settings.backups_dir)
        importer = ZipImporter(
            **repositories,
            backup_service=backup_service,
            api_base_url=settings.api_base_url,
        )

        container.register_singleton(
            ConfigTransferService,
            ConfigTransferService(exporter=exporter, importer=importer, backup_service=backup_service)
        )
