from typing import TYPE_CHECKING

from ...application.services.page_service import PageService
from ...application.services.settings_service import SettingsService
from ...domain.repositories.catalog_repository import ProductRepository
from ...domain.repositories.page_repository import MenuItemRepository, PageContentRepository
from ...domain.repositories.settings_repository import SocialNetworkRepository, WebsiteSettingsRepository
from ...infrastructure.storage.file_storage import FileStorage

if TYPE_CHECKING:
    from ..base_container import BaseContainer


class SettingsProvider:
    """Site provider - registers the settings and page services"""

    @staticmethod
    def register(container: "BaseContainer") -> None:
        container.register_singleton(
            SettingsService,
            SettingsService(
                settings_repository=container.get(WebsiteSettingsRepository),
                social_network_repository=container.get(SocialNetworkRepository),
                file_storage=container.get(FileStorage),
            )
        )

        container.register_singleton(
            PageService,
            PageService(
                menu_item_repository=container.get(MenuItemRepository),
                page_content_repository=container.get(PageContentRepository),
                product_repository=container.get(ProductRepository),
                file_storage=container.get(FileStorage),
            )
        )
