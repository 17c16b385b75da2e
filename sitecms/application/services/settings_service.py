"""
Settings Service
================

Application service for website settings, uploaded site assets and
social networks.
"""
from typing import Any, Dict, List, Optional

from sitecms.application.use_cases.settings.get_settings import GetPublicSettingsUseCase, GetSettingsUseCase
from sitecms.application.use_cases.settings.manage_site_assets import DeleteSiteAssetUseCase, UploadSiteAssetUseCase
from sitecms.application.use_cases.settings.manage_social_networks import (
    GetSocialNetworksUseCase,
    UpdateSocialNetworksUseCase,
)
from sitecms.application.use_cases.settings.update_setting import UpdateSettingUseCase
from sitecms.domain.constants.available_fonts import AVAILABLE_FONTS, FontMetadata
from sitecms.domain.constants.setting_keys import is_valid_setting_key
from sitecms.domain.constants.theme_palette import THEME_COLOR_PALETTE
from sitecms.domain.models.social_network import SocialNetwork
from sitecms.domain.models.website_setting import ThemeColor, WebsiteFont, WebsiteSetting
from sitecms.domain.repositories.settings_repository import SocialNetworkRepository, WebsiteSettingsRepository
from sitecms.infrastructure.storage.file_storage import FileStorage


class SettingsService:
    """
    Application service for website settings.

    Typed settings go through UpdateSettingUseCase; icons, logos and loaders
    through the asset use cases that also manage the stored files.
    """

    def __init__(
        self,
        settings_repository: WebsiteSettingsRepository,
        social_network_repository: SocialNetworkRepository,
        file_storage: FileStorage,
    ):
        self._repository = settings_repository
        self._get_settings = GetSettingsUseCase(settings_repository)
        self._get_public_settings = GetPublicSettingsUseCase(settings_repository)
        self._update_setting = UpdateSettingUseCase(settings_repository)
        self._upload_asset = UploadSiteAssetUseCase(settings_repository, file_storage)
        self._delete_asset = DeleteSiteAssetUseCase(settings_repository, file_storage)
        self._get_social_networks = GetSocialNetworksUseCase(social_network_repository)
        self._update_social_networks = UpdateSocialNetworksUseCase(social_network_repository)

    def get_all_settings(self) -> Dict[str, Any]:
        """All settings with defaults filled in (email configuration excluded)."""
        return self._get_settings.execute()

    def get_public_settings(self) -> Dict[str, Any]:
        return self._get_public_settings.execute()

    def get_setting(self, key: str) -> Optional[WebsiteSetting]:
        """
        Get one stored setting.

        Raises:
            ValueError: If ``key`` is not a setting key
        """
        if not is_valid_setting_key(key):
            raise ValueError(f"Unknown setting key '{key}'")
        return self._repository.find_by_key(key)

    def update_setting(self, key: str, value: Any) -> WebsiteSetting:
        return self._update_setting.execute(key, value)

    def list_fonts(self) -> List[FontMetadata]:
        return list(AVAILABLE_FONTS)

    def google_fonts_url(self, font: FontMetadata) -> str:
        return WebsiteFont(font.name).google_fonts_url

    def list_theme_colors(self) -> List[ThemeColor]:
        return [ThemeColor(value) for value in THEME_COLOR_PALETTE]

    def upload_asset(self, key: str, original_name: str, content: bytes, content_type: Optional[str]) -> Dict[str, Any]:
        """
        Store an icon, logo or loader file and update its setting.

        Args:
            key: website-icon, header-logo or custom-loader
            original_name: Uploaded file name
            content: File bytes
            content_type: MIME type sent by the browser
        """
        return self._upload_asset.execute(key, original_name, content, content_type)

    def delete_asset(self, key: str) -> bool:
        return self._delete_asset.execute(key)

    def get_social_networks(self, enabled_only: bool = False) -> List[SocialNetwork]:
        return self._get_social_networks.execute(enabled_only=enabled_only)

    def update_social_networks(self, items: List[Dict[str, Any]]) -> List[SocialNetwork]:
        return self._update_social_networks.execute(items)
