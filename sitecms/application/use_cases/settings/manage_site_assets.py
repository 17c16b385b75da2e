"""
Site Asset Use Cases
====================

Upload and removal of the files referenced by settings: website icon,
header logo and custom loader.
"""
import logging
from typing import Any, Dict, Optional

from sitecms.domain.constants.setting_keys import SettingKeys
from sitecms.domain.models.website_setting import (
    CustomLoader,
    HeaderLogo,
    ImageMetadata,
    WebsiteIcon,
)
from sitecms.domain.repositories.settings_repository import WebsiteSettingsRepository
from sitecms.infrastructure.storage.file_storage import FileStorage, StorageFolders
from sitecms.utils.datetime_utils import now

logger = logging.getLogger(__name__)

ASSET_FOLDERS = {
    SettingKeys.WEBSITE_ICON: StorageFolders.ICONS,
    SettingKeys.HEADER_LOGO: StorageFolders.ICONS,
    SettingKeys.CUSTOM_LOADER: StorageFolders.LOADERS,
}

PUBLIC_ROUTES = {
    StorageFolders.ICONS: "/api/v1/public/icons",
    StorageFolders.LOADERS: "/api/v1/public/loaders",
}


class UploadSiteAssetUseCase:
    """
    Store an uploaded icon, logo or loader and point its setting at it.

    The previous file of the setting, if any, is deleted once the new one
    is stored.
    """

    def __init__(self, settings_repository: WebsiteSettingsRepository, file_storage: FileStorage):
        self._settings = settings_repository
        self._storage = file_storage

    def _build_value(self, key: str, url: str, metadata: ImageMetadata) -> Dict[str, Any]:
        if key == SettingKeys.WEBSITE_ICON:
            return WebsiteIcon(url=url, metadata=metadata).to_dict()
        if key == SettingKeys.HEADER_LOGO:
            return HeaderLogo(url=url, metadata=metadata).to_dict()
        loader = CustomLoader(
            type=CustomLoader.type_for_extension(metadata.format),
            url=url,
            metadata=metadata,
        )
        return loader.to_dict()

    def execute(
        self,
        key: str,
        original_name: str,
        content: bytes,
        content_type: Optional[str],
    ) -> Dict[str, Any]:
        """
        Args:
            key: website-icon, header-logo or custom-loader
            original_name: Name of the uploaded file
            content: File bytes
            content_type: MIME type sent with the upload

        Returns:
            The new setting value ({url, metadata} plus type for loaders)

        Raises:
            ValueError: If the key is not a file setting or the file is rejected
        """
        folder = ASSET_FOLDERS.get(key)
        if folder is None:
            raise ValueError(f"Setting '{key}' does not hold a file")

        filename = self._storage.generate_name(original_name)
        metadata = ImageMetadata(
            filename=filename,
            original_name=original_name,
            size=len(content),
            format=filename.rsplit(".", 1)[-1],
            mime_type=content_type or "",
            uploaded_at=now(),
        )
        value = self._build_value(key, f"{PUBLIC_ROUTES[folder]}/{filename}", metadata)

        previous = self._settings.find_by_key(key)
        self._storage.write(folder, filename, content)
        self._settings.set(key, value)
        _delete_file(self._storage, folder, previous.value if previous else None)

        logger.info("Uploaded %s '%s' as %s", key, original_name, filename)
        return value


class DeleteSiteAssetUseCase:
    """Remove an icon, logo or loader setting and its file."""

    def __init__(self, settings_repository: WebsiteSettingsRepository, file_storage: FileStorage):
        self._settings = settings_repository
        self._storage = file_storage

    def execute(self, key: str) -> bool:
        folder = ASSET_FOLDERS.get(key)
        if folder is None:
            raise ValueError(f"Setting '{key}' does not hold a file")
        previous = self._settings.find_by_key(key)
        if previous is None:
            return False
        _delete_file(self._storage, folder, previous.value)
        return self._settings.delete(key)


def _delete_file(storage: FileStorage, folder: str, value: Any) -> None:
    if not isinstance(value, dict):
        return
    filename = (value.get("metadata") or {}).get("filename")
    if filename and storage.delete(folder, filename):
        logger.info("Deleted previous file %s/%s", folder, filename)
