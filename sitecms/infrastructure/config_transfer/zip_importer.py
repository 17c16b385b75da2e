"""
ZIP Importer
============

Validates configuration packages and replaces the current configuration
with their content. A backup of the current configuration is taken before
anything is deleted.
"""
import io
import json
import logging
import zipfile
from typing import Any, Optional

from sitecms.domain.constants.setting_keys import SECRET_SETTING_KEYS, SettingKeys
from sitecms.domain.models.config_package import (
    CURRENT_PACKAGE_VERSION,
    ImportResult,
    PackageManifest,
    PackageSummary,
    PackageVersion,
    ValidationResult,
)
from sitecms.domain.models.setting_normalizers import normalize_setting
from sitecms.domain.repositories.appointment_repository import (
    ActivityRepository,
    AvailabilityRepository,
)
from sitecms.domain.repositories.catalog_repository import CategoryRepository, ProductRepository
from sitecms.domain.repositories.page_repository import MenuItemRepository, PageContentRepository
from sitecms.domain.repositories.settings_repository import (
    SocialNetworkRepository,
    WebsiteSettingsRepository,
)
from sitecms.infrastructure.config_transfer import serializers
from sitecms.infrastructure.config_transfer.backup_service import BackupService
from sitecms.infrastructure.config_transfer.zip_exporter import (
    DATA_FILES,
    FOLDER_FILTERS,
    IMAGES_PREFIX,
    MANIFEST_NAME,
)
from sitecms.infrastructure.storage.file_storage import FileStorage, StorageFolders

logger = logging.getLogger(__name__)

IMAGE_SETTING_KEYS = (SettingKeys.WEBSITE_ICON, SettingKeys.HEADER_LOGO)


class ZipImporter:
    """Reads configuration packages written by ZipExporter."""

    def __init__(
        self,
        menu_item_repository: MenuItemRepository,
        page_content_repository: PageContentRepository,
        settings_repository: WebsiteSettingsRepository,
        social_network_repository: SocialNetworkRepository,
        product_repository: ProductRepository,
        category_repository: CategoryRepository,
        activity_repository: ActivityRepository,
        availability_repository: AvailabilityRepository,
        file_storage: FileStorage,
        backup_service: BackupService,
        api_base_url: str = "",
    ):
        self._menu_items = menu_item_repository
        self._page_contents = page_content_repository
        self._settings = settings_repository
        self._social_networks = social_network_repository
        self._products = product_repository
        self._categories = category_repository
        self._activities = activity_repository
        self._availability = availability_repository
        self._storage = file_storage
        self._backups = backup_service
        self._api_base_url = (api_base_url or "").rstrip("/")

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    @staticmethod
    def _open(content: bytes) -> zipfile.ZipFile:
        return zipfile.ZipFile(io.BytesIO(content))

    def validate(self, content: bytes) -> ValidationResult:
        """
        Check that ``content`` is a package this installation can import.

        Returns:
            ValidationResult carrying the manifest, or the reason it is invalid
        """
        try:
            with self._open(content) as archive:
                if MANIFEST_NAME not in archive.namelist():
                    return ValidationResult.invalid("Invalid package: manifest.json missing")
                manifest_data = json.loads(archive.read(MANIFEST_NAME).decode("utf-8"))
        except zipfile.BadZipFile:
            return ValidationResult.invalid("Invalid package: not a ZIP archive")
        except ValueError as e:
            return ValidationResult.invalid(f"Invalid package: {e}")

        if not isinstance(manifest_data, dict):
            return ValidationResult.invalid("Invalid package: malformed manifest")
        try:
            version = PackageVersion.parse(manifest_data.get("schemaVersion"))
        except ValueError as e:
            return ValidationResult.invalid(str(e))
        if not version.is_compatible_with(CURRENT_PACKAGE_VERSION):
            return ValidationResult.invalid(
                f"Incompatible package version {version}. Current version {CURRENT_PACKAGE_VERSION}"
            )
        try:
            manifest = PackageManifest.from_dict(manifest_data)
        except (TypeError, ValueError, AttributeError):
            return ValidationResult.invalid("Invalid package: malformed manifest")
        return ValidationResult.valid(manifest)

    def preview(self, content: bytes) -> ValidationResult:
        """Validation result and manifest of a package; nothing is changed."""
        return self.validate(content)

    # ------------------------------------------------------------------
    # Import
    # ------------------------------------------------------------------

    def import_from_zip(self, content: bytes) -> ImportResult:
        """
        Replace the current configuration with the package content.

        Returns:
            ImportResult with the counts actually imported and the backup path
        """
        validation = self.validate(content)
        if not validation.is_valid:
            return ImportResult(success=False, error=validation.error or "Invalid package")

        logger.info(
            "Importing package exported on %s from '%s'",
            validation.manifest.export_date.isoformat(),
            validation.manifest.source_identifier,
        )
        backup_path = self._backups.create_backup()

        try:
            with self._open(content) as archive:
                self._clear_existing_data()
                summary = self._import_all(archive)
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            logger.error("Configuration import failed: %s", e, exc_info=True)
            return ImportResult(
                success=False,
                backup_path=backup_path,
                error=f"Import failed: {e}. A backup was saved before the import.",
            )

        logger.info("Configuration imported: %s", summary.to_dict())
        return ImportResult(success=True, summary=summary, backup_path=backup_path)

    def _clear_existing_data(self) -> None:
        self._page_contents.delete_all()
        self._menu_items.delete_all()
        self._products.delete_all()
        self._categories.delete_all()
        self._activities.delete_all()
        self._availability.delete()
        self._social_networks.delete_all()
        for folder in StorageFolders.ALL:
            self._storage.clear(folder)

    @staticmethod
    def _read_json(archive: zipfile.ZipFile, name: str) -> Optional[Any]:
        entry = DATA_FILES[name]
        if entry not in archive.namelist():
            return None
        return json.loads(archive.read(entry).decode("utf-8"))

    def _import_all(self, archive: zipfile.ZipFile) -> PackageSummary:
        summary = PackageSummary()

        for data in self._read_json(archive, "menu_items") or []:
            self._menu_items.create(serializers.menu_item_from_json(data))
            summary.menu_item_count += 1

        for data in self._read_json(archive, "page_contents") or []:
            self._page_contents.save(serializers.page_content_from_json(data))
            summary.page_content_count += 1

        for data in self._read_json(archive, "settings") or []:
            if self._import_setting(data):
                summary.settings_count += 1

        networks = [
            serializers.social_network_from_json(data)
            for data in self._read_json(archive, "social_networks") or []
        ]
        if networks:
            self._social_networks.replace_all(networks)
        summary.social_network_count = len(networks)

        for data in self._read_json(archive, "categories") or []:
            self._categories.create(serializers.category_from_json(data))
            summary.category_count += 1

        for data in self._read_json(archive, "products") or []:
            self._products.create(serializers.product_from_json(data))
            summary.product_count += 1

        for data in self._read_json(archive, "activities") or []:
            self._activities.create(serializers.activity_from_json(data))
            summary.activity_count += 1

        availability = self._read_json(archive, "availability")
        if availability:
            self._availability.save(serializers.availability_from_json(availability))
            summary.has_availability = True

        summary.image_count = self._import_files(archive)
        return summary

    def _import_setting(self, data: Any) -> bool:
        """Store one exported setting; invalid values and secrets are skipped."""
        key = data.get("key") if isinstance(data, dict) else None
        if not isinstance(key, str) or key in SECRET_SETTING_KEYS:
            return False
        try:
            value = normalize_setting(key, self._rewrite_file_url(key, data.get("value")))
            self._settings.set(key, value)
        except ValueError as e:
            logger.warning("Skipping setting '%s': %s", key, e)
            return False
        return True

    def _rewrite_file_url(self, key: str, value: Any) -> Any:
        """Point icon, logo and loader settings at this installation's file routes."""
        if not isinstance(value, dict) or "url" not in value or not isinstance(value.get("metadata"), dict):
            return value
        filename = value["metadata"].get("filename")
        if not filename:
            return value
        if key in IMAGE_SETTING_KEYS:
            return {**value, "url": f"{self._api_base_url}/api/v1/public/icons/{filename}"}
        if key == SettingKeys.CUSTOM_LOADER:
            return {**value, "url": f"{self._api_base_url}/api/v1/public/loaders/{filename}"}
        return value

    def _import_files(self, archive: zipfile.ZipFile) -> int:
        count = 0
        for entry in archive.namelist():
            parts = entry.split("/")
            if len(parts) != 3 or parts[0] != IMAGES_PREFIX or not parts[2]:
                continue
            folder, filename = parts[1], parts[2]
            pattern = FOLDER_FILTERS.get(folder)
            if pattern is None or not pattern.search(filename):
                logger.warning("Ignoring unexpected package entry '%s'", entry)
                continue
            try:
                self._storage.write(folder, filename, archive.read(entry))
            except ValueError as e:
                logger.warning("Skipping file '%s': %s", entry, e)
                continue
            count += 1
        return count
