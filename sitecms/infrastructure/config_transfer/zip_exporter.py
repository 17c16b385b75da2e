"""
ZIP Exporter
============

Writes the website configuration (menu, pages, settings, social networks,
catalog, activities, availability and uploaded images) into a ZIP package.

Package layout::

    manifest.json
    data/menu-items.json
    data/page-contents.json
    data/settings.json
    data/social-networks.json
    data/products.json
    data/categories.json
    data/activities.json
    data/availability.json
    images/<folder>/<file>
"""
import io
import json
import logging
import re
import zipfile
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from sitecms.domain.constants.setting_keys import SECRET_SETTING_KEYS
from sitecms.domain.models.config_package import PackageManifest, PackageSummary
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
from sitecms.infrastructure.storage.file_storage import FileStorage, StorageFolders

logger = logging.getLogger(__name__)

MANIFEST_NAME = "manifest.json"
DATA_FILES = {
    "menu_items": "data/menu-items.json",
    "page_contents": "data/page-contents.json",
    "settings": "data/settings.json",
    "social_networks": "data/social-networks.json",
    "products": "data/products.json",
    "categories": "data/categories.json",
    "activities": "data/activities.json",
    "availability": "data/availability.json",
}
IMAGES_PREFIX = "images"

IMAGE_FILE_PATTERN = re.compile(r"\.(jpg|jpeg|png|gif|webp|ico|svg)$", re.IGNORECASE)
LOADER_FILE_PATTERN = re.compile(r"\.(gif|mp4|webm)$", re.IGNORECASE)

FOLDER_FILTERS = {
    StorageFolders.PAGE_CONTENT_IMAGES: IMAGE_FILE_PATTERN,
    StorageFolders.ICONS: IMAGE_FILE_PATTERN,
    StorageFolders.LOADERS: LOADER_FILE_PATTERN,
    StorageFolders.PRODUCT_IMAGES: IMAGE_FILE_PATTERN,
}


def image_entry_name(folder: str, filename: str) -> str:
    return f"{IMAGES_PREFIX}/{folder}/{filename}"


@dataclass
class ExportData:
    """Everything a package holds, already serialized to JSON-ready values."""
    data: Dict[str, Any]
    files: List[Tuple[str, str]]
    summary: PackageSummary


class ZipExporter:
    """Builds configuration packages from the repositories and file storage."""

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

    def _collect_files(self) -> List[Tuple[str, str]]:
        files = []
        for folder, pattern in FOLDER_FILTERS.items():
            files.extend((folder, name) for name in self._storage.list(folder) if pattern.search(name))
        return files

    def _collect(self) -> ExportData:
        settings = [
            setting for setting in self._settings.find_all()
            if setting.key not in SECRET_SETTING_KEYS
        ]
        availability = self._availability.get()
        data = {
            "menu_items": [serializers.menu_item_to_json(i) for i in self._menu_items.find_all()],
            "page_contents": [serializers.page_content_to_json(p) for p in self._page_contents.find_all()],
            "settings": [serializers.setting_to_json(s) for s in settings],
            "social_networks": [
                serializers.social_network_to_json(n) for n in self._social_networks.find_all()
            ],
            "products": [serializers.product_to_json(p) for p in self._products.find_all()],
            "categories": [serializers.category_to_json(c) for c in self._categories.find_all()],
            "activities": [serializers.activity_to_json(a) for a in self._activities.find_all()],
            "availability": serializers.availability_to_json(availability) if availability else None,
        }
        files = self._collect_files()
        summary = PackageSummary(
            menu_item_count=len(data["menu_items"]),
            page_content_count=len(data["page_contents"]),
            settings_count=len(data["settings"]),
            social_network_count=len(data["social_networks"]),
            product_count=len(data["products"]),
            category_count=len(data["categories"]),
            activity_count=len(data["activities"]),
            has_availability=availability is not None,
            image_count=len(files),
        )
        return ExportData(data=data, files=files, summary=summary)

    def get_export_summary(self) -> PackageManifest:
        """Manifest of what an export would contain, with the total file size."""
        export = self._collect()
        export.summary.total_size_bytes = sum(
            self._storage.size(folder, name) for folder, name in export.files
        )
        return PackageManifest(summary=export.summary)

    def export_to_zip(self) -> bytes:
        """
        Build the configuration package.

        Returns:
            ZIP archive bytes
        """
        export = self._collect()
        manifest = PackageManifest(summary=export.summary)

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            archive.writestr(MANIFEST_NAME, json.dumps(manifest.to_dict(), indent=2))
            for name, entry in DATA_FILES.items():
                archive.writestr(entry, json.dumps(export.data[name], indent=2, ensure_ascii=False))
            for folder, filename in export.files:
                content = self._storage.read(folder, filename)
                if content is not None:
                    archive.writestr(image_entry_name(folder, filename), content)

        logger.info(
            "Exported configuration: %d menu items, %d pages, %d products, %d files",
            export.summary.menu_item_count,
            export.summary.page_content_count,
            export.summary.product_count,
            export.summary.image_count,
        )
        return buffer.getvalue()
