"""
Config Transfer Service
=======================

Application service for exporting and importing the site configuration as
a ZIP package, and for the backups taken before each import.
"""
import logging
from typing import List, Optional

from sitecms.domain.models.config_package import ImportResult, PackageManifest, ValidationResult
from sitecms.infrastructure.config_transfer.backup_service import BackupFile, BackupService
from sitecms.infrastructure.config_transfer.zip_exporter import ZipExporter
from sitecms.infrastructure.config_transfer.zip_importer import ZipImporter

logger = logging.getLogger(__name__)


class ConfigTransferService:
    def __init__(self, exporter: ZipExporter, importer: ZipImporter, backup_service: BackupService):
        self._exporter = exporter
        self._importer = importer
        self._backups = backup_service

    def get_export_summary(self) -> PackageManifest:
        """Manifest of what an export would contain, without building the ZIP."""
        return self._exporter.get_export_summary()

    def export_package(self) -> bytes:
        content = self._exporter.export_to_zip()
        logger.info("Configuration exported (%d bytes)", len(content))
        return content

    def preview_package(self, content: bytes) -> ValidationResult:
        return self._importer.preview(content)

    def import_package(self, content: bytes) -> ImportResult:
        """
        Replace the current configuration with the package content.

        A backup of the current configuration is written first; its path
        is part of the result.
        """
        return self._importer.import_from_zip(content)

    def list_backups(self) -> List[BackupFile]:
        return self._backups.list_backups()

    def read_backup(self, filename: str) -> Optional[bytes]:
        return self._backups.read_backup(filename)
