"""
Backup Service
==============

Stores a package of the current configuration before an import replaces
it, and lists or reads the backups already taken.
"""
import logging
import os
import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sitecms.infrastructure.config_transfer.zip_exporter import ZipExporter
from sitecms.utils.datetime_utils import to_iso

logger = logging.getLogger(__name__)

BACKUP_NAME_PATTERN = re.compile(r"^backup-[0-9a-f\-]{32,36}\.zip$")


@dataclass
class BackupFile:
    filename: str
    path: str
    size: int
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "size": self.size,
            "createdAt": to_iso(self.created_at),
        }


class BackupService:
    """Backups live in ``<TEMP_DIR>/backups`` as ``backup-<uuid>.zip``."""

    def __init__(self, exporter: ZipExporter, backups_dir: str):
        self._exporter = exporter
        self._backups_dir = backups_dir

    def create_backup(self) -> str:
        """
        Export the current configuration into a new backup file.

        Returns:
            Absolute path of the backup
        """
        os.makedirs(self._backups_dir, exist_ok=True)
        path = os.path.join(self._backups_dir, f"backup-{uuid.uuid4()}.zip")
        content = self._exporter.export_to_zip()
        with open(path, "wb") as handle:
            handle.write(content)
        logger.info("Configuration backup written to %s (%d bytes)", path, len(content))
        return path

    def _describe(self, filename: str) -> BackupFile:
        path = os.path.join(self._backups_dir, filename)
        stat = os.stat(path)
        return BackupFile(
            filename=filename,
            path=path,
            size=stat.st_size,
            created_at=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
        )

    def list_backups(self) -> List[BackupFile]:
        """Existing backups, newest first."""
        if not os.path.isdir(self._backups_dir):
            return []
        backups = [
            self._describe(name) for name in os.listdir(self._backups_dir)
            if BACKUP_NAME_PATTERN.match(name)
        ]
        return sorted(backups, key=lambda backup: backup.created_at, reverse=True)

    def read_backup(self, filename: str) -> Optional[bytes]:
        """Content of a backup, or None for an unknown or malformed name."""
        if not BACKUP_NAME_PATTERN.match(filename or ""):
            return None
        path = os.path.join(self._backups_dir, filename)
        if not os.path.isfile(path):
            return None
        with open(path, "rb") as handle:
            return handle.read()
