"""
File Storage
============

Uploaded files (icons, loaders, product and page images) stored on disk
under ``PUBLIC_DIR``, one sub-folder per kind of asset.
"""
import logging
import os
import re
import shutil
import uuid
from typing import List, Optional

logger = logging.getLogger(__name__)


class StorageFolders:
    """Folder name constants"""
    ICONS = "icons"
    LOADERS = "loaders"
    PRODUCT_IMAGES = "product-images"
    PAGE_CONTENT_IMAGES = "page-content-images"

    ALL = (ICONS, LOADERS, PRODUCT_IMAGES, PAGE_CONTENT_IMAGES)


SAFE_FILENAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")
EXTENSION_PATTERN = re.compile(r"^\.[a-z0-9]{1,5}$")


class FileStorage:
    """
    Disk storage rooted at a base directory.

    Stored files get a generated name (uuid + original extension); reads
    only accept plain file names, so paths cannot escape their folder.
    """

    def __init__(self, base_dir: str):
        self._base_dir = os.path.abspath(base_dir)

    @property
    def base_dir(self) -> str:
        return self._base_dir

    def _folder_path(self, folder: str) -> str:
        if folder not in StorageFolders.ALL:
            raise ValueError(f"Unknown storage folder '{folder}'")
        return os.path.join(self._base_dir, folder)

    def path_for(self, folder: str, filename: str) -> Optional[str]:
        """
        Absolute path of a stored file.

        Returns:
            The path, or None when the name is unsafe or the file is missing
        """
        if not filename or not SAFE_FILENAME_PATTERN.match(filename) or ".." in filename:
            return None
        path = os.path.join(self._folder_path(folder), filename)
        return path if os.path.isfile(path) else None

    @staticmethod
    def extension_of(original_name: str) -> str:
        extension = os.path.splitext(original_name or "")[1].lower()
        if not EXTENSION_PATTERN.match(extension):
            raise ValueError(f"Unsupported file name '{original_name}'")
        return extension

    @classmethod
    def generate_name(cls, original_name: str) -> str:
        """Fresh file name keeping the extension of ``original_name``."""
        return f"{uuid.uuid4().hex}{cls.extension_of(original_name)}"

    def save(self, folder: str, original_name: str, content: bytes) -> str:
        """
        Store a file under a generated name.

        Args:
            folder: One of StorageFolders.ALL
            original_name: Name of the uploaded file (for its extension)
            content: File bytes

        Returns:
            Generated file name
        """
        filename = self.generate_name(original_name)
        self.write(folder, filename, content)
        return filename

    def write(self, folder: str, filename: str, content: bytes) -> None:
        """Write a file under an explicit (safe) name, replacing any existing one."""
        if not SAFE_FILENAME_PATTERN.match(filename or "") or ".." in filename:
            raise ValueError(f"Invalid file name '{filename}'")
        folder_path = self._folder_path(folder)
        os.makedirs(folder_path, exist_ok=True)
        with open(os.path.join(folder_path, filename), "wb") as handle:
            handle.write(content)
        logger.debug("Stored %s/%s (%d bytes)", folder, filename, len(content))

    def read(self, folder: str, filename: str) -> Optional[bytes]:
        path = self.path_for(folder, filename)
        if path is None:
            return None
        with open(path, "rb") as handle:
            return handle.read()

    def delete(self, folder: str, filename: str) -> bool:
        path = self.path_for(folder, filename)
        if path is None:
            return False
        os.remove(path)
        return True

    def list(self, folder: str) -> List[str]:
        folder_path = self._folder_path(folder)
        if not os.path.isdir(folder_path):
            return []
        return sorted(
            name for name in os.listdir(folder_path)
            if os.path.isfile(os.path.join(folder_path, name)) and not name.startswith(".")
        )

    def size(self, folder: str, filename: str) -> int:
        path = self.path_for(folder, filename)
        return os.path.getsize(path) if path else 0

    def clear(self, folder: str) -> int:
        """Delete every file of a folder; returns the number removed."""
        folder_path = self._folder_path(folder)
        if not os.path.isdir(folder_path):
            return 0
        count = len(self.list(folder))
        shutil.rmtree(folder_path)
        os.makedirs(folder_path, exist_ok=True)
        logger.info("Cleared %d file(s) from %s", count, folder)
        return count
