"""
Configuration Package Models
============================

Version, manifest and summary of the ZIP packages used to move a website
configuration from one installation to another.
"""
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from sitecms.utils.datetime_utils import now, parse_iso, to_iso

VERSION_PATTERN = re.compile(r"^(\d+)\.(\d+)$")
SOURCE_IDENTIFIER = "sitecms"


@dataclass(frozen=True)
class PackageVersion:
    """``MAJOR.MINOR`` schema version; packages are compatible within a major."""
    major: int
    minor: int

    def __post_init__(self) -> None:
        if self.major < 0 or self.minor < 0:
            raise ValueError("Version numbers cannot be negative")

    @classmethod
    def parse(cls, value: str) -> "PackageVersion":
        match = VERSION_PATTERN.match((value or "").strip()) if isinstance(value, str) else None
        if match is None:
            raise ValueError(f"Invalid package version '{value}'")
        return cls(int(match.group(1)), int(match.group(2)))

    def is_compatible_with(self, other: "PackageVersion") -> bool:
        return self.major == other.major

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


CURRENT_PACKAGE_VERSION = PackageVersion(1, 2)


@dataclass
class PackageSummary:
    menu_item_count: int = 0
    page_content_count: int = 0
    settings_count: int = 0
    social_network_count: int = 0
    product_count: int = 0
    category_count: int = 0
    activity_count: int = 0
    has_availability: bool = False
    image_count: int = 0
    total_size_bytes: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "menuItemCount": self.menu_item_count,
            "pageContentCount": self.page_content_count,
            "settingsCount": self.settings_count,
            "socialNetworkCount": self.social_network_count,
            "productCount": self.product_count,
            "categoryCount": self.category_count,
            "activityCount": self.activity_count,
            "hasAvailability": self.has_availability,
            "imageCount": self.image_count,
            "totalSizeBytes": self.total_size_bytes,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PackageSummary":
        data = data or {}
        return cls(
            menu_item_count=int(data.get("menuItemCount", 0)),
            page_content_count=int(data.get("pageContentCount", 0)),
            settings_count=int(data.get("settingsCount", 0)),
            social_network_count=int(data.get("socialNetworkCount", 0)),
            product_count=int(data.get("productCount", 0)),
            category_count=int(data.get("categoryCount", 0)),
            activity_count=int(data.get("activityCount", 0)),
            has_availability=bool(data.get("hasAvailability", False)),
            image_count=int(data.get("imageCount", 0)),
            total_size_bytes=int(data.get("totalSizeBytes", 0)),
        )


@dataclass
class PackageManifest:
    summary: PackageSummary
    schema_version: PackageVersion = CURRENT_PACKAGE_VERSION
    export_date: datetime = field(default_factory=lambda: now())
    source_identifier: str = SOURCE_IDENTIFIER

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schemaVersion": str(self.schema_version),
            "exportDate": to_iso(self.export_date),
            "sourceIdentifier": self.source_identifier,
            "summary": self.summary.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PackageManifest":
        """
        Read a manifest.

        Raises:
            ValueError: If the schema version is missing or malformed
        """
        return cls(
            summary=PackageSummary.from_dict(data.get("summary")),
            schema_version=PackageVersion.parse(data.get("schemaVersion")),
            export_date=parse_iso(data.get("exportDate")) or now(),
            source_identifier=data.get("sourceIdentifier") or SOURCE_IDENTIFIER,
        )


@dataclass
class ValidationResult:
    is_valid: bool
    error: Optional[str] = None
    manifest: Optional[PackageManifest] = None

    @classmethod
    def valid(cls, manifest: PackageManifest) -> "ValidationResult":
        return cls(is_valid=True, manifest=manifest)

    @classmethod
    def invalid(cls, error: str) -> "ValidationResult":
        return cls(is_valid=False, error=error)


@dataclass
class ImportResult:
    success: bool
    summary: Optional[PackageSummary] = None
    backup_path: Optional[str] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "summary": self.summary.to_dict() if self.summary else None,
            "backupPath": self.backup_path,
            "error": self.error,
        }
