"""
Config Transfer DTO
===================

Pydantic models for configuration export/import and backups.
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class PackageSummaryResponse(BaseModel):
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


class ManifestResponse(BaseModel):
    schema_version: str
    export_date: datetime
    source_identifier: str
    summary: PackageSummaryResponse


class ValidationResponse(BaseModel):
    is_valid: bool
    error: Optional[str] = None
    manifest: Optional[ManifestResponse] = None


class ImportResultResponse(BaseModel):
    success: bool
    summary: Optional[PackageSummaryResponse] = None
    backup_path: Optional[str] = Field(None, description="Backup written before the import")
    error: Optional[str] = None


class BackupResponse(BaseModel):
    filename: str
    size: int
    created_at: datetime
