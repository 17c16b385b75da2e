"""
Config Controller
=================

Admin endpoints to export the site configuration as a ZIP package, import
one back, and download the backups taken before each import.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile, status

from sitecms.api.v1.dependencies import get_config_transfer_service
from sitecms.api.v1.security import require_admin
from sitecms.application.dto.config_dto import (
    BackupResponse,
    ImportResultResponse,
    ManifestResponse,
    PackageSummaryResponse,
    ValidationResponse,
)
from sitecms.application.services.config_transfer_service import ConfigTransferService
from sitecms.domain.models.config_package import PackageManifest, PackageSummary
from sitecms.utils.datetime_utils import now

router = APIRouter(tags=["config"], dependencies=[Depends(require_admin)])

ZIP_MEDIA_TYPE = "application/zip"


def summary_response(summary: Optional[PackageSummary]) -> Optional[PackageSummaryResponse]:
    if summary is None:
        return None
    return PackageSummaryResponse(**vars(summary))


def manifest_response(manifest: Optional[PackageManifest]) -> Optional[ManifestResponse]:
    if manifest is None:
        return None
    return ManifestResponse(
        schema_version=str(manifest.schema_version),
        export_date=manifest.export_date,
        source_identifier=manifest.source_identifier,
        summary=summary_response(manifest.summary),
    )


def zip_download(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type=ZIP_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/summary", response_model=ManifestResponse, summary="Describe what an export would contain")
async def get_export_summary(
    service: ConfigTransferService = Depends(get_config_transfer_service),
) -> ManifestResponse:
    return manifest_response(service.get_export_summary())


@router.get(
    "/export",
    summary="Export the configuration",
    description="Download a ZIP with the manifest, the site data and every uploaded file.",
    response_class=Response,
)
async def export_configuration(
    service: ConfigTransferService = Depends(get_config_transfer_service),
) -> Response:
    content = service.export_package()
    return zip_download(content, f"site-config-{now().strftime('%Y%m%d-%H%M%S')}.zip")


@router.post(
    "/preview",
    response_model=ValidationResponse,
    summary="Validate a package without importing it",
)
async def preview_configuration(
    file: UploadFile = File(...),
    service: ConfigTransferService = Depends(get_config_transfer_service),
) -> ValidationResponse:
    result = service.preview_package(await file.read())
    return ValidationResponse(
        is_valid=result.is_valid,
        error=result.error,
        manifest=manifest_response(result.manifest),
    )


@router.post(
    "/import",
    response_model=ImportResultResponse,
    summary="Import a configuration package",
    description="""
    Replace menu, pages, settings, social networks, catalog, activities,
    availability and uploaded files with the package content.

    A backup of the current configuration is written first. Packages whose
    major schema version differs from the current one are refused.
    """
)
async def import_configuration(
    file: UploadFile = File(...),
    service: ConfigTransferService = Depends(get_config_transfer_service),
) -> ImportResultResponse:
    result = service.import_package(await file.read())
    if not result.success:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.error)
    return ImportResultResponse(
        success=True,
        summary=summary_response(result.summary),
        backup_path=result.backup_path,
    )


@router.get("/backups", response_model=List[BackupResponse], summary="List backups")
async def list_backups(
    service: ConfigTransferService = Depends(get_config_transfer_service),
) -> List[BackupResponse]:
    return [
        BackupResponse(filename=backup.filename, size=backup.size, created_at=backup.created_at)
        for backup in service.list_backups()
    ]


@router.get("/backups/{filename}", summary="Download a backup", response_class=Response)
async def download_backup(
    filename: str,
    service: ConfigTransferService = Depends(get_config_transfer_service),
) -> Response:
    content = service.read_backup(filename)
    if content is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Backup '{filename}' not found")
    return zip_download(content, filename)
