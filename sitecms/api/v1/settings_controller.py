"""
Settings Controller
===================

Admin endpoints for website settings, uploaded site assets and social
networks.
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from sitecms.api.v1.dependencies import get_settings_service
from sitecms.api.v1.security import require_admin
from sitecms.application.dto.auth_dto import StatusResponse
from sitecms.application.dto.settings_dto import (
    AssetResponse,
    SettingResponse,
    SettingUpdateRequest,
    SocialNetworkResponse,
    SocialNetworksUpdateRequest,
    ThemeColorResponse,
)
from sitecms.application.services.settings_service import SettingsService
from sitecms.domain.constants.setting_keys import DEFAULT_SETTING_VALUES
from sitecms.domain.models.social_network import SocialNetwork

router = APIRouter(tags=["settings"], dependencies=[Depends(require_admin)])
social_router = APIRouter(tags=["social-networks"], dependencies=[Depends(require_admin)])


def social_network_response(network: SocialNetwork) -> SocialNetworkResponse:
    return SocialNetworkResponse(
        type=network.type.value,
        url=network.url,
        label=network.label,
        enabled=network.enabled,
        url_placeholder=network.type.url_placeholder,
    )


@router.get("", response_model=Dict[str, Any], summary="Get all settings")
async def get_all_settings(service: SettingsService = Depends(get_settings_service)) -> Dict[str, Any]:
    """Every setting, defaults filled in for keys never written."""
    return service.get_all_settings()


@router.get("/theme-colors", response_model=List[ThemeColorResponse], summary="List theme colors")
async def list_theme_colors(service: SettingsService = Depends(get_settings_service)) -> List[ThemeColorResponse]:
    return [
        ThemeColorResponse(value=color.value, display_name=color.display_name, hex_value=color.hex_value)
        for color in service.list_theme_colors()
    ]


@router.get("/{key}", response_model=SettingResponse, summary="Get one setting")
async def get_setting(key: str, service: SettingsService = Depends(get_settings_service)) -> SettingResponse:
    try:
        setting = service.get_setting(key)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if setting is None:
        return SettingResponse(key=key, value=DEFAULT_SETTING_VALUES.get(key))
    return SettingResponse(key=setting.key, value=setting.value, updated_at=setting.updated_at)


@router.put(
    "/{key}",
    response_model=SettingResponse,
    summary="Update one setting",
    description="""
    Validate and store a setting value.

    Accepted keys: website-name, theme-color, background-color, website-font,
    header-menu-text-color, loader-background-color, theme-mode,
    selling-enabled, appointment-module-enabled, scheduled-restart.
    Icons, logos and loaders are changed through the upload endpoint.
    """
)
async def update_setting(
    key: str,
    request: SettingUpdateRequest,
    service: SettingsService = Depends(get_settings_service),
) -> SettingResponse:
    try:
        setting = service.update_setting(key, request.value)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return SettingResponse(key=setting.key, value=setting.value, updated_at=setting.updated_at)


@router.post(
    "/{key}/upload",
    response_model=AssetResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload the website icon, header logo or custom loader",
)
async def upload_asset(
    key: str,
    file: UploadFile = File(...),
    service: SettingsService = Depends(get_settings_service),
) -> AssetResponse:
    content = await file.read()
    try:
        value = service.upload_asset(key, file.filename or "", content, file.content_type)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return AssetResponse(key=key, value=value)


@router.delete("/{key}/upload", response_model=StatusResponse, summary="Remove an uploaded site asset")
async def delete_asset(key: str, service: SettingsService = Depends(get_settings_service)) -> StatusResponse:
    try:
        removed = service.delete_asset(key)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if not removed:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No file stored for '{key}'")
    return StatusResponse(status="deleted")


@social_router.get("", response_model=List[SocialNetworkResponse], summary="List social networks")
async def list_social_networks(
    service: SettingsService = Depends(get_settings_service),
) -> List[SocialNetworkResponse]:
    return [social_network_response(network) for network in service.get_social_networks()]


@social_router.put("", response_model=List[SocialNetworkResponse], summary="Replace social networks")
async def update_social_networks(
    request: SocialNetworksUpdateRequest,
    service: SettingsService = Depends(get_settings_service),
) -> List[SocialNetworkResponse]:
    try:
        networks = service.update_social_networks([item.model_dump() for item in request.networks])
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return [social_network_response(network) for network in networks]
