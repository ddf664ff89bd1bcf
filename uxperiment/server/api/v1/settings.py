"""
Site Settings Endpoints.

Settings are public to read (the frontend uses them for branding) and
editable by administrators.
"""

from typing import Dict

from fastapi import APIRouter, status

from uxperiment.core.models.io.settings import SettingCreate, SettingRead, SettingUpdate
from uxperiment.server.core.security import AdminUserDep
from uxperiment.server.services.deps import SettingsServiceDep

router = APIRouter(tags=["settings"])


@router.get(
    "",
    response_model=Dict[str, Dict[str, str]],
    summary="Get Settings",
    description="All settings grouped as `{section: {key: value}}`.",
)
async def get_settings(settings: SettingsServiceDep) -> Dict[str, Dict[str, str]]:
    return await settings.grouped()


@router.get(
    "/{section}/{key}",
    response_model=SettingRead,
    summary="Get Setting",
    responses={404: {"description": "Setting not found"}},
)
async def get_setting(section: str, key: str, settings: SettingsServiceDep) -> SettingRead:
    return SettingRead.model_validate(await settings.get(section, key))


@router.post(
    "",
    response_model=SettingRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Setting",
    responses={409: {"description": "Setting already exists"}},
)
async def create_setting(data: SettingCreate, _: AdminUserDep, settings: SettingsServiceDep) -> SettingRead:
    return SettingRead.model_validate(await settings.create(data))


@router.put(
    "/{section}/{key}",
    response_model=SettingRead,
    summary="Update Setting",
    responses={404: {"description": "Setting not found"}},
)
async def update_setting(
    section: str, key: str, data: SettingUpdate, _: AdminUserDep, settings: SettingsServiceDep
) -> SettingRead:
    return SettingRead.model_validate(await settings.update(section, key, data.value))


@router.delete(
    "/{section}/{key}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Setting",
    responses={404: {"description": "Setting not found"}},
)
async def delete_setting(section: str, key: str, _: AdminUserDep, settings: SettingsServiceDep) -> None:
    await settings.delete(section, key)
