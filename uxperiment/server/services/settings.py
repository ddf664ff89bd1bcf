"""Site settings grouped by section."""

from typing import Dict

from uxperiment.core.database.entities.site_settings import Setting
from uxperiment.core.database.repositories import RepositoryBundle
from uxperiment.core.models.io.settings import SettingCreate

from .errors import ConflictError, NotFoundError


class SettingsService:
    def __init__(self, repos: RepositoryBundle) -> None:
        self.repos = repos

    async def grouped(self) -> Dict[str, Dict[str, str]]:
        """All settings as ``{section: {key: value}}``."""
        grouped: Dict[str, Dict[str, str]] = {}
        for setting in await self.repos.settings.list_ordered():
            grouped.setdefault(setting.section, {})[setting.key] = setting.value
        return grouped

    async def get(self, section: str, key: str) -> Setting:
        setting = await self.repos.settings.get_by_key(section, key)
        if setting is None:
            raise NotFoundError(f"Setting {section}.{key} not found")
        return setting

    async def create(self, data: SettingCreate) -> Setting:
        if await self.repos.settings.get_by_key(data.section, data.key) is not None:
            raise ConflictError(f"Setting {data.section}.{data.key} already exists")
        return await self.repos.settings.create(Setting(section=data.section, key=data.key, value=data.value))

    async def update(self, section: str, key: str, value: str) -> Setting:
        setting = await self.get(section, key)
        setting.value = value
        return await self.repos.settings.update(setting)

    async def delete(self, section: str, key: str) -> None:
        setting = await self.get(section, key)
        await self.repos.settings.delete(setting.id)
