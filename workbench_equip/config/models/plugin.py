# workbench_equip/config/models/plugin.py
from typing import Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# Значения по умолчанию для свежего конфига и для миграции со старых версий.
DEFAULT_REQUIRED_WORKBENCH_LEVELS: Dict[str, int] = {
    "weapon.mod.flashlight": 1,
    "weapon.mod.simplesight": 1,
    "weapon.mod.muzzlebrake": 2,
    "weapon.mod.muzzleboost": 2,
    "weapon.mod.holosight": 2,
    "weapon.mod.lasersight": 2,
    "weapon.mod.extendedmags": 2,
    "weapon.mod.silencer": 3,
    "weapon.mod.small.scope": 3,
    "weapon.mod.8x.scope": 3,
}


class PluginConfig(BaseModel):
    """
    Конфигурация плагина в том виде, в котором она лежит в JSON-файле.

    Таблица требований неизменна во время работы: сервисы получают
    готовый объект и только читают из него.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True, protected_namespaces=())

    version: Optional[str] = Field(default=None, alias="Version")
    required_workbench_level_for_attachments: Dict[str, int] = Field(
        default_factory=dict,
        alias="Required Workbench Level For Attachments",
        validation_alias=AliasChoices(
            "Required Workbench Level For Attachments",
            "RequiredWorkbenchLevelForAttachments",
            "required_workbench_level_for_attachments",
        ),
    )

    def required_level(self, shortname: str) -> Optional[int]:
        return self.required_workbench_level_for_attachments.get(shortname)
