# workbench_equip/services/config_service.py
# Описание: загрузка, миграция и сохранение JSON-конфига плагина.

import json
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from loguru import logger
from pydantic import ValidationError

from workbench_equip import __version__
from workbench_equip.config.models import DEFAULT_REQUIRED_WORKBENCH_LEVELS, PluginConfig

Migration = Callable[[PluginConfig, PluginConfig], PluginConfig]


class ConfigLoadError(RuntimeError):
    """Файл конфигурации не удалось прочитать или он не проходит валидацию."""


def compare_versions(left: Optional[str], right: Optional[str]) -> int:
    """
    Порядковое сравнение строк версий: -1, 0 или 1.
    Отсутствующая версия меньше любой другой.
    """
    left = left or ""
    right = right or ""
    return (left > right) - (left < right)


def _reset_to_defaults(stored: PluginConfig, defaults: PluginConfig) -> PluginConfig:
    return defaults


# (порог, шаг): шаг применяется, если сохраненная версия меньше порога.
MIGRATIONS: List[Tuple[str, Migration]] = [
    ("1.0.0", _reset_to_defaults),
]


class ConfigService:
    """
    Сервис конфигурации плагина.

    Файл читается один раз при загрузке плагина. Если версия в файле
    старше версии плагина, применяются шаги миграции, после чего файл
    всегда перезаписывается в актуальном виде.
    """

    def __init__(self, config_path: Union[str, Path], plugin_version: str = __version__):
        self.config_path = Path(config_path)
        self.plugin_version = plugin_version

    def get_default_config(self) -> PluginConfig:
        return PluginConfig(
            version=self.plugin_version,
            required_workbench_level_for_attachments=dict(DEFAULT_REQUIRED_WORKBENCH_LEVELS),
        )

    def read_config(self) -> Optional[PluginConfig]:
        """Читает файл как есть; None, если файла нет."""
        if not self.config_path.exists():
            return None
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return PluginConfig.model_validate(data)
        except json.JSONDecodeError as e:
            logger.error(f"❌ Ошибка парсинга JSON в файле конфигурации {self.config_path}: {e}")
            raise ConfigLoadError(f"Invalid JSON in {self.config_path}: {e}") from e
        except ValidationError as e:
            logger.error(f"❌ Ошибка валидации конфигурации {self.config_path}: {e}")
            raise ConfigLoadError(f"Invalid configuration in {self.config_path}") from e

    def load_config(self) -> PluginConfig:
        config = self.read_config()

        if config is None:
            logger.warning(f"⚠️ Файл конфигурации не найден, создается новый: {self.config_path}")
            config = self.get_default_config()
        elif compare_versions(config.version, self.plugin_version) < 0:
            config = self.update_config(config)

        self.save_config(config)
        logger.info(
            f"✅ Конфигурация загружена: {len(config.required_workbench_level_for_attachments)} "
            f"модулей с ограничениями"
        )
        return config

    def update_config(self, config: PluginConfig) -> PluginConfig:
        logger.warning("Config changes detected! Updating...")

        stored_version = config.version
        defaults = self.get_default_config()
        applied = 0
        for threshold, step in MIGRATIONS:
            if compare_versions(stored_version, threshold) < 0:
                config = step(config, defaults)
                applied += 1

        if not applied:
            logger.info(
                f"ℹ️ Для версии {stored_version} нет шагов миграции, таблица требований сохранена без изменений"
            )

        config = config.model_copy(update={"version": self.plugin_version})
        logger.warning(
            f"Config update complete! Updated from version {stored_version} to {self.plugin_version}"
        )
        return config

    def save_config(self, config: PluginConfig) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w", encoding="utf-8") as f:
            json.dump(config.model_dump(by_alias=True), f, ensure_ascii=False, indent=2)
