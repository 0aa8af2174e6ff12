# workbench_equip/config/models/__init__.py
from workbench_equip.config.models.core import LoggingConfig, ThrottlingConfig
from workbench_equip.config.models.plugin import (
    DEFAULT_REQUIRED_WORKBENCH_LEVELS,
    PluginConfig,
)

__all__ = [
    "LoggingConfig",
    "ThrottlingConfig",
    "PluginConfig",
    "DEFAULT_REQUIRED_WORKBENCH_LEVELS",
]
