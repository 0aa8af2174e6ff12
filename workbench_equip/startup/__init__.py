# workbench_equip/startup/__init__.py
from workbench_equip.startup.lifecycle import LoadedPlugin, on_load, on_unload

__all__ = [
    "LoadedPlugin",
    "on_load",
    "on_unload",
]
