# workbench_equip/__init__.py
"""
Workbench Equip Only: attaching weapon mods requires a nearby workbench of a
sufficient level.
"""

PLUGIN_NAME = "WorkbenchEquipOnly"
PLUGIN_TITLE = "Workbench Equip Only"
PLUGIN_AUTHOR = "VisEntities"
__version__ = "1.0.1"

__all__ = ["PLUGIN_NAME", "PLUGIN_TITLE", "PLUGIN_AUTHOR", "__version__"]
