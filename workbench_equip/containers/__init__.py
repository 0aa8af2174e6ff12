# workbench_equip/containers/__init__.py
from workbench_equip.containers.container import Container

__all__ = ["Container"]
