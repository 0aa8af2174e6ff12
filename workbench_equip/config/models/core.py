# workbench_equip/config/models/core.py
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field


class ThrottlingConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())
    
    message_window_seconds: float = Field(default=1.0, gt=0)
    backend: Literal["memory", "redis"] = "memory"
    key_prefix: str = "workbenchequiponly"


class LoggingConfig(BaseModel):
    model_config = ConfigDict(protected_namespaces=())
    
    json_enabled: bool = False
    service_name: str = "workbench-equip-only"
    debug_loggers: List[str] = []
