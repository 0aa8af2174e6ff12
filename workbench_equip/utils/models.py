# workbench_equip/utils/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


class Decision(str, Enum):
    """Ответ на попытку положить предмет в контейнер."""
    ACCEPT = "accept"
    REJECT = "reject"
    # Плагин не вмешивается, решение остается за сервером
    ABSTAIN = "abstain"


@dataclass
class BasePlayer:
    """Игрок в том объеме, который нужен плагину."""
    user_id: int
    display_name: str = ""
    # Уровень верстака, рядом с которым сейчас стоит игрок (0 = верстака нет)
    current_craft_level: float = 0.0
    language: Optional[str] = None

    @property
    def user_id_string(self) -> str:
        return str(self.user_id)


@dataclass
class Item:
    """Предмет инвентаря. Оружие тоже предмет: его слоты модулей лежат в `contents`."""
    shortname: str
    owner: Optional[BasePlayer] = None
    parent: Optional[ItemContainer] = None
    contents: Optional[ItemContainer] = None

    def get_owner_player(self) -> Optional[BasePlayer]:
        if self.owner is not None:
            return self.owner
        if self.parent is not None and isinstance(self.parent.parent, BasePlayer):
            return self.parent.parent
        return None


@dataclass
class ItemContainer:
    """Контейнер предметов. `parent` может быть предметом (слоты оружия) или игроком."""
    parent: Optional[Union[Item, BasePlayer]] = None
    capacity: int = 4
    items: List[Item] = field(default_factory=list)
