# workbench_equip/hooks/can_accept_item.py
from typing import Optional

from loguru import logger

from workbench_equip.services.attachment_gate import AttachmentGate
from workbench_equip.utils.models import Decision, Item, ItemContainer


class CanAcceptItemHook:
    """
    Хук сервера «можно ли положить предмет в контейнер».
    Интересуют только контейнеры-слоты оружия, у которого есть владелец-игрок;
    во всех остальных случаях решение остается за сервером.
    """

    def __init__(self, gate: AttachmentGate):
        self.gate: Optional[AttachmentGate] = gate
        logger.info("✅ CanAcceptItemHook initialized")

    def detach(self) -> None:
        """После выгрузки плагина хук больше ни на что не влияет."""
        self.gate = None

    async def __call__(
        self,
        container: Optional[ItemContainer],
        item: Optional[Item],
        target_pos: int = -1,
    ) -> Decision:
        if self.gate is None or item is None or container is None:
            return Decision.ABSTAIN

        weapon = container.parent
        if not isinstance(weapon, Item):
            return Decision.ABSTAIN

        player = weapon.get_owner_player()
        if player is None:
            return Decision.ABSTAIN

        return await self.gate.evaluate(item, weapon, player)
