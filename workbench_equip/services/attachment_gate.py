# workbench_equip/services/attachment_gate.py
# Описание: решение о допуске модуля оружия в слот по уровню верстака.

from typing import Optional

from loguru import logger

from workbench_equip import PLUGIN_NAME
from workbench_equip.config.models import PluginConfig
from workbench_equip.services.notification_service import NotificationService
from workbench_equip.services.permission_service import PermissionService
from workbench_equip.services.throttle_store import ThrottleStore
from workbench_equip.utils.models import BasePlayer, Decision, Item

PERMISSION_IGNORE = f"{PLUGIN_NAME.lower()}.ignore"
PERMISSIONS = [PERMISSION_IGNORE]


class Lang:
    WRONG_WORKBENCH_LEVEL = "WrongWorkbenchLevel"


DEFAULT_MESSAGES = {
    Lang.WRONG_WORKBENCH_LEVEL: "You need to be near a level {0} workbench to equip this attachment.",
}


class AttachmentGate:
    """
    Проверяет, может ли игрок установить модуль на оружие.

    Сервер вызывает проверку несколько раз за одну попытку, поэтому
    предупреждение отправляется не чаще одного раза за окно throttle-хранилища.
    """

    def __init__(
        self,
        config: PluginConfig,
        permission_service: PermissionService,
        throttle_store: ThrottleStore,
        notification_service: NotificationService,
    ):
        self.config = config
        self.permission_service = permission_service
        self.throttle_store = throttle_store
        self.notification_service = notification_service

    async def evaluate(
        self,
        item: Optional[Item],
        weapon: Optional[Item],
        player: Optional[BasePlayer],
    ) -> Decision:
        if item is None or weapon is None or player is None:
            return Decision.ABSTAIN

        required_level = self.config.required_level(item.shortname)
        if required_level is None:
            return Decision.ACCEPT

        if self.permission_service.user_has_permission(player.user_id_string, PERMISSION_IGNORE):
            return Decision.ACCEPT

        if player.current_craft_level < float(required_level):
            if await self.throttle_store.try_acquire(player.user_id, required_level):
                await self.notification_service.send_message(
                    player, Lang.WRONG_WORKBENCH_LEVEL, required_level
                )
            else:
                logger.debug(f"Warning for {player.user_id} suppressed, already sent in this window")
            logger.debug(
                f"🚫 {item.shortname} rejected for {player.user_id}: "
                f"level {player.current_craft_level} < {required_level}"
            )
            return Decision.REJECT

        await self.throttle_store.clear(player.user_id)
        return Decision.ACCEPT
