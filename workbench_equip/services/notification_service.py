# workbench_equip/services/notification_service.py
from typing import Any, Awaitable, Callable

from loguru import logger

from workbench_equip import PLUGIN_NAME
from workbench_equip.services.lang_service import LangService
from workbench_equip.utils.models import BasePlayer

ChatSender = Callable[[BasePlayer, str], Awaitable[Any]]


async def log_chat_sender(player: BasePlayer, message: str) -> None:
    """Отправитель по умолчанию: пишет сообщение в лог вместо чата игры."""
    logger.info(f"💬 -> {player.display_name or player.user_id}: {message}")


class NotificationService:
    """
    Отправка локализованных сообщений игрокам.
    """

    def __init__(self, lang_service: LangService, sender: ChatSender = log_chat_sender, plugin: str = PLUGIN_NAME):
        self.lang_service = lang_service
        self.sender = sender
        self.plugin = plugin

    def format_message(self, player: BasePlayer, message_key: str, *args: Any) -> str:
        message = self.lang_service.get_message(
            message_key, self.plugin, player.user_id_string, lang=player.language
        )
        if args:
            message = message.format(*args)
        return message

    async def send_message(self, player: BasePlayer, message_key: str, *args: Any) -> bool:
        """
        Отправляет игроку сообщение по ключу локализации.

        Returns:
            bool: True если сообщение отправлено
        """
        try:
            message = self.format_message(player, message_key, *args)
            await self.sender(player, message)
            return True
        except Exception as e:
            logger.error(f"❌ Не удалось отправить сообщение '{message_key}' игроку {player.user_id}: {e}")
            return False
