# workbench_equip/utils/keys.py
class KeyFactory:
    """Генерирует стандартизированные ключи для Redis."""

    @staticmethod
    def attachment_warning(prefix: str, user_id: int) -> str:
        """Отметка «предупреждение уже отправлено» для игрока."""
        return f"{prefix}:warned:{user_id}"

    @staticmethod
    def attachment_warning_pattern(prefix: str) -> str:
        return f"{prefix}:warned:*"
