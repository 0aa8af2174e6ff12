# workbench_equip/services/permission_service.py
# Описание: реестр прав сервера. Плагин регистрирует свои права при загрузке
#   и проверяет их у игрока при каждой попытке установить модуль.

from typing import Dict, Set

from loguru import logger

DEFAULT_GROUP = "default"


class PermissionRegistrationError(ValueError):
    """Право нельзя зарегистрировать: неверное имя или оно уже занято."""


class PermissionService:
    """
    Права выдаются пользователям напрямую или через группы.
    Каждый пользователь неявно состоит в группе `default`.
    """

    def __init__(self):
        self._owners: Dict[str, str] = {}
        self._user_grants: Dict[str, Set[str]] = {}
        self._group_grants: Dict[str, Set[str]] = {DEFAULT_GROUP: set()}
        self._user_groups: Dict[str, Set[str]] = {}
        logger.info("✅ Сервис PermissionService инициализирован.")

    @staticmethod
    def _normalize(name: str) -> str:
        return name.strip().lower()

    def register_permission(self, name: str, owner: str) -> None:
        """
        Регистрирует право от имени плагина.

        Имя права должно начинаться с имени плагина в нижнем регистре,
        например `workbenchequiponly.ignore`.
        """
        permission = self._normalize(name)
        prefix = owner.lower() + "."
        if not permission.startswith(prefix) or permission == prefix:
            raise PermissionRegistrationError(
                f"Permission '{name}' must be prefixed with '{prefix}'"
            )
        if permission in self._owners:
            raise PermissionRegistrationError(
                f"Permission '{name}' is already registered by {self._owners[permission]}"
            )
        self._owners[permission] = owner
        logger.debug(f"🔑 Permission registered: {permission} ({owner})")

    def unregister_permissions(self, owner: str) -> None:
        for permission in [p for p, o in self._owners.items() if o == owner]:
            del self._owners[permission]
            for grants in list(self._user_grants.values()) + list(self._group_grants.values()):
                grants.discard(permission)

    def permission_exists(self, name: str) -> bool:
        return self._normalize(name) in self._owners

    def grant_user(self, user_id: str, name: str) -> bool:
        permission = self._normalize(name)
        if permission not in self._owners:
            logger.warning(f"⚠️ Attempt to grant unknown permission '{name}' to {user_id}")
            return False
        self._user_grants.setdefault(str(user_id), set()).add(permission)
        return True

    def revoke_user(self, user_id: str, name: str) -> None:
        self._user_grants.get(str(user_id), set()).discard(self._normalize(name))

    def grant_group(self, group: str, name: str) -> bool:
        permission = self._normalize(name)
        if permission not in self._owners:
            logger.warning(f"⚠️ Attempt to grant unknown permission '{name}' to group {group}")
            return False
        self._group_grants.setdefault(group, set()).add(permission)
        return True

    def revoke_group(self, group: str, name: str) -> None:
        self._group_grants.get(group, set()).discard(self._normalize(name))

    def add_user_to_group(self, user_id: str, group: str) -> None:
        self._group_grants.setdefault(group, set())
        self._user_groups.setdefault(str(user_id), set()).add(group)

    def remove_user_from_group(self, user_id: str, group: str) -> None:
        self._user_groups.get(str(user_id), set()).discard(group)

    def user_has_permission(self, user_id: str, name: str) -> bool:
        permission = self._normalize(name)
        if permission not in self._owners:
            return False
        user_id = str(user_id)
        if permission in self._user_grants.get(user_id, set()):
            return True
        groups = self._user_groups.get(user_id, set()) | {DEFAULT_GROUP}
        return any(permission in self._group_grants.get(group, set()) for group in groups)
