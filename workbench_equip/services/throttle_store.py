# workbench_equip/services/throttle_store.py
# Описание: хранилище отметок «предупреждение уже отправлено» для игроков.
#   Отметка живет окно `window_seconds` и проверяется лениво при следующем
#   обращении, без таймеров.

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Protocol

from loguru import logger
from redis.asyncio import Redis

from workbench_equip.utils.keys import KeyFactory


@dataclass(frozen=True)
class ThrottleEntry:
    required_tier: int
    expires_at: float


class ThrottleStore(Protocol):
    window_seconds: float

    async def try_acquire(self, user_id: int, required_tier: int) -> bool:
        """True, если отметки нет и она только что создана (сообщение можно отправлять)."""
        ...

    async def is_pending(self, user_id: int) -> bool:
        ...

    async def clear(self, user_id: int) -> None:
        ...

    async def clear_all(self) -> None:
        ...


class MemoryThrottleStore:
    """
    Хранилище в памяти процесса. Живет столько же, сколько экземпляр плагина.

    :param window_seconds: Сколько секунд подавлять повторные предупреждения.
    :param clock: Монотонные часы; в тестах подменяются.
    """

    def __init__(self, window_seconds: float = 1.0, clock: Callable[[], float] = time.monotonic):
        self.window_seconds = window_seconds
        self._clock = clock
        self._entries: Dict[int, ThrottleEntry] = {}

    def _live_entry(self, user_id: int) -> Optional[ThrottleEntry]:
        entry = self._entries.get(user_id)
        if entry is None:
            return None
        if self._clock() >= entry.expires_at:
            del self._entries[user_id]
            return None
        return entry

    def get_entry(self, user_id: int) -> Optional[ThrottleEntry]:
        return self._live_entry(user_id)

    async def try_acquire(self, user_id: int, required_tier: int) -> bool:
        if self._live_entry(user_id) is not None:
            return False
        self._entries[user_id] = ThrottleEntry(
            required_tier=required_tier,
            expires_at=self._clock() + self.window_seconds,
        )
        return True

    async def is_pending(self, user_id: int) -> bool:
        return self._live_entry(user_id) is not None

    async def clear(self, user_id: int) -> None:
        self._entries.pop(user_id, None)

    async def clear_all(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class RedisThrottleStore:
    """
    Хранилище в Redis: одна строка на игрока, записанная через SET NX PX.
    Истечение TTL и есть конец окна, поэтому несколько процессов сервера
    делят одни и те же отметки.

    Пока Redis недоступен, отметки ведутся в собственном MemoryThrottleStore
    этого экземпляра, и окно подавления соблюдается в пределах процесса.
    """

    def __init__(
        self,
        redis: Redis,
        window_seconds: float = 1.0,
        key_prefix: str = "workbenchequiponly",
        clock: Callable[[], float] = time.monotonic,
    ):
        self.redis = redis
        self.window_seconds = window_seconds
        self.key_prefix = key_prefix.strip(":")
        self.keys = KeyFactory
        self.fallback = MemoryThrottleStore(window_seconds=window_seconds, clock=clock)

    @property
    def _window_ms(self) -> int:
        return max(1, int(self.window_seconds * 1000))

    async def try_acquire(self, user_id: int, required_tier: int) -> bool:
        key = self.keys.attachment_warning(self.key_prefix, user_id)
        try:
            ok = await self.redis.set(key, str(required_tier), nx=True, px=self._window_ms)
        except Exception as e:
            logger.error(f"❌ Throttle SET failed for key={key}, using in-memory store: {e}")
            return await self.fallback.try_acquire(user_id, required_tier)
        return bool(ok)

    async def is_pending(self, user_id: int) -> bool:
        key = self.keys.attachment_warning(self.key_prefix, user_id)
        try:
            return bool(await self.redis.exists(key)) or await self.fallback.is_pending(user_id)
        except Exception as e:
            logger.error(f"❌ Throttle EXISTS failed for key={key}: {e}")
            return await self.fallback.is_pending(user_id)

    async def clear(self, user_id: int) -> None:
        await self.fallback.clear(user_id)
        key = self.keys.attachment_warning(self.key_prefix, user_id)
        try:
            await self.redis.delete(key)
        except Exception as e:
            logger.error(f"❌ Throttle DEL failed for key={key}: {e}")

    async def clear_all(self) -> None:
        await self.fallback.clear_all()
        pattern = self.keys.attachment_warning_pattern(self.key_prefix)
        try:
            keys = [key async for key in self.redis.scan_iter(match=pattern)]
            if keys:
                await self.redis.delete(*keys)
        except Exception as e:
            logger.error(f"❌ Throttle cleanup failed for pattern={pattern}: {e}")
