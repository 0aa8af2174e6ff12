# workbench_equip/containers/container.py
from typing import Callable

from dependency_injector import containers, providers
from loguru import logger
from redis.asyncio import Redis

from workbench_equip.config.settings import Settings
from workbench_equip.services.config_service import ConfigService
from workbench_equip.services.lang_service import LangService
from workbench_equip.services.notification_service import NotificationService, log_chat_sender
from workbench_equip.services.permission_service import PermissionService
from workbench_equip.services.throttle_store import MemoryThrottleStore, RedisThrottleStore


def create_throttle_store(settings: Settings, redis_client: Callable[[], Redis]):
    cfg = settings.throttling
    if cfg.backend == "redis":
        if not settings.redis_url:
            raise RuntimeError("throttling.backend=redis requires REDIS_URL")
        logger.info("🔧 Throttle store: redis")
        return RedisThrottleStore(
            redis=redis_client(),
            window_seconds=cfg.message_window_seconds,
            key_prefix=cfg.key_prefix,
        )
    logger.info("🔧 Throttle store: memory")
    return MemoryThrottleStore(window_seconds=cfg.message_window_seconds)


class Container(containers.DeclarativeContainer):
    """
    Зависимости одного экземпляра плагина. Несколько контейнеров
    не делят между собой ни конфиг, ни throttle-хранилище.
    """

    settings = providers.Singleton(Settings)

    redis_client = providers.Singleton(
        Redis.from_url,
        url=settings.provided.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
        socket_keepalive=True,
        health_check_interval=30,
    )

    permission_service = providers.Singleton(PermissionService)

    lang_service = providers.Singleton(
        LangService,
        default_language=settings.provided.DEFAULT_LANGUAGE,
        lang_dir=settings.provided.LANG_DIR,
    )

    chat_sender = providers.Object(log_chat_sender)

    notification_service = providers.Singleton(
        NotificationService,
        lang_service=lang_service,
        sender=chat_sender,
    )

    config_service = providers.Factory(
        ConfigService,
        config_path=settings.provided.config_path,
    )

    throttle_store = providers.Singleton(
        create_throttle_store,
        settings=settings,
        redis_client=redis_client.provider,
    )

