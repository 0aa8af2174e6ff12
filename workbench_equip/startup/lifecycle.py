# workbench_equip/startup/lifecycle.py
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from workbench_equip import PLUGIN_NAME, PLUGIN_TITLE, __version__
from workbench_equip.config.models import PluginConfig
from workbench_equip.containers import Container
from workbench_equip.hooks.can_accept_item import CanAcceptItemHook
from workbench_equip.services.attachment_gate import DEFAULT_MESSAGES, PERMISSIONS, AttachmentGate
from workbench_equip.services.config_service import ConfigLoadError
from workbench_equip.services.throttle_store import RedisThrottleStore, ThrottleStore


@dataclass
class LoadedPlugin:
    config: Optional[PluginConfig]
    gate: Optional[AttachmentGate]
    hook: Optional[CanAcceptItemHook]
    throttle_store: Optional[ThrottleStore]

    @property
    def loaded(self) -> bool:
        return self.gate is not None


def register_permissions(container: Container) -> None:
    permission_service = container.permission_service()
    for permission in PERMISSIONS:
        permission_service.register_permission(permission, PLUGIN_NAME)
    logger.info(f"🔑 Registered {len(PERMISSIONS)} permission(s)")


def load_default_messages(container: Container) -> None:
    container.lang_service().register_messages(DEFAULT_MESSAGES, PLUGIN_NAME, "en")


async def on_load(container: Container) -> LoadedPlugin:
    logger.info(f"🚀 Loading {PLUGIN_TITLE} v{__version__}...")

    register_permissions(container)

    try:
        config = container.config_service().load_config()
    except ConfigLoadError:
        container.permission_service().unregister_permissions(PLUGIN_NAME)
        logger.error(f"❌ {PLUGIN_TITLE} failed to load: configuration is invalid")
        raise

    load_default_messages(container)

    throttle_store = container.throttle_store()
    gate = AttachmentGate(
        config=config,
        permission_service=container.permission_service(),
        throttle_store=throttle_store,
        notification_service=container.notification_service(),
    )
    hook = CanAcceptItemHook(gate)

    logger.info(f"✅ {PLUGIN_TITLE} loaded")
    return LoadedPlugin(config=config, gate=gate, hook=hook, throttle_store=throttle_store)


async def on_unload(container: Container, plugin: LoadedPlugin) -> None:
    if not plugin.loaded:
        logger.debug(f"{PLUGIN_TITLE} is not loaded, nothing to unload")
        return

    logger.info(f"🛑 Unloading {PLUGIN_TITLE}...")

    plugin.hook.detach()
    throttle_store = plugin.throttle_store
    plugin.hook = None
    plugin.gate = None
    plugin.config = None
    plugin.throttle_store = None

    try:
        await throttle_store.clear_all()
    except Exception as e:
        logger.error(f"Error clearing throttle store: {e}")

    if isinstance(throttle_store, RedisThrottleStore):
        try:
            await throttle_store.redis.aclose()
            logger.info("✅ Redis client closed")
        except Exception as e:
            logger.error(f"Error closing Redis: {e}")
        container.redis_client.reset()
    container.throttle_store.reset()

    container.permission_service().unregister_permissions(PLUGIN_NAME)
    container.lang_service().unregister_messages(PLUGIN_NAME)

    logger.info(f"✅ {PLUGIN_TITLE} unloaded")
