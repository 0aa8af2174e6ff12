# workbench_equip/main.py
import asyncio
import sys

from loguru import logger

from workbench_equip import PLUGIN_TITLE, __version__
from workbench_equip.config.settings import settings
from workbench_equip.containers import Container
from workbench_equip.services.config_service import ConfigLoadError
from workbench_equip.startup import on_load, on_unload
from workbench_equip.utils.logging_setup import setup_logging


async def main_async() -> None:
    """
    Загружает плагин вне игрового сервера: создает или мигрирует файл
    конфигурации и файлы локализации, печатает таблицу требований и выгружается.
    """
    container = Container()
    plugin = await on_load(container)
    try:
        table = plugin.config.required_workbench_level_for_attachments
        for shortname, level in sorted(table.items(), key=lambda kv: (kv[1], kv[0])):
            logger.info(f"   {shortname:<28} -> workbench level {level}")
    finally:
        await on_unload(container, plugin)


def main() -> None:
    setup_logging(
        level=settings.log_level,
        format="json" if settings.logging.json_enabled else "text",
        debug_loggers=settings.logging.debug_loggers,
        service_name=settings.logging.service_name,
    )
    logger.info("=" * 60)
    logger.info(f"🔧 {PLUGIN_TITLE} v{__version__}")
    logger.info(f"📝 Config: {settings.config_path}")
    logger.info(f"⏱️ Throttle: {settings.throttling.backend}, {settings.throttling.message_window_seconds}s")
    logger.info("=" * 60)
    
    try:
        asyncio.run(main_async())
    except ConfigLoadError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("⚠️ Received KeyboardInterrupt")


if __name__ == "__main__":
    main()
