# =============================================================================
# Файл: workbench_equip/utils/logging_setup.py
# Описание:
#   • Настройка логирования через loguru
#   • JSON-формат для structured logging
#   • Перехват стандартного logging
# =============================================================================

import logging
import sys
from typing import Iterable, Literal

from loguru import logger


class InterceptHandler(logging.Handler):
    """
    Перехватчик стандартных логов Python и перенаправление в loguru.
    Нужен для библиотек, которые пишут через стандартный logging (redis, asyncio).
    """
    
    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        
        # Ищем вызывающий кадр за пределами модуля logging
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        
        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging(
    level: str = "INFO",
    format: Literal["text", "json"] = "text",
    debug_loggers: Iterable[str] = (),
    service_name: str = "workbench-equip-only",
) -> None:
    """
    Настраивает логирование для плагина.
    
    Args:
        level: Уровень логирования ("DEBUG", "INFO", "WARNING", "ERROR")
        format: Формат вывода ("text" или "json")
        debug_loggers: Стандартные логгеры, которые нужно оставить на DEBUG
        service_name: Имя сервиса в поле extra.service каждой записи
    """
    logger.remove()
    logger.configure(extra={"service": service_name})
    
    if format == "json":
        logger.add(sys.stdout, level=level.upper(), serialize=True, backtrace=True, diagnose=False)
    else:
        log_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<magenta>{extra[service]}</magenta> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        )
        logger.add(
            sys.stdout,
            format=log_format,
            level=level.upper(),
            colorize=True,
            backtrace=True,
            diagnose=True,
        )
    
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    
    for logger_name in ["asyncio", "redis"]:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
    for logger_name in debug_loggers:
        logging.getLogger(logger_name).setLevel(logging.DEBUG)
    
    logger.info(
        f"✅ Logging configured: level={level.upper()}, format={format}"
    )
