# -*- coding: utf-8 -*-
"""
Настройка логирования для Event Hub с использованием loguru.

Стандартный ``logging`` (uvicorn, SQLAlchemy, alembic) перенаправляется в
loguru, поэтому весь вывод приложения имеет один формат.
"""
import logging
import sys

from loguru import logger

from eventhub.config.settings import settings

logger.remove()

# Библиотеки, чьи INFO/DEBUG логи только засоряют вывод
NOISY_LOGGERS = ("httpx", "httpcore", "asyncio", "passlib", "aiosqlite")

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[module]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | "
    "{extra[module]}:{function}:{line} - {message}"
)


class InterceptHandler(logging.Handler):
    """Перехватывает стандартные логи и перенаправляет их в loguru."""

    def emit(self, record):
        # "Started server process", "Waiting for application startup" и т.п.
        if record.name.startswith("uvicorn") and record.levelno == logging.INFO:
            return
        if record.name.startswith(NOISY_LOGGERS) and record.levelno < logging.WARNING:
            return

        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.bind(module=record.name).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

# Записи без привязанного модуля (например, из сторонних loguru-пользователей)
logger.configure(extra={"module": "eventhub"})

logger.add(
    sys.stdout,
    format=CONSOLE_FORMAT,
    level="DEBUG" if settings.debug else settings.log_level.upper(),
    colorize=True,
    backtrace=False,
    diagnose=False,
)

if settings.log_file:
    logger.add(
        settings.log_file,
        format=FILE_FORMAT,
        level="INFO",
        rotation=settings.log_rotation,
        retention=settings.log_retention,
        encoding="utf-8",
        enqueue=True,
    )


def configure_logger(name: str = "eventhub"):
    """
    Возвращает логгер модуля.

    Args:
        name: Имя модуля, попадает в каждую запись как ``module``

    Returns:
        loguru.Logger: Логгер с привязанным именем модуля
    """
    return logger.bind(module=name)
