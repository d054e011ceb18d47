# -*- coding: utf-8 -*-
"""
Конфигурация логов Uvicorn и SQLAlchemy через loguru.
"""

import logging

from eventhub.config.logger import InterceptHandler
from eventhub.config.settings import settings

INTERCEPTED_LOGGERS = (
    "uvicorn",
    "uvicorn.error",
    "uvicorn.access",
    "fastapi",
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "alembic",
)


def setup_uvicorn_logging() -> None:
    """Перенаправляет логи uvicorn, FastAPI, SQLAlchemy и Alembic в loguru."""
    for logger_name in INTERCEPTED_LOGGERS:
        logger_obj = logging.getLogger(logger_name)
        logger_obj.handlers = [InterceptHandler()]
        logger_obj.propagate = False

    # Access-лог дублирует middleware логирования запросов
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    # SQL-запросы только в режиме отладки
    sql_level = logging.INFO if settings.database_echo else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(sql_level)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)


def get_uvicorn_config() -> dict:
    """Параметры запуска uvicorn из настроек приложения."""
    return {
        "app": "eventhub.main:app",
        "host": settings.app_host,
        "port": settings.app_port,
        "log_config": None,
        "proxy_headers": True,
    }
