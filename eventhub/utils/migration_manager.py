# -*- coding: utf-8 -*-
"""
Менеджер миграций для автоматической проверки и применения миграций.

Alembic запускается отдельным процессом из корня проекта (каталог с
``alembic.ini``), чтобы env.py использовал синхронный драйвер.
"""

import subprocess
from pathlib import Path
from typing import Optional

from sqlalchemy import inspect, text

from eventhub.clients.database_client import async_engine
from eventhub.config.logger import configure_logger
from eventhub.config.settings import settings

logger = configure_logger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def _run_alembic(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        ["alembic", *args],
        cwd=PROJECT_ROOT,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
    )


async def get_current_migration_version() -> Optional[str]:
    """
    Получает текущую версию миграции из базы данных.

    Returns:
        Текущая версия миграции или None, если таблицы alembic_version нет
    """
    try:
        async with async_engine.connect() as conn:
            table_exists = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).has_table("alembic_version")
            )
            if not table_exists:
                logger.warning("⚠️ Таблица alembic_version не найдена")
                return None

            result = await conn.execute(text("SELECT version_num FROM alembic_version"))
            return result.scalar()
    except Exception as e:
        logger.error(f"❌ Ошибка при получении версии миграции: {e}")
        return None


def get_latest_migration_version() -> Optional[str]:
    """
    Получает последнюю версию миграции у самого Alembic.

    Returns:
        Ревизия head или None, если получить ее не удалось
    """
    try:
        result = _run_alembic("heads", "--verbose")
        if result.returncode == 0 and result.stdout:
            # Строки формата: "Revision ID: <rev>"
            for line in result.stdout.splitlines():
                if "Revision ID:" in line:
                    return line.split("Revision ID:", 1)[1].strip()
        logger.warning(f"⚠️ alembic heads: {result.stderr.strip()}")
        return None
    except Exception as e:
        logger.warning(f"⚠️ Ошибка при получении последней версии миграции: {e}")
        return None


async def run_migrations() -> bool:
    """Запускает ``alembic upgrade head``."""
    try:
        result = _run_alembic("upgrade", "head")
        if result.returncode == 0:
            logger.info("✅ Миграции успешно применены")
            return True

        logger.error(f"❌ Ошибка при применении миграций: {result.stderr}")
        logger.error(f"❌ stdout: {result.stdout}")
        return False
    except Exception as e:
        logger.error(f"❌ Ошибка при запуске миграций: {e}")
        return False


async def check_and_apply_migrations() -> bool:
    """
    Проверяет и применяет миграции при необходимости.

    Returns:
        True, если схема актуальна после проверки
    """
    if not settings.auto_migrate:
        logger.info("⚙️ AUTO_MIGRATE=false, автоприменение миграций отключено")
        return False

    try:
        current_version = await get_current_migration_version()
        latest_version = get_latest_migration_version()

        if current_version is not None and current_version == latest_version:
            logger.info("✅ Миграции актуальны")
            return True

        if current_version is None:
            logger.info("🔄 База данных пустая, применяем миграции...")
        else:
            logger.info(
                f"🔄 Обнаружены новые миграции: {current_version} -> {latest_version}"
            )

        success = await run_migrations()
        if not success:
            logger.warning("⚠️ Не удалось применить миграции, но продолжаем работу")
        return success

    except Exception as e:
        # Приложение должно стартовать даже без миграций
        logger.warning(f"⚠️ Ошибка при проверке миграций: {e}, но продолжаем работу")
        return False
