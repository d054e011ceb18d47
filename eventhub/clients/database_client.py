# -*- coding: utf-8 -*-
"""
Клиент для работы с базой данных.

PostgreSQL в продакшене (asyncpg для приложения, psycopg2 для синхронных
проверок и Alembic), SQLite через aiosqlite в тестах и локально.
"""
from typing import AsyncGenerator

from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import (AsyncSession, async_sessionmaker,
                                    create_async_engine)

from eventhub.config.settings import settings
from eventhub.domain.models import Base

_engine_options = (
    {}
    if settings.is_sqlite
    else {
        "pool_pre_ping": True,  # Проверяем соединение перед использованием
        "pool_recycle": 3600,  # Переподключаемся каждый час
    }
)

# Синхронный движок: проверка подключения при старте
sync_engine = create_engine(
    settings.sync_database_url, echo=False, **_engine_options
)

# Асинхронный движок для обработки запросов
async_engine = create_async_engine(
    settings.database_url, echo=settings.database_echo, **_engine_options
)

# Фабрика асинхронных сессий
AsyncSessionLocal = async_sessionmaker(
    bind=async_engine, class_=AsyncSession, expire_on_commit=False
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Предоставляет асинхронную сессию базы данных для внедрения зависимостей в FastAPI.

    Yields:
        AsyncSession: Активная сессия базы данных
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db() -> None:
    """
    Создает недостающие таблицы по метаданным моделей.

    Используется, когда миграции отключены (локальный SQLite, демо-стенды).
    """
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
