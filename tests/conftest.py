# -*- coding: utf-8 -*-
"""
Общие фикстуры для тестирования
"""

import os

# Окружение задается до импорта приложения: настройки читаются при импорте
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["REDIS_ENABLED"] = "false"
os.environ["AUTO_MIGRATE"] = "false"
os.environ["DEFAULT_ACCOUNTS_ENABLED"] = "false"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["SUPER_ADMIN_EMAIL"] = "root@eventhub.test"
os.environ["SUPER_ADMIN_PASSWORD"] = "root-password"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import (AsyncSession,  # noqa: E402
                                    async_sessionmaker, create_async_engine)
from sqlalchemy.pool import StaticPool  # noqa: E402

from eventhub.clients.database_client import get_db  # noqa: E402
from eventhub.domain.models import Base  # noqa: E402
from eventhub.main import app  # noqa: E402

# Тестовая база данных в памяти
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Создать тестовый движок БД (чистая база на каждый тест)."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Создаем таблицы
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    """Создать тестовую сессию БД."""
    async_session_maker = async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session


@pytest.fixture
async def client(test_session):
    """Асинхронный тестовый клиент API с подмененной зависимостью get_db."""

    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://testserver"
    ) as client:
        yield client
    app.dependency_overrides.clear()
