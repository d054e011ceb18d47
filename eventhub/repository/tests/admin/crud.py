# -*- coding: utf-8 -*-
"""
CRUD операции с пре-квалификационными тестами.

Этот модуль содержит функции создания, обновления, удаления и выборки
тестов организаторами и администраторами.
"""

from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config.logger import configure_logger
from eventhub.domain.models import PreQualifierTest, TestAttempt
from eventhub.repository.base import create_item, get_item
from eventhub.utils.datetime_utils import utc_now
from eventhub.utils.exceptions import ValidationError

logger = configure_logger(__name__)


def _validate_window(start_date: datetime, end_date: datetime) -> None:
    if start_date > end_date:
        raise ValidationError("Test start date must not be after its end date")


async def create_test_admin(
    session: AsyncSession, created_by: str, **fields: Any
) -> PreQualifierTest:
    """
    Создать новый тест.

    Args:
        session: Сессия базы данных
        created_by: Email создателя (организатор или администратор)
        **fields: Поля теста

    Returns:
        Созданный тест

    Raises:
        ValidationError: Если окно проведения некорректно
    """
    _validate_window(fields["start_date"], fields["end_date"])

    now = utc_now()
    test = await create_item(
        session,
        PreQualifierTest,
        created_by=created_by,
        is_active=True,
        created_at=now,
        updated_at=now,
        **fields,
    )
    logger.info(f"Создан тест {test.id} '{test.title}' пользователем {created_by}")
    return test


async def update_test_admin(
    session: AsyncSession, test_id: int, updates: Dict[str, Any]
) -> PreQualifierTest:
    """
    Частичное обновление теста.

    Raises:
        NotFoundError: Если тест не найден
        ValidationError: Если после обновления окно проведения некорректно
    """
    test = await get_item(session, PreQualifierTest, test_id, resource_name="Test")

    start_date = updates.get("start_date", test.start_date)
    end_date = updates.get("end_date", test.end_date)
    _validate_window(start_date, end_date)

    for key, value in updates.items():
        setattr(test, key, value)
    test.updated_at = utc_now()

    await session.commit()
    await session.refresh(test)
    logger.info(f"Тест {test_id} обновлен: {sorted(updates)}")
    return test


async def toggle_test_status_admin(
    session: AsyncSession, test_id: int
) -> PreQualifierTest:
    """Переключить флаг ``is_active`` теста."""
    test = await get_item(session, PreQualifierTest, test_id, resource_name="Test")
    test.is_active = not test.is_active
    test.updated_at = utc_now()
    await session.commit()
    await session.refresh(test)
    logger.info(f"Тест {test_id} {'активирован' if test.is_active else 'деактивирован'}")
    return test


async def delete_test_admin(session: AsyncSession, test_id: int) -> None:
    """Удалить тест вместе со всеми его попытками."""
    test = await get_item(session, PreQualifierTest, test_id, resource_name="Test")

    result = await session.execute(
        delete(TestAttempt).where(TestAttempt.test_id == test_id)
    )
    await session.delete(test)
    await session.commit()
    logger.info(f"Тест {test_id} удален вместе с {result.rowcount} попытками")


async def list_tests_admin(session: AsyncSession) -> List[PreQualifierTest]:
    """Все тесты, новые первыми."""
    stmt = select(PreQualifierTest).order_by(
        PreQualifierTest.created_at.desc(), PreQualifierTest.id.desc()
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_active_tests(
    session: AsyncSession, now: datetime
) -> List[PreQualifierTest]:
    """Активные тесты, окно которых содержит ``now``, по дате начала."""
    stmt = (
        select(PreQualifierTest)
        .where(
            PreQualifierTest.is_active.is_(True),
            PreQualifierTest.start_date <= now,
            PreQualifierTest.end_date >= now,
        )
        .order_by(PreQualifierTest.start_date.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_tests_starting_between(
    session: AsyncSession, start: datetime, end: datetime
) -> List[PreQualifierTest]:
    """Активные тесты, начинающиеся в полуинтервале (start, end]."""
    stmt = (
        select(PreQualifierTest)
        .where(
            PreQualifierTest.is_active.is_(True),
            PreQualifierTest.start_date > start,
            PreQualifierTest.start_date <= end,
        )
        .order_by(PreQualifierTest.start_date.asc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())
