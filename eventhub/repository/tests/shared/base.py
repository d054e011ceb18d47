# -*- coding: utf-8 -*-
"""
Базовые репозитории для тестов и попыток.

Этот модуль содержит запросы к таблицам ``pre_qualifier_tests`` и
``test_attempts``, общие для админских и участнических операций.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config.logger import configure_logger
from eventhub.domain.enums import AttemptStatus
from eventhub.domain.models import PreQualifierTest, TestAttempt
from eventhub.utils.exceptions import ConflictError

logger = configure_logger(__name__)


async def get_test_by_id(
    session: AsyncSession, test_id: int
) -> Optional[PreQualifierTest]:
    """
    Получить тест по ID.

    Args:
        session: Сессия базы данных
        test_id: ID теста

    Returns:
        Объект теста или None
    """
    test = await session.get(PreQualifierTest, test_id)
    if test is None:
        logger.debug(f"Тест {test_id} не найден")
    return test


async def get_test_attempts(
    session: AsyncSession,
    test_id: int,
    participant_email: Optional[str] = None,
    status: Optional[AttemptStatus] = None,
    limit: int = 0,
    offset: int = 0,
) -> List[TestAttempt]:
    """
    Получить попытки прохождения теста, новые первыми.

    Args:
        session: Сессия базы данных
        test_id: ID теста
        participant_email: Email участника (опционально)
        status: Статус попытки (опционально)
        limit: Лимит результатов (0 - без лимита)
        offset: Смещение

    Returns:
        Список попыток прохождения теста
    """
    stmt = select(TestAttempt).where(TestAttempt.test_id == test_id)

    if participant_email is not None:
        stmt = stmt.where(TestAttempt.participant_email == participant_email)

    if status is not None:
        stmt = stmt.where(TestAttempt.status == status)

    stmt = stmt.order_by(TestAttempt.started_at.desc(), TestAttempt.id.desc())
    if offset:
        stmt = stmt.offset(offset)
    if limit:
        stmt = stmt.limit(limit)

    result = await session.execute(stmt)
    attempts = result.scalars().all()

    logger.debug(f"Найдено {len(attempts)} попыток для теста {test_id}")
    return list(attempts)


async def get_participant_attempts(
    session: AsyncSession,
    participant_email: str,
    test_id: Optional[int] = None,
) -> List[TestAttempt]:
    """Все попытки участника (по всем тестам или по одному), новые первыми."""
    stmt = select(TestAttempt).where(
        TestAttempt.participant_email == participant_email
    )
    if test_id is not None:
        stmt = stmt.where(TestAttempt.test_id == test_id)
    stmt = stmt.order_by(TestAttempt.started_at.desc(), TestAttempt.id.desc())

    result = await session.execute(stmt)
    return list(result.scalars().all())


async def count_participant_attempts(
    session: AsyncSession, test_id: int, participant_email: str
) -> int:
    """Количество попыток участника по тесту во всех статусах."""
    stmt = select(func.count(TestAttempt.id)).where(
        TestAttempt.test_id == test_id,
        TestAttempt.participant_email == participant_email,
    )
    result = await session.execute(stmt)
    return result.scalar_one()


async def insert_test_attempt(
    session: AsyncSession,
    test_id: int,
    participant_email: str,
    participant_name: str,
    attempt_number: int,
    started_at: datetime,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> TestAttempt:
    """
    Вставить попытку с заданным номером.

    Уникальный индекс (test_id, participant_email, attempt_number) не дает
    двум конкурентным запросам занять один номер попытки.

    Raises:
        ConflictError: Если номер уже занят параллельной попыткой
    """
    attempt = TestAttempt(
        test_id=test_id,
        participant_email=participant_email,
        participant_name=participant_name,
        attempt_number=attempt_number,
        started_at=started_at,
        status=AttemptStatus.STARTED,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    session.add(attempt)
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        logger.warning(
            f"⚠️ Конфликт номера попытки {attempt_number} для теста {test_id}, "
            f"участник {participant_email}: {exc.orig}"
        )
        raise ConflictError(
            "Another attempt was started at the same time, please try again"
        ) from exc

    await session.refresh(attempt)
    return attempt


async def get_test_statistics_rows(
    session: AsyncSession, test_id: int
) -> List[tuple]:
    """Кортежи (participant_email, status, score) всех попыток теста."""
    stmt = select(
        TestAttempt.participant_email, TestAttempt.status, TestAttempt.score
    ).where(TestAttempt.test_id == test_id)
    result = await session.execute(stmt)
    return [tuple(row) for row in result.all()]
