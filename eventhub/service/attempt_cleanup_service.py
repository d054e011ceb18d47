# -*- coding: utf-8 -*-
"""
Сервис очистки зависших попыток тестирования.

Запускается внешним планировщиком (cron через
``scripts/sweep_abandoned_attempts.py``) или вручную через админский эндпоинт.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config.logger import configure_logger
from eventhub.config.settings import settings
from eventhub.domain.enums import AttemptStatus
from eventhub.domain.models import PreQualifierTest, TestAttempt
from eventhub.utils.datetime_utils import utc_now

logger = configure_logger(__name__)


class AttemptCleanupService:
    """Сервис перевода зависших попыток в статус ABANDONED"""

    @staticmethod
    async def find_stale_attempts(
        session: AsyncSession,
        now: Optional[datetime] = None,
        grace_minutes: Optional[int] = None,
    ) -> List[TestAttempt]:
        """
        Найти зависшие попытки.

        Попытка считается зависшей, если она в статусе STARTED и с момента
        ее начала прошло больше, чем длительность теста плюс запас.
        """
        now = now or utc_now()
        grace = (
            settings.attempt_abandon_grace_minutes
            if grace_minutes is None
            else grace_minutes
        )

        stmt = (
            select(TestAttempt, PreQualifierTest.duration)
            .join(PreQualifierTest, PreQualifierTest.id == TestAttempt.test_id)
            .where(TestAttempt.status == AttemptStatus.STARTED)
        )
        result = await session.execute(stmt)

        # Длительность у каждого теста своя, поэтому порог считаем в Python
        stale = [
            attempt
            for attempt, duration in result.all()
            if attempt.started_at + timedelta(minutes=duration + grace) < now
        ]
        return stale

    @staticmethod
    async def abandon_stale_attempts(
        session: AsyncSession,
        now: Optional[datetime] = None,
        grace_minutes: Optional[int] = None,
    ) -> int:
        """
        Пометить зависшие попытки как ABANDONED.

        ``completed_at`` не заполняется: попытка не была завершена.

        Returns:
            Количество помеченных попыток
        """
        logger.info("Начинаем поиск зависших попыток")

        stale = await AttemptCleanupService.find_stale_attempts(
            session, now=now, grace_minutes=grace_minutes
        )
        if not stale:
            logger.debug("Зависших попыток не найдено")
            return 0

        attempt_ids = [attempt.id for attempt in stale]
        result = await session.execute(
            update(TestAttempt)
            .where(
                TestAttempt.id.in_(attempt_ids),
                # Попытка могла завершиться между выборкой и обновлением
                TestAttempt.status == AttemptStatus.STARTED,
            )
            .values(status=AttemptStatus.ABANDONED)
            .execution_options(synchronize_session="fetch")
        )
        await session.commit()

        logger.info(f"Помечено как ABANDONED {result.rowcount} попыток: {attempt_ids}")
        return result.rowcount


__all__ = ["AttemptCleanupService"]
