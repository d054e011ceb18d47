# -*- coding: utf-8 -*-
"""
Административные операции управления попытками тестов.

Просмотр попыток и статистики, ручная регистрация и завершение попыток
(например, при синхронизации результатов внешней платформы), очистка
зависших попыток.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.clients.database_client import get_db
from eventhub.config.logger import configure_logger
from eventhub.domain.enums import AttemptStatus
from eventhub.repository.tests.shared.base import get_test_attempts
from eventhub.security.access_control import resolve_participant_email
from eventhub.security.security import get_current_user, staff
from eventhub.service import admission
from eventhub.service import tests as tests_service
from eventhub.service.attempt_cleanup_service import AttemptCleanupService

from ..shared.cache import (get_statistics_cached, invalidate_all_statistics,
                            invalidate_statistics_cache,
                            set_statistics_cached)
from ..shared.schemas import (AttemptCompleteSchema, AttemptReadSchema,
                              AttemptStartResponseSchema, AttemptStartSchema,
                              SweepResultSchema, TestStatisticsSchema)
from ..shared.utils import (get_client_ip, get_user_agent,
                            resolve_participant_name)

router = APIRouter()
logger = configure_logger(__name__)


@router.post(
    "/attempts/sweep",
    response_model=SweepResultSchema,
    dependencies=[Depends(staff)],
)
async def sweep_abandoned_attempts_endpoint(
    grace_minutes: Optional[int] = None,
    session: AsyncSession = Depends(get_db),
) -> SweepResultSchema:
    """
    Пометить зависшие попытки как abandoned.

    Попытка зависла, если она в статусе started дольше длительности теста
    плюс запас (``grace_minutes``, по умолчанию из настроек).
    """
    try:
        count = await AttemptCleanupService.abandon_stale_attempts(
            session, grace_minutes=grace_minutes
        )
        if count:
            await invalidate_all_statistics()
        return SweepResultSchema(abandoned_count=count)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Ошибка очистки попыток: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to sweep abandoned attempts",
        )


@router.post(
    "/attempts/{attempt_id}/complete",
    response_model=AttemptReadSchema,
    dependencies=[Depends(staff)],
)
async def complete_attempt_admin_endpoint(
    attempt_id: int,
    payload: AttemptCompleteSchema,
    session: AsyncSession = Depends(get_db),
) -> AttemptReadSchema:
    """Завершить любую попытку и записать результат."""
    attempt = await admission.complete_attempt(
        session, attempt_id, **payload.model_dump()
    )
    await invalidate_statistics_cache(attempt.test_id)
    return AttemptReadSchema.model_validate(attempt)


@router.get(
    "/{test_id}/attempts",
    response_model=List[AttemptReadSchema],
    dependencies=[Depends(staff)],
)
async def get_test_attempts_endpoint(
    test_id: int,
    participant_email: Optional[str] = None,
    attempt_status: Optional[AttemptStatus] = None,
    session: AsyncSession = Depends(get_db),
) -> List[AttemptReadSchema]:
    """
    Получить попытки прохождения теста.

    Args:
        test_id: ID теста
        participant_email: Фильтр по email участника
        attempt_status: Фильтр по статусу попытки
    """
    await tests_service.get_test(session, test_id)
    attempts = await get_test_attempts(
        session,
        test_id,
        participant_email=participant_email.strip().lower() if participant_email else None,
        status=attempt_status,
    )
    logger.debug(f"Найдено {len(attempts)} попыток для теста {test_id}")
    return [AttemptReadSchema.model_validate(attempt) for attempt in attempts]


@router.post(
    "/{test_id}/attempts",
    response_model=AttemptStartResponseSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(staff)],
)
async def record_attempt_endpoint(
    test_id: int,
    payload: AttemptStartSchema,
    request: Request,
    session: AsyncSession = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> AttemptStartResponseSchema:
    """
    Зарегистрировать попытку за участника.

    Проверяется только лимит попыток: окно проведения и незавершенные
    попытки не учитываются.
    """
    participant_email = resolve_participant_email(
        current_user, payload.participant_email
    )
    attempt = await admission.start_attempt(
        session,
        test_id,
        participant_email,
        resolve_participant_name(
            current_user, participant_email, payload.participant_name
        ),
        ip_address=get_client_ip(request),
        user_agent=get_user_agent(request),
    )
    await invalidate_statistics_cache(test_id)
    return AttemptStartResponseSchema(
        attempt_id=attempt.id, attempt_number=attempt.attempt_number
    )


@router.get(
    "/{test_id}/statistics",
    response_model=TestStatisticsSchema,
    dependencies=[Depends(staff)],
)
async def get_test_statistics_endpoint(
    test_id: int,
    session: AsyncSession = Depends(get_db),
) -> TestStatisticsSchema:
    """Статистика попыток теста."""
    cached = await get_statistics_cached(test_id)
    if cached:
        return TestStatisticsSchema.model_validate(cached)

    await tests_service.get_test(session, test_id)
    stats = await admission.get_test_statistics(session, test_id)
    await set_statistics_cached(test_id, stats)
    return TestStatisticsSchema.model_validate(stats)
