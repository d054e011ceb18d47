# -*- coding: utf-8 -*-
"""
Допуск к тесту и начало попытки.

Email участника берется из токена: участник не может проверить допуск
или начать попытку от чужого имени.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.clients.database_client import get_db
from eventhub.config.logger import configure_logger
from eventhub.security.access_control import resolve_participant_email
from eventhub.security.security import authenticated, get_current_user
from eventhub.service import admission

from ..shared.cache import invalidate_statistics_cache
from ..shared.schemas import (AttemptStartResponseSchema, AttemptStartSchema,
                              EligibilitySchema)
from ..shared.utils import (get_client_ip, get_user_agent,
                            resolve_participant_name)

router = APIRouter()
logger = configure_logger(__name__)


@router.get(
    "/{test_id}/eligibility",
    response_model=EligibilitySchema,
    response_model_exclude_none=True,
    dependencies=[Depends(authenticated)],
)
async def check_eligibility_endpoint(
    test_id: int,
    participant_email: Optional[str] = None,
    session: AsyncSession = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> EligibilitySchema:
    """
    Проверить, может ли участник начать попытку.

    Отказ не является ошибкой: ответ 200 с ``can_take=false`` и причиной.

    Args:
        test_id: ID теста
        participant_email: Email участника (только для организаторов и администраторов)
    """
    email = resolve_participant_email(current_user, participant_email)
    decision = await admission.can_attempt(session, test_id, email)
    logger.debug(f"Допуск к тесту {test_id} для {email}: {decision}")
    return EligibilitySchema.model_validate(decision)


@router.post(
    "/{test_id}/start",
    response_model=AttemptStartResponseSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(authenticated)],
)
async def start_test_endpoint(
    test_id: int,
    request: Request,
    payload: Optional[AttemptStartSchema] = None,
    session: AsyncSession = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> AttemptStartResponseSchema:
    """
    Начать попытку прохождения теста.

    Допуск проверяется и попытка создается в одном запросе. Если участник
    не допущен, возвращается 403 с причиной отказа.

    Raises:
        HTTPException: 403 при отказе в допуске, 409 при превышении лимита
            или параллельном старте
    """
    payload = payload or AttemptStartSchema()
    email = resolve_participant_email(current_user, payload.participant_email)
    logger.info(f"🎓 Запрос начала теста {test_id} участником {email}")

    try:
        attempt = await admission.admit_attempt(
            session,
            test_id,
            email,
            resolve_participant_name(current_user, email, payload.participant_name),
            ip_address=get_client_ip(request),
            user_agent=get_user_agent(request),
        )
        await invalidate_statistics_cache(test_id)
        return AttemptStartResponseSchema(
            attempt_id=attempt.id, attempt_number=attempt.attempt_number
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(
            f"❌ Ошибка начала теста {test_id} участником {email}: "
            f"{type(e).__name__}: {e}"
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to start test",
        )
