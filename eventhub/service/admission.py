# -*- coding: utf-8 -*-
"""
Сервис допуска к пре-квалификационным тестам.

Этот модуль содержит бизнес-логику попыток прохождения теста:

* ``can_attempt``: проверка допуска без побочных эффектов;
* ``start_attempt``: регистрация новой попытки с контролем лимита;
* ``admit_attempt``: проверка допуска и регистрация попытки одним вызовом;
* ``complete_attempt``: фиксация результата попытки;
* ``get_test_statistics``: агрегированная статистика по тесту.

Номер попытки защищен уникальным индексом
(test_id, participant_email, attempt_number), поэтому параллельные запросы
одного участника не могут получить одинаковый номер или превысить лимит.
"""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config.logger import configure_logger
from eventhub.domain.enums import AttemptStatus
from eventhub.domain.models import TestAttempt
from eventhub.repository.base import get_item
from eventhub.repository.tests.shared.base import (count_participant_attempts,
                                                   get_participant_attempts,
                                                   get_test_attempts,
                                                   get_test_by_id,
                                                   get_test_statistics_rows,
                                                   insert_test_attempt)
from eventhub.utils.datetime_utils import utc_now
from eventhub.utils.exceptions import (AdmissionDeniedError,
                                       LimitExceededError, NotFoundError)

logger = configure_logger(__name__)

# Причины отказа в допуске (показываются пользователю как есть)
REASON_NOT_AVAILABLE = "Test is not available"
REASON_NOT_STARTED = "Test has not started yet"
REASON_ENDED = "Test has ended"
REASON_MAX_ATTEMPTS = "Maximum attempts reached"
REASON_ONGOING = "You have an ongoing attempt"

MAX_ATTEMPTS_MESSAGE = "Maximum attempts reached for this test"


def _denied(reason: str, **extra: Any) -> Dict[str, Any]:
    return {"can_take": False, "reason": reason, **extra}


async def can_attempt(
    session: AsyncSession,
    test_id: int,
    participant_email: str,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Проверить, может ли участник начать новую попытку теста.

    Проверки выполняются по порядку, первая неудачная определяет причину:
    доступность теста, начало окна, конец окна, лимит попыток, наличие
    незавершенной попытки. Функция ничего не пишет в базу.

    Args:
        session: Сессия базы данных
        test_id: ID теста
        participant_email: Email участника
        now: Момент проверки (по умолчанию текущее время UTC)

    Returns:
        Словарь ``can_take`` + ``reason`` (и ``ongoing_attempt_id``) при отказе,
        либо ``can_take``, ``attempts_left`` и ``completed_attempts`` при допуске
    """
    now = now or utc_now()

    test = await get_test_by_id(session, test_id)
    if test is None or not test.is_active:
        return _denied(REASON_NOT_AVAILABLE)

    if now < test.start_date:
        return _denied(REASON_NOT_STARTED)

    if now > test.end_date:
        return _denied(REASON_ENDED)

    attempts = await get_test_attempts(session, test_id, participant_email)
    if len(attempts) >= test.max_attempts:
        return _denied(REASON_MAX_ATTEMPTS)

    ongoing = [a for a in attempts if a.status == AttemptStatus.STARTED]
    if ongoing:
        latest = max(ongoing, key=lambda a: a.attempt_number)
        return _denied(REASON_ONGOING, ongoing_attempt_id=latest.id)

    completed = sum(1 for a in attempts if a.status == AttemptStatus.COMPLETED)
    return {
        "can_take": True,
        "attempts_left": test.max_attempts - len(attempts),
        "completed_attempts": completed,
    }


async def start_attempt(
    session: AsyncSession,
    test_id: int,
    participant_email: str,
    participant_name: str,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
    now: Optional[datetime] = None,
) -> TestAttempt:
    """
    Зарегистрировать новую попытку теста.

    Проверяется только лимит попыток. Окно проведения и незавершенные
    попытки проверяет ``can_attempt`` (или ``admit_attempt``).

    Raises:
        NotFoundError: Если тест не найден
        LimitExceededError: Если лимит попыток исчерпан
        ConflictError: Если параллельный запрос занял тот же номер попытки
    """
    test = await get_test_by_id(session, test_id)
    if test is None:
        raise NotFoundError("Test")

    attempt_count = await count_participant_attempts(
        session, test_id, participant_email
    )
    if attempt_count >= test.max_attempts:
        logger.warning(
            f"🚫 Лимит попыток исчерпан: тест {test_id}, участник {participant_email}, "
            f"попыток {attempt_count}/{test.max_attempts}"
        )
        raise LimitExceededError(MAX_ATTEMPTS_MESSAGE)

    attempt = await insert_test_attempt(
        session,
        test_id=test_id,
        participant_email=participant_email,
        participant_name=participant_name,
        attempt_number=attempt_count + 1,
        started_at=now or utc_now(),
        ip_address=ip_address,
        user_agent=user_agent,
    )
    logger.info(
        f"🚀 Начата попытка {attempt.id} (№{attempt.attempt_number}) "
        f"теста {test_id} участником {participant_email}"
    )
    return attempt


async def admit_attempt(
    session: AsyncSession,
    test_id: int,
    participant_email: str,
    participant_name: str,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
    now: Optional[datetime] = None,
) -> TestAttempt:
    """
    Проверить допуск и сразу зарегистрировать попытку.

    Raises:
        AdmissionDeniedError: Если участник не допущен (причина из ``can_attempt``)
        LimitExceededError: Если лимит исчерпан между проверкой и вставкой
        ConflictError: Если параллельный запрос занял тот же номер попытки
    """
    now = now or utc_now()
    decision = await can_attempt(session, test_id, participant_email, now=now)
    if not decision["can_take"]:
        logger.info(
            f"⛔ Отказ в допуске к тесту {test_id} для {participant_email}: "
            f"{decision['reason']}"
        )
        raise AdmissionDeniedError(
            decision["reason"], decision.get("ongoing_attempt_id")
        )

    return await start_attempt(
        session,
        test_id,
        participant_email,
        participant_name,
        ip_address=ip_address,
        user_agent=user_agent,
        now=now,
    )


async def complete_attempt(
    session: AsyncSession,
    attempt_id: int,
    score: Optional[float] = None,
    time_spent: Optional[int] = None,
    responses: Any = None,
    feedback: Optional[str] = None,
    now: Optional[datetime] = None,
) -> TestAttempt:
    """
    Завершить попытку и сохранить результат.

    Предыдущий статус не проверяется: повторный вызов для завершенной или
    брошенной попытки просто перезаписывает переданные поля. Поля со
    значением ``None`` не изменяются.

    Raises:
        NotFoundError: Если попытка не найдена
    """
    attempt = await get_item(session, TestAttempt, attempt_id, resource_name="Attempt")

    attempt.status = AttemptStatus.COMPLETED
    attempt.completed_at = now or utc_now()
    if score is not None:
        attempt.score = score
    if time_spent is not None:
        attempt.time_spent = time_spent
    if responses is not None:
        attempt.responses = responses
    if feedback is not None:
        attempt.feedback = feedback

    await session.commit()
    await session.refresh(attempt)

    logger.info(
        f"🏁 Попытка {attempt_id} теста {attempt.test_id} завершена "
        f"участником {attempt.participant_email}, балл: {attempt.score}"
    )
    return attempt


def _round_half_up(value: float, places: int = 2) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def aggregate_statistics(rows: List[tuple]) -> Dict[str, Any]:
    """
    Посчитать статистику по кортежам (email, status, score).

    Средний балл считается только по завершенным попыткам (отсутствующий
    балл считается нулем) и округляется до сотых по правилу half-up.
    Процент завершения не округляется.
    """
    total = len(rows)
    completed_scores = [
        score or 0 for _, status, score in rows if status == AttemptStatus.COMPLETED
    ]
    completed = len(completed_scores)

    average = sum(completed_scores) / completed if completed else 0
    return {
        "total_attempts": total,
        "completed_attempts": completed,
        "unique_participants": len({email for email, _, _ in rows}),
        "average_score": _round_half_up(average),
        "completion_rate": completed / total * 100 if total else 0,
    }


async def get_test_statistics(session: AsyncSession, test_id: int) -> Dict[str, Any]:
    """Агрегированная статистика попыток теста."""
    rows = await get_test_statistics_rows(session, test_id)
    stats = aggregate_statistics(rows)
    logger.debug(f"Статистика теста {test_id}: {stats}")
    return stats


async def list_participant_attempts(
    session: AsyncSession, participant_email: str, test_id: Optional[int] = None
) -> List[TestAttempt]:
    """Попытки участника, новые первыми."""
    return await get_participant_attempts(session, participant_email, test_id)
