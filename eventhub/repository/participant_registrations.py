# -*- coding: utf-8 -*-
"""
eventhub/repository/participant_registrations.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Репозиторные функции для анкет публичной регистрации участников.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config.logger import configure_logger
from eventhub.domain.models import ParticipantRegistration
from eventhub.utils.exceptions import ConflictError

logger = configure_logger(__name__)

DUPLICATE_REGISTRATION = (
    "You have already registered for this event with this email address."
)

NEWEST_FIRST = (
    ParticipantRegistration.registered_at.desc(),
    ParticipantRegistration.id.desc(),
)


async def find_participant_registration(
    session: AsyncSession, event_id: int, email: str
) -> Optional[ParticipantRegistration]:
    stmt = select(ParticipantRegistration).where(
        ParticipantRegistration.event_id == event_id,
        ParticipantRegistration.email == email,
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def insert_participant_registration(
    session: AsyncSession, **fields: Any
) -> ParticipantRegistration:
    """
    Сохранить анкету.

    Raises:
        ConflictError: Если с этим email уже есть анкета на мероприятие
    """
    registration = ParticipantRegistration(**fields)
    session.add(registration)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise ConflictError(DUPLICATE_REGISTRATION)
    await session.refresh(registration)
    logger.debug(f"Сохранена анкета {registration.id} на мероприятие {registration.event_id}")
    return registration


async def list_participant_registration_rows(
    session: AsyncSession,
    event_id: Optional[int] = None,
    college: Optional[str] = None,
) -> List[ParticipantRegistration]:
    """Анкеты, новые первыми. ``college`` сравнивается точно."""
    stmt = select(ParticipantRegistration)
    if event_id is not None:
        stmt = stmt.where(ParticipantRegistration.event_id == event_id)
    if college is not None:
        stmt = stmt.where(ParticipantRegistration.college_university == college)
    result = await session.execute(stmt.order_by(*NEWEST_FIRST))
    return list(result.scalars().all())


async def search_participant_registration_rows(
    session: AsyncSession,
    search_term: Optional[str] = None,
    college: Optional[str] = None,
    team_size: Optional[int] = None,
) -> List[ParticipantRegistration]:
    """
    Поиск анкет без учета регистра.

    Args:
        search_term: Подстрока имени, email, названия команды или навыков
        college: Подстрока названия учебного заведения
        team_size: Точный размер команды
    """
    stmt = select(ParticipantRegistration)
    if search_term:
        term = search_term.lower()
        stmt = stmt.where(
            or_(
                *(
                    func.lower(column).contains(term, autoescape=True)
                    for column in (
                        ParticipantRegistration.full_name,
                        ParticipantRegistration.email,
                        ParticipantRegistration.team_name,
                        ParticipantRegistration.technical_skills,
                    )
                )
            )
        )
    if college:
        stmt = stmt.where(
            func.lower(ParticipantRegistration.college_university).contains(
                college.lower(), autoescape=True
            )
        )
    if team_size is not None:
        stmt = stmt.where(ParticipantRegistration.team_size == team_size)

    result = await session.execute(stmt.order_by(*NEWEST_FIRST))
    return list(result.scalars().all())


async def get_participant_registration_stats_rows(
    session: AsyncSession, since: datetime
) -> Dict[str, Any]:
    """
    Сырые агрегаты по анкетам.

    Returns:
        ``total``, ``recent`` (после ``since``), ``by_college`` и
        ``by_team_size`` в виде списков пар (значение, количество)
    """
    total = (
        await session.execute(select(func.count(ParticipantRegistration.id)))
    ).scalar_one()
    recent = (
        await session.execute(
            select(func.count(ParticipantRegistration.id)).where(
                ParticipantRegistration.registered_at > since
            )
        )
    ).scalar_one()

    by_college = await session.execute(
        select(
            ParticipantRegistration.college_university,
            func.count(ParticipantRegistration.id),
        ).group_by(ParticipantRegistration.college_university)
    )
    by_team_size = await session.execute(
        select(
            ParticipantRegistration.team_size,
            func.count(ParticipantRegistration.id),
        ).group_by(ParticipantRegistration.team_size)
    )
    return {
        "total": total,
        "recent": recent,
        "by_college": [tuple(row) for row in by_college.all()],
        "by_team_size": [tuple(row) for row in by_team_size.all()],
    }
