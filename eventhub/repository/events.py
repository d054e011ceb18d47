# -*- coding: utf-8 -*-
"""
eventhub/repository/events.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Репозиторные функции для мероприятий, заявок и судей.
"""

from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config.logger import configure_logger
from eventhub.domain.enums import EventStatus, RegistrationStatus
from eventhub.domain.models import (Event, ParticipantRegistration,
                                    PreQualifierTest, Registration, User,
                                    event_judges)
from eventhub.utils.exceptions import ConflictError, NotFoundError

logger = configure_logger(__name__)


async def load_event(session: AsyncSession, event_id: int) -> Event:
    """
    Загрузить мероприятие вместе с судьями.

    Судьи перечитываются из базы даже если мероприятие уже есть в сессии.

    Raises:
        NotFoundError: Если мероприятие не найдено
    """
    stmt = (
        select(Event)
        .where(Event.id == event_id)
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    event = result.scalar_one_or_none()
    if event is None:
        raise NotFoundError("Event", event_id)
    return event


async def list_events_repo(
    session: AsyncSession,
    category: Optional[str] = None,
    status: Optional[EventStatus] = None,
    organizer_id: Optional[int] = None,
) -> List[Event]:
    """
    Список мероприятий, ближайшие первыми.

    Фильтр по категории имеет приоритет над фильтром по статусу.
    """
    stmt = select(Event)
    if category:
        stmt = stmt.where(Event.category == category)
    elif status is not None:
        stmt = stmt.where(Event.status == status)
    if organizer_id is not None:
        stmt = stmt.where(Event.organizer_id == organizer_id)

    stmt = stmt.order_by(Event.start_date, Event.id)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def delete_event_repo(session: AsyncSession, event_id: int) -> None:
    """
    Удалить мероприятие с заявками и назначениями судей.

    Тесты и анкеты мероприятия сохраняются, ссылка на мероприятие обнуляется.
    """
    await session.execute(
        update(PreQualifierTest)
        .where(PreQualifierTest.event_id == event_id)
        .values(event_id=None)
    )
    await session.execute(
        update(ParticipantRegistration)
        .where(ParticipantRegistration.event_id == event_id)
        .values(event_id=None)
    )
    await session.execute(delete(Registration).where(Registration.event_id == event_id))
    await session.execute(delete(event_judges).where(event_judges.c.event_id == event_id))
    await session.execute(delete(Event).where(Event.id == event_id))
    await session.commit()
    logger.info(f"Удалено мероприятие {event_id}")


# ---------------------------------------------------------------------------
# Заявки
# ---------------------------------------------------------------------------


async def get_registration(
    session: AsyncSession, event_id: int, participant_id: int
) -> Optional[Registration]:
    stmt = select(Registration).where(
        Registration.event_id == event_id,
        Registration.participant_id == participant_id,
    )
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def insert_registration(session: AsyncSession, **fields: Any) -> Registration:
    """
    Создать заявку.

    Raises:
        ConflictError: Если участник уже подал заявку на это мероприятие
    """
    registration = Registration(**fields)
    session.add(registration)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise ConflictError("Already registered for this event")
    await session.refresh(registration)
    return registration


async def list_event_registrations(
    session: AsyncSession, event_id: int
) -> List[Dict[str, Any]]:
    """
    Заявки на мероприятие вместе с именем и email участника.

    Returns:
        Словари ``registration``, ``participant_name``, ``participant_email``
    """
    stmt = (
        select(Registration, User.name, User.email)
        .join(User, User.id == Registration.participant_id)
        .where(Registration.event_id == event_id)
        .order_by(Registration.registered_at, Registration.id)
    )
    result = await session.execute(stmt)
    return [
        {
            "registration": registration,
            "participant_name": name or "Unknown",
            "participant_email": email,
        }
        for registration, name, email in result.all()
    ]


async def list_participant_registrations(
    session: AsyncSession, participant_id: int
) -> List[Registration]:
    stmt = (
        select(Registration)
        .where(Registration.participant_id == participant_id)
        .order_by(Registration.registered_at.desc(), Registration.id.desc())
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def count_registrations(
    session: AsyncSession,
    event_ids: Optional[Sequence[int]] = None,
    participant_id: Optional[int] = None,
    status: Optional[RegistrationStatus] = None,
) -> int:
    stmt = select(func.count(Registration.id))
    if event_ids is not None:
        if not event_ids:
            return 0
        stmt = stmt.where(Registration.event_id.in_(event_ids))
    if participant_id is not None:
        stmt = stmt.where(Registration.participant_id == participant_id)
    if status is not None:
        stmt = stmt.where(Registration.status == status)
    result = await session.execute(stmt)
    return result.scalar_one()


async def count_events(
    session: AsyncSession,
    organizer_id: Optional[int] = None,
    status: Optional[EventStatus] = None,
) -> int:
    stmt = select(func.count(Event.id))
    if organizer_id is not None:
        stmt = stmt.where(Event.organizer_id == organizer_id)
    if status is not None:
        stmt = stmt.where(Event.status == status)
    result = await session.execute(stmt)
    return result.scalar_one()
