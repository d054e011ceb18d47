# -*- coding: utf-8 -*-
"""
Сервис мероприятий: мероприятия, заявки участников и назначение судей.

Права проверяются здесь, а не в роутерах, потому что зависят от
конкретного мероприятия (организатор, назначенный судья).
"""

from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config.logger import configure_logger
from eventhub.domain.enums import (EventStatus, PaymentStatus,
                                   RegistrationStatus, Role)
from eventhub.domain.models import Event, Registration, User
from eventhub.repository.base import create_item, get_item
from eventhub.repository.events import (delete_event_repo,
                                        get_registration, insert_registration,
                                        list_event_registrations,
                                        list_events_repo,
                                        list_participant_registrations,
                                        load_event)
from eventhub.repository.users import list_users_by_role
from eventhub.security.access_control import (ensure_can_manage_event,
                                              ensure_can_review_event)
from eventhub.security.security import current_user_id
from eventhub.utils.datetime_utils import utc_now
from eventhub.utils.exceptions import (ConflictError, NotFoundError,
                                       PermissionDeniedError, ValidationError)

logger = configure_logger(__name__)

# Согласия, без которых заявка не принимается
CONSENT_FIELDS = ("agree_to_terms", "agree_to_code_of_conduct")

EVENT_UPDATABLE_FIELDS = {
    "title",
    "description",
    "category",
    "start_date",
    "end_date",
    "location",
    "max_participants",
    "registration_deadline",
    "requirements",
    "prizes",
    "tags",
    "banner_image",
    "event_image",
    "registration_fee",
    "payment_link",
}


def _validate_dates(event_fields: Dict[str, Any]) -> None:
    if event_fields["start_date"] > event_fields["end_date"]:
        raise ValidationError("Event start date must not be after its end date")


def _require_user_id(current_user: dict, detail: str) -> int:
    user_id = current_user_id(current_user)
    if user_id is None:
        raise PermissionDeniedError(detail)
    return user_id


# ---------------------------------------------------------------------------
# Мероприятия
# ---------------------------------------------------------------------------


async def create_event(
    session: AsyncSession, current_user: dict, data: Dict[str, Any]
) -> Event:
    """
    Создать мероприятие в статусе draft без судей.

    Организатором становится текущий пользователь.

    Raises:
        ValidationError: Если даты мероприятия некорректны
    """
    organizer_id = _require_user_id(
        current_user, "Must be logged in as a user to create events"
    )
    _validate_dates(data)

    event = await create_item(
        session,
        Event,
        organizer_id=organizer_id,
        status=EventStatus.DRAFT,
        created_at=utc_now(),
        **data,
    )
    logger.info(f"🎉 Создано мероприятие {event.id} '{event.title}' ({organizer_id})")
    return await load_event(session, event.id)


async def list_events(
    session: AsyncSession,
    category: Optional[str] = None,
    status: Optional[EventStatus] = None,
) -> List[Event]:
    return await list_events_repo(session, category=category, status=status)


async def get_event(session: AsyncSession, event_id: int) -> Event:
    return await load_event(session, event_id)


async def update_event_status(
    session: AsyncSession, current_user: dict, event_id: int, status: EventStatus
) -> Event:
    """
    Сменить статус мероприятия.

    Raises:
        NotFoundError: Если мероприятие не найдено
        PermissionDeniedError: Если пользователь не организатор и не администратор
    """
    event = await load_event(session, event_id)
    ensure_can_manage_event(
        current_user, event, "Only the event organizer can update event status"
    )
    event.status = status
    await session.commit()
    logger.info(f"Мероприятие {event_id}: статус {status.value}")
    return await load_event(session, event_id)


async def update_event(
    session: AsyncSession, event_id: int, updates: Dict[str, Any]
) -> Event:
    """
    Обновить поля мероприятия (супер-администратор).

    Передаются только заданные поля, неизвестные поля игнорируются.
    """
    event = await load_event(session, event_id)
    changes = {k: v for k, v in updates.items() if k in EVENT_UPDATABLE_FIELDS}
    _validate_dates(
        {
            "start_date": changes.get("start_date", event.start_date),
            "end_date": changes.get("end_date", event.end_date),
        }
    )
    for key, value in changes.items():
        setattr(event, key, value)
    await session.commit()
    logger.info(f"✏️ Мероприятие {event_id} обновлено: {sorted(changes)}")
    return await load_event(session, event_id)


async def update_payment_link(
    session: AsyncSession, event_id: int, payment_link: Optional[str]
) -> Event:
    return await update_event(session, event_id, {"payment_link": payment_link})


async def delete_event(session: AsyncSession, event_id: int) -> None:
    await load_event(session, event_id)
    await delete_event_repo(session, event_id)


# ---------------------------------------------------------------------------
# Заявки
# ---------------------------------------------------------------------------


async def register_for_event(
    session: AsyncSession,
    current_user: dict,
    event_id: int,
    submission_data: Dict[str, Any],
    is_team_leader: bool = False,
) -> Registration:
    """
    Подать заявку на мероприятие.

    Заявка создается в статусе pending с ожидающей оплатой.

    Raises:
        ValidationError: Если участник не дал согласие с правилами
        NotFoundError: Если мероприятие не найдено
        ConflictError: Если заявка уже подана
    """
    participant_id = _require_user_id(current_user, "Must be logged in to register")
    await get_item(session, Event, event_id)

    if await get_registration(session, event_id, participant_id):
        raise ConflictError("Already registered for this event")

    missing = [f for f in CONSENT_FIELDS if submission_data.get(f) is not True]
    if missing:
        raise ValidationError(f"Consent is required: {', '.join(missing)}")

    registration = await insert_registration(
        session,
        event_id=event_id,
        participant_id=participant_id,
        status=RegistrationStatus.PENDING,
        payment_status=PaymentStatus.PENDING,
        is_team_leader=is_team_leader,
        submission_data=dict(submission_data),
        registered_at=utc_now(),
    )
    logger.info(f"📝 Заявка {registration.id}: участник {participant_id}, мероприятие {event_id}")
    return registration


async def list_registrations(
    session: AsyncSession, current_user: dict, event_id: int
) -> List[Dict[str, Any]]:
    """Заявки мероприятия (организатор, администратор или судья мероприятия)."""
    event = await load_event(session, event_id)
    ensure_can_review_event(current_user, event)
    return await list_event_registrations(session, event_id)


async def list_my_registrations(
    session: AsyncSession, current_user: dict
) -> List[Registration]:
    participant_id = _require_user_id(current_user, "Must be logged in as a user")
    return await list_participant_registrations(session, participant_id)


async def review_registration(
    session: AsyncSession,
    current_user: dict,
    registration_id: int,
    status: RegistrationStatus,
    review_notes: Optional[str] = None,
) -> Registration:
    """
    Рассмотреть заявку.

    Raises:
        NotFoundError: Если заявка или мероприятие не найдены
        PermissionDeniedError: Если пользователь не организатор, не
            администратор и не судья мероприятия
    """
    registration = await get_item(
        session, Registration, registration_id, resource_name="Registration"
    )
    event = await load_event(session, registration.event_id)
    ensure_can_review_event(current_user, event)

    registration.status = status
    registration.reviewed_at = utc_now()
    registration.reviewed_by = current_user_id(current_user)
    registration.review_notes = review_notes
    await session.commit()
    await session.refresh(registration)

    logger.info(
        f"Заявка {registration_id}: {status.value} "
        f"(рассмотрел {current_user.get('email') or current_user.get('sub')})"
    )
    return registration


# ---------------------------------------------------------------------------
# Судьи
# ---------------------------------------------------------------------------


async def list_available_judges(session: AsyncSession) -> List[User]:
    return await list_users_by_role(session, Role.JUDGE)


async def assign_judge(
    session: AsyncSession, current_user: dict, event_id: int, judge_id: int
) -> Event:
    """
    Назначить судью на мероприятие.

    Raises:
        NotFoundError: Если мероприятие или судья не найдены
        PermissionDeniedError: Если пользователь не организатор и не администратор
        ConflictError: Если судья уже назначен
    """
    event = await load_event(session, event_id)
    ensure_can_manage_event(
        current_user, event, "Only admins and event organizers can assign judges"
    )

    judge = await session.get(User, judge_id)
    if judge is None or judge.role != Role.JUDGE:
        raise NotFoundError("Judge", judge_id)
    if any(j.id == judge_id for j in event.judges):
        raise ConflictError("Judge is already assigned to this event")

    event.judges.append(judge)
    await session.commit()
    logger.info(f"⚖️ Судья {judge_id} назначен на мероприятие {event_id}")
    return await load_event(session, event_id)


async def remove_judge(
    session: AsyncSession, current_user: dict, event_id: int, judge_id: int
) -> Event:
    """Снять судью с мероприятия; если судья не назначен, ничего не меняется."""
    event = await load_event(session, event_id)
    ensure_can_manage_event(
        current_user, event, "Only admins and event organizers can remove judges"
    )
    event.judges = [j for j in event.judges if j.id != judge_id]
    await session.commit()
    logger.info(f"Судья {judge_id} снят с мероприятия {event_id}")
    return await load_event(session, event_id)
