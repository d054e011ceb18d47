# -*- coding: utf-8 -*-
"""
Сервис публичной регистрации участников.

Анкета заполняется без входа в систему: участник определяется email, и на
одно мероприятие с одного email принимается одна анкета. Поля, нужные только
отдельным мероприятиям (состав команды, проект, стартап, робот, игра),
сохраняются в ``event_specific_data``.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config.logger import configure_logger
from eventhub.domain.enums import TeamRole
from eventhub.domain.models import Event, ParticipantRegistration
from eventhub.repository.base import delete_item, get_item
from eventhub.repository.participant_registrations import (
    DUPLICATE_REGISTRATION, find_participant_registration,
    get_participant_registration_stats_rows, insert_participant_registration,
    list_participant_registration_rows, search_participant_registration_rows)
from eventhub.utils.datetime_utils import utc_now
from eventhub.utils.exceptions import ConflictError, ValidationError
from eventhub.utils.validators import normalize_email

logger = configure_logger(__name__)

RECENT_DAYS = 7
TOP_COLLEGES = 5

EVENT_SPECIFIC_FIELDS = (
    "gender",
    "city",
    "program_branch",
    "current_year",
    "is_team",
    "team_members",
    "project_idea",
    "project_title",
    "project_abstract",
    "project_domain",
    "project_type",
    "startup_name",
    "startup_idea",
    "robot_name",
    "bot_dimensions",
    "selected_game",
    "game_usernames",
    "needs_special_setup",
    "additional_space_requirements",
    "laptop_available",
    "event_category",
    "event_title",
)

UPDATABLE_FIELDS = {
    "full_name",
    "college_university",
    "department_year",
    "contact_number",
    "team_name",
    "team_size",
    "role_in_team",
    "technical_skills",
    "previous_experience",
}


def _department_year(data: Dict[str, Any]) -> str:
    parts = [data.get("program_branch"), data.get("current_year")]
    parts = [part.strip() for part in parts if part and part.strip()]
    if parts:
        return " - ".join(parts)
    return data.get("department_year") or ""


async def register_participant(
    session: AsyncSession,
    event_id: int,
    data: Dict[str, Any],
    ip_address: Optional[str] = None,
) -> ParticipantRegistration:
    """
    Принять анкету участника.

    Одиночный участник всегда записывается командой из одного человека,
    заявитель считается лидером команды.

    Raises:
        NotFoundError: Если мероприятие не найдено
        ConflictError: Если с этим email уже есть анкета на мероприятие
        ValidationError: Если участник не согласился с правилами
    """
    await get_item(session, Event, event_id)
    email = normalize_email(data["email"])

    if await find_participant_registration(session, event_id, email):
        raise ConflictError(DUPLICATE_REGISTRATION)
    if not data.get("agree_to_rules"):
        raise ValidationError("You must agree to the rules and regulations to register.")

    is_team = bool(data.get("is_team"))
    registration = await insert_participant_registration(
        session,
        event_id=event_id,
        full_name=data["full_name"],
        college_university=data["college_name"],
        department_year=_department_year(data),
        contact_number=data["contact_number"],
        email=email,
        team_name=data.get("team_name"),
        team_size=(data.get("team_size") or 1) if is_team else 1,
        role_in_team=TeamRole.LEADER,
        technical_skills=data.get("technical_skills") or "",
        previous_experience=data.get("previous_experience") or "",
        agree_to_rules=True,
        registered_at=utc_now(),
        ip_address=ip_address,
        event_specific_data={
            field: data[field]
            for field in EVENT_SPECIFIC_FIELDS
            if data.get(field) is not None
        },
    )
    logger.info(
        f"📝 Анкета {registration.id}: {registration.email}, мероприятие {event_id}"
    )
    return registration


async def get_participant_registration(
    session: AsyncSession, registration_id: int
) -> ParticipantRegistration:
    return await get_item(
        session,
        ParticipantRegistration,
        registration_id,
        resource_name="Participant registration",
    )


async def list_all_participant_registrations(
    session: AsyncSession,
) -> List[ParticipantRegistration]:
    return await list_participant_registration_rows(session)


async def list_event_participant_registrations(
    session: AsyncSession, event_id: int
) -> List[ParticipantRegistration]:
    return await list_participant_registration_rows(session, event_id=event_id)


async def list_participant_registrations_by_college(
    session: AsyncSession, college: str
) -> List[ParticipantRegistration]:
    return await list_participant_registration_rows(session, college=college)


async def search_participant_registrations(
    session: AsyncSession,
    search_term: Optional[str] = None,
    college: Optional[str] = None,
    team_size: Optional[int] = None,
) -> List[ParticipantRegistration]:
    return await search_participant_registration_rows(
        session, search_term=search_term, college=college, team_size=team_size
    )


async def get_registration_stats(
    session: AsyncSession, now: Optional[datetime] = None
) -> Dict[str, Any]:
    """
    Сводка по анкетам.

    Returns:
        Всего анкет, разбивка по учебным заведениям и размеру команды,
        число анкет за последние 7 дней и пять самых активных заведений
    """
    now = now or utc_now()
    rows = await get_participant_registration_stats_rows(
        session, since=now - timedelta(days=RECENT_DAYS)
    )
    college_stats = {college: count for college, count in rows["by_college"]}
    top = sorted(college_stats.items(), key=lambda item: (-item[1], item[0]))
    return {
        "total_registrations": rows["total"],
        "college_stats": college_stats,
        "team_size_stats": {str(size): count for size, count in rows["by_team_size"]},
        "recent_registrations": rows["recent"],
        "top_colleges": [
            {"college": college, "count": count}
            for college, count in top[:TOP_COLLEGES]
        ],
    }


async def update_participant_registration(
    session: AsyncSession, registration_id: int, updates: Dict[str, Any]
) -> ParticipantRegistration:
    """Частичное обновление анкеты: переданные значения None игнорируются."""
    registration = await get_participant_registration(session, registration_id)
    for key, value in updates.items():
        if key in UPDATABLE_FIELDS and value is not None:
            setattr(registration, key, value)
    await session.commit()
    await session.refresh(registration)
    return registration


async def delete_participant_registration(
    session: AsyncSession, registration_id: int
) -> None:
    await get_participant_registration(session, registration_id)
    await delete_item(session, ParticipantRegistration, registration_id)
    logger.info(f"🗑️ Удалена анкета {registration_id}")
