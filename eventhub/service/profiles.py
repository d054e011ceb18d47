# -*- coding: utf-8 -*-
"""
Сервис профилей пользователей и статистики для личного кабинета.
"""

from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config.logger import configure_logger
from eventhub.domain.enums import EventStatus, RegistrationStatus, Role
from eventhub.domain.models import Event, UserProfile
from eventhub.repository.events import count_events, count_registrations
from eventhub.repository.users import count_users
from eventhub.utils.datetime_utils import utc_now

logger = configure_logger(__name__)

PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "bio",
    "skills",
    "organization",
    "avatar",
    "social_links",
)


async def get_profile(session: AsyncSession, user_id: int) -> Optional[UserProfile]:
    stmt = select(UserProfile).where(UserProfile.user_id == user_id)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def create_or_update_profile(
    session: AsyncSession, user_id: int, data: Dict[str, Any]
) -> UserProfile:
    """
    Создать профиль или обновить существующий.

    Роль пользователя профилем не меняется.
    """
    profile = await get_profile(session, user_id)
    if profile is None:
        profile = UserProfile(user_id=user_id, skills=[])
        session.add(profile)
        logger.info(f"👤 Создание профиля пользователя {user_id}")

    for field in PROFILE_FIELDS:
        if field in data and data[field] is not None:
            setattr(profile, field, data[field])
    profile.updated_at = utc_now()

    await session.commit()
    await session.refresh(profile)
    return profile


async def get_dashboard_stats(
    session: AsyncSession, user_id: Optional[int], role: Role
) -> Dict[str, int]:
    """
    Статистика личного кабинета в зависимости от роли.

    Для судей статистика пустая.
    """
    if role in (Role.SUPER_ADMIN, Role.ADMIN):
        return {
            "total_events": await count_events(session),
            "total_users": await count_users(session),
            "total_registrations": await count_registrations(session),
            "active_events": await count_events(session, status=EventStatus.ONGOING),
        }

    if role == Role.ORGANIZER:
        result = await session.execute(
            select(Event.id).where(Event.organizer_id == user_id)
        )
        event_ids = list(result.scalars().all())
        return {
            "my_events": len(event_ids),
            "total_registrations": await count_registrations(
                session, event_ids=event_ids
            ),
            "active_events": await count_events(
                session, organizer_id=user_id, status=EventStatus.ONGOING
            ),
            "draft_events": await count_events(
                session, organizer_id=user_id, status=EventStatus.DRAFT
            ),
        }

    if role == Role.PARTICIPANT:
        return {
            "registered_events": await count_registrations(
                session, participant_id=user_id
            ),
            "pending_registrations": await count_registrations(
                session, participant_id=user_id, status=RegistrationStatus.PENDING
            ),
            "approved_registrations": await count_registrations(
                session, participant_id=user_id, status=RegistrationStatus.APPROVED
            ),
        }

    return {}
