# -*- coding: utf-8 -*-
"""
Фикстуры для тестирования: пользователи, тесты, попытки, мероприятия и токены
"""

from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config.settings import settings
from eventhub.domain.enums import AttemptStatus, EventStatus, Role, TeamRole
from eventhub.domain.models import (Event, ParticipantRegistration,
                                    PreQualifierTest, TestAttempt, User)
from eventhub.repository.base import create_item
from eventhub.security.security import create_access_token, hash_password
from eventhub.service.users import build_token_claims
from eventhub.utils.datetime_utils import utc_now

PARTICIPANT_EMAIL = "alice@example.com"


async def create_test_user(
    session: AsyncSession,
    email: str = PARTICIPANT_EMAIL,
    role: Role = Role.PARTICIPANT,
    name: Optional[str] = None,
    password: Optional[str] = None,
    is_active: bool = True,
) -> User:
    """Создать тестового пользователя"""
    return await create_item(
        session,
        User,
        email=email,
        name=name or email.split("@")[0].title(),
        password=hash_password(password) if password else None,
        role=role,
        is_active=is_active,
    )


async def create_test_test(
    session: AsyncSession,
    title: str = "Qualifier",
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    duration: int = 30,
    max_attempts: int = 2,
    is_active: bool = True,
    event_id: Optional[int] = None,
) -> PreQualifierTest:
    """Создать тест, окно которого по умолчанию открыто прямо сейчас"""
    now = utc_now()
    return await create_item(
        session,
        PreQualifierTest,
        title=title,
        description="Pre-qualifier round",
        test_link="https://quiz.example.com/q/1",
        is_active=is_active,
        start_date=start_date or now - timedelta(hours=1),
        end_date=end_date or now + timedelta(hours=1),
        duration=duration,
        max_attempts=max_attempts,
        passing_score=60.0,
        created_by="organizer@example.com",
        created_at=now,
        updated_at=now,
        event_id=event_id,
    )


async def create_test_attempt(
    session: AsyncSession,
    test_id: int,
    participant_email: str = PARTICIPANT_EMAIL,
    attempt_number: int = 1,
    status: AttemptStatus = AttemptStatus.COMPLETED,
    score: Optional[float] = None,
    started_at: Optional[datetime] = None,
) -> TestAttempt:
    """Создать попытку с произвольным статусом"""
    started_at = started_at or utc_now() - timedelta(minutes=10)
    return await create_item(
        session,
        TestAttempt,
        test_id=test_id,
        participant_email=participant_email,
        participant_name=participant_email.split("@")[0],
        attempt_number=attempt_number,
        status=status,
        score=score,
        started_at=started_at,
        completed_at=(
            started_at + timedelta(minutes=5)
            if status == AttemptStatus.COMPLETED
            else None
        ),
    )


async def create_test_event(
    session: AsyncSession,
    organizer_id: int,
    title: str = "Spring Hackathon",
    category: str = "Hackathon",
    status: EventStatus = EventStatus.PUBLISHED,
) -> Event:
    """Создать мероприятие, которое начнется через неделю"""
    start = utc_now() + timedelta(days=7)
    return await create_item(
        session,
        Event,
        title=title,
        description="48 hours of building",
        category=category,
        start_date=start,
        end_date=start + timedelta(days=2),
        location="Main hall",
        max_participants=100,
        registration_deadline=start - timedelta(days=1),
        status=status,
        organizer_id=organizer_id,
        created_at=utc_now(),
    )


def auth_headers(user: User) -> dict:
    """Заголовок авторизации с access токеном пользователя"""
    token = create_access_token(build_token_claims(user))
    return {"Authorization": f"Bearer {token}"}


def super_admin_headers() -> dict:
    """Заголовок авторизации супер-администратора"""
    token = create_access_token(
        {
            "sub": settings.super_admin_email,
            "role": Role.SUPER_ADMIN,
            "email": settings.super_admin_email,
            "name": "Super Admin",
        }
    )
    return {"Authorization": f"Bearer {token}"}


def registration_form(**overrides) -> dict:
    """Данные анкеты с публичной формы регистрации"""
    form = {
        "full_name": "Priya Sharma",
        "contact_number": "+91 98765 43210",
        "email": "priya@example.com",
        "college_name": "City College",
        "program_branch": "CSE",
        "current_year": "3rd",
        "technical_skills": "Python, React",
        "agree_to_rules": True,
    }
    form.update(overrides)
    return form


async def create_test_participant_registration(
    session: AsyncSession,
    event_id: Optional[int],
    email: str = "priya@example.com",
    college: str = "City College",
    team_size: int = 1,
    registered_at: Optional[datetime] = None,
    **fields,
) -> ParticipantRegistration:
    """Сохранить анкету напрямую, минуя проверки сервиса"""
    data = {
        "full_name": "Priya Sharma",
        "department_year": "CSE - 3rd",
        "contact_number": "+91 98765 43210",
        "role_in_team": TeamRole.LEADER,
        "technical_skills": "Python",
        "agree_to_rules": True,
    }
    data.update(fields)
    return await create_item(
        session,
        ParticipantRegistration,
        event_id=event_id,
        email=email,
        college_university=college,
        team_size=team_size,
        registered_at=registered_at or utc_now(),
        **data,
    )
