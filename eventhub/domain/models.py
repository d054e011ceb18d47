# -*- coding: utf-8 -*-
"""
eventhub/domain/models.py
~~~~~~~~~~~~~~~~~~~~~~~~~
ORM модели Event Hub (SQLAlchemy 2.0, декларативный стиль).

Модели покрывают пользователей и профили, мероприятия с заявками, судьями
и анкетами публичной регистрации,
пре-квалификационные тесты с попытками, учетные данные организаторов/судей,
новости и организации-участники.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import (JSON, Boolean, Column, DateTime, Enum, Float,
                        ForeignKey, Index, Integer, String, Table, Text,
                        UniqueConstraint)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from eventhub.domain.enums import (AttemptStatus, CredentialRole, EventStatus,
                                   InstitutionType, NewsCategory, NewsStatus,
                                   PaymentStatus, RegistrationStatus, Role,
                                   TeamRole, TestDifficulty, TestType)
from eventhub.utils.datetime_utils import utc_now


class Base(DeclarativeBase):
    """Базовый класс всех моделей."""


def enum_type(enum_cls) -> Enum:
    """Enum-колонка, хранящая значения (а не имена) членов перечисления."""
    return Enum(
        enum_cls,
        values_callable=lambda members: [member.value for member in members],
        native_enum=False,
        length=32,
        validate_strings=True,
    )


# ---------------------------------------------------------------------------
# Пользователи
# ---------------------------------------------------------------------------


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), unique=True, index=True)
    name: Mapped[Optional[str]] = mapped_column(String(255))
    password: Mapped[Optional[str]] = mapped_column(String(255))  # bcrypt хэш
    role: Mapped[Role] = mapped_column(
        enum_type(Role), default=Role.PARTICIPANT, nullable=False, index=True
    )
    is_anonymous: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    refresh_token: Mapped[Optional[str]] = mapped_column(Text)
    last_login: Mapped[Optional[datetime]] = mapped_column(DateTime)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)


class UserProfile(Base):
    __tablename__ = "user_profiles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    first_name: Mapped[str] = mapped_column(String(100), default="")
    last_name: Mapped[str] = mapped_column(String(100), default="")
    bio: Mapped[Optional[str]] = mapped_column(Text)
    skills: Mapped[list[str]] = mapped_column(JSON, default=list)
    organization: Mapped[Optional[str]] = mapped_column(String(255))
    avatar: Mapped[Optional[str]] = mapped_column(String(512))
    social_links: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, onupdate=utc_now
    )


# ---------------------------------------------------------------------------
# Пре-квалификационные тесты
# ---------------------------------------------------------------------------


class PreQualifierTest(Base):
    __tablename__ = "pre_qualifier_tests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    test_link: Mapped[str] = mapped_column(String(1024), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    end_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)  # минуты
    instructions: Mapped[str] = mapped_column(Text, default="")
    eligibility_criteria: Mapped[str] = mapped_column(Text, default="")
    max_attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    passing_score: Mapped[Optional[float]] = mapped_column(Float)
    created_by: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
    event_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("events.id", ondelete="SET NULL"), index=True
    )
    tags: Mapped[list[str]] = mapped_column(JSON, default=list)
    difficulty: Mapped[TestDifficulty] = mapped_column(
        enum_type(TestDifficulty), default=TestDifficulty.MEDIUM, nullable=False
    )
    total_questions: Mapped[Optional[int]] = mapped_column(Integer)
    test_type: Mapped[TestType] = mapped_column(
        enum_type(TestType), default=TestType.MCQ, nullable=False
    )

    __table_args__ = (Index("ix_pre_qualifier_tests_active", "is_active"),)


class TestAttempt(Base):
    __tablename__ = "test_attempts"
    __test__ = False  # не собирать как pytest-класс

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    test_id: Mapped[int] = mapped_column(
        ForeignKey("pre_qualifier_tests.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    participant_email: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True
    )
    participant_name: Mapped[str] = mapped_column(String(255), nullable=False)
    attempt_number: Mapped[int] = mapped_column(Integer, nullable=False)
    started_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, index=True)
    score: Mapped[Optional[float]] = mapped_column(Float)
    status: Mapped[AttemptStatus] = mapped_column(
        enum_type(AttemptStatus),
        default=AttemptStatus.STARTED,
        nullable=False,
        index=True,
    )
    time_spent: Mapped[Optional[int]] = mapped_column(Integer)
    ip_address: Mapped[Optional[str]] = mapped_column(String(64))
    user_agent: Mapped[Optional[str]] = mapped_column(String(512))
    responses: Mapped[Optional[Any]] = mapped_column(JSON)
    feedback: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (
        # Номер попытки уникален в рамках пары (тест, участник)
        UniqueConstraint(
            "test_id",
            "participant_email",
            "attempt_number",
            name="uq_test_attempts_test_participant_number",
        ),
        Index("ix_test_attempts_test_participant", "test_id", "participant_email"),
    )


# ---------------------------------------------------------------------------
# Мероприятия и заявки
# ---------------------------------------------------------------------------

event_judges = Table(
    "event_judges",
    Base.metadata,
    Column(
        "event_id",
        ForeignKey("events.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "judge_id",
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Event(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="")
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    start_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    location: Mapped[str] = mapped_column(String(255), default="")
    max_participants: Mapped[int] = mapped_column(Integer, nullable=False)
    registration_deadline: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[EventStatus] = mapped_column(
        enum_type(EventStatus), default=EventStatus.DRAFT, nullable=False, index=True
    )
    organizer_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True
    )
    requirements: Mapped[list[str]] = mapped_column(JSON, default=list)
    prizes: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    banner_image: Mapped[Optional[str]] = mapped_column(String(1024))
    event_image: Mapped[Optional[str]] = mapped_column(String(1024))
    registration_fee: Mapped[float] = mapped_column(Float, default=0)
    payment_link: Mapped[Optional[str]] = mapped_column(String(1024))
    tags: Mapped[list[str]] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)

    judges: Mapped[list[User]] = relationship(
        secondary=event_judges, lazy="selectin", order_by=User.id
    )


class Registration(Base):
    __tablename__ = "registrations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    event_id: Mapped[int] = mapped_column(
        ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True
    )
    participant_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[RegistrationStatus] = mapped_column(
        enum_type(RegistrationStatus),
        default=RegistrationStatus.PENDING,
        nullable=False,
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        enum_type(PaymentStatus), default=PaymentStatus.PENDING, nullable=False
    )
    is_team_leader: Mapped[bool] = mapped_column(Boolean, default=False)
    submission_data: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)
    registered_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime)
    reviewed_by: Mapped[Optional[int]] = mapped_column(ForeignKey("users.id"))
    review_notes: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (
        UniqueConstraint(
            "event_id", "participant_id", name="uq_registrations_event_participant"
        ),
    )


class ParticipantRegistration(Base):
    """
    Подробная анкета участника с публичной формы регистрации.

    Не требует учетной записи: участник определяется email, одна анкета
    на email в рамках мероприятия.
    """

    __tablename__ = "participant_registrations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    event_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("events.id", ondelete="SET NULL"), index=True
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    college_university: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True
    )
    department_year: Mapped[str] = mapped_column(String(255), default="")
    contact_number: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    team_name: Mapped[Optional[str]] = mapped_column(String(255))
    team_size: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    role_in_team: Mapped[TeamRole] = mapped_column(
        enum_type(TeamRole), default=TeamRole.LEADER, nullable=False
    )
    technical_skills: Mapped[str] = mapped_column(Text, default="")
    previous_experience: Mapped[Optional[str]] = mapped_column(Text)
    agree_to_rules: Mapped[bool] = mapped_column(Boolean, nullable=False)
    registered_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, index=True
    )
    ip_address: Mapped[Optional[str]] = mapped_column(String(45))
    # Поля конкретного мероприятия: состав команды, проект, стартап и т.д.
    event_specific_data: Mapped[Optional[dict[str, Any]]] = mapped_column(JSON)

    __table_args__ = (
        UniqueConstraint(
            "event_id", "email", name="uq_participant_registrations_event_email"
        ),
    )


# ---------------------------------------------------------------------------
# Учетные данные организаторов и судей
# ---------------------------------------------------------------------------


class OrganizerCredential(Base):
    __tablename__ = "organizer_credentials"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password: Mapped[str] = mapped_column(String(255), nullable=False)  # bcrypt хэш
    role: Mapped[CredentialRole] = mapped_column(
        enum_type(CredentialRole), nullable=False, index=True
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    organization: Mapped[Optional[str]] = mapped_column(String(255))
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
    created_by: Mapped[str] = mapped_column(String(255), nullable=False)
    last_login: Mapped[Optional[datetime]] = mapped_column(DateTime)
    password_reset_required: Mapped[bool] = mapped_column(Boolean, default=False)
    linked_user_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL")
    )


# ---------------------------------------------------------------------------
# Новости и организации
# ---------------------------------------------------------------------------


class NewsUpdate(Base):
    __tablename__ = "news_updates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    subtitle: Mapped[Optional[str]] = mapped_column(String(255))
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[NewsCategory] = mapped_column(
        enum_type(NewsCategory), nullable=False, index=True
    )
    image: Mapped[Optional[str]] = mapped_column(String(1024))
    video_link: Mapped[Optional[str]] = mapped_column(String(1024))
    publish_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    author_name: Mapped[str] = mapped_column(String(255), nullable=False)
    author_email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    status: Mapped[NewsStatus] = mapped_column(
        enum_type(NewsStatus), default=NewsStatus.DRAFT, nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)


class ParticipatingInstitution(Base):
    __tablename__ = "participating_institutions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[InstitutionType] = mapped_column(
        enum_type(InstitutionType), nullable=False, index=True
    )
    logo: Mapped[Optional[str]] = mapped_column(String(1024))
    description: Mapped[Optional[str]] = mapped_column(Text)
    website: Mapped[Optional[str]] = mapped_column(String(1024))
    location: Mapped[Optional[str]] = mapped_column(String(255))
    student_count: Mapped[int] = mapped_column(Integer, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    order: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utc_now)
