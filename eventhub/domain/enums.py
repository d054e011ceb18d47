# -*- coding: utf-8 -*-
"""
eventhub/domain/enums.py
~~~~~~~~~~~~~~~~~~~~~~~~
Определение классов перечислений для домена Event Hub.

Этот модуль содержит все перечисления, используемые в приложении: роли,
статусы попыток и мероприятий, типы и сложность тестов, категории новостей.
"""

import enum


class Role(str, enum.Enum):
    """Роли, доступные в системе."""

    SUPER_ADMIN = "super_admin"  # Только через токен, в таблице users не хранится
    ADMIN = "admin"
    ORGANIZER = "organizer"
    JUDGE = "judge"
    PARTICIPANT = "participant"


class CredentialRole(str, enum.Enum):
    """Роли, выдаваемые супер-администратором через учетные данные."""

    ORGANIZER = "organizer"
    JUDGE = "judge"


class AttemptStatus(str, enum.Enum):
    """Статусы жизненного цикла попытки теста."""

    STARTED = "started"
    COMPLETED = "completed"
    ABANDONED = "abandoned"  # Выставляется только сервисом очистки


class TestDifficulty(str, enum.Enum):
    """Уровни сложности пре-квалификационного теста."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class TestType(str, enum.Enum):
    """Форматы пре-квалификационного теста."""

    MCQ = "MCQ"
    CODING = "Coding"
    MIXED = "Mixed"


class EventStatus(str, enum.Enum):
    """Жизненный цикл мероприятия."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ONGOING = "ongoing"
    COMPLETED = "completed"


class RegistrationStatus(str, enum.Enum):
    """Статусы рассмотрения заявки на участие."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class TeamRole(str, enum.Enum):
    """Роль заявителя в команде (анкета участника)."""

    LEADER = "Leader"
    MEMBER = "Member"


class NewsCategory(str, enum.Enum):
    """Категории новостей и объявлений."""

    ANNOUNCEMENT = "Announcement"
    EVENT_UPDATE = "Event Update"
    IMPORTANT_NOTICE = "Important Notice"
    GENERAL_NEWS = "General News"


class NewsStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class InstitutionType(str, enum.Enum):
    """Типы организаций-участников."""

    COLLEGE = "college"
    UNIVERSITY = "university"
    COMPANY = "company"  # Компании выступают спонсорами
