# -*- coding: utf-8 -*-
"""
Сервис каталога пре-квалификационных тестов.

Этот модуль содержит бизнес-логику управления тестами (создание, изменение,
включение/выключение, удаление) и выборки для участников: активные тесты и
уведомление о ближайших тестах.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config.logger import configure_logger
from eventhub.config.settings import settings
from eventhub.domain.models import Event, PreQualifierTest
from eventhub.repository.base import get_item
from eventhub.repository.tests.admin.crud import (create_test_admin,
                                                  delete_test_admin,
                                                  list_active_tests,
                                                  list_tests_admin,
                                                  list_tests_starting_between,
                                                  toggle_test_status_admin,
                                                  update_test_admin)
from eventhub.utils.datetime_utils import utc_now

logger = configure_logger(__name__)


async def create_test(
    session: AsyncSession, created_by: str, data: Dict[str, Any]
) -> PreQualifierTest:
    """
    Создать тест от имени организатора.

    Raises:
        NotFoundError: Если указанное мероприятие не существует
        ValidationError: Если окно проведения некорректно
    """
    if data.get("event_id") is not None:
        await get_item(session, Event, data["event_id"])
    return await create_test_admin(session, created_by=created_by, **data)


async def update_test(
    session: AsyncSession, test_id: int, updates: Dict[str, Any]
) -> PreQualifierTest:
    """Частичное обновление теста; ``None`` в ``updates`` не передается."""
    if updates.get("event_id") is not None:
        await get_item(session, Event, updates["event_id"])
    return await update_test_admin(session, test_id, updates)


async def toggle_test_status(session: AsyncSession, test_id: int) -> PreQualifierTest:
    return await toggle_test_status_admin(session, test_id)


async def delete_test(session: AsyncSession, test_id: int) -> None:
    await delete_test_admin(session, test_id)


async def get_test(session: AsyncSession, test_id: int) -> PreQualifierTest:
    return await get_item(session, PreQualifierTest, test_id, resource_name="Test")


async def list_all_tests(session: AsyncSession) -> List[PreQualifierTest]:
    return await list_tests_admin(session)


async def get_active_tests(
    session: AsyncSession, now: Optional[datetime] = None
) -> List[PreQualifierTest]:
    """Активные тесты, которые можно проходить прямо сейчас."""
    return await list_active_tests(session, now or utc_now())


async def get_upcoming_tests_notification(
    session: AsyncSession,
    now: Optional[datetime] = None,
    window_hours: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Данные для уведомления о тестах.

    Returns:
        ``active_tests``: идут сейчас, ``upcoming_tests``: начнутся в
        ближайшие ``window_hours`` часов, ``next_test_start``: начало ближайшего
    """
    now = now or utc_now()
    window = timedelta(
        hours=window_hours
        if window_hours is not None
        else settings.upcoming_tests_window_hours
    )

    active = await list_active_tests(session, now)
    upcoming = await list_tests_starting_between(session, now, now + window)

    return {
        "active_tests": active,
        "upcoming_tests": upcoming,
        "next_test_start": upcoming[0].start_date if upcoming else None,
    }
