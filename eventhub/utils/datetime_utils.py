# -*- coding: utf-8 -*-
"""
Утилиты для работы со временем.

Все отметки времени в базе хранятся как naive UTC.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Текущее время в UTC без tzinfo."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime | None) -> datetime | None:
    """Приводит aware datetime к naive UTC, naive значения возвращает как есть."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
