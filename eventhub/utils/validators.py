# -*- coding: utf-8 -*-
"""Общие валидаторы входных данных."""


def normalize_email(value: str) -> str:
    """Приводит email к нижнему регистру и проверяет базовый формат."""
    value = value.strip().lower()
    local, _, domain = value.partition("@")
    if not local or "." not in domain:
        raise ValueError("Invalid email address")
    return value
