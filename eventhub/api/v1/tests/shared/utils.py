# -*- coding: utf-8 -*-
"""
Общие утилиты маршрутов тестов и анкет.

Извлечение данных запроса (IP, User-Agent) и определение имени участника.
"""

from typing import Optional

from fastapi import Request


def get_client_ip(request: Request) -> Optional[str]:
    """IP клиента: за прокси берется первый адрес из X-Forwarded-For."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip() or None
    return request.client.host if request.client else None


def get_user_agent(request: Request) -> Optional[str]:
    user_agent = request.headers.get("User-Agent")
    return user_agent[:512] if user_agent else None


def resolve_participant_name(
    current_user: dict, participant_email: str, requested_name: Optional[str] = None
) -> str:
    """Имя участника: из запроса, затем из токена, иначе email."""
    if requested_name and requested_name.strip():
        return requested_name.strip()
    token_name = current_user.get("name")
    if token_name and current_user.get("email") == participant_email:
        return token_name
    return participant_email
