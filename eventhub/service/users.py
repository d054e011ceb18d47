# -*- coding: utf-8 -*-
"""
Сервис пользователей: регистрация, вход и выдача токенов.

Токены содержат ``sub`` (ID пользователя), ``role``, ``email`` и ``name``.
Email из токена используется для привязки попыток тестов к участнику,
поэтому анонимные пользователи (без email) тесты проходить не могут.
"""

from typing import Any, Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config.logger import configure_logger
from eventhub.domain.enums import Role
from eventhub.domain.models import User
from eventhub.repository.base import get_item, update_item
from eventhub.repository.users import create_user_repo, get_user_by_email
from eventhub.security.security import (create_access_token,
                                        create_refresh_token, hash_password,
                                        verify_password, verify_token)
from eventhub.utils.datetime_utils import utc_now
from eventhub.utils.exceptions import (AuthenticationError,
                                       PermissionDeniedError)

logger = configure_logger(__name__)


def build_token_claims(user: User) -> Dict[str, Any]:
    return {
        "sub": str(user.id),
        "role": user.role,
        "email": user.email,
        "name": user.name,
    }


async def issue_tokens(session: AsyncSession, user: User) -> Dict[str, str]:
    """
    Выдать пару токенов и запомнить refresh токен пользователя.

    Returns:
        ``access_token``, ``refresh_token`` и ``token_type``
    """
    claims = build_token_claims(user)
    access_token = create_access_token(claims)
    refresh_token = create_refresh_token(claims)

    await update_item(
        session, User, user.id, refresh_token=refresh_token, last_login=utc_now()
    )
    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
    }


async def register_user(
    session: AsyncSession, email: str, password: str, name: Optional[str] = None
) -> User:
    """
    Зарегистрировать участника по email и паролю.

    Raises:
        ConflictError: Если email уже зарегистрирован
    """
    return await create_user_repo(
        session,
        email=email,
        name=name or email.split("@")[0],
        password=hash_password(password),
        role=Role.PARTICIPANT,
    )


async def create_anonymous_user(session: AsyncSession) -> User:
    """Анонимный участник: без email и пароля."""
    return await create_user_repo(
        session, name="Anonymous", role=Role.PARTICIPANT, is_anonymous=True
    )


async def authenticate_user(session: AsyncSession, email: str, password: str) -> User:
    """
    Проверить email и пароль пользователя.

    Raises:
        AuthenticationError: Неверные учетные данные
        PermissionDeniedError: Пользователь деактивирован
    """
    user = await get_user_by_email(session, email)
    if user is None or not verify_password(password, user.password):
        logger.warning(f"Неудачная попытка входа: {email}")
        raise AuthenticationError("Invalid credentials")
    if not user.is_active:
        logger.warning(f"Неудачная попытка входа: пользователь {email} неактивен")
        raise PermissionDeniedError("Account is deactivated")
    return user


async def refresh_tokens(session: AsyncSession, refresh_token: str) -> Dict[str, str]:
    """
    Выдать новый access токен по refresh токену.

    Refresh токен должен совпадать с последним выданным пользователю.

    Raises:
        HTTPException: 401 если токен недействителен или устарел
    """
    payload = verify_token(refresh_token, "refresh")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AuthenticationError("Invalid token payload")

    user = await session.get(User, user_id)
    if user is None or user.refresh_token != refresh_token:
        logger.warning(f"Недействительный refresh токен для пользователя {user_id}")
        raise AuthenticationError("Invalid refresh token")
    if not user.is_active:
        raise PermissionDeniedError("Account is deactivated")

    access_token = create_access_token(build_token_claims(user))
    await update_item(session, User, user.id, last_login=utc_now())
    logger.info(f"Обновлен токен для пользователя {user_id}")
    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
    }


async def get_or_create_linked_user(
    session: AsyncSession, email: str, name: str, role: Role
) -> User:
    """
    Найти пользователя для учетной записи организатора/судьи или создать его.

    Роль существующего пользователя приводится к роли учетной записи.
    """
    user = await get_user_by_email(session, email)
    if user is None:
        logger.info(f"🔗 Создание пользователя для учетной записи {email}")
        return await create_user_repo(session, email=email, name=name, role=role)
    if user.role != role:
        logger.info(f"🔗 Роль пользователя {user.id}: {user.role.value} -> {role.value}")
        user = await update_item(session, User, user.id, role=role)
    return user


async def get_user(session: AsyncSession, user_id: int) -> User:
    return await get_item(session, User, user_id, resource_name="User")
