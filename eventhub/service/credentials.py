# -*- coding: utf-8 -*-
"""
Сервис учетных записей организаторов и судей.

Учетные записи создает супер-администратор. При входе по учетной записи
находится (или создается) связанный пользователь с той же ролью, и токены
выдаются уже для него: так организаторы и судьи проходят те же проверки
доступа, что и обычные пользователи.
"""

from datetime import timedelta
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config.logger import configure_logger
from eventhub.config.settings import settings
from eventhub.domain.enums import CredentialRole, Role
from eventhub.domain.models import OrganizerCredential, User
from eventhub.repository.base import delete_item, find_item, get_item
from eventhub.security.security import hash_password, verify_password
from eventhub.service.users import get_or_create_linked_user, issue_tokens
from eventhub.utils.datetime_utils import utc_now
from eventhub.utils.exceptions import (AuthenticationError, ConflictError,
                                       PermissionDeniedError)

logger = configure_logger(__name__)

RECENT_LOGIN_DAYS = 7


async def create_credential(
    session: AsyncSession,
    created_by: str,
    email: str,
    password: str,
    role: CredentialRole,
    first_name: str,
    last_name: str,
    organization: Optional[str] = None,
) -> OrganizerCredential:
    """
    Создать учетную запись организатора или судьи.

    Raises:
        ConflictError: Если email уже занят
    """
    email = email.strip().lower()
    if await find_item(session, OrganizerCredential, email=email):
        raise ConflictError("Email already exists")

    credential = OrganizerCredential(
        email=email,
        password=hash_password(password),
        role=role,
        first_name=first_name,
        last_name=last_name,
        organization=organization,
        is_active=True,
        created_by=created_by,
        password_reset_required=False,
    )
    session.add(credential)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise ConflictError("Email already exists")
    await session.refresh(credential)

    logger.info(f"🔑 Создана учетная запись {role.value} {email} ({created_by})")
    return credential


async def list_credentials(session: AsyncSession) -> List[OrganizerCredential]:
    stmt = select(OrganizerCredential).order_by(
        OrganizerCredential.created_at.desc(), OrganizerCredential.id.desc()
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def get_credential(
    session: AsyncSession, credential_id: int
) -> OrganizerCredential:
    return await get_item(
        session, OrganizerCredential, credential_id, resource_name="Credential"
    )


async def update_credential_password(
    session: AsyncSession, credential_id: int, new_password: str
) -> OrganizerCredential:
    """Сменить пароль; флаг обязательной смены пароля снимается."""
    credential = await get_credential(session, credential_id)
    credential.password = hash_password(new_password)
    credential.password_reset_required = False
    await session.commit()
    await session.refresh(credential)
    logger.info(f"🔑 Пароль учетной записи {credential.email} изменен")
    return credential


async def _sync_linked_user(
    session: AsyncSession, credential: OrganizerCredential, is_active: bool
) -> None:
    if credential.linked_user_id is None:
        return
    user = await session.get(User, credential.linked_user_id)
    if user is not None:
        user.is_active = is_active


async def toggle_credential_status(
    session: AsyncSession, credential_id: int
) -> OrganizerCredential:
    """
    Включить или выключить учетную запись.

    Связанный пользователь включается и выключается вместе с ней.
    """
    credential = await get_credential(session, credential_id)
    credential.is_active = not credential.is_active
    await _sync_linked_user(session, credential, credential.is_active)
    await session.commit()
    await session.refresh(credential)
    logger.info(
        f"Учетная запись {credential.email}: is_active={credential.is_active}"
    )
    return credential


async def update_credential_info(
    session: AsyncSession, credential_id: int, updates: Dict[str, Any]
) -> OrganizerCredential:
    """Обновить имя, фамилию и организацию; ``None`` значения пропускаются."""
    credential = await get_credential(session, credential_id)
    for field in ("first_name", "last_name", "organization"):
        value = updates.get(field)
        if value is not None:
            setattr(credential, field, value)
    await session.commit()
    await session.refresh(credential)
    return credential


async def delete_credential(session: AsyncSession, credential_id: int) -> None:
    """Удалить учетную запись; связанный пользователь деактивируется."""
    credential = await get_credential(session, credential_id)
    await _sync_linked_user(session, credential, False)
    await delete_item(session, OrganizerCredential, credential_id)
    logger.info(f"🗑️ Учетная запись {credential_id} удалена")


async def get_credential_stats(session: AsyncSession) -> Dict[str, int]:
    """
    Сводка по учетным записям.

    ``recent_logins`` считает входы за последние 7 дней.
    """
    credentials = await list_credentials(session)
    since = utc_now() - timedelta(days=RECENT_LOGIN_DAYS)
    return {
        "total_organizers": sum(
            1 for c in credentials if c.role == CredentialRole.ORGANIZER
        ),
        "total_judges": sum(1 for c in credentials if c.role == CredentialRole.JUDGE),
        "active_accounts": sum(1 for c in credentials if c.is_active),
        "inactive_accounts": sum(1 for c in credentials if not c.is_active),
        "recent_logins": sum(
            1 for c in credentials if c.last_login and c.last_login > since
        ),
        "total_accounts": len(credentials),
    }


async def create_default_accounts(session: AsyncSession) -> List[OrganizerCredential]:
    """
    Создать организатора и судью по умолчанию для dev-окружений.

    Ничего не делает, если это выключено в настройках или хотя бы одна
    учетная запись уже есть.

    Returns:
        Созданные учетные записи (пустой список, если ничего не создано)
    """
    if not settings.default_accounts_enabled:
        logger.debug("Учетные записи по умолчанию отключены")
        return []
    if await find_item(session, OrganizerCredential):
        logger.debug("Учетные записи уже существуют, пропускаем")
        return []

    defaults = [
        (
            settings.default_organizer_email,
            settings.default_organizer_password,
            CredentialRole.ORGANIZER,
            "Organizer",
        ),
        (
            settings.default_judge_email,
            settings.default_judge_password,
            CredentialRole.JUDGE,
            "Judge",
        ),
    ]
    created = []
    for email, password, role, last_name in defaults:
        created.append(
            await create_credential(
                session,
                created_by=settings.super_admin_email,
                email=email,
                password=password,
                role=role,
                first_name="Test",
                last_name=last_name,
                organization="Test Organization",
            )
        )
    logger.warning(
        "⚠️ Созданы учетные записи по умолчанию: "
        + ", ".join(c.email for c in created)
    )
    return created


async def authenticate_credential(
    session: AsyncSession, email: str, password: str
) -> Dict[str, Any]:
    """
    Вход организатора или судьи.

    Returns:
        Пара токенов связанного пользователя, роль и флаг
        ``password_reset_required``

    Raises:
        AuthenticationError: Неверные учетные данные
        PermissionDeniedError: Учетная запись деактивирована
    """
    credential = await find_item(
        session, OrganizerCredential, email=email.strip().lower()
    )
    if credential is None or not verify_password(password, credential.password):
        logger.warning(f"Неудачная попытка входа по учетной записи {email}")
        raise AuthenticationError("Invalid credentials")
    if not credential.is_active:
        raise PermissionDeniedError("Account is deactivated")

    user = await get_or_create_linked_user(
        session,
        credential.email,
        f"{credential.first_name} {credential.last_name}".strip(),
        Role(credential.role.value),
    )
    if not user.is_active:
        user.is_active = True
    credential.last_login = utc_now()
    credential.linked_user_id = user.id
    await session.commit()

    tokens = await issue_tokens(session, user)
    logger.info(
        f"Вход {credential.role.value} {credential.email} (пользователь {user.id})"
    )
    return {
        **tokens,
        "role": credential.role,
        "first_name": credential.first_name,
        "last_name": credential.last_name,
        "organization": credential.organization,
        "password_reset_required": credential.password_reset_required,
    }
