# -*- coding: utf-8 -*-
"""
eventhub/repository/users.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Репозиторные функции для работы с пользователями.
"""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config.logger import configure_logger
from eventhub.domain.enums import Role
from eventhub.domain.models import User
from eventhub.utils.exceptions import ConflictError

logger = configure_logger(__name__)


async def get_user_by_email(session: AsyncSession, email: str) -> Optional[User]:
    """
    Получить пользователя по email.

    Args:
        session: Сессия базы данных
        email: Email (сравнивается в нижнем регистре)

    Returns:
        Пользователь или None
    """
    stmt = select(User).where(User.email == email.strip().lower())
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def create_user_repo(session: AsyncSession, **fields) -> User:
    """
    Создать пользователя.

    Raises:
        ConflictError: Если email уже зарегистрирован
    """
    if fields.get("email"):
        fields["email"] = fields["email"].strip().lower()

    user = User(**fields)
    session.add(user)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        logger.warning(f"Email {fields.get('email')} уже зарегистрирован")
        raise ConflictError("Email already registered")
    await session.refresh(user)
    logger.info(f"👤 Создан пользователь {user.id} с ролью {user.role.value}")
    return user


async def list_users_by_role(session: AsyncSession, role: Role) -> List[User]:
    stmt = (
        select(User)
        .where(User.role == role, User.is_active.is_(True))
        .order_by(User.name, User.id)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def count_users(session: AsyncSession, role: Optional[Role] = None) -> int:
    stmt = select(func.count(User.id))
    if role is not None:
        stmt = stmt.where(User.role == role)
    result = await session.execute(stmt)
    return result.scalar_one()
