# -*- coding: utf-8 -*-
"""
Маршруты профиля текущего пользователя.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.clients.database_client import get_db
from eventhub.config.logger import configure_logger
from eventhub.domain.enums import Role
from eventhub.security.security import authenticated, current_user_id
from eventhub.service import profiles as profiles_service
from eventhub.utils.exceptions import PermissionDeniedError

from .schemas import (CurrentProfileSchema, DashboardSchema,
                      ProfileReadSchema, ProfileUpdateSchema)

router = APIRouter()
logger = configure_logger(__name__)


@router.get("", response_model=CurrentProfileSchema)
async def get_current_profile_endpoint(
    session: AsyncSession = Depends(get_db),
    current_user: dict = Depends(authenticated),
) -> CurrentProfileSchema:
    """Профиль текущего пользователя (``profile`` пустой, если не заполнен)."""
    user_id = current_user_id(current_user)
    profile = await profiles_service.get_profile(session, user_id) if user_id else None
    return CurrentProfileSchema(
        role=Role(current_user["role"]),
        email=current_user.get("email"),
        name=current_user.get("name"),
        profile=ProfileReadSchema.model_validate(profile) if profile else None,
    )


@router.put("", response_model=ProfileReadSchema)
async def update_current_profile_endpoint(
    payload: ProfileUpdateSchema,
    session: AsyncSession = Depends(get_db),
    current_user: dict = Depends(authenticated),
) -> ProfileReadSchema:
    """
    Создать или обновить профиль.

    Raises:
        HTTPException: 403 для супер-администратора (у него нет профиля)
    """
    user_id = current_user_id(current_user)
    if user_id is None:
        raise PermissionDeniedError("Super admin has no profile")
    profile = await profiles_service.create_or_update_profile(
        session, user_id, payload.model_dump(exclude_unset=True)
    )
    logger.info(f"Профиль пользователя {user_id} обновлен")
    return ProfileReadSchema.model_validate(profile)


@router.get("/dashboard", response_model=DashboardSchema)
async def get_dashboard_endpoint(
    session: AsyncSession = Depends(get_db),
    current_user: dict = Depends(authenticated),
) -> DashboardSchema:
    user_id = current_user_id(current_user)
    role = Role(current_user["role"])
    profile = await profiles_service.get_profile(session, user_id) if user_id else None
    stats = await profiles_service.get_dashboard_stats(session, user_id, role)
    return DashboardSchema(
        role=role,
        profile=ProfileReadSchema.model_validate(profile) if profile else None,
        stats=stats,
    )
