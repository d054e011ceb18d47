# -*- coding: utf-8 -*-
"""
Консоль супер-администратора.

Вход по секретам из настроек и управление учетными записями
организаторов и судей.
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.clients.database_client import get_db
from eventhub.config.logger import configure_logger
from eventhub.config.settings import settings
from eventhub.domain.enums import Role
from eventhub.security.security import (create_access_token,
                                        get_current_user, super_admin_only,
                                        verify_super_admin)
from eventhub.service import credentials as credentials_service
from eventhub.utils.exceptions import AuthenticationError

from .schemas import (CredentialCreateSchema, CredentialPasswordSchema,
                      CredentialReadSchema, CredentialStatsSchema,
                      CredentialUpdateSchema, SuperAdminLoginSchema,
                      SuperAdminTokenSchema)

router = APIRouter()
logger = configure_logger(__name__)


@router.post("/login", response_model=SuperAdminTokenSchema)
async def super_admin_login(payload: SuperAdminLoginSchema) -> SuperAdminTokenSchema:
    """
    Вход супер-администратора.

    Исключения:
        * 401 ― неверные учётные данные.
    """
    if not verify_super_admin(payload.email, payload.password):
        logger.warning("🚫 Неудачная попытка входа супер-администратора")
        raise AuthenticationError("Invalid super admin credentials")

    email = settings.super_admin_email.strip().lower()
    token = create_access_token(
        {"sub": email, "role": Role.SUPER_ADMIN, "email": email, "name": "Super Admin"}
    )
    logger.info("👑 Супер-администратор вошел в систему")
    return SuperAdminTokenSchema(access_token=token)


@router.post(
    "/credentials",
    response_model=CredentialReadSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(super_admin_only)],
)
async def create_credential_endpoint(
    payload: CredentialCreateSchema,
    session: AsyncSession = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> CredentialReadSchema:
    """Создать учетную запись организатора или судьи."""
    try:
        credential = await credentials_service.create_credential(
            session, created_by=current_user["sub"], **payload.model_dump()
        )
        return CredentialReadSchema.model_validate(credential)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Ошибка создания учетной записи: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create credential",
        )


@router.get(
    "/credentials",
    response_model=List[CredentialReadSchema],
    dependencies=[Depends(super_admin_only)],
)
async def list_credentials_endpoint(
    session: AsyncSession = Depends(get_db),
) -> List[CredentialReadSchema]:
    credentials = await credentials_service.list_credentials(session)
    return [CredentialReadSchema.model_validate(c) for c in credentials]


@router.get(
    "/credentials/stats",
    response_model=CredentialStatsSchema,
    dependencies=[Depends(super_admin_only)],
)
async def credential_stats_endpoint(
    session: AsyncSession = Depends(get_db),
) -> CredentialStatsSchema:
    return CredentialStatsSchema(
        **await credentials_service.get_credential_stats(session)
    )


@router.post(
    "/credentials/defaults",
    response_model=List[CredentialReadSchema],
    dependencies=[Depends(super_admin_only)],
)
async def create_default_accounts_endpoint(
    session: AsyncSession = Depends(get_db),
) -> List[CredentialReadSchema]:
    """Создать учетные записи по умолчанию (если включено и записей еще нет)."""
    created = await credentials_service.create_default_accounts(session)
    return [CredentialReadSchema.model_validate(c) for c in created]


@router.patch(
    "/credentials/{credential_id}/password",
    response_model=CredentialReadSchema,
    dependencies=[Depends(super_admin_only)],
)
async def update_credential_password_endpoint(
    credential_id: int,
    payload: CredentialPasswordSchema,
    session: AsyncSession = Depends(get_db),
) -> CredentialReadSchema:
    credential = await credentials_service.update_credential_password(
        session, credential_id, payload.new_password
    )
    return CredentialReadSchema.model_validate(credential)


@router.post(
    "/credentials/{credential_id}/toggle",
    response_model=CredentialReadSchema,
    dependencies=[Depends(super_admin_only)],
)
async def toggle_credential_endpoint(
    credential_id: int,
    session: AsyncSession = Depends(get_db),
) -> CredentialReadSchema:
    credential = await credentials_service.toggle_credential_status(
        session, credential_id
    )
    return CredentialReadSchema.model_validate(credential)


@router.patch(
    "/credentials/{credential_id}",
    response_model=CredentialReadSchema,
    dependencies=[Depends(super_admin_only)],
)
async def update_credential_endpoint(
    credential_id: int,
    payload: CredentialUpdateSchema,
    session: AsyncSession = Depends(get_db),
) -> CredentialReadSchema:
    credential = await credentials_service.update_credential_info(
        session, credential_id, payload.model_dump(exclude_unset=True)
    )
    return CredentialReadSchema.model_validate(credential)


@router.delete(
    "/credentials/{credential_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(super_admin_only)],
)
async def delete_credential_endpoint(
    credential_id: int,
    session: AsyncSession = Depends(get_db),
) -> None:
    await credentials_service.delete_credential(session, credential_id)
