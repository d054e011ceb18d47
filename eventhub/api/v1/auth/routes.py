# -*- coding: utf-8 -*-
"""
Маршруты FastAPI для аутентификации.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.clients.database_client import get_db
from eventhub.config.logger import configure_logger
from eventhub.domain.enums import Role
from eventhub.security.security import (authenticated, current_user_id,
                                        extract_bearer_token)
from eventhub.service import credentials as credentials_service
from eventhub.service import users as users_service

from .schemas import (CredentialLoginResponseSchema, CredentialLoginSchema,
                      LoginSchema, RegisterSchema, TokenSchema,
                      UserReadSchema)

router = APIRouter()
logger = configure_logger(__name__)


@router.post(
    "/register", response_model=TokenSchema, status_code=status.HTTP_201_CREATED
)
async def register(
    payload: RegisterSchema,
    session: AsyncSession = Depends(get_db),
):
    """
    Регистрирует участника и сразу выдает токены.

    Исключения:
        * 409 ― email уже зарегистрирован.
    """
    user = await users_service.register_user(
        session, payload.email, payload.password, payload.name
    )
    logger.info(f"Зарегистрирован участник {user.email} (ID: {user.id})")
    return await users_service.issue_tokens(session, user)


@router.post("/login", response_model=TokenSchema, status_code=status.HTTP_200_OK)
async def login(
    credentials: LoginSchema,
    session: AsyncSession = Depends(get_db),
):
    """
    Аутентифицирует пользователя и возвращает JWT-токены.

    Исключения:
        * 401 ― неверные учётные данные.
        * 403 ― пользователь неактивен.
    """
    user = await users_service.authenticate_user(
        session, credentials.email, credentials.password
    )
    tokens = await users_service.issue_tokens(session, user)
    logger.info(
        f"Пользователь {user.email} (ID: {user.id}, роль: {user.role.value}) "
        f"успешно авторизовался"
    )
    return tokens


@router.post(
    "/anonymous", response_model=TokenSchema, status_code=status.HTTP_201_CREATED
)
async def anonymous_login(session: AsyncSession = Depends(get_db)):
    """Анонимный вход: участник без email (может смотреть, но не проходить тесты)."""
    user = await users_service.create_anonymous_user(session)
    return await users_service.issue_tokens(session, user)


@router.post("/refresh", response_model=TokenSchema, status_code=status.HTTP_200_OK)
async def refresh_token(
    request: Request,
    session: AsyncSession = Depends(get_db),
):
    """
    Обновляет Access Token на основе Refresh Token.

    Исключения:
        * 401 ― недействительный или истёкший Refresh Token.
    """
    token = extract_bearer_token(request)
    try:
        return await users_service.refresh_tokens(session, token)
    except HTTPException:
        raise
    except Exception as exc:
        logger.error(f"Ошибка обновления токена: {type(exc).__name__}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired refresh token",
        )


@router.get("/me", response_model=UserReadSchema)
async def read_current_user(
    session: AsyncSession = Depends(get_db),
    claims: dict = Depends(authenticated),
):
    """
    Возвращает данные текущего пользователя.

    Супер-администратор не хранится в базе, данные берутся из токена.
    """
    user_id = current_user_id(claims)
    if user_id is None:
        return UserReadSchema(
            email=claims.get("email"), name=claims.get("name"), role=Role.SUPER_ADMIN
        )
    user = await users_service.get_user(session, user_id)
    logger.debug(f"Запрос данных пользователя: ID {user.id}, роль {user.role.value}")
    return user


@router.post("/credential-login", response_model=CredentialLoginResponseSchema)
async def credential_login(
    credentials: CredentialLoginSchema,
    session: AsyncSession = Depends(get_db),
):
    """
    Вход организатора или судьи по учетной записи от супер-администратора.

    Исключения:
        * 401 ― неверные учётные данные.
        * 403 ― учетная запись деактивирована.
    """
    return await credentials_service.authenticate_credential(
        session, credentials.email, credentials.password
    )
