# -*- coding: utf-8 -*-
"""eventhub.security.security
~~~~~~~~~~~~~~~~~~~~~~~~~~~~
JWT помощники, хэширование паролей и проверки доступа на основе ролей.

Ключевые моменты
================
* Использует *python‑jose* для компактной обработки JWS.
* Экспортирует **create_access_token**, **verify_token** и **require_roles**
  (фабрика зависимостей FastAPI).
* Токен содержит ``sub`` (ID пользователя, либо email супер-администратора),
  ``role`` и ``email``. Email из токена связывает участника с его попытками.
* Супер-администратор задается только через настройки и сверяется
  сравнением за постоянное время.
"""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable

from fastapi import HTTPException, Request, status
from jose import JWTError, jwt
from passlib.context import CryptContext

from eventhub.config.logger import configure_logger
from eventhub.config.settings import settings
from eventhub.domain.enums import Role

logger = configure_logger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# ---------------------------------------------------------------------------
# Пароли
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    return pwd_context.verify(password, hashed)


def verify_super_admin(email: str, password: str) -> bool:
    """Сверить учетные данные с секретами супер-администратора из настроек."""
    email_ok = secrets.compare_digest(
        email.strip().lower().encode("utf-8"),
        settings.super_admin_email.strip().lower().encode("utf-8"),
    )
    password_ok = secrets.compare_digest(
        password.encode("utf-8"), settings.super_admin_password.encode("utf-8")
    )
    return email_ok and password_ok


# ---------------------------------------------------------------------------
# JWT помощники
# ---------------------------------------------------------------------------

# Отдельные секреты для access и refresh токенов
ACCESS_TOKEN_SECRET = settings.jwt_secret
REFRESH_TOKEN_SECRET = settings.jwt_secret + "_refresh"


def _encode(data: dict, secret: str, expire: datetime, token_type: str) -> str:
    to_encode = data.copy()
    to_encode.update({"exp": expire, "token_type": token_type})
    if "sub" in to_encode and not isinstance(to_encode["sub"], str):
        to_encode["sub"] = str(to_encode["sub"])
    if "role" in to_encode and isinstance(to_encode["role"], Role):
        to_encode["role"] = to_encode["role"].value
    return jwt.encode(to_encode, secret, algorithm=settings.jwt_algorithm)


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta
        if expires_delta is not None
        else timedelta(minutes=settings.access_token_expire_minutes)
    )
    return _encode(data, ACCESS_TOKEN_SECRET, expire, "access")


def create_refresh_token(data: dict, expires_delta: timedelta | None = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta
        if expires_delta is not None
        else timedelta(days=settings.refresh_token_expire_days)
    )
    return _encode(data, REFRESH_TOKEN_SECRET, expire, "refresh")


def verify_token(token: str, expected_type: str = "access") -> dict:
    secret = ACCESS_TOKEN_SECRET if expected_type == "access" else REFRESH_TOKEN_SECRET
    try:
        payload = jwt.decode(token, secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        logger.warning(f"Ошибка проверки JWT: {str(exc)}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    token_type = payload.get("token_type")
    if token_type != expected_type:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token type. Expected {expected_type}, got {token_type}",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload


# ---------------------------------------------------------------------------
# Проверка на основе ролей
# ---------------------------------------------------------------------------


def extract_bearer_token(request: Request) -> str:
    auth: str | None = request.headers.get("Authorization")
    if not auth or not auth.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return auth.split(" ", 1)[1]


def get_current_user(request: Request) -> dict:
    """
    Получить текущего пользователя из access токена.

    Returns:
        Payload токена (``sub``, ``role``, ``email``)

    Raises:
        HTTPException: Если токен недействителен или отсутствует
    """
    payload = verify_token(extract_bearer_token(request), "access")
    if payload.get("sub") is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload


def require_roles(*allowed_roles: Role) -> Callable[[Request], dict]:
    allowed: set[Role] = set(allowed_roles)

    async def checker(request: Request) -> dict:
        payload = get_current_user(request)
        try:
            role = Role(payload["role"])
        except (KeyError, ValueError) as exc:
            logger.error(f"Неверная роль в payload: {payload}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token payload",
            ) from exc

        if role not in allowed:
            logger.warning(
                f"Доступ запрещен: пользователь {payload.get('sub')} с ролью {role.value} "
                f"пытался получить доступ к {request.url.path}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )

        return payload

    return checker


# Удобные предустановки --------------------------------------------------------

super_admin_only = require_roles(Role.SUPER_ADMIN)

admin_or_super_admin = require_roles(Role.SUPER_ADMIN, Role.ADMIN)

staff = require_roles(Role.SUPER_ADMIN, Role.ADMIN, Role.ORGANIZER)

organizers = require_roles(Role.ADMIN, Role.ORGANIZER)

participants = require_roles(Role.PARTICIPANT)

event_reviewers = require_roles(
    Role.SUPER_ADMIN, Role.ADMIN, Role.ORGANIZER, Role.JUDGE
)

authenticated = require_roles(*Role)


def current_user_id(current_user: dict) -> int | None:
    """ID пользователя из токена (у супер-администратора его нет)."""
    if current_user.get("role") == Role.SUPER_ADMIN.value:
        return None
    return int(current_user["sub"])
