# -*- coding: utf-8 -*-
"""Схемы аутентификации."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventhub.domain.enums import CredentialRole, Role
from eventhub.utils.validators import normalize_email


class RegisterSchema(BaseModel):
    email: str
    password: str = Field(min_length=6, max_length=128)
    name: Optional[str] = Field(default=None, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "participant@example.com",
                "password": "securepassword123",
                "name": "Jane Doe",
            }
        }
    )


class LoginSchema(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)


class TokenSchema(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class UserReadSchema(BaseModel):
    """Схема для чтения данных пользователя."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    email: Optional[str] = None
    name: Optional[str] = None
    role: Role
    is_anonymous: bool = False
    is_active: bool = True
    created_at: Optional[datetime] = None
    last_login: Optional[datetime] = None


class CredentialLoginSchema(BaseModel):
    email: str
    password: str


class CredentialLoginResponseSchema(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    role: CredentialRole
    first_name: str
    last_name: str
    organization: Optional[str] = None
    password_reset_required: bool
