# -*- coding: utf-8 -*-
"""Схемы консоли супер-администратора."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventhub.domain.enums import CredentialRole
from eventhub.utils.validators import normalize_email


class SuperAdminLoginSchema(BaseModel):
    email: str
    password: str


class SuperAdminTokenSchema(BaseModel):
    access_token: str
    token_type: str = "bearer"


class CredentialCreateSchema(BaseModel):
    email: str
    password: str = Field(min_length=6, max_length=128)
    role: CredentialRole
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    organization: Optional[str] = Field(default=None, max_length=255)

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)


class CredentialPasswordSchema(BaseModel):
    new_password: str = Field(min_length=6, max_length=128)


class CredentialUpdateSchema(BaseModel):
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    organization: Optional[str] = Field(default=None, max_length=255)


class CredentialReadSchema(BaseModel):
    """Учетная запись без хэша пароля."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: CredentialRole
    first_name: str
    last_name: str
    organization: Optional[str] = None
    is_active: bool
    created_at: datetime
    created_by: str
    last_login: Optional[datetime] = None
    password_reset_required: bool
    linked_user_id: Optional[int] = None


class CredentialStatsSchema(BaseModel):
    total_organizers: int
    total_judges: int
    active_accounts: int
    inactive_accounts: int
    recent_logins: int
    total_accounts: int
