# -*- coding: utf-8 -*-
"""Схемы профиля пользователя."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from eventhub.domain.enums import Role


class SocialLinksSchema(BaseModel):
    linkedin: Optional[str] = None
    github: Optional[str] = None
    twitter: Optional[str] = None


class ProfileUpdateSchema(BaseModel):
    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    bio: Optional[str] = None
    skills: Optional[List[str]] = None
    organization: Optional[str] = Field(default=None, max_length=255)
    avatar: Optional[str] = None
    social_links: Optional[SocialLinksSchema] = None


class ProfileReadSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    first_name: str
    last_name: str
    bio: Optional[str] = None
    skills: List[str] = Field(default_factory=list)
    organization: Optional[str] = None
    avatar: Optional[str] = None
    social_links: Optional[SocialLinksSchema] = None
    created_at: datetime
    updated_at: datetime


class CurrentProfileSchema(BaseModel):
    """Профиль вместе с ролью и email из учетной записи."""

    role: Role
    email: Optional[str] = None
    name: Optional[str] = None
    profile: Optional[ProfileReadSchema] = None


class DashboardSchema(BaseModel):
    role: Role
    profile: Optional[ProfileReadSchema] = None
    stats: Dict[str, int]
