# -*- coding: utf-8 -*-
"""Схемы организаций-участников."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from eventhub.domain.enums import InstitutionType


class InstitutionCreateSchema(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    type: InstitutionType
    logo: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    student_count: Optional[int] = Field(default=None, ge=0)
    is_active: bool = True
    order: Optional[int] = None


class InstitutionUpdateSchema(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    type: Optional[InstitutionType] = None
    logo: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    student_count: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
    order: Optional[int] = None


class InstitutionReadSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    type: InstitutionType
    logo: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None
    student_count: int
    is_active: bool
    order: int
    created_at: datetime
    updated_at: datetime
