# -*- coding: utf-8 -*-
"""Схемы новостей."""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventhub.domain.enums import NewsCategory, NewsStatus
from eventhub.utils.datetime_utils import to_naive_utc, utc_now


class NewsCreateSchema(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    subtitle: Optional[str] = Field(default=None, max_length=255)
    content: str = Field(min_length=1)
    category: NewsCategory
    image: Optional[str] = None
    video_link: Optional[str] = None
    publish_date: datetime = Field(default_factory=utc_now)
    status: NewsStatus = NewsStatus.DRAFT
    featured: bool = False

    @field_validator("publish_date", mode="after")
    @classmethod
    def normalize_datetime(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class NewsUpdateSchema(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    subtitle: Optional[str] = Field(default=None, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1)
    category: Optional[NewsCategory] = None
    image: Optional[str] = None
    video_link: Optional[str] = None
    publish_date: Optional[datetime] = None
    status: Optional[NewsStatus] = None
    featured: Optional[bool] = None

    @field_validator("publish_date", mode="after")
    @classmethod
    def normalize_datetime(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class NewsReadSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    subtitle: Optional[str] = None
    content: str
    category: NewsCategory
    image: Optional[str] = None
    video_link: Optional[str] = None
    publish_date: datetime
    author_name: str
    author_email: str
    status: NewsStatus
    created_at: datetime
    updated_at: datetime
    views: int
    featured: bool


class NewsViewsSchema(BaseModel):
    views: int


class NewsStatsSchema(BaseModel):
    total: int
    published: int
    drafts: int
    featured: int
    total_views: int
    by_category: Dict[str, int]
