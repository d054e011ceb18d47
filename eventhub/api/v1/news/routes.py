# -*- coding: utf-8 -*-
"""
Маршруты новостей.

Опубликованные новости доступны без авторизации и кэшируются; черновики,
статистика и изменения доступны организаторам и администраторам.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.clients.database_client import get_db
from eventhub.config.logger import configure_logger
from eventhub.config.redis_settings import redis_settings
from eventhub.domain.enums import NewsCategory, NewsStatus
from eventhub.security.security import get_current_user, staff
from eventhub.service import news as news_service
from eventhub.service.cache_service import cache_service

from .schemas import (NewsCreateSchema, NewsReadSchema, NewsStatsSchema,
                      NewsUpdateSchema, NewsViewsSchema)

router = APIRouter()
logger = configure_logger(__name__)

PREFIX = redis_settings.cache_prefix_news


async def invalidate_news_cache() -> None:
    await cache_service.invalidate_pattern(cache_service.build_key(PREFIX, "*"))


@router.post(
    "",
    response_model=NewsReadSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(staff)],
)
async def create_news_endpoint(
    payload: NewsCreateSchema,
    session: AsyncSession = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> NewsReadSchema:
    """Создать новость от имени текущего пользователя."""
    author_email = current_user.get("email") or current_user["sub"]
    try:
        news = await news_service.create_news(
            session,
            author_name=current_user.get("name") or author_email,
            author_email=author_email,
            data=payload.model_dump(),
        )
        await invalidate_news_cache()
        return NewsReadSchema.model_validate(news)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Ошибка создания новости: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create news update",
        )


@router.get("/published", response_model=List[NewsReadSchema])
async def list_published_news_endpoint(
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    category: Optional[NewsCategory] = None,
    session: AsyncSession = Depends(get_db),
):
    """Опубликованные новости, свежие первыми."""

    async def fetch():
        news = await news_service.list_published_news(session, limit, category)
        return [NewsReadSchema.model_validate(n).model_dump(mode="json") for n in news]

    key = cache_service.build_key(
        PREFIX, "published", category.value if category else "all", limit or "all"
    )
    return await cache_service.get_or_set(key, fetch, redis_settings.cache_ttl_lists)


@router.get("/featured", response_model=List[NewsReadSchema])
async def list_featured_news_endpoint(
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    session: AsyncSession = Depends(get_db),
) -> List[NewsReadSchema]:
    news = await news_service.list_featured_news(session, limit)
    return [NewsReadSchema.model_validate(n) for n in news]


@router.get(
    "",
    response_model=List[NewsReadSchema],
    dependencies=[Depends(staff)],
)
async def list_all_news_endpoint(
    author_email: Optional[str] = None,
    news_status: Optional[NewsStatus] = None,
    session: AsyncSession = Depends(get_db),
) -> List[NewsReadSchema]:
    news = await news_service.list_all_news(session, author_email, news_status)
    return [NewsReadSchema.model_validate(n) for n in news]


@router.get(
    "/stats",
    response_model=NewsStatsSchema,
    dependencies=[Depends(staff)],
)
async def news_stats_endpoint(
    author_email: Optional[str] = None,
    session: AsyncSession = Depends(get_db),
) -> NewsStatsSchema:
    return NewsStatsSchema(**await news_service.get_news_stats(session, author_email))


@router.get("/{news_id}", response_model=NewsReadSchema)
async def get_news_endpoint(
    news_id: int,
    session: AsyncSession = Depends(get_db),
) -> NewsReadSchema:
    return NewsReadSchema.model_validate(await news_service.get_news(session, news_id))


@router.post("/{news_id}/views", response_model=NewsViewsSchema)
async def increment_views_endpoint(
    news_id: int,
    session: AsyncSession = Depends(get_db),
) -> NewsViewsSchema:
    return NewsViewsSchema(views=await news_service.increment_views(session, news_id))


@router.patch(
    "/{news_id}",
    response_model=NewsReadSchema,
    dependencies=[Depends(staff)],
)
async def update_news_endpoint(
    news_id: int,
    payload: NewsUpdateSchema,
    session: AsyncSession = Depends(get_db),
) -> NewsReadSchema:
    news = await news_service.update_news(
        session, news_id, payload.model_dump(exclude_unset=True, exclude_none=True)
    )
    await invalidate_news_cache()
    return NewsReadSchema.model_validate(news)


@router.delete(
    "/{news_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(staff)],
)
async def delete_news_endpoint(
    news_id: int,
    session: AsyncSession = Depends(get_db),
) -> None:
    await news_service.delete_news(session, news_id)
    await invalidate_news_cache()
