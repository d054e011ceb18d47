# -*- coding: utf-8 -*-
"""
Сервис новостей и объявлений.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config.logger import configure_logger
from eventhub.domain.enums import NewsCategory, NewsStatus
from eventhub.domain.models import NewsUpdate
from eventhub.repository.base import create_item, delete_item, get_item
from eventhub.utils.datetime_utils import utc_now

logger = configure_logger(__name__)


async def create_news(
    session: AsyncSession, author_name: str, author_email: str, data: Dict[str, Any]
) -> NewsUpdate:
    """Создать новость; просмотры начинаются с нуля."""
    now = utc_now()
    data = dict(data)
    data.setdefault("featured", False)
    news = await create_item(
        session,
        NewsUpdate,
        author_name=author_name,
        author_email=author_email,
        created_at=now,
        updated_at=now,
        views=0,
        **data,
    )
    logger.info(f"📰 Создана новость {news.id} '{news.title}' ({news.status.value})")
    return news


async def update_news(
    session: AsyncSession, news_id: int, updates: Dict[str, Any]
) -> NewsUpdate:
    news = await get_news(session, news_id)
    for key, value in updates.items():
        setattr(news, key, value)
    news.updated_at = utc_now()
    await session.commit()
    await session.refresh(news)
    return news


async def delete_news(session: AsyncSession, news_id: int) -> None:
    await get_news(session, news_id)
    await delete_item(session, NewsUpdate, news_id)


async def get_news(session: AsyncSession, news_id: int) -> NewsUpdate:
    return await get_item(session, NewsUpdate, news_id, resource_name="News update")


def _newest_first(stmt):
    return stmt.order_by(NewsUpdate.publish_date.desc(), NewsUpdate.id.desc())


async def list_published_news(
    session: AsyncSession,
    limit: Optional[int] = None,
    category: Optional[NewsCategory] = None,
) -> List[NewsUpdate]:
    """Опубликованные новости, свежие первыми."""
    stmt = select(NewsUpdate).where(NewsUpdate.status == NewsStatus.PUBLISHED)
    if category is not None:
        stmt = stmt.where(NewsUpdate.category == category)
    stmt = _newest_first(stmt)
    if limit:
        stmt = stmt.limit(limit)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_featured_news(
    session: AsyncSession, limit: Optional[int] = None
) -> List[NewsUpdate]:
    stmt = _newest_first(
        select(NewsUpdate).where(
            NewsUpdate.featured.is_(True),
            NewsUpdate.status == NewsStatus.PUBLISHED,
        )
    )
    if limit:
        stmt = stmt.limit(limit)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_all_news(
    session: AsyncSession,
    author_email: Optional[str] = None,
    status: Optional[NewsStatus] = None,
) -> List[NewsUpdate]:
    """Все новости (включая черновики) с фильтрами по автору и статусу."""
    stmt = select(NewsUpdate)
    if author_email:
        stmt = stmt.where(NewsUpdate.author_email == author_email.strip().lower())
    if status is not None:
        stmt = stmt.where(NewsUpdate.status == status)
    result = await session.execute(_newest_first(stmt))
    return list(result.scalars().all())


async def increment_views(session: AsyncSession, news_id: int) -> int:
    """
    Увеличить счетчик просмотров.

    Returns:
        Новое значение счетчика
    """
    await get_news(session, news_id)
    await session.execute(
        update(NewsUpdate)
        .where(NewsUpdate.id == news_id)
        .values(views=NewsUpdate.views + 1)
        .execution_options(synchronize_session=False)
    )
    await session.commit()
    news = await get_news(session, news_id)
    await session.refresh(news)
    return news.views


async def get_news_stats(
    session: AsyncSession, author_email: Optional[str] = None
) -> Dict[str, Any]:
    news = await list_all_news(session, author_email=author_email)
    return {
        "total": len(news),
        "published": sum(1 for n in news if n.status == NewsStatus.PUBLISHED),
        "drafts": sum(1 for n in news if n.status == NewsStatus.DRAFT),
        "featured": sum(1 for n in news if n.featured),
        "total_views": sum(n.views for n in news),
        "by_category": {
            category.value: sum(1 for n in news if n.category == category)
            for category in NewsCategory
        },
    }
