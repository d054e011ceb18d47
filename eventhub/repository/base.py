# -*- coding: utf-8 -*-
"""
eventhub/repository/base.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~
Base repository operations for generic CRUD functionality.

This module provides reusable asynchronous CRUD helpers using SQLAlchemy 2.0
async ORM, with logging and basic validation. It is designed to be stateless
for unit testing simplicity.
"""

from __future__ import annotations

from typing import Any, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config.logger import configure_logger
from eventhub.domain.models import Base
from eventhub.utils.exceptions import NotFoundError

T = TypeVar("T", bound=Base)

logger = configure_logger(__name__)

# ---------------------------------------------------------------------------
# Generic helpers
# ---------------------------------------------------------------------------


async def get_item(
    session: AsyncSession,
    model: Type[T],
    item_id: int,
    resource_name: str | None = None,
) -> T:
    """Retrieve a single item by ID or raise NotFoundError."""
    item = await session.get(model, item_id)
    if item is None:
        raise NotFoundError(
            resource_type=resource_name or model.__name__, resource_id=item_id
        )
    return item


async def find_item(session: AsyncSession, model: Type[T], **filters: Any) -> T | None:
    """Return the first item matching the equality filters, or None."""
    stmt = select(model).filter_by(**filters).limit(1)
    result = await session.execute(stmt)
    return result.scalars().first()


async def create_item(session: AsyncSession, model: Type[T], **kwargs: Any) -> T:
    """Create a new item in the database."""
    instance = model(**kwargs)
    session.add(instance)
    await session.commit()
    await session.refresh(instance)
    return instance


async def update_item(
    session: AsyncSession, model: Type[T], item_id: int, **kwargs: Any
) -> T:
    """Update an existing item in the database."""
    instance = await get_item(session, model, item_id)
    for key, value in kwargs.items():
        setattr(instance, key, value)
    await session.commit()
    await session.refresh(instance)
    return instance


async def delete_item(session: AsyncSession, model: Type[T], item_id: int) -> None:
    """Delete an item from the database."""
    instance = await get_item(session, model, item_id)
    await session.delete(instance)
    await session.commit()
    logger.debug(f"Удален {model.__name__} с ID {item_id}")

