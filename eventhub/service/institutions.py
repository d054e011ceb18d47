# -*- coding: utf-8 -*-
"""
Сервис организаций-участников (колледжи, университеты, компании-спонсоры).
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.config.logger import configure_logger
from eventhub.domain.enums import InstitutionType
from eventhub.domain.models import ParticipatingInstitution
from eventhub.repository.base import create_item, delete_item, get_item
from eventhub.utils.datetime_utils import utc_now

logger = configure_logger(__name__)


async def create_institution(
    session: AsyncSession, data: Dict[str, Any]
) -> ParticipatingInstitution:
    now = utc_now()
    data = dict(data)
    data["student_count"] = data.get("student_count") or 0
    data["order"] = data.get("order") or 0
    institution = await create_item(
        session, ParticipatingInstitution, created_at=now, updated_at=now, **data
    )
    logger.info(f"🏛️ Добавлена организация {institution.id} '{institution.name}'")
    return institution


async def update_institution(
    session: AsyncSession, institution_id: int, updates: Dict[str, Any]
) -> ParticipatingInstitution:
    institution = await get_institution(session, institution_id)
    for key, value in updates.items():
        setattr(institution, key, value)
    institution.updated_at = utc_now()
    await session.commit()
    await session.refresh(institution)
    return institution


async def delete_institution(session: AsyncSession, institution_id: int) -> None:
    await get_institution(session, institution_id)
    await delete_item(session, ParticipatingInstitution, institution_id)


async def get_institution(
    session: AsyncSession, institution_id: int
) -> ParticipatingInstitution:
    return await get_item(
        session, ParticipatingInstitution, institution_id, resource_name="Institution"
    )


async def list_institutions(
    session: AsyncSession,
    institution_type: Optional[InstitutionType] = None,
    is_active: Optional[bool] = None,
) -> List[ParticipatingInstitution]:
    """Организации, упорядоченные по полю ``order``, затем новые первыми."""
    stmt = select(ParticipatingInstitution)
    if institution_type is not None:
        stmt = stmt.where(ParticipatingInstitution.type == institution_type)
    if is_active is not None:
        stmt = stmt.where(ParticipatingInstitution.is_active.is_(is_active))
    stmt = stmt.order_by(
        ParticipatingInstitution.order,
        ParticipatingInstitution.created_at.desc(),
        ParticipatingInstitution.id.desc(),
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def list_active_institutions(
    session: AsyncSession, institution_type: Optional[InstitutionType] = None
) -> List[ParticipatingInstitution]:
    return await list_institutions(session, institution_type, is_active=True)


async def list_active_sponsors(session: AsyncSession) -> List[ParticipatingInstitution]:
    return await list_active_institutions(session, InstitutionType.COMPANY)
