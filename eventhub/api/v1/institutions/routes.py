# -*- coding: utf-8 -*-
"""
Маршруты организаций-участников.

Просмотр открыт всем, изменения доступны администраторам и
супер-администратору.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.clients.database_client import get_db
from eventhub.domain.enums import InstitutionType
from eventhub.security.security import admin_or_super_admin
from eventhub.service import institutions as institutions_service

from .schemas import (InstitutionCreateSchema, InstitutionReadSchema,
                      InstitutionUpdateSchema)

router = APIRouter()


@router.post(
    "",
    response_model=InstitutionReadSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(admin_or_super_admin)],
)
async def create_institution_endpoint(
    payload: InstitutionCreateSchema,
    session: AsyncSession = Depends(get_db),
) -> InstitutionReadSchema:
    institution = await institutions_service.create_institution(
        session, payload.model_dump()
    )
    return InstitutionReadSchema.model_validate(institution)


@router.get("", response_model=List[InstitutionReadSchema])
async def list_institutions_endpoint(
    institution_type: Optional[InstitutionType] = None,
    is_active: Optional[bool] = None,
    session: AsyncSession = Depends(get_db),
) -> List[InstitutionReadSchema]:
    institutions = await institutions_service.list_institutions(
        session, institution_type, is_active
    )
    return [InstitutionReadSchema.model_validate(i) for i in institutions]


@router.get("/active", response_model=List[InstitutionReadSchema])
async def list_active_institutions_endpoint(
    institution_type: Optional[InstitutionType] = None,
    session: AsyncSession = Depends(get_db),
) -> List[InstitutionReadSchema]:
    institutions = await institutions_service.list_active_institutions(
        session, institution_type
    )
    return [InstitutionReadSchema.model_validate(i) for i in institutions]


@router.get("/sponsors", response_model=List[InstitutionReadSchema])
async def list_active_sponsors_endpoint(
    session: AsyncSession = Depends(get_db),
) -> List[InstitutionReadSchema]:
    """Активные компании, которые показываются как спонсоры."""
    sponsors = await institutions_service.list_active_sponsors(session)
    return [InstitutionReadSchema.model_validate(i) for i in sponsors]


@router.get("/{institution_id}", response_model=InstitutionReadSchema)
async def get_institution_endpoint(
    institution_id: int,
    session: AsyncSession = Depends(get_db),
) -> InstitutionReadSchema:
    institution = await institutions_service.get_institution(session, institution_id)
    return InstitutionReadSchema.model_validate(institution)


@router.patch(
    "/{institution_id}",
    response_model=InstitutionReadSchema,
    dependencies=[Depends(admin_or_super_admin)],
)
async def update_institution_endpoint(
    institution_id: int,
    payload: InstitutionUpdateSchema,
    session: AsyncSession = Depends(get_db),
) -> InstitutionReadSchema:
    institution = await institutions_service.update_institution(
        session, institution_id, payload.model_dump(exclude_unset=True, exclude_none=True)
    )
    return InstitutionReadSchema.model_validate(institution)


@router.delete(
    "/{institution_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(admin_or_super_admin)],
)
async def delete_institution_endpoint(
    institution_id: int,
    session: AsyncSession = Depends(get_db),
) -> None:
    await institutions_service.delete_institution(session, institution_id)
