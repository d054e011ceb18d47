# -*- coding: utf-8 -*-
"""
Маршруты публичной регистрации участников.

Анкету может отправить кто угодно, без входа в систему. Просмотр, поиск и
статистика доступны организаторам и администраторам, правка и удаление
только администраторам.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.api.v1.tests.shared.utils import get_client_ip
from eventhub.clients.database_client import get_db
from eventhub.config.logger import configure_logger
from eventhub.security.security import admin_or_super_admin, staff
from eventhub.service import participant_registrations as registrations_service

from .schemas import (ParticipantRegistrationCreateSchema,
                      ParticipantRegistrationReadSchema,
                      ParticipantRegistrationStatsSchema,
                      ParticipantRegistrationUpdateSchema)

router = APIRouter()
logger = configure_logger(__name__)


@router.post(
    "",
    response_model=ParticipantRegistrationReadSchema,
    status_code=status.HTTP_201_CREATED,
)
async def register_participant_endpoint(
    payload: ParticipantRegistrationCreateSchema,
    request: Request,
    session: AsyncSession = Depends(get_db),
) -> ParticipantRegistrationReadSchema:
    """
    Отправить анкету участника.

    Raises:
        HTTPException: 404 если мероприятия нет, 409 если с этим email уже
            есть анкета, 422 без согласия с правилами
    """
    data = payload.model_dump(exclude_none=True, exclude={"event_id"})
    try:
        registration = await registrations_service.register_participant(
            session, payload.event_id, data, ip_address=get_client_ip(request)
        )
        return ParticipantRegistrationReadSchema.model_validate(registration)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Ошибка сохранения анкеты: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save registration",
        )


@router.get(
    "",
    response_model=List[ParticipantRegistrationReadSchema],
    dependencies=[Depends(staff)],
)
async def list_participant_registrations_endpoint(
    session: AsyncSession = Depends(get_db),
) -> List[ParticipantRegistrationReadSchema]:
    registrations = await registrations_service.list_all_participant_registrations(
        session
    )
    return [ParticipantRegistrationReadSchema.model_validate(r) for r in registrations]


@router.get(
    "/search",
    response_model=List[ParticipantRegistrationReadSchema],
    dependencies=[Depends(staff)],
)
async def search_participant_registrations_endpoint(
    search_term: Optional[str] = Query(None, max_length=255),
    college: Optional[str] = Query(None, max_length=255),
    team_size: Optional[int] = Query(None, ge=1),
    session: AsyncSession = Depends(get_db),
) -> List[ParticipantRegistrationReadSchema]:
    """Поиск по имени, email, команде и навыкам с фильтрами, новые первыми."""
    registrations = await registrations_service.search_participant_registrations(
        session, search_term=search_term, college=college, team_size=team_size
    )
    return [ParticipantRegistrationReadSchema.model_validate(r) for r in registrations]


@router.get(
    "/stats",
    response_model=ParticipantRegistrationStatsSchema,
    dependencies=[Depends(staff)],
)
async def get_registration_stats_endpoint(
    session: AsyncSession = Depends(get_db),
) -> ParticipantRegistrationStatsSchema:
    stats = await registrations_service.get_registration_stats(session)
    return ParticipantRegistrationStatsSchema(**stats)


@router.get(
    "/by-college",
    response_model=List[ParticipantRegistrationReadSchema],
    dependencies=[Depends(staff)],
)
async def list_registrations_by_college_endpoint(
    college: str = Query(..., min_length=1),
    session: AsyncSession = Depends(get_db),
) -> List[ParticipantRegistrationReadSchema]:
    registrations = (
        await registrations_service.list_participant_registrations_by_college(
            session, college
        )
    )
    return [ParticipantRegistrationReadSchema.model_validate(r) for r in registrations]


@router.get(
    "/events/{event_id}",
    response_model=List[ParticipantRegistrationReadSchema],
    dependencies=[Depends(staff)],
)
async def list_event_registrations_endpoint(
    event_id: int,
    session: AsyncSession = Depends(get_db),
) -> List[ParticipantRegistrationReadSchema]:
    registrations = await registrations_service.list_event_participant_registrations(
        session, event_id
    )
    return [ParticipantRegistrationReadSchema.model_validate(r) for r in registrations]


@router.patch(
    "/{registration_id}",
    response_model=ParticipantRegistrationReadSchema,
    dependencies=[Depends(admin_or_super_admin)],
)
async def update_participant_registration_endpoint(
    registration_id: int,
    payload: ParticipantRegistrationUpdateSchema,
    session: AsyncSession = Depends(get_db),
) -> ParticipantRegistrationReadSchema:
    registration = await registrations_service.update_participant_registration(
        session, registration_id, payload.model_dump(exclude_unset=True)
    )
    return ParticipantRegistrationReadSchema.model_validate(registration)


@router.delete(
    "/{registration_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(admin_or_super_admin)],
)
async def delete_participant_registration_endpoint(
    registration_id: int,
    session: AsyncSession = Depends(get_db),
) -> None:
    await registrations_service.delete_participant_registration(
        session, registration_id
    )
