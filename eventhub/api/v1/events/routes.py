# -*- coding: utf-8 -*-
"""
Маршруты мероприятий, заявок и судей.

Просмотр мероприятий открыт всем; изменения доступны организатору
мероприятия и администраторам, правка деталей и удаление только
супер-администратору.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventhub.clients.database_client import get_db
from eventhub.config.logger import configure_logger
from eventhub.domain.enums import EventStatus
from eventhub.security.security import (authenticated, event_reviewers,
                                        get_current_user, organizers,
                                        participants, staff,
                                        super_admin_only)
from eventhub.service import events as events_service

from .schemas import (EventCreateSchema, EventReadSchema,
                      EventRegistrationSchema, EventStatusSchema,
                      EventUpdateSchema, JudgeAssignSchema, JudgeReadSchema,
                      PaymentLinkSchema, RegistrationCreateSchema,
                      RegistrationReadSchema, RegistrationReviewSchema)

router = APIRouter()
logger = configure_logger(__name__)


@router.post(
    "",
    response_model=EventReadSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(organizers)],
)
async def create_event_endpoint(
    payload: EventCreateSchema,
    session: AsyncSession = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> EventReadSchema:
    """
    Создать мероприятие.

    Мероприятие создается черновиком, организатором становится автор.
    """
    try:
        event = await events_service.create_event(
            session, current_user, payload.model_dump()
        )
        return EventReadSchema.model_validate(event)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Ошибка создания мероприятия: {type(e).__name__}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create event",
        )


@router.get("", response_model=List[EventReadSchema])
async def list_events_endpoint(
    category: Optional[str] = None,
    event_status: Optional[EventStatus] = None,
    session: AsyncSession = Depends(get_db),
) -> List[EventReadSchema]:
    """
    Список мероприятий.

    Args:
        category: Фильтр по категории (имеет приоритет над статусом)
        event_status: Фильтр по статусу
    """
    events = await events_service.list_events(session, category, event_status)
    return [EventReadSchema.model_validate(event) for event in events]


@router.get(
    "/judges/available",
    response_model=List[JudgeReadSchema],
    dependencies=[Depends(staff)],
)
async def list_available_judges_endpoint(
    session: AsyncSession = Depends(get_db),
) -> List[JudgeReadSchema]:
    judges = await events_service.list_available_judges(session)
    return [JudgeReadSchema.model_validate(judge) for judge in judges]


@router.get(
    "/registrations/me",
    response_model=List[RegistrationReadSchema],
    dependencies=[Depends(authenticated)],
)
async def list_my_registrations_endpoint(
    session: AsyncSession = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> List[RegistrationReadSchema]:
    registrations = await events_service.list_my_registrations(session, current_user)
    return [RegistrationReadSchema.model_validate(r) for r in registrations]


@router.patch(
    "/registrations/{registration_id}",
    response_model=RegistrationReadSchema,
    dependencies=[Depends(event_reviewers)],
)
async def review_registration_endpoint(
    registration_id: int,
    payload: RegistrationReviewSchema,
    session: AsyncSession = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> RegistrationReadSchema:
    """Одобрить или отклонить заявку (организатор, администратор, судья мероприятия)."""
    registration = await events_service.review_registration(
        session,
        current_user,
        registration_id,
        payload.status,
        payload.review_notes,
    )
    return RegistrationReadSchema.model_validate(registration)


@router.get("/{event_id}", response_model=EventReadSchema)
async def get_event_endpoint(
    event_id: int,
    session: AsyncSession = Depends(get_db),
) -> EventReadSchema:
    event = await events_service.get_event(session, event_id)
    return EventReadSchema.model_validate(event)


@router.patch(
    "/{event_id}",
    response_model=EventReadSchema,
    dependencies=[Depends(super_admin_only)],
)
async def update_event_endpoint(
    event_id: int,
    payload: EventUpdateSchema,
    session: AsyncSession = Depends(get_db),
) -> EventReadSchema:
    """Изменить детали мероприятия (только супер-администратор)."""
    event = await events_service.update_event(
        session, event_id, payload.model_dump(exclude_unset=True, exclude_none=True)
    )
    return EventReadSchema.model_validate(event)


@router.put(
    "/{event_id}/payment-link",
    response_model=EventReadSchema,
    dependencies=[Depends(super_admin_only)],
)
async def update_payment_link_endpoint(
    event_id: int,
    payload: PaymentLinkSchema,
    session: AsyncSession = Depends(get_db),
) -> EventReadSchema:
    event = await events_service.update_payment_link(
        session, event_id, payload.payment_link
    )
    return EventReadSchema.model_validate(event)


@router.put(
    "/{event_id}/status",
    response_model=EventReadSchema,
    dependencies=[Depends(staff)],
)
async def update_event_status_endpoint(
    event_id: int,
    payload: EventStatusSchema,
    session: AsyncSession = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> EventReadSchema:
    event = await events_service.update_event_status(
        session, current_user, event_id, payload.status
    )
    return EventReadSchema.model_validate(event)


@router.delete(
    "/{event_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(super_admin_only)],
)
async def delete_event_endpoint(
    event_id: int,
    session: AsyncSession = Depends(get_db),
) -> None:
    """Удалить мероприятие вместе с заявками."""
    logger.info(f"🗑️ Удаление мероприятия {event_id}")
    await events_service.delete_event(session, event_id)


# ----------------------------- REGISTRATIONS --------------------------------


@router.post(
    "/{event_id}/registrations",
    response_model=RegistrationReadSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(participants)],
)
async def register_for_event_endpoint(
    event_id: int,
    payload: RegistrationCreateSchema,
    session: AsyncSession = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> RegistrationReadSchema:
    """
    Подать заявку на мероприятие.

    Raises:
        HTTPException: 404 если мероприятия нет, 409 если заявка уже подана,
            422 без согласия с правилами
    """
    registration = await events_service.register_for_event(
        session,
        current_user,
        event_id,
        payload.submission_data.model_dump(exclude_none=True),
        is_team_leader=payload.is_team_leader,
    )
    return RegistrationReadSchema.model_validate(registration)


@router.get(
    "/{event_id}/registrations",
    response_model=List[EventRegistrationSchema],
    dependencies=[Depends(event_reviewers)],
)
async def list_event_registrations_endpoint(
    event_id: int,
    session: AsyncSession = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> List[EventRegistrationSchema]:
    rows = await events_service.list_registrations(session, current_user, event_id)
    return [
        EventRegistrationSchema(
            **RegistrationReadSchema.model_validate(row["registration"]).model_dump(),
            participant_name=row["participant_name"],
            participant_email=row["participant_email"],
        )
        for row in rows
    ]


# ----------------------------- JUDGES ---------------------------------------


@router.post(
    "/{event_id}/judges",
    response_model=EventReadSchema,
    dependencies=[Depends(staff)],
)
async def assign_judge_endpoint(
    event_id: int,
    payload: JudgeAssignSchema,
    session: AsyncSession = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> EventReadSchema:
    event = await events_service.assign_judge(
        session, current_user, event_id, payload.judge_id
    )
    return EventReadSchema.model_validate(event)


@router.delete(
    "/{event_id}/judges/{judge_id}",
    response_model=EventReadSchema,
    dependencies=[Depends(staff)],
)
async def remove_judge_endpoint(
    event_id: int,
    judge_id: int,
    session: AsyncSession = Depends(get_db),
    current_user: dict = Depends(get_current_user),
) -> EventReadSchema:
    event = await events_service.remove_judge(
        session, current_user, event_id, judge_id
    )
    return EventReadSchema.model_validate(event)
