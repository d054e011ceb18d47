# -*- coding: utf-8 -*-
"""
Pydantic схемы мероприятий, заявок и назначения судей.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from eventhub.domain.enums import (EventStatus, PaymentStatus,
                                   RegistrationStatus)
from eventhub.utils.datetime_utils import to_naive_utc


class PrizeSchema(BaseModel):
    position: str
    prize: str
    amount: Optional[float] = None


class EventCreateSchema(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    category: str = Field(min_length=1, max_length=100)
    start_date: datetime
    end_date: datetime
    location: str = ""
    max_participants: int = Field(gt=0)
    registration_deadline: datetime
    requirements: List[str] = Field(default_factory=list)
    prizes: List[PrizeSchema] = Field(default_factory=list)
    banner_image: Optional[str] = None
    event_image: Optional[str] = None
    registration_fee: float = Field(default=0, ge=0)
    payment_link: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator("start_date", "end_date", "registration_deadline", mode="after")
    @classmethod
    def normalize_datetime(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

    @model_validator(mode="after")
    def check_dates(self) -> "EventCreateSchema":
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class EventUpdateSchema(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    location: Optional[str] = None
    max_participants: Optional[int] = Field(default=None, gt=0)
    registration_deadline: Optional[datetime] = None
    requirements: Optional[List[str]] = None
    prizes: Optional[List[PrizeSchema]] = None
    banner_image: Optional[str] = None
    event_image: Optional[str] = None
    registration_fee: Optional[float] = Field(default=None, ge=0)
    payment_link: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator("start_date", "end_date", "registration_deadline", mode="after")
    @classmethod
    def normalize_datetime(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class EventStatusSchema(BaseModel):
    status: EventStatus


class PaymentLinkSchema(BaseModel):
    payment_link: Optional[str] = None


class JudgeReadSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: Optional[str] = None
    email: Optional[str] = None


class EventReadSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    category: str
    start_date: datetime
    end_date: datetime
    location: str
    max_participants: int
    registration_deadline: datetime
    status: EventStatus
    organizer_id: int
    judges: List[JudgeReadSchema] = Field(default_factory=list)
    requirements: List[str] = Field(default_factory=list)
    prizes: List[PrizeSchema] = Field(default_factory=list)
    banner_image: Optional[str] = None
    event_image: Optional[str] = None
    registration_fee: float = 0
    payment_link: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    created_at: datetime


class JudgeAssignSchema(BaseModel):
    judge_id: int


# ----------------------------- REGISTRATIONS --------------------------------


class EmergencyContactSchema(BaseModel):
    name: str
    phone: str
    relationship: str


class SubmissionDataSchema(BaseModel):
    """Анкета участника. Согласия с правилами обязательны."""

    model_config = ConfigDict(extra="allow")

    team_name: Optional[str] = None
    team_members: Optional[List[str]] = None
    project_description: Optional[str] = None
    additional_info: Optional[str] = None
    experience: Optional[str] = None
    motivation: Optional[str] = None
    skills: Optional[List[str]] = None
    portfolio: Optional[str] = None
    github: Optional[str] = None
    linkedin: Optional[str] = None
    website: Optional[str] = None
    emergency_contact: Optional[EmergencyContactSchema] = None
    dietary_restrictions: Optional[str] = None
    tshirt_size: Optional[str] = None
    agree_to_terms: bool
    agree_to_code_of_conduct: bool
    allow_photography: Optional[bool] = None

    @field_validator("agree_to_terms", "agree_to_code_of_conduct")
    @classmethod
    def must_agree(cls, value: bool) -> bool:
        if not value:
            raise ValueError("Consent is required to register")
        return value


class RegistrationCreateSchema(BaseModel):
    is_team_leader: bool = False
    submission_data: SubmissionDataSchema


class RegistrationReviewSchema(BaseModel):
    status: RegistrationStatus
    review_notes: Optional[str] = None


class RegistrationReadSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    event_id: int
    participant_id: int
    status: RegistrationStatus
    payment_status: PaymentStatus
    is_team_leader: bool
    submission_data: Optional[Dict[str, Any]] = None
    registered_at: datetime
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[int] = None
    review_notes: Optional[str] = None


class EventRegistrationSchema(RegistrationReadSchema):
    participant_name: str
    participant_email: Optional[str] = None
