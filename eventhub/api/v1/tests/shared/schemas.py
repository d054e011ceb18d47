# -*- coding: utf-8 -*-
"""
Общие Pydantic схемы пре-квалификационных тестов.

Схемы используются и в административных, и в участнических операциях.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from eventhub.domain.enums import AttemptStatus, TestDifficulty, TestType
from eventhub.utils.datetime_utils import to_naive_utc

# ----------------------------- CRUD -----------------------------------------


class TestCreateSchema(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    test_link: str = Field(min_length=1, description="Ссылка на внешнюю платформу теста")
    start_date: datetime
    end_date: datetime
    duration: int = Field(gt=0, description="Длительность в минутах")
    instructions: str = ""
    eligibility_criteria: str = ""
    max_attempts: int = Field(default=1, ge=1)
    passing_score: Optional[float] = None
    event_id: Optional[int] = None
    tags: List[str] = Field(default_factory=list)
    difficulty: TestDifficulty = TestDifficulty.MEDIUM
    total_questions: Optional[int] = Field(default=None, ge=0)
    test_type: TestType = TestType.MCQ

    @field_validator("start_date", "end_date", mode="after")
    @classmethod
    def normalize_datetime(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

    @model_validator(mode="after")
    def check_window(self) -> "TestCreateSchema":
        if self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self


class TestUpdateSchema(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    test_link: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, gt=0)
    instructions: Optional[str] = None
    eligibility_criteria: Optional[str] = None
    max_attempts: Optional[int] = Field(default=None, ge=1)
    passing_score: Optional[float] = None
    event_id: Optional[int] = None
    tags: Optional[List[str]] = None
    difficulty: Optional[TestDifficulty] = None
    total_questions: Optional[int] = Field(default=None, ge=0)
    test_type: Optional[TestType] = None
    is_active: Optional[bool] = None

    @field_validator("start_date", "end_date", mode="after")
    @classmethod
    def normalize_datetime(cls, value: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(value)


class TestReadSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    test_link: str
    is_active: bool
    start_date: datetime
    end_date: datetime
    duration: int
    instructions: str
    eligibility_criteria: str
    max_attempts: int
    passing_score: Optional[float] = None
    created_by: str
    created_at: datetime
    updated_at: datetime
    event_id: Optional[int] = None
    tags: List[str] = Field(default_factory=list)
    difficulty: TestDifficulty
    total_questions: Optional[int] = None
    test_type: TestType


class UpcomingTestsSchema(BaseModel):
    active_tests: List[TestReadSchema]
    upcoming_tests: List[TestReadSchema]
    next_test_start: Optional[datetime] = None


# ----------------------------- ATTEMPTS -------------------------------------


class AttemptReadSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    test_id: int
    participant_email: str
    participant_name: str
    attempt_number: int
    started_at: datetime
    completed_at: Optional[datetime] = None
    score: Optional[float] = None
    status: AttemptStatus
    time_spent: Optional[int] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    responses: Optional[Any] = None
    feedback: Optional[str] = None


class AttemptStartSchema(BaseModel):
    participant_email: Optional[str] = Field(
        default=None,
        description="Email участника. Для участников должен совпадать с email из токена",
    )
    participant_name: Optional[str] = Field(default=None, max_length=255)


class AttemptStartResponseSchema(BaseModel):
    attempt_id: int
    attempt_number: int


class AttemptCompleteSchema(BaseModel):
    score: Optional[float] = None
    time_spent: Optional[int] = Field(default=None, description="Затраченное время, сек.")
    responses: Optional[Any] = None
    feedback: Optional[str] = None


class EligibilitySchema(BaseModel):
    can_take: bool
    reason: Optional[str] = None
    attempts_left: Optional[int] = None
    ongoing_attempt_id: Optional[int] = None
    completed_attempts: Optional[int] = None


class TestStatisticsSchema(BaseModel):
    total_attempts: int
    completed_attempts: int
    unique_participants: int
    average_score: float
    completion_rate: float


class SweepResultSchema(BaseModel):
    abandoned_count: int
