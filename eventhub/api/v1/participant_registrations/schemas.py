# -*- coding: utf-8 -*-
"""Схемы анкет публичной регистрации участников."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from eventhub.domain.enums import TeamRole
from eventhub.utils.validators import normalize_email


class TeamMemberSchema(BaseModel):
    name: str
    gender: str
    contact_number: str
    email: str
    college: str
    city: str
    program_branch: str
    current_year: str


class ParticipantRegistrationCreateSchema(BaseModel):
    """
    Анкета с формы регистрации.

    Кроме общих полей содержит поля отдельных типов мероприятий
    (проект, стартап, робот, игра). Они необязательны.
    """

    event_id: int
    full_name: str = Field(min_length=1, max_length=255)
    gender: Optional[str] = None
    contact_number: str = Field(min_length=1, max_length=50)
    email: str
    college_name: str = Field(min_length=1, max_length=255)
    department_year: Optional[str] = None
    city: Optional[str] = None
    program_branch: Optional[str] = None
    current_year: Optional[str] = None
    is_team: bool = False
    team_name: Optional[str] = Field(default=None, max_length=255)
    team_size: int = Field(default=1, ge=1)
    team_members: Optional[List[TeamMemberSchema]] = None
    technical_skills: str = ""
    previous_experience: Optional[str] = None
    project_idea: Optional[str] = None
    project_title: Optional[str] = None
    project_abstract: Optional[str] = None
    project_domain: Optional[str] = None
    project_type: Optional[str] = None
    startup_name: Optional[str] = None
    startup_idea: Optional[str] = None
    robot_name: Optional[str] = None
    bot_dimensions: Optional[str] = None
    selected_game: Optional[str] = None
    game_usernames: Optional[str] = None
    needs_special_setup: Optional[bool] = None
    additional_space_requirements: Optional[str] = None
    laptop_available: Optional[bool] = None
    agree_to_rules: bool
    event_category: Optional[str] = None
    event_title: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "event_id": 1,
                "full_name": "Priya Sharma",
                "contact_number": "+91 98765 43210",
                "email": "priya@example.com",
                "college_name": "City College",
                "program_branch": "CSE",
                "current_year": "3rd",
                "is_team": True,
                "team_name": "Owls",
                "team_size": 3,
                "technical_skills": "Python, React",
                "agree_to_rules": True,
            }
        }
    )


class ParticipantRegistrationUpdateSchema(BaseModel):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    college_university: Optional[str] = Field(default=None, min_length=1, max_length=255)
    department_year: Optional[str] = None
    contact_number: Optional[str] = Field(default=None, min_length=1, max_length=50)
    team_name: Optional[str] = Field(default=None, max_length=255)
    team_size: Optional[int] = Field(default=None, ge=1)
    role_in_team: Optional[TeamRole] = None
    technical_skills: Optional[str] = None
    previous_experience: Optional[str] = None


class ParticipantRegistrationReadSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    event_id: Optional[int] = None
    full_name: str
    college_university: str
    department_year: str
    contact_number: str
    email: str
    team_name: Optional[str] = None
    team_size: int
    role_in_team: TeamRole
    technical_skills: str
    previous_experience: Optional[str] = None
    agree_to_rules: bool
    registered_at: datetime
    event_specific_data: Optional[Dict[str, Any]] = None


class TopCollegeSchema(BaseModel):
    college: str
    count: int


class ParticipantRegistrationStatsSchema(BaseModel):
    total_registrations: int
    college_stats: Dict[str, int]
    team_size_stats: Dict[str, int]
    recent_registrations: int
    top_colleges: List[TopCollegeSchema]
