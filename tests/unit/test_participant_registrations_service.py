# -*- coding: utf-8 -*-
"""
Unit тесты для сервиса анкет участников
"""

from datetime import timedelta

import pytest

from eventhub.domain.enums import Role, TeamRole
from eventhub.service import events as events_service
from eventhub.service import participant_registrations as registrations_service
from eventhub.utils.datetime_utils import utc_now
from eventhub.utils.exceptions import (ConflictError, NotFoundError,
                                       ValidationError)
from tests.fixtures import (create_test_event,
                            create_test_participant_registration,
                            create_test_user, registration_form)


async def _event(session, title="Spring Hackathon"):
    email = f"{title[:3].lower()}@example.com"
    owner = await create_test_user(session, email, Role.ORGANIZER)
    return await create_test_event(session, owner.id, title=title)


class TestRegisterParticipant:
    """Тесты приема анкеты"""

    @pytest.mark.asyncio
    async def test_solo_registration(self, test_session):
        """Одиночный участник записывается командой из одного человека"""
        event = await _event(test_session)

        registration = await registrations_service.register_participant(
            test_session,
            event.id,
            registration_form(email="Priya@Example.com ", team_size=4, city="Pune"),
            ip_address="10.0.0.7",
        )

        assert registration.email == "priya@example.com"
        assert registration.college_university == "City College"
        assert registration.department_year == "CSE - 3rd"
        assert registration.team_size == 1
        assert registration.role_in_team == TeamRole.LEADER
        assert registration.ip_address == "10.0.0.7"
        assert registration.event_specific_data == {
            "city": "Pune",
            "program_branch": "CSE",
            "current_year": "3rd",
        }

    @pytest.mark.asyncio
    async def test_team_registration(self, test_session):
        event = await _event(test_session)
        member = {
            "name": "Ravi",
            "gender": "M",
            "contact_number": "123",
            "email": "ravi@example.com",
            "college": "City College",
            "city": "Pune",
            "program_branch": "ECE",
            "current_year": "2nd",
        }

        registration = await registrations_service.register_participant(
            test_session,
            event.id,
            registration_form(
                is_team=True,
                team_name="Owls",
                team_size=2,
                team_members=[member],
                program_branch=None,
                current_year=None,
                department_year="ECE / 2nd",
            ),
        )

        assert registration.team_size == 2
        assert registration.team_name == "Owls"
        assert registration.department_year == "ECE / 2nd"
        assert registration.event_specific_data["team_members"] == [member]
        assert registration.event_specific_data["is_team"] is True

    @pytest.mark.asyncio
    async def test_duplicate_email_for_event(self, test_session):
        """Один email, одна анкета на мероприятие"""
        event = await _event(test_session)
        other_event = await _event(test_session, "Autumn Cup")
        await registrations_service.register_participant(
            test_session, event.id, registration_form()
        )

        with pytest.raises(ConflictError) as exc_info:
            await registrations_service.register_participant(
                test_session, event.id, registration_form(email="PRIYA@example.com")
            )
        elsewhere = await registrations_service.register_participant(
            test_session, other_event.id, registration_form()
        )

        assert exc_info.value.detail == (
            "You have already registered for this event with this email address."
        )
        assert elsewhere.event_id == other_event.id

    @pytest.mark.asyncio
    async def test_rules_must_be_accepted(self, test_session):
        event = await _event(test_session)

        with pytest.raises(ValidationError) as exc_info:
            await registrations_service.register_participant(
                test_session, event.id, registration_form(agree_to_rules=False)
            )

        assert exc_info.value.detail == (
            "You must agree to the rules and regulations to register."
        )
        assert await registrations_service.list_all_participant_registrations(
            test_session
        ) == []

    @pytest.mark.asyncio
    async def test_missing_event(self, test_session):
        with pytest.raises(NotFoundError):
            await registrations_service.register_participant(
                test_session, 31337, registration_form()
            )


class TestParticipantRegistrationQueries:
    """Тесты выборок, поиска и статистики"""

    @pytest.mark.asyncio
    async def test_lists_newest_first(self, test_session):
        event = await _event(test_session)
        other_event = await _event(test_session, "Autumn Cup")
        now = utc_now()
        old = await create_test_participant_registration(
            test_session, event.id, "a@example.com", registered_at=now - timedelta(days=2)
        )
        new = await create_test_participant_registration(
            test_session, event.id, "b@example.com", college="State University",
            registered_at=now - timedelta(hours=1),
        )
        elsewhere = await create_test_participant_registration(
            test_session, other_event.id, "c@example.com", registered_at=now
        )

        everything = await registrations_service.list_all_participant_registrations(
            test_session
        )
        for_event = await registrations_service.list_event_participant_registrations(
            test_session, event.id
        )
        by_college = await registrations_service.list_participant_registrations_by_college(
            test_session, "City College"
        )
        partial_college = (
            await registrations_service.list_participant_registrations_by_college(
                test_session, "City"
            )
        )

        assert [r.id for r in everything] == [elsewhere.id, new.id, old.id]
        assert [r.id for r in for_event] == [new.id, old.id]
        assert [r.id for r in by_college] == [elsewhere.id, old.id]
        assert partial_college == []

    @pytest.mark.asyncio
    async def test_search(self, test_session):
        """Поиск без учета регистра и фильтры по заведению и размеру команды"""
        event = await _event(test_session)
        now = utc_now()
        owls = await create_test_participant_registration(
            test_session, event.id, "a@example.com", team_size=3,
            team_name="Night Owls", registered_at=now - timedelta(hours=2),
        )
        rust = await create_test_participant_registration(
            test_session, event.id, "b@example.com", college="State University",
            technical_skills="Rust, Go", registered_at=now - timedelta(hours=1),
        )

        by_team = await registrations_service.search_participant_registrations(
            test_session, search_term="OWLS"
        )
        by_skill = await registrations_service.search_participant_registrations(
            test_session, search_term="rust"
        )
        by_college = await registrations_service.search_participant_registrations(
            test_session, college="state"
        )
        by_size = await registrations_service.search_participant_registrations(
            test_session, team_size=3
        )
        everything = await registrations_service.search_participant_registrations(
            test_session
        )
        wildcard = await registrations_service.search_participant_registrations(
            test_session, search_term="%"
        )

        assert [r.id for r in by_team] == [owls.id]
        assert [r.id for r in by_skill] == [rust.id]
        assert [r.id for r in by_college] == [rust.id]
        assert [r.id for r in by_size] == [owls.id]
        assert [r.id for r in everything] == [rust.id, owls.id]
        assert wildcard == []

    @pytest.mark.asyncio
    async def test_stats(self, test_session):
        event = await _event(test_session)
        now = utc_now()
        for email, college, size, age in [
            ("a@example.com", "City College", 1, timedelta(days=1)),
            ("b@example.com", "City College", 3, timedelta(days=10)),
            ("c@example.com", "State University", 3, timedelta(hours=5)),
        ]:
            await create_test_participant_registration(
                test_session, event.id, email, college=college, team_size=size,
                registered_at=now - age,
            )

        stats = await registrations_service.get_registration_stats(test_session, now=now)

        assert stats == {
            "total_registrations": 3,
            "college_stats": {"City College": 2, "State University": 1},
            "team_size_stats": {"1": 1, "3": 2},
            "recent_registrations": 2,
            "top_colleges": [
                {"college": "City College", "count": 2},
                {"college": "State University", "count": 1},
            ],
        }

    @pytest.mark.asyncio
    async def test_stats_empty(self, test_session):
        stats = await registrations_service.get_registration_stats(test_session)

        assert stats["total_registrations"] == 0
        assert stats["top_colleges"] == []


class TestParticipantRegistrationChanges:
    """Тесты правки и удаления анкет"""

    @pytest.mark.asyncio
    async def test_partial_update(self, test_session):
        event = await _event(test_session)
        registration = await create_test_participant_registration(test_session, event.id)

        updated = await registrations_service.update_participant_registration(
            test_session,
            registration.id,
            {
                "team_size": 2,
                "role_in_team": TeamRole.MEMBER,
                "full_name": None,
                "email": "hijack@example.com",
            },
        )

        assert updated.team_size == 2
        assert updated.role_in_team == TeamRole.MEMBER
        assert updated.full_name == "Priya Sharma"
        assert updated.email == "priya@example.com"

    @pytest.mark.asyncio
    async def test_delete(self, test_session):
        event = await _event(test_session)
        registration = await create_test_participant_registration(test_session, event.id)

        await registrations_service.delete_participant_registration(
            test_session, registration.id
        )

        with pytest.raises(NotFoundError):
            await registrations_service.get_participant_registration(
                test_session, registration.id
            )

    @pytest.mark.asyncio
    async def test_event_deletion_keeps_registrations(self, test_session):
        """Анкеты удаленного мероприятия сохраняются без привязки"""
        event = await _event(test_session)
        registration = await create_test_participant_registration(test_session, event.id)

        await events_service.delete_event(test_session, event.id)

        await test_session.refresh(registration)
        assert registration.event_id is None
