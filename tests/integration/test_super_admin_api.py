# -*- coding: utf-8 -*-
"""
Integration тесты для консоли супер-администратора
"""

import pytest
from httpx import AsyncClient

from eventhub.domain.enums import Role
from tests.fixtures import auth_headers, create_test_user, super_admin_headers

BASE = "/api/v1/super-admin"

ORGANIZER_BODY = {
    "email": "Olga@Example.com",
    "password": "organizer-pw",
    "role": "organizer",
    "first_name": "Olga",
    "last_name": "Organizer",
    "organization": "ACME",
}


class TestSuperAdminLogin:
    """Integration тесты входа супер-администратора"""

    @pytest.mark.asyncio
    async def test_login(self, client: AsyncClient, test_session):
        response = await client.post(
            f"{BASE}/login",
            json={"email": "ROOT@eventhub.test", "password": "root-password"},
        )

        assert response.status_code == 200
        assert response.json()["token_type"] == "bearer"
        # Токен сразу пригоден для консоли
        listing = await client.get(
            f"{BASE}/credentials",
            headers={"Authorization": f"Bearer {response.json()['access_token']}"},
        )
        assert listing.status_code == 200

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient, test_session):
        response = await client.post(
            f"{BASE}/login",
            json={"email": "root@eventhub.test", "password": "guess"},
        )

        assert response.status_code == 401


class TestCredentialsAPI:
    """Integration тесты управления учетными записями"""

    @pytest.mark.asyncio
    async def test_create_and_list(self, client: AsyncClient, test_session):
        """Созданная учетная запись не раскрывает пароль"""
        headers = super_admin_headers()

        created = await client.post(
            f"{BASE}/credentials", json=ORGANIZER_BODY, headers=headers
        )
        listing = await client.get(f"{BASE}/credentials", headers=headers)

        assert created.status_code == 201
        data = created.json()
        assert data["email"] == "olga@example.com"
        assert data["created_by"] == "root@eventhub.test"
        assert "password" not in data
        assert [c["id"] for c in listing.json()] == [data["id"]]

    @pytest.mark.asyncio
    async def test_create_duplicate(self, client: AsyncClient, test_session):
        headers = super_admin_headers()
        await client.post(f"{BASE}/credentials", json=ORGANIZER_BODY, headers=headers)

        response = await client.post(
            f"{BASE}/credentials", json=ORGANIZER_BODY, headers=headers
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "Email already exists"

    @pytest.mark.asyncio
    async def test_console_is_super_admin_only(self, client: AsyncClient, test_session):
        """Даже администратор не управляет учетными записями"""
        admin = await create_test_user(test_session, "admin@example.com", Role.ADMIN)

        response = await client.get(
            f"{BASE}/credentials", headers=auth_headers(admin)
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_credential_login_flow(self, client: AsyncClient, test_session):
        """Вход по учетной записи, смена пароля и деактивация"""
        headers = super_admin_headers()
        credential = (
            await client.post(
                f"{BASE}/credentials", json=ORGANIZER_BODY, headers=headers
            )
        ).json()
        login_body = {"email": "olga@example.com", "password": "organizer-pw"}

        login = await client.post("/api/v1/auth/credential-login", json=login_body)
        assert login.status_code == 200
        assert login.json()["role"] == "organizer"
        assert login.json()["organization"] == "ACME"

        # Токен организатора открывает управление тестами
        tests_listing = await client.get(
            "/api/v1/tests/admin",
            headers={"Authorization": f"Bearer {login.json()['access_token']}"},
        )
        assert tests_listing.status_code == 200

        changed = await client.patch(
            f"{BASE}/credentials/{credential['id']}/password",
            json={"new_password": "fresh-password"},
            headers=headers,
        )
        assert changed.status_code == 200
        old_login = await client.post("/api/v1/auth/credential-login", json=login_body)
        assert old_login.status_code == 401

        toggled = await client.post(
            f"{BASE}/credentials/{credential['id']}/toggle", headers=headers
        )
        assert toggled.json()["is_active"] is False
        blocked = await client.post(
            "/api/v1/auth/credential-login",
            json={"email": "olga@example.com", "password": "fresh-password"},
        )
        assert blocked.status_code == 403
        assert blocked.json()["detail"] == "Account is deactivated"

    @pytest.mark.asyncio
    async def test_update_stats_and_delete(self, client: AsyncClient, test_session):
        headers = super_admin_headers()
        credential = (
            await client.post(
                f"{BASE}/credentials", json=ORGANIZER_BODY, headers=headers
            )
        ).json()
        await client.post(
            f"{BASE}/credentials",
            json={
                **ORGANIZER_BODY,
                "email": "jane@example.com",
                "role": "judge",
                "first_name": "Jane",
            },
            headers=headers,
        )

        updated = await client.patch(
            f"{BASE}/credentials/{credential['id']}",
            json={"organization": "Initech"},
            headers=headers,
        )
        stats = await client.get(f"{BASE}/credentials/stats", headers=headers)
        deleted = await client.delete(
            f"{BASE}/credentials/{credential['id']}", headers=headers
        )
        missing = await client.post(
            f"{BASE}/credentials/{credential['id']}/toggle", headers=headers
        )

        assert updated.json()["organization"] == "Initech"
        assert updated.json()["first_name"] == "Olga"
        assert stats.json()["total_organizers"] == 1
        assert stats.json()["total_judges"] == 1
        assert stats.json()["total_accounts"] == 2
        assert deleted.status_code == 204
        assert missing.status_code == 404

    @pytest.mark.asyncio
    async def test_default_accounts_disabled(self, client: AsyncClient, test_session):
        response = await client.post(
            f"{BASE}/credentials/defaults", headers=super_admin_headers()
        )

        assert response.status_code == 200
        assert response.json() == []
