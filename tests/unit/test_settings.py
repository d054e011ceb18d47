# -*- coding: utf-8 -*-
"""
Unit тесты для настроек приложения
"""

import pytest
from pydantic import ValidationError

from eventhub.config.settings import Settings

SECRET_VARS = ("JWT_SECRET", "SUPER_ADMIN_EMAIL", "SUPER_ADMIN_PASSWORD")


class TestSettings:
    """Секреты задаются только через окружение"""

    @pytest.mark.parametrize("missing", SECRET_VARS)
    def test_missing_secret_fails(self, monkeypatch, missing):
        """Без секрета настройки не создаются"""
        monkeypatch.delenv(missing, raising=False)

        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)

        assert missing.lower() in str(exc_info.value)

    def test_secrets_from_environment(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "from-env")
        monkeypatch.setenv("SUPER_ADMIN_EMAIL", "admin@example.com")
        monkeypatch.setenv("SUPER_ADMIN_PASSWORD", "admin-pw")

        loaded = Settings(_env_file=None)

        assert loaded.jwt_secret == "from-env"
        assert loaded.super_admin_password == "admin-pw"
        assert loaded.default_organizer_password is None

    def test_default_accounts_require_passwords(self, monkeypatch):
        """Учетные записи по умолчанию без паролей не допускаются"""
        monkeypatch.setenv("DEFAULT_ACCOUNTS_ENABLED", "true")
        monkeypatch.delenv("DEFAULT_ORGANIZER_PASSWORD", raising=False)
        monkeypatch.setenv("DEFAULT_JUDGE_PASSWORD", "judge-pw")

        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)

        assert "DEFAULT_ORGANIZER_PASSWORD" in str(exc_info.value)

    def test_default_accounts_with_passwords(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_ACCOUNTS_ENABLED", "true")
        monkeypatch.setenv("DEFAULT_ORGANIZER_PASSWORD", "organizer-pw")
        monkeypatch.setenv("DEFAULT_JUDGE_PASSWORD", "judge-pw")

        loaded = Settings(_env_file=None)

        assert loaded.default_accounts_enabled is True
