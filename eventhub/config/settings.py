# -*- coding: utf-8 -*-
"""
eventhub/config/settings.py
~~~~~~~~~~~~~~~~~~~~~~~~~~~
Конфигурация настроек приложения с использованием Pydantic.

Этот модуль загружает конфигурацию из .env файла (если он существует) и
переменных окружения, предоставляя централизованную систему управления
настройками для всех окружений.
"""

from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Корень проекта (каталог с pyproject.toml)
BASE_DIR = Path(__file__).resolve().parent.parent.parent

# Возможные пути к .env файлам
ROOT_ENV_PATH = (BASE_DIR.parent / ".env").resolve()
PROJECT_ENV_PATH = (BASE_DIR / ".env").resolve()


# Приоритет: 1) переменные окружения, 2) .env проекта, 3) корневой .env
ENV_FILE = None
if PROJECT_ENV_PATH.exists():
    ENV_FILE = PROJECT_ENV_PATH
elif ROOT_ENV_PATH.exists():
    ENV_FILE = ROOT_ENV_PATH


class Settings(BaseSettings):
    """Настройки приложения, загружаемые из окружения и .env файла."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Конфигурация базы данных
    database_url: str | None = None
    postgres_db: str = "eventhub"
    postgres_user: str = "eventhub"
    postgres_password: str = "eventhub"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    database_echo: bool = False

    # Конфигурация JWT
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440
    refresh_token_expire_days: int = 7

    # Супер-администратор (задается только через окружение)
    super_admin_email: str
    super_admin_password: str

    # Учетные записи организатора/судьи по умолчанию (только для dev-окружений).
    # Пароли обязательны, если учетные записи включены.
    default_accounts_enabled: bool = False
    default_organizer_email: str = "organizer@eventhub.local"
    default_organizer_password: str | None = None
    default_judge_email: str = "judge@eventhub.local"
    default_judge_password: str | None = None

    @model_validator(mode="after")
    def check_default_account_passwords(self):
        if self.default_accounts_enabled and not (
            self.default_organizer_password and self.default_judge_password
        ):
            raise ValueError(
                "DEFAULT_ORGANIZER_PASSWORD and DEFAULT_JUDGE_PASSWORD are "
                "required when DEFAULT_ACCOUNTS_ENABLED=true"
            )
        return self

    # Конфигурация приложения
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_domain: str | None = None
    frontend_port: int | None = None

    # Конфигурация логирования
    log_level: str = "INFO"
    log_file: str | None = None
    log_rotation: str = "10 MB"
    log_retention: str = "14 days"
    debug: bool = False

    # Конфигурация SSL
    ssl_enabled: bool = False

    # Конфигурация автоматических миграций
    auto_migrate: bool = True

    # Конфигурация CORS
    cors_allow_origins: str = ""
    cors_allow_credentials: bool = True
    cors_allow_methods: str = "GET,POST,PUT,PATCH,DELETE,OPTIONS"
    cors_allow_headers: str = "Authorization,Content-Type"

    # Попытки пре-квалификационных тестов
    attempt_abandon_grace_minutes: int = 15
    upcoming_tests_window_hours: int = 24

    def get_allowed_origins(self) -> list[str]:
        """Формирует список разрешённых origins для CORS.
        Приоритет: явные cors_allow_origins -> из домена/порта -> значения для dev.
        """
        if self.cors_allow_origins:
            return [
                origin.strip()
                for origin in self.cors_allow_origins.split(",")
                if origin.strip()
            ]

        allowed: list[str] = []

        if self.app_domain:
            if self.ssl_enabled:
                allowed.append(f"https://{self.app_domain}")
            else:
                allowed.append(f"http://{self.app_domain}")
                allowed.append(f"https://{self.app_domain}")

        port = self.frontend_port or 3000
        allowed.extend(
            [
                f"http://localhost:{port}",
                f"http://127.0.0.1:{port}",
            ]
        )
        return allowed

    def get_cors_methods(self) -> list[str]:
        """Возвращает список разрешённых HTTP методов для CORS."""
        if self.cors_allow_methods == "*":
            return ["*"]
        return [
            method.strip()
            for method in self.cors_allow_methods.split(",")
            if method.strip()
        ]

    def get_cors_headers(self) -> list[str]:
        """Возвращает список разрешённых заголовков для CORS."""
        if self.cors_allow_headers == "*":
            return ["*"]
        return [
            header.strip()
            for header in self.cors_allow_headers.split(",")
            if header.strip()
        ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if not self.database_url:
            self.database_url = self._build_database_url()

    def _build_database_url(self) -> str:
        """Build database URL from individual components."""
        # asyncpg для асинхронного подключения в FastAPI
        driver = "postgresql+asyncpg"
        return (
            f"{driver}://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def sync_database_url(self) -> str:
        """URL для синхронного драйвера (Alembic, проверки при старте)."""
        return self.database_url.replace(
            "postgresql+asyncpg://", "postgresql+psycopg2://"
        ).replace("sqlite+aiosqlite://", "sqlite://")

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    def get_config_source(self) -> str:
        """Возвращает информацию об источнике конфигурации для отладки."""
        if PROJECT_ENV_PATH.exists():
            return f"project: {PROJECT_ENV_PATH}"
        elif ROOT_ENV_PATH.exists():
            return f"root: {ROOT_ENV_PATH}"
        else:
            return "environment variables only"


settings = Settings()
