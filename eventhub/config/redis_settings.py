"""
Настройки конфигурации Redis для Event Hub.

Этот модуль предоставляет настройки подключения к Redis и конфигурации TTL кэша.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from eventhub.config.settings import ENV_FILE


class RedisSettings(BaseSettings):
    """Настройки конфигурации Redis."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Кэш можно полностью отключить (тесты, локальная разработка без Redis)
    redis_enabled: bool = True

    # Настройки подключения
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: Optional[str] = None
    redis_db: int = 0

    # Настройки пула подключений
    redis_max_connections: int = 10
    redis_retry_on_timeout: bool = True
    redis_socket_timeout: float = 2.0

    # Настройки TTL кэша (в секундах)
    cache_ttl_tests: int = 3600  # 1 час
    cache_ttl_statistics: int = 600  # 10 минут
    cache_ttl_lists: int = 300  # 5 минут

    # Префиксы ключей кэша
    cache_prefix_tests: str = "tests"
    cache_prefix_news: str = "news"


# Глобальный экземпляр настроек Redis
redis_settings = RedisSettings()


def get_redis_connection_params() -> dict:
    """
    Получить параметры подключения к Redis для redis-py.

    Returns:
        Словарь с параметрами подключения
    """
    params = {
        "host": redis_settings.redis_host,
        "port": redis_settings.redis_port,
        "db": redis_settings.redis_db,
        "max_connections": redis_settings.redis_max_connections,
        "retry_on_timeout": redis_settings.redis_retry_on_timeout,
        "socket_timeout": redis_settings.redis_socket_timeout,
        "socket_connect_timeout": redis_settings.redis_socket_timeout,
        "decode_responses": True,
    }

    if redis_settings.redis_password:
        params["password"] = redis_settings.redis_password

    return params
