"""
Сервис кэширования Event Hub поверх Redis.

Кэшируются карточки тестов, статистика попыток и публичные ленты новостей.
Кэш вспомогательный: при ошибке Redis или при ``REDIS_ENABLED=false``
операции возвращают "пустой" результат и запрос идет в базу.
"""

import json
from typing import Any, Awaitable, Callable, Optional

import redis.asyncio as redis
from redis.asyncio import Redis
from redis.exceptions import RedisError

from eventhub.config.logger import configure_logger
from eventhub.config.redis_settings import (get_redis_connection_params,
                                            redis_settings)

logger = configure_logger(__name__)

# Общий префикс, чтобы не пересекаться с другими приложениями в той же базе Redis
NAMESPACE = "eventhub"

# Сколько ключей удалять за одну команду при инвалидации по паттерну
INVALIDATE_BATCH = 500


class CacheService:
    """Кэш с JSON-сериализацией, TTL и отключением через настройки."""

    def __init__(self, enabled: bool = True):
        self._redis: Optional[Redis] = None
        self._connection_params = get_redis_connection_params()
        self.enabled = enabled
        if not enabled:
            logger.info("Кэш Redis отключен настройками")

    async def get_redis(self) -> Redis:
        """
        Ленивое подключение к Redis.

        Raises:
            RedisError: Если Redis недоступен
        """
        if self._redis is None:
            client = redis.Redis(**self._connection_params)
            try:
                await client.ping()
            except RedisError:
                await client.aclose()
                raise
            self._redis = client
            logger.info(
                f"Подключение к Redis {redis_settings.redis_host}:"
                f"{redis_settings.redis_port} установлено"
            )
        return self._redis

    async def close(self) -> None:
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
            logger.info("Подключение к Redis закрыто")

    @staticmethod
    def build_key(prefix: str, *parts: Any) -> str:
        """``eventhub:<prefix>:<part>:<part>...``"""
        return ":".join([NAMESPACE, prefix, *(str(part) for part in parts)])

    async def get(self, key: str) -> Optional[Any]:
        """Значение по ключу или None (промах, кэш выключен, ошибка Redis)."""
        if not self.enabled:
            return None
        try:
            raw = await (await self.get_redis()).get(key)
        except RedisError as e:
            logger.error(f"Кэш: ошибка чтения '{key}': {e}")
            return None
        return json.loads(raw) if raw is not None else None

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        if not self.enabled:
            return False
        payload = json.dumps(value, default=str, ensure_ascii=False)
        try:
            await (await self.get_redis()).set(key, payload, ex=ttl or None)
        except RedisError as e:
            logger.error(f"Кэш: ошибка записи '{key}': {e}")
            return False
        return True

    async def delete(self, *keys: str) -> int:
        if not self.enabled or not keys:
            return 0
        try:
            return await (await self.get_redis()).delete(*keys)
        except RedisError as e:
            logger.error(f"Кэш: ошибка удаления {keys}: {e}")
            return 0

    async def get_or_set(
        self, key: str, fetch: Callable[[], Awaitable[Any]], ttl: Optional[int] = None
    ) -> Any:
        """
        Вернуть значение из кэша, а при промахе вычислить ``fetch()`` и сохранить.

        ``fetch`` должен возвращать JSON-совместимые данные.
        """
        cached = await self.get(key)
        if cached is not None:
            logger.debug(f"Кэш: попадание {key}")
            return cached

        result = await fetch()
        await self.set(key, result, ttl)
        return result

    async def invalidate_pattern(self, pattern: str) -> int:
        """
        Удалить ключи по glob-паттерну, например ``eventhub:news:*``.

        Ключи перебираются через SCAN и удаляются пачками.
        """
        if not self.enabled:
            return 0
        deleted = 0
        batch: list[str] = []
        try:
            client = await self.get_redis()
            async for key in client.scan_iter(match=pattern, count=INVALIDATE_BATCH):
                batch.append(key)
                if len(batch) >= INVALIDATE_BATCH:
                    deleted += await client.delete(*batch)
                    batch.clear()
            if batch:
                deleted += await client.delete(*batch)
        except RedisError as e:
            logger.error(f"Кэш: ошибка инвалидации '{pattern}': {e}")
            return deleted
        if deleted:
            logger.debug(f"Кэш: удалено {deleted} ключей по '{pattern}'")
        return deleted

    async def ping(self) -> bool:
        """Проверка доступности Redis для старта и health-check."""
        if not self.enabled:
            return False
        return await (await self.get_redis()).ping()


cache_service = CacheService(enabled=redis_settings.redis_enabled)
