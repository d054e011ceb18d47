#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Скрипт очистки зависших попыток тестирования.

Запускается по расписанию (cron), например раз в 5 минут:

    */5 * * * * cd /app && python scripts/sweep_abandoned_attempts.py
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Добавляем корень проекта в sys.path
sys.path.append(str(Path(__file__).parent.parent))

from eventhub.api.v1.tests.shared.cache import invalidate_all_statistics
from eventhub.clients.database_client import AsyncSessionLocal, async_engine
from eventhub.config.logger import configure_logger
from eventhub.service.attempt_cleanup_service import AttemptCleanupService
from eventhub.service.cache_service import cache_service

logger = configure_logger()


async def sweep(grace_minutes: int | None = None) -> int:
    """Пометить зависшие попытки и сбросить кэш статистики."""
    try:
        async with AsyncSessionLocal() as session:
            count = await AttemptCleanupService.abandon_stale_attempts(
                session, grace_minutes=grace_minutes
            )
        if count:
            await invalidate_all_statistics()
        print(f"✅ Помечено как abandoned: {count}")
        return count
    finally:
        await cache_service.close()
        await async_engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Sweep abandoned test attempts")
    parser.add_argument(
        "--grace-minutes",
        type=int,
        default=None,
        help="Запас сверх длительности теста (по умолчанию из настроек)",
    )
    args = parser.parse_args()

    try:
        asyncio.run(sweep(args.grace_minutes))
    except Exception as e:
        logger.error(f"Ошибка очистки попыток: {e}")
        print(f"❌ Ошибка: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
