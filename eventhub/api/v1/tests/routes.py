# -*- coding: utf-8 -*-
"""
Роутер для работы с пре-квалификационными тестами.

Этот модуль объединяет эндпоинты для организаторов (каталог тестов,
попытки, статистика) и для участников (допуск, попытки).
"""

from fastapi import APIRouter

from .admin import attempts as admin_attempts
from .admin import crud as admin_crud
from .participant import available as participant_available
from .participant import read as participant_read
from .participant import start as participant_start
from .participant import status as participant_status

router = APIRouter()

# Роутеры для организаторов и администраторов
router.include_router(
    admin_attempts.router,
    prefix="/admin",
    tags=["🧪 Тесты - 📊 Админ - Управление попытками"],
)

router.include_router(
    admin_crud.router, prefix="/admin", tags=["🧪 Тесты - 👨‍💼 Админ - CRUD"]
)

# Роутеры для участников
router.include_router(
    participant_available.router,
    prefix="/participant",
    tags=["🧪 Тесты - 📚 Участник - Доступные"],
)

router.include_router(
    participant_start.router,
    prefix="/participant",
    tags=["🧪 Тесты - 🎓 Участник - Начало"],
)

router.include_router(
    participant_status.router,
    prefix="/participant",
    tags=["🧪 Тесты - 📈 Участник - Попытки"],
)

# participant_read подключается последним, чтобы /{test_id} не перехватывал
# /active, /upcoming и /attempts
router.include_router(
    participant_read.router,
    prefix="/participant",
    tags=["🧪 Тесты - 📖 Участник - Чтение"],
)
