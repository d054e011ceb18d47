"""
Операции участников для тестов.

Этот модуль содержит операции для участников: просмотр доступных тестов,
проверку допуска, начало и завершение попыток.
"""

from .available import router as available_router
from .read import router as read_router
from .start import router as start_router
from .status import router as status_router

__all__ = [
    "available_router",
    "start_router",
    "status_router",
    "read_router",
]
