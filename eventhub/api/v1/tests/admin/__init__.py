"""
Admin operations for tests.

This module contains staff operations for managing pre-qualifier tests,
including CRUD operations, attempt management and statistics.
"""

from .attempts import router as attempts_router
from .crud import router as crud_router

__all__ = [
    "crud_router",
    "attempts_router",
]
