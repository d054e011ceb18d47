"""Пре-квалификационные тесты."""

from .routes import router

__all__ = ["router"]
