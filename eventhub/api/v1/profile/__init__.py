"""Профиль пользователя и статистика панели."""

from .routes import router

__all__ = ["router"]
