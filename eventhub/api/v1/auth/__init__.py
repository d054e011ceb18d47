"""Аутентификация и учетные записи участников."""

from .routes import router

__all__ = ["router"]
