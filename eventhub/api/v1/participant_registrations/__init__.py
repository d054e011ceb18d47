"""Публичная регистрация участников (анкеты)."""

from .routes import router

__all__ = ["router"]
