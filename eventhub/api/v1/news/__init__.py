"""Новости и объявления."""

from .routes import router

__all__ = ["router"]
