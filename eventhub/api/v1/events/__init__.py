"""Мероприятия, заявки и судьи."""

from .routes import router

__all__ = ["router"]
