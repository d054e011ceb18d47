"""Консоль супер-администратора."""

from .routes import router

__all__ = ["router"]
