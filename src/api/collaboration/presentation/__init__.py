"""Presentation layer for the collaboration context."""

from collaboration.presentation.routes import router

__all__ = ["router"]
