"""Runtime helpers for the reservation engine application."""

from .engine_application import EngineApplication

__all__ = ['EngineApplication']
