"""Bootstrap helpers for wiring engine components."""

from .container import DependencyContainer, EngineDependencies

__all__ = ['DependencyContainer', 'EngineDependencies']
