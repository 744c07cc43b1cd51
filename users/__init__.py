"""User directory collaborator."""

from .manager import UserManager, UserRole

__all__ = ["UserManager", "UserRole"]
