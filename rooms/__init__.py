"""Room catalog collaborator."""

from .catalog import RoomCatalog
from .defaults import DEFAULT_ROOMS

__all__ = ["RoomCatalog", "DEFAULT_ROOMS"]
