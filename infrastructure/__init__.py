"""Infrastructure helpers."""

from .clock import SystemClock
from .settings import AppSettings, get_settings, load_settings

__all__ = ["AppSettings", "SystemClock", "get_settings", "load_settings"]
