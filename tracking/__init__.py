"""Lightweight call-count instrumentation used across the engine."""

from .runtime import flush, reset, snapshot, t

__all__ = ["t", "snapshot", "flush", "reset"]
