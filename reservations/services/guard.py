"""Translate unexpected failures into the engine's generic ``InternalError``."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from reservations.errors import InternalError, ReservationError


@contextmanager
def internal_errors(logger: logging.Logger, operation: str, **context: Any) -> Iterator[None]:
    """Let domain errors through; log anything else and raise ``InternalError``."""
    try:
        yield
    except ReservationError as exc:
        if isinstance(exc, InternalError):
            logger.error("%s failed (%s): %s", operation, context, exc)
        raise
    except Exception as exc:
        logger.error("Unexpected error in %s (%s): %s", operation, context, exc, exc_info=True)
        raise InternalError() from exc
