"""
Centralized Error Handling for the Reservation Engine
Maps engine failures onto response dictionaries a request layer can return
"""
from tracking import t

import logging
from typing import Any, Dict, Optional

from reservations.errors import (
    ConflictError,
    ErrorCode,
    InternalError,
    NotFoundError,
    ReservationError,
    ValidationError,
)

GENERIC_ERROR_MESSAGE = "An internal error occurred. Please try again later."


class ErrorHandler:
    """
    Centralized error handling for engine operations

    Provides static methods that translate exceptions into uniform
    ``{success, code, message, status}`` dictionaries with HTTP-like status
    hints, logging each failure at a level matching its category.
    """

    @staticmethod
    def status_for(error: ReservationError) -> int:
        t('roomapp.error_handler.ErrorHandler.status_for')
        if isinstance(error, ValidationError):
            return 400
        if isinstance(error, NotFoundError):
            return 404
        if isinstance(error, ConflictError):
            return 409
        return 500

    @staticmethod
    def to_response(error: Exception, operation: Optional[str] = None) -> Dict[str, Any]:
        """
        Convert ``error`` into a failure response

        Domain errors keep their message and code. Anything else, including
        ``InternalError``, is reported with a generic message so internal
        detail never reaches the caller.
        """
        t('roomapp.error_handler.ErrorHandler.to_response')
        logger = logging.getLogger('ErrorHandler')

        if isinstance(error, ReservationError) and not isinstance(error, InternalError):
            status = ErrorHandler.status_for(error)
            logger.info(f"Request rejected - Operation: {operation}, Code: {error.code.value}, Reason: {error.message}")
            return {
                'success': False,
                'code': error.code.value,
                'message': error.message,
                'status': status,
            }

        code = error.code if isinstance(error, InternalError) else ErrorCode.INTERNAL
        logger.error(f"Internal failure - Operation: {operation}, {type(error).__name__}: {error}")
        return {
            'success': False,
            'code': code.value,
            'message': GENERIC_ERROR_MESSAGE,
            'status': 500,
        }

    @staticmethod
    def success(data: Any = None, message: str = "OK", status: int = 200) -> Dict[str, Any]:
        t('roomapp.error_handler.ErrorHandler.success')
        return {
            'success': True,
            'message': message,
            'data': data,
            'status': status,
        }
