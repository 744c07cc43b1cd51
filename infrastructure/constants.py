"""
Constants Module - Centralized configuration values
===================================================

PURPOSE: Single source of truth for the values shared across the engine
PATTERN: Constants grouped by category
SCOPE: Record formats, statuses and default limits

Settings in :mod:`infrastructure.settings` fall back to these defaults.
"""

# Record formats
DATE_FORMAT = '%Y-%m-%d'
TIME_FORMAT = '%H:%M'
MINUTES_PER_DAY = 24 * 60

# Reservation statuses
RESERVATION_CONFIRMED = 'confirmed'
RESERVATION_CANCELLED = 'cancelled'

# Waitlist entries are deleted rather than re-statused
WAITLIST_WAITING = 'waiting'

# Slot event statuses published to the event sink
SLOT_RESERVED = 'reserved'
SLOT_AVAILABLE = 'available'

# Quota and booking horizon
DEFAULT_MAX_ACTIVE_RESERVATIONS = 3
DEFAULT_MAX_WAITING_ENTRIES = 3
DEFAULT_BOOKING_HORIZON_DAYS = 7  # today + 6 days, inclusive

# Reminder scan
DEFAULT_REMINDER_LEAD_MINUTES = 30
DEFAULT_REMINDER_TOLERANCE_MINUTES = 1
DEFAULT_NOTIFICATION_TICK_SECONDS = 60

# Runtime defaults
DEFAULT_TIMEZONE = 'Asia/Seoul'
DEFAULT_DATA_DIRECTORY = 'data'
UNKNOWN_USER_NAME = 'Unknown'
POPULAR_ROOMS_LIMIT = 5
