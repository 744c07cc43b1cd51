from pathlib import Path

from infrastructure.clock import SystemClock
from infrastructure.settings import load_settings


def test_defaults():
    settings = load_settings({})

    assert settings.production_mode is False
    assert settings.timezone == "Asia/Seoul"
    assert settings.max_active_reservations == 3
    assert settings.max_waiting_entries == 3
    assert settings.booking_horizon_days == 7
    assert settings.reminder_lead_minutes == 30
    assert settings.reminder_tolerance_minutes == 1
    assert settings.notification_tick_seconds == 60
    assert settings.waitlist_enforce_horizon is False
    assert Path(settings.reservations_file) == Path("data") / "reservations.json"
    assert Path(settings.log_directory) == Path("data") / "logs"


def test_environment_overrides():
    settings = load_settings({
        "PRODUCTION_MODE": "yes",
        "ROOMQUEUE_TIMEZONE": "UTC",
        "DATA_DIRECTORY": "/srv/rooms",
        "WAITLIST_FILE": "/tmp/wait.json",
        "MAX_ACTIVE_RESERVATIONS": "5",
        "NOTIFICATION_TICK_SECONDS": "0",
        "BOOKING_HORIZON_DAYS": "not-a-number",
        "WAITLIST_ENFORCE_HORIZON": "1",
    })

    assert settings.production_mode is True
    assert settings.timezone == "UTC"
    assert Path(settings.notifications_file) == Path("/srv/rooms") / "notifications.json"
    assert settings.waitlist_file == "/tmp/wait.json"
    assert settings.max_active_reservations == 5
    assert settings.notification_tick_seconds == 1
    assert settings.booking_horizon_days == 7
    assert settings.waitlist_enforce_horizon is True


def test_system_clock_is_timezone_aware():
    clock = SystemClock("Asia/Seoul")

    now = clock.now()

    assert now.tzinfo is not None
    assert now.utcoffset().total_seconds() == 9 * 3600
