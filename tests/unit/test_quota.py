from reservations.engine import QuotaEnforcer, future_active_count, waiting_count
from reservations.engine.quota import is_future_start
from reservations.models import Reservation, WaitlistEntry
from tests.helpers import local_time

NOW = local_time(2026, 3, 10, 9, 0)


def _reservation(res_id, user_id, date, start, *, participants=None, status="confirmed"):
    return Reservation(
        id=res_id,
        room_id=1,
        user_id=user_id,
        date=date,
        start_time=start,
        end_time="23:00",
        participants=list(participants or []),
        status=status,
    )


def test_is_future_start_is_strict():
    assert is_future_start("2026-03-10", "09:01", NOW)
    assert not is_future_start("2026-03-10", "09:00", NOW)
    assert not is_future_start("2026-03-09", "23:00", NOW)
    assert is_future_start("2026-03-11", "00:00", NOW)


def test_counts_owner_and_member_participation():
    reservations = [
        _reservation("a", 1, "2026-03-10", "10:00"),
        _reservation("b", 2, "2026-03-11", "10:00", participants=[1, "Guest"]),
        _reservation("c", 3, "2026-03-12", "10:00", participants=["1"]),
        _reservation("d", 4, "2026-03-12", "10:00", participants=["Someone 1"]),
    ]

    assert future_active_count(1, NOW, reservations) == 3
    assert future_active_count(2, NOW, reservations) == 1


def test_ignores_past_and_cancelled_reservations():
    reservations = [
        _reservation("past", 1, "2026-03-10", "08:00"),
        _reservation("now", 1, "2026-03-10", "09:00"),
        _reservation("cancelled", 1, "2026-03-11", "10:00", status="cancelled"),
    ]

    assert future_active_count(1, NOW, reservations) == 0


def test_waiting_count_and_enforcer_limits():
    waitlist = [
        WaitlistEntry(id=str(index), user_id=1, room_id=1, date="2026-03-10", start_time="10:00", end_time="11:00")
        for index in range(3)
    ]
    enforcer = QuotaEnforcer(max_active_reservations=3, max_waiting_entries=3)

    assert waiting_count(1, waitlist) == 3
    assert waiting_count(2, waitlist) == 0
    assert enforcer.is_waitlist_full(1, waitlist)
    assert not enforcer.is_waitlist_full(2, waitlist)

    reservations = [_reservation(str(index), 1, "2026-03-11", f"1{index}:00") for index in range(3)]
    assert enforcer.is_over_quota(1, NOW, reservations)
    assert not enforcer.is_over_quota(1, NOW, reservations[:2])
