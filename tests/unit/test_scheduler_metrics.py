from tracking import t
from reservations.scheduler.metrics import SchedulerStats


def test_scheduler_stats_records_ticks_and_errors():
    t('tests.unit.test_scheduler_metrics.test_scheduler_stats_records_ticks_and_errors')
    stats = SchedulerStats()

    stats.record_tick(2, tick_time=0.5, at="2026-03-10T09:30:00+09:00")
    stats.record_tick(0, tick_time=1.5)
    stats.record_error()

    assert stats.ticks == 3
    assert stats.reminders_sent == 2
    assert stats.tick_errors == 1
    assert stats.avg_tick_time == 1.0
    assert round(stats.error_rate, 2) == 33.33
    assert stats.last_tick_at == "2026-03-10T09:30:00+09:00"


def test_scheduler_stats_report():
    t('tests.unit.test_scheduler_metrics.test_scheduler_stats_report')
    stats = SchedulerStats()
    stats.record_tick(1, tick_time="bad")

    report = stats.format_report()

    assert "Reminders sent: 1" in report
    assert "Tick errors: 0 (0.00%)" in report
    assert stats.total_tick_time == 0.0
