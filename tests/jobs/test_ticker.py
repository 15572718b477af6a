from __future__ import annotations

import threading
from datetime import datetime, time

from src.timesheet_payroll.timesheet_payroll.jobs.ticker import Ticker, daily_at, every


def test_every_returns_fixed_delay():
    assert every(3600)() == 3600.0


def test_daily_at_counts_down_to_next_occurrence():
    before = daily_at(time(0, 0), clock=lambda: datetime(2026, 3, 3, 23, 0))
    exactly = daily_at(time(0, 0), clock=lambda: datetime(2026, 3, 4, 0, 0))

    assert before() == 3600.0
    assert exactly() == 24 * 3600.0


def test_fire_skips_while_previous_run_in_flight():
    started = threading.Event()
    release = threading.Event()
    calls = []

    def slow():
        calls.append(1)
        started.set()
        release.wait(5)

    ticker = Ticker("slow", slow, every(3600), run_at_start=False)
    worker = threading.Thread(target=ticker.fire)
    worker.start()
    started.wait(5)

    assert ticker.fire() is False

    release.set()
    worker.join(5)
    assert calls == [1]
    assert ticker.fire() is True


def test_action_errors_are_logged_and_swallowed(caplog):
    def boom():
        raise RuntimeError("boom")

    ticker = Ticker("boom", boom, every(3600), run_at_start=False)

    assert ticker.fire() is True
    assert "Ticker boom action failed" in caplog.text


def test_start_runs_once_then_stop():
    ran = threading.Event()
    ticker = Ticker("once", ran.set, every(3600))

    ticker.start()
    assert ran.wait(5)
    ticker.stop(timeout=5)
