from __future__ import annotations

import logging
import threading
from datetime import datetime, time, timedelta, tzinfo
from typing import Callable, Optional

from ..common.datetime_utils import now_local

logger = logging.getLogger(__name__)

DelayFn = Callable[[], float]


def every(seconds: float) -> DelayFn:
    return lambda: float(seconds)


def daily_at(at: time, tz: Optional[tzinfo] = None, *, clock: Optional[Callable[[], datetime]] = None) -> DelayFn:
    """Seconds until the next ``at`` wall-clock time."""
    clock = clock or (lambda: now_local(tz))

    def delay() -> float:
        now = clock()
        nxt = now.replace(hour=at.hour, minute=at.minute, second=at.second, microsecond=0)
        if nxt <= now:
            nxt += timedelta(days=1)
        return (nxt - now).total_seconds()

    return delay


class Ticker:
    """Runs ``action`` on its own daemon thread: once at start, then per ``next_delay``.

    A trigger that arrives while the previous run is still in flight is
    dropped, not queued. Errors from ``action`` are logged and the ticker keeps
    going.
    """

    def __init__(self, name: str, action: Callable[[], object], next_delay: DelayFn, *, run_at_start: bool = True):
        self.name = name
        self._action = action
        self._next_delay = next_delay
        self._run_at_start = run_at_start
        self._running = threading.Lock()
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._loop, name=f"ticker-{self.name}", daemon=True)
        self._thread.start()
        logger.info("Ticker %s started", self.name)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stopped.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def fire(self) -> bool:
        """Run the action now unless a run is already in flight."""
        if not self._running.acquire(blocking=False):
            logger.warning("Ticker %s still running; trigger skipped", self.name)
            return False
        try:
            self._action()
        except Exception:
            logger.exception("Ticker %s action failed", self.name)
        finally:
            self._running.release()
        return True

    def _loop(self) -> None:
        if self._run_at_start and not self._stopped.is_set():
            self.fire()
        while not self._stopped.wait(self._next_delay()):
            self.fire()
