from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Optional

from ..common.datetime_utils import now_local, to_local
from ..core.constants import ALL_TENANTS, AUTO_CLOSE_HOUR, AUTO_CLOSE_LOCATION, FORCE_CLOSE_LOCATION, JOB_AUTO_CLOSE
from ..core.enums import PunchType
from ..punches.model import DailyLog, Punch
from ..punches.repository import PunchStore
from .repository import JobRunLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AutoCloseResult:
    closed_count: int = 0
    failed_count: int = 0
    skipped: Optional[str] = None


class AutoCloseJob:
    """Clocks out every shift still open at the daily cutoff (22:00 local).

    Appends a synthetic OUT punch stamped at the cutoff to each log whose last
    punch is IN. Closed and empty logs are left alone, so repeated runs for the
    same day never add a second OUT. A durable ledger entry keeps the batch to
    one scan per day across restarts and instances. A run in which some
    appends failed gives its entry back, so the next tick retries those logs.
    """

    def __init__(
        self,
        store: Optional[PunchStore],
        ledger: Optional[JobRunLedger] = None,
        *,
        tenant_id: Optional[str] = None,
        cutoff_hour: int = AUTO_CLOSE_HOUR,
        tz: Optional[tzinfo] = None,
    ):
        self._store = store
        self._ledger = ledger
        self._tenant_id = tenant_id
        self._cutoff_hour = int(cutoff_hour)
        self._tz = tz
        # Mirrors ledger claims so hourly ticks after the cutoff skip the DB.
        self._claimed: set[date] = set()

    def run_once(self, now: Optional[datetime] = None) -> AutoCloseResult:
        if self._store is None:
            logger.warning("Punch store not configured; auto-close skipped")
            return AutoCloseResult(skipped="not_configured")

        now = to_local(now or now_local(self._tz), self._tz)
        if now.hour < self._cutoff_hour:
            return AutoCloseResult(skipped="before_cutoff")

        today = now.date()
        if today in self._claimed:
            return AutoCloseResult(skipped="already_ran")

        try:
            logs = self._store.list_logs_for_date(self._tenant_id, today)
        except Exception:
            logger.exception("Auto-close could not list logs for %s", today)
            return AutoCloseResult(skipped="store_error")

        try:
            claimed = self._claim(today)
        except Exception:
            logger.exception("Auto-close could not record its run for %s", today)
            return AutoCloseResult(skipped="store_error")

        self._claimed.add(today)
        if not claimed:
            return AutoCloseResult(skipped="already_ran")

        logger.info("Running auto-close for %s", today)
        result = self._close_open_logs(logs, self._cutoff(now), AUTO_CLOSE_LOCATION)
        if result.failed_count:
            self._release(today)
        return result

    def force(self, now: Optional[datetime] = None) -> AutoCloseResult:
        """Manual trigger: closes today's open logs regardless of hour and guard."""
        if self._store is None:
            logger.warning("Punch store not configured; forced auto-close skipped")
            return AutoCloseResult(skipped="not_configured")

        now = to_local(now or now_local(self._tz), self._tz)
        logger.info("Forced auto-close for %s", now.date())
        try:
            logs = self._store.list_logs_for_date(self._tenant_id, now.date())
        except Exception:
            logger.exception("Forced auto-close could not list logs for %s", now.date())
            return AutoCloseResult(skipped="store_error")
        return self._close_open_logs(logs, self._cutoff(now), FORCE_CLOSE_LOCATION)

    def _claim(self, today: date) -> bool:
        if self._ledger is None:
            return True
        return self._ledger.claim(self._tenant_id or ALL_TENANTS, today, JOB_AUTO_CLOSE)

    def _release(self, today: date) -> None:
        """Give the day back so a later tick retries the logs that failed."""
        self._claimed.discard(today)
        if self._ledger is None:
            return
        try:
            self._ledger.release(self._tenant_id or ALL_TENANTS, today, JOB_AUTO_CLOSE)
        except Exception:
            logger.exception("Auto-close could not release its run for %s", today)

    def _cutoff(self, now: datetime) -> datetime:
        return now.replace(hour=self._cutoff_hour, minute=0, second=0, microsecond=0)

    def _close_open_logs(self, logs: list[DailyLog], close_at: datetime, location: str) -> AutoCloseResult:
        closed = 0
        failed = 0
        for log in logs:
            if not log.is_open:
                continue

            punch = Punch(
                employee_id=log.employee_id,
                tenant_id=log.tenant_id,
                type=PunchType.OUT,
                timestamp=close_at,
                location=location,
                auto_generated=True,
            )
            try:
                self._store.append_punch(int(log.log_id), punch)
            except Exception:
                logger.exception("Error auto-closing log %s (employee %s)", log.log_id, log.employee_id)
                failed += 1
                continue

            logger.info("Auto-closed shift for employee %s", log.employee_id)
            closed += 1

        logger.info("Auto-close completed: %d shift(s) closed, %d failed", closed, failed)
        return AutoCloseResult(closed_count=closed, failed_count=failed)
