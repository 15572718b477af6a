from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Optional

from ..common.datetime_utils import now_local, to_local
from ..core.constants import PLACEHOLDER_CLOCK_IN, PLACEHOLDER_GAP, PLACEHOLDER_LOCATION
from ..core.enums import PunchType, Role
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..punches.model import DailyLog, Punch
from ..punches.repository import PunchStore

logger = logging.getLogger(__name__)

SATURDAY = 5


@dataclass(frozen=True)
class BackfillResult:
    generated: int = 0
    skipped: int = 0
    failed: int = 0
    skipped_reason: Optional[str] = None


class MissingDayBackfill:
    """Gives every active employee a DailyLog for each weekday.

    Employees with no punches get a placeholder log (IN, then OUT one second
    later, both auto-generated) so the day shows up in history with zero hours
    and can be adjusted. The existence of a log row, not its punch count, is
    what makes an employee skip, so re-running a date is a no-op.
    """

    def __init__(
        self,
        store: Optional[PunchStore],
        employees: Optional[EmployeeRepository],
        *,
        tenant_id: Optional[str] = None,
        tz: Optional[tzinfo] = None,
        clock_in: time = PLACEHOLDER_CLOCK_IN,
    ):
        self._store = store
        self._employees = employees
        self._tenant_id = tenant_id
        self._tz = tz
        self._clock_in = clock_in

    def run_for_previous_day(self, now: Optional[datetime] = None) -> BackfillResult:
        now = to_local(now or now_local(self._tz), self._tz)
        return self.run_once(now.date() - timedelta(days=1))

    def run_once(self, target_date: date) -> BackfillResult:
        if self._store is None or self._employees is None:
            logger.warning("Stores not configured; missing-day backfill skipped")
            return BackfillResult(skipped_reason="not_configured")

        if target_date.weekday() >= SATURDAY:
            logger.info("Skipping weekend: %s", target_date)
            return BackfillResult(skipped_reason="weekend")

        try:
            employees = [
                e
                for e in self._employees.list_active()
                if e.role is not Role.SUPER_ADMIN and (self._tenant_id is None or e.tenant_id == self._tenant_id)
            ]
        except Exception:
            logger.exception("Missing-day backfill could not list employees")
            return BackfillResult(skipped_reason="store_error")

        logger.info("Checking for missing punch entries on %s", target_date)
        generated = skipped = failed = 0
        for employee in employees:
            if not employee.tenant_id:
                logger.warning("Employee %s has no tenant; skipped", employee.employee_id)
                skipped += 1
                continue

            try:
                if self._store.get_daily_log(employee.employee_id, target_date) is not None:
                    skipped += 1
                    continue
                if self._store.insert_log(self._placeholder(employee, target_date)) is None:
                    # A real punch or another run created the row first.
                    skipped += 1
                    continue
            except Exception:
                logger.exception("Error backfilling %s for %s", target_date, employee.employee_id)
                failed += 1
                continue

            logger.info("Generated missing day entry for %s (%s)", employee.employee_id, target_date)
            generated += 1

        logger.info(
            "Missing days generation completed: %d generated, %d skipped, %d failed",
            generated,
            skipped,
            failed,
        )
        return BackfillResult(generated=generated, skipped=skipped, failed=failed)

    def _placeholder(self, employee: Employee, target_date: date) -> DailyLog:
        clock_in = datetime.combine(target_date, self._clock_in, tzinfo=self._tz)

        def punch(punch_type: PunchType, at: datetime) -> Punch:
            return Punch(
                employee_id=employee.employee_id,
                tenant_id=employee.tenant_id,
                type=punch_type,
                timestamp=at,
                location=PLACEHOLDER_LOCATION,
                auto_generated=True,
            )

        return DailyLog(
            log_id=None,
            tenant_id=employee.tenant_id,
            employee_id=employee.employee_id,
            work_date=target_date,
            punches=(punch(PunchType.IN, clock_in), punch(PunchType.OUT, clock_in + PLACEHOLDER_GAP)),
        )
