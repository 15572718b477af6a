from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import DailyLog, Punch


class PunchStore(Protocol):
    """Durable store of DailyLogs; at most one log per (employee, date)."""

    def get_daily_log(self, employee_id: str, work_date: date) -> Optional[DailyLog]:
        raise NotImplementedError

    def list_logs_for_date(self, tenant_id: Optional[str], work_date: date) -> Sequence[DailyLog]:
        """``tenant_id=None`` lists every tenant's logs for the date."""

        raise NotImplementedError

    def list_logs_for_employee(self, employee_id: str, start: date, end: date) -> Sequence[DailyLog]:
        raise NotImplementedError

    def append_punch(self, log_id: int, punch: Punch) -> None:
        raise NotImplementedError

    def insert_log(self, log: DailyLog) -> Optional[int]:
        """Insert ``log`` unless a row already exists for its (employee, date).

        Returns the new ``log_id``, or ``None`` when a row was already there.
        """

        raise NotImplementedError
