from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from ..common.datetime_utils import month_key
from ..core.constants import REQUIRED_DAILY_WORK


def worked_between(clock_in: Optional[datetime], clock_out: Optional[datetime]) -> timedelta:
    if clock_in is None or clock_out is None:
        return timedelta(0)
    return max(timedelta(0), clock_out - clock_in)


@dataclass(frozen=True)
class Shift:
    """Derived view of one employee's day after adjustment override."""

    work_date: date
    employee_id: str
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    has_adjustment: bool = False
    punch_count: int = 0
    placeholder: bool = False

    @property
    def worked(self) -> timedelta:
        if self.placeholder:
            return timedelta(0)
        return worked_between(self.clock_in, self.clock_out)

    @property
    def worked_seconds(self) -> int:
        return int(self.worked.total_seconds())

    @property
    def month_key(self) -> str:
        return month_key(self.work_date)

    def balance(self, required: timedelta = REQUIRED_DAILY_WORK) -> timedelta:
        return self.worked - required

    def to_dict(self) -> dict:
        return {
            "date": self.work_date.isoformat(),
            "employee_id": self.employee_id,
            "clock_in": self.clock_in.isoformat() if self.clock_in else None,
            "clock_out": self.clock_out.isoformat() if self.clock_out else None,
            "worked_seconds": self.worked_seconds,
            "balance_seconds": int(self.balance().total_seconds()),
            "has_adjustment": self.has_adjustment,
            "placeholder": self.placeholder,
        }


@dataclass(frozen=True)
class AdjustmentHint:
    needed: bool
    reason: str = ""


NOT_NEEDED = AdjustmentHint(needed=False)
