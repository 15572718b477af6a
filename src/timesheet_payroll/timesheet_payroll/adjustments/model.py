from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Optional, Union

from ..common.datetime_utils import local_date
from ..core.enums import RequestStatus


@dataclass(frozen=True)
class AdjustmentRequest:
    """Employee-submitted correction of one day's clock-in/clock-out."""

    request_id: int
    tenant_id: str
    employee_id: str
    work_date: Optional[date]
    requested_clock_in: datetime
    requested_clock_out: Optional[datetime]
    reason: str
    status: RequestStatus
    created_at: datetime
    original_clock_in: Optional[datetime] = None
    original_clock_out: Optional[datetime] = None
    decided_by: Optional[str] = None
    decided_at: Optional[datetime] = None

    def match_dates(self, tz: Optional[tzinfo] = None) -> frozenset[date]:
        """Dates this request applies to: its own date and its original clock-in date."""
        dates = set()
        if self.work_date is not None:
            dates.add(self.work_date)
        if self.original_clock_in is not None:
            dates.add(local_date(self.original_clock_in, tz))
        if not dates:
            dates.add(local_date(self.requested_clock_in, tz))
        return frozenset(dates)

    def applies_to(self, work_date: date, tz: Optional[tzinfo] = None) -> bool:
        return work_date in self.match_dates(tz)

    def to_dict(self) -> dict:
        return {
            "id": self.request_id,
            "tenant_id": self.tenant_id,
            "employee_id": self.employee_id,
            "date": self.work_date.isoformat() if self.work_date else None,
            "original_clock_in": self.original_clock_in.isoformat() if self.original_clock_in else None,
            "original_clock_out": self.original_clock_out.isoformat() if self.original_clock_out else None,
            "requested_clock_in": self.requested_clock_in.isoformat(),
            "requested_clock_out": self.requested_clock_out.isoformat() if self.requested_clock_out else None,
            "reason": self.reason,
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "decided_by": self.decided_by,
            "decided_at": self.decided_at.isoformat() if self.decided_at else None,
        }


class NoOverride:
    """No approved adjustment: derive the day from raw punches."""

    _instance: Optional["NoOverride"] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_OVERRIDE"


NO_OVERRIDE = NoOverride()


@dataclass(frozen=True)
class ApprovedTimes:
    """Approved adjustment: these times replace the raw punches entirely."""

    request_id: int
    clock_in: datetime
    clock_out: Optional[datetime]

    @classmethod
    def of(cls, req: AdjustmentRequest) -> "ApprovedTimes":
        return cls(request_id=req.request_id, clock_in=req.requested_clock_in, clock_out=req.requested_clock_out)


Override = Union[NoOverride, ApprovedTimes]
