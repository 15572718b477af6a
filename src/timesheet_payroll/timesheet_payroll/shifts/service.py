from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta, tzinfo
from typing import Optional

from ..adjustments.repository import AdjustmentRepository
from ..common.datetime_utils import now_local
from ..core.enums import RequestStatus
from ..punches.repository import PunchStore
from .model import AdjustmentHint, Shift
from .reconciler import ShiftReconciler, month_to_date, monthly_totals

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryDay:
    shift: Shift
    hint: AdjustmentHint

    def to_dict(self) -> dict:
        out = self.shift.to_dict()
        out["adjustment_needed"] = self.hint.needed
        out["adjustment_reason"] = self.hint.reason
        return out


@dataclass(frozen=True)
class WorkHistory:
    days: list[HistoryDay] = field(default_factory=list)
    month_to_date: timedelta = timedelta(0)
    monthly_totals: dict[str, timedelta] = field(default_factory=dict)
    configured: bool = True

    def to_dict(self) -> dict:
        return {
            "days": [d.to_dict() for d in self.days],
            "month_to_date_seconds": int(self.month_to_date.total_seconds()),
            "monthly_totals_seconds": {k: int(v.total_seconds()) for k, v in self.monthly_totals.items()},
        }


class ShiftHistoryService:
    """Work history of one employee: reconciled days, newest first."""

    def __init__(
        self,
        store: Optional[PunchStore],
        adjustments: Optional[AdjustmentRepository],
        *,
        reconciler: Optional[ShiftReconciler] = None,
        tz: Optional[tzinfo] = None,
    ):
        self._store = store
        self._adjustments = adjustments
        self._tz = tz
        self._reconciler = reconciler or ShiftReconciler(tz=tz)

    def history(self, *, employee_id: str, start: date, end: date, today: Optional[date] = None) -> WorkHistory:
        if self._store is None:
            logger.warning("Punch store not configured; returning empty history for %s", employee_id)
            return WorkHistory(configured=False)

        today = today or now_local(self._tz).date()
        logs = self._store.list_logs_for_employee(employee_id, start, end)
        approved = []
        if self._adjustments is not None:
            approved = [
                r
                for r in self._adjustments.list_adjustments(
                    tenant_id=None, employee_id=employee_id, status=RequestStatus.APPROVED
                )
                if any(start <= d <= end for d in r.match_dates(self._tz))
            ]

        shifts = [s for s in self._reconciler.reconcile_logs(logs, approved) if start <= s.work_date <= end]
        shifts.sort(key=lambda s: s.work_date, reverse=True)
        return WorkHistory(
            days=[HistoryDay(shift=s, hint=self._reconciler.needs_adjustment(s, today=today)) for s in shifts],
            month_to_date=month_to_date(shifts, today),
            monthly_totals=monthly_totals(shifts),
        )
