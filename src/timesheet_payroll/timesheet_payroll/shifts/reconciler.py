from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional, Sequence

from ..adjustments.model import NO_OVERRIDE, AdjustmentRequest, ApprovedTimes, Override
from ..adjustments.service import first_approved
from ..common.datetime_utils import local_date, month_key, to_local, to_local_or_none
from ..core.constants import ADJUSTMENT_TOLERANCE, MAX_SHIFT_SPAN, REQUIRED_DAILY_WORK
from ..punches.model import DailyLog, Punch
from .model import NOT_NEEDED, AdjustmentHint, Shift

DayKey = tuple[str, date]


class ShiftReconciler:
    """Turns raw punches plus approved adjustments into per-day shifts.

    Stateless; safe to share between threads.

    Rules:
    - clock-in is the earliest IN, clock-out the latest OUT of the day
      (duplicates and input order do not matter);
    - an approved adjustment replaces both times entirely;
    - days without punches are omitted unless an approved adjustment exists.
    """

    def __init__(
        self,
        *,
        tz: Optional[tzinfo] = None,
        required: timedelta = REQUIRED_DAILY_WORK,
        tolerance: timedelta = ADJUSTMENT_TOLERANCE,
    ):
        self._tz = tz
        self._required = required
        self._tolerance = tolerance

    def reconcile(self, punches: Iterable[Punch], adjustments: Iterable[AdjustmentRequest] = ()) -> list[Shift]:
        return self._build(self._group_by_day(punches), adjustments)

    def reconcile_logs(self, logs: Iterable[DailyLog], adjustments: Iterable[AdjustmentRequest] = ()) -> list[Shift]:
        """Like ``reconcile`` but trusts each log's date as the grouping key."""
        groups: dict[DayKey, list[Punch]] = defaultdict(list)
        for log in logs:
            groups[(log.employee_id, log.work_date)].extend(log.punches)
        return self._build(groups, adjustments)

    def override_for(self, employee_id: str, work_date: date, adjustments: Iterable[AdjustmentRequest]) -> Override:
        matching = [r for r in adjustments if r.employee_id == employee_id and r.applies_to(work_date, self._tz)]
        winner = first_approved(matching)
        return ApprovedTimes.of(winner) if winner else NO_OVERRIDE

    def needs_adjustment(self, shift: Shift, *, today: date) -> AdjustmentHint:
        """Whether a closed day should offer an adjustment request."""
        if shift.work_date >= today or shift.has_adjustment:
            return NOT_NEEDED
        if shift.punch_count % 2 != 0:
            return AdjustmentHint(True, "Missing punch detected")
        if shift.worked < self._required - self._tolerance:
            return AdjustmentHint(True, "Shift under 8 hours")
        if shift.worked > self._required + self._tolerance:
            return AdjustmentHint(True, "Shift over 8 hours")
        return NOT_NEEDED

    def _build(self, groups: dict[DayKey, list[Punch]], adjustments: Iterable[AdjustmentRequest]) -> list[Shift]:
        approved = self._index_approved(adjustments)
        shifts = []
        for key in set(groups) | set(approved):
            employee_id, work_date = key
            shifts.append(
                self._shift_for(employee_id, work_date, groups.get(key, ()), approved.get(key, NO_OVERRIDE))
            )
        return shifts

    def _shift_for(self, employee_id: str, work_date: date, punches: Sequence[Punch], override: Override) -> Shift:
        # Backfilled days carry only synthetic punches and count as zero.
        is_placeholder = bool(punches) and all(p.auto_generated for p in punches)
        if isinstance(override, ApprovedTimes):
            clock_in = to_local_or_none(override.clock_in, self._tz)
            clock_out = to_local_or_none(override.clock_out, self._tz)
            is_placeholder = False
        else:
            ins = [to_local(p.timestamp, self._tz) for p in punches if p.is_in]
            outs = [to_local(p.timestamp, self._tz) for p in punches if p.is_out]
            clock_in = min(ins) if ins else None
            clock_out = max(outs) if outs else None
        return Shift(
            work_date=work_date,
            employee_id=employee_id,
            clock_in=clock_in,
            clock_out=clock_out,
            has_adjustment=isinstance(override, ApprovedTimes),
            punch_count=len(punches),
            placeholder=is_placeholder,
        )

    def _index_approved(self, adjustments: Iterable[AdjustmentRequest]) -> dict[DayKey, ApprovedTimes]:
        candidates: dict[DayKey, list[AdjustmentRequest]] = defaultdict(list)
        for req in adjustments:
            for d in req.match_dates(self._tz):
                candidates[(req.employee_id, d)].append(req)

        index = {}
        for key, reqs in candidates.items():
            winner = first_approved(reqs)
            if winner is not None:
                index[key] = ApprovedTimes.of(winner)
        return index

    def _group_by_day(self, punches: Iterable[Punch]) -> dict[DayKey, list[Punch]]:
        by_employee: dict[str, list[Punch]] = defaultdict(list)
        for p in punches:
            by_employee[p.employee_id].append(p)

        groups: dict[DayKey, list[Punch]] = defaultdict(list)
        for employee_id, items in by_employee.items():
            items.sort(key=lambda p: to_local(p.timestamp, self._tz))
            for p in items:
                groups[(employee_id, self._day_of(p, items))].append(p)
        return groups

    def _day_of(self, punch: Punch, ordered: Sequence[Punch]) -> date:
        """Calendar date a punch belongs to.

        An OUT with no IN before it on its own date belongs to the previous
        day when that day's last IN has no OUT after it on that day (a shift
        running past midnight) and the OUT comes at most a day after that IN.
        Otherwise it stays on its own date.
        """
        own = local_date(punch.timestamp, self._tz)
        if punch.is_in:
            return own

        at = to_local(punch.timestamp, self._tz)
        local = [(to_local(p.timestamp, self._tz), p) for p in ordered]
        earlier_ins = [ts for ts, p in local if p.is_in and ts <= at]
        if not earlier_ins:
            return own

        latest_in = max(earlier_ins)
        previous_day = own - timedelta(days=1)
        if latest_in.date() != previous_day or at - latest_in > MAX_SHIFT_SPAN:
            return own

        closed = any(p.is_out and ts >= latest_in and ts.date() == previous_day for ts, p in local)
        return own if closed else previous_day


def monthly_totals(shifts: Iterable[Shift]) -> dict[str, timedelta]:
    totals: dict[str, timedelta] = defaultdict(timedelta)
    for s in shifts:
        totals[s.month_key] += s.worked
    return dict(totals)


def month_to_date(shifts: Iterable[Shift], today: date) -> timedelta:
    key = month_key(today)
    return sum((s.worked for s in shifts if s.month_key == key and s.work_date <= today), timedelta(0))
