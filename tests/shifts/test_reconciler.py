from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from src.timesheet_payroll.timesheet_payroll.adjustments.model import NO_OVERRIDE, AdjustmentRequest, ApprovedTimes
from src.timesheet_payroll.timesheet_payroll.core.enums import PunchType, RequestStatus
from src.timesheet_payroll.timesheet_payroll.punches.model import DailyLog, Punch
from src.timesheet_payroll.timesheet_payroll.shifts.reconciler import ShiftReconciler, month_to_date, monthly_totals

EMP = "11111111-1111-1111-1111-111111111111"
OTHER = "22222222-2222-2222-2222-222222222222"
TENANT = "99999999-9999-9999-9999-999999999999"


def _punch(kind: str, ts: datetime, employee_id: str = EMP, auto: bool = False) -> Punch:
    return Punch(employee_id=employee_id, tenant_id=TENANT, type=PunchType(kind), timestamp=ts, auto_generated=auto)


def _request(
    rid: int,
    work_date: date,
    clock_in: datetime,
    clock_out: datetime | None,
    status: RequestStatus = RequestStatus.APPROVED,
    decided_at: datetime | None = datetime(2026, 3, 5, 9, 0),
    original_clock_in: datetime | None = None,
) -> AdjustmentRequest:
    return AdjustmentRequest(
        request_id=rid,
        tenant_id=TENANT,
        employee_id=EMP,
        work_date=work_date,
        requested_clock_in=clock_in,
        requested_clock_out=clock_out,
        reason="forgot",
        status=status,
        created_at=datetime(2026, 3, 4, 18, 0),
        original_clock_in=original_clock_in,
        decided_at=decided_at if status is not RequestStatus.PENDING else None,
    )


def _only(shifts, work_date=None):
    if work_date is not None:
        shifts = [s for s in shifts if s.work_date == work_date]
    assert len(shifts) == 1
    return shifts[0]


def test_duplicate_in_uses_earliest_in_and_latest_out():
    punches = [
        _punch("in", datetime(2026, 3, 3, 9, 0)),
        _punch("in", datetime(2026, 3, 3, 9, 5)),
        _punch("out", datetime(2026, 3, 3, 17, 0)),
    ]

    shift = _only(ShiftReconciler().reconcile(punches))

    assert shift.clock_in == datetime(2026, 3, 3, 9, 0)
    assert shift.clock_out == datetime(2026, 3, 3, 17, 0)
    assert shift.worked == timedelta(hours=8)
    assert shift.has_adjustment is False


def test_input_order_does_not_matter():
    punches = [
        _punch("out", datetime(2026, 3, 3, 12, 0)),
        _punch("in", datetime(2026, 3, 3, 13, 0)),
        _punch("out", datetime(2026, 3, 3, 17, 30)),
        _punch("in", datetime(2026, 3, 3, 8, 30)),
    ]
    forward = _only(ShiftReconciler().reconcile(punches))
    backward = _only(ShiftReconciler().reconcile(list(reversed(punches))))

    assert forward == backward
    assert forward.worked == timedelta(hours=9)


def test_only_in_gives_no_clock_out_and_zero_worked():
    shift = _only(ShiftReconciler().reconcile([_punch("in", datetime(2026, 3, 3, 9, 0))]))

    assert shift.clock_out is None
    assert shift.worked == timedelta(0)


def test_out_before_in_never_goes_negative():
    punches = [
        _punch("out", datetime(2026, 3, 3, 8, 0)),
        _punch("in", datetime(2026, 3, 3, 9, 0)),
    ]
    shift = _only(ShiftReconciler().reconcile(punches))

    assert shift.worked == timedelta(0)


def test_days_without_punches_are_omitted():
    punches = [
        _punch("in", datetime(2026, 3, 2, 9, 0)),
        _punch("out", datetime(2026, 3, 2, 17, 0)),
        _punch("in", datetime(2026, 3, 4, 9, 0)),
        _punch("out", datetime(2026, 3, 4, 17, 0)),
    ]
    shifts = ShiftReconciler().reconcile(punches)

    assert sorted(s.work_date for s in shifts) == [date(2026, 3, 2), date(2026, 3, 4)]


def test_employees_are_reconciled_separately():
    punches = [
        _punch("in", datetime(2026, 3, 3, 9, 0)),
        _punch("out", datetime(2026, 3, 3, 17, 0)),
        _punch("in", datetime(2026, 3, 3, 7, 0), employee_id=OTHER),
        _punch("out", datetime(2026, 3, 3, 11, 0), employee_id=OTHER),
    ]
    shifts = {s.employee_id: s for s in ShiftReconciler().reconcile(punches)}

    assert shifts[EMP].worked == timedelta(hours=8)
    assert shifts[OTHER].worked == timedelta(hours=4)


def test_approved_adjustment_replaces_times_entirely():
    punches = [
        _punch("in", datetime(2026, 3, 3, 9, 0)),
        _punch("out", datetime(2026, 3, 3, 12, 0)),
    ]
    adj = _request(1, date(2026, 3, 3), datetime(2026, 3, 3, 8, 0), datetime(2026, 3, 3, 16, 30))

    shift = _only(ShiftReconciler().reconcile(punches, [adj]))

    assert shift.clock_in == datetime(2026, 3, 3, 8, 0)
    assert shift.clock_out == datetime(2026, 3, 3, 16, 30)
    assert shift.worked == timedelta(hours=8, minutes=30)
    assert shift.has_adjustment is True


def test_approved_adjustment_without_clock_out_gives_zero():
    punches = [
        _punch("in", datetime(2026, 3, 3, 9, 0)),
        _punch("out", datetime(2026, 3, 3, 17, 0)),
    ]
    adj = _request(1, date(2026, 3, 3), datetime(2026, 3, 3, 8, 0), None)

    shift = _only(ShiftReconciler().reconcile(punches, [adj]))

    assert shift.clock_out is None
    assert shift.worked == timedelta(0)


def test_pending_and_rejected_adjustments_are_ignored():
    punches = [
        _punch("in", datetime(2026, 3, 3, 9, 0)),
        _punch("out", datetime(2026, 3, 3, 17, 0)),
    ]
    adjustments = [
        _request(1, date(2026, 3, 3), datetime(2026, 3, 3, 6, 0), datetime(2026, 3, 3, 20, 0), RequestStatus.PENDING),
        _request(2, date(2026, 3, 3), datetime(2026, 3, 3, 6, 0), datetime(2026, 3, 3, 20, 0), RequestStatus.REJECTED),
    ]

    shift = _only(ShiftReconciler().reconcile(punches, adjustments))

    assert shift.worked == timedelta(hours=8)
    assert shift.has_adjustment is False


def test_adjustment_matches_original_clock_in_date():
    punches = [_punch("in", datetime(2026, 3, 3, 9, 0))]
    adj = _request(
        1,
        date(2026, 3, 4),
        datetime(2026, 3, 3, 9, 0),
        datetime(2026, 3, 3, 17, 0),
        original_clock_in=datetime(2026, 3, 3, 9, 0),
    )

    shifts = ShiftReconciler().reconcile(punches, [adj])

    assert _only(shifts, date(2026, 3, 3)).has_adjustment is True
    assert _only(shifts, date(2026, 3, 3)).worked == timedelta(hours=8)


def test_approved_adjustment_without_punches_still_produces_shift():
    adj = _request(1, date(2026, 3, 3), datetime(2026, 3, 3, 9, 0), datetime(2026, 3, 3, 17, 0))

    shift = _only(ShiftReconciler().reconcile([], [adj]))

    assert shift.work_date == date(2026, 3, 3)
    assert shift.worked == timedelta(hours=8)


def test_first_approved_adjustment_wins():
    later = _request(
        1, date(2026, 3, 3), datetime(2026, 3, 3, 7, 0), datetime(2026, 3, 3, 19, 0),
        decided_at=datetime(2026, 3, 6, 9, 0),
    )
    earlier = _request(
        2, date(2026, 3, 3), datetime(2026, 3, 3, 9, 0), datetime(2026, 3, 3, 17, 0),
        decided_at=datetime(2026, 3, 5, 9, 0),
    )
    reconciler = ShiftReconciler()

    shift = _only(reconciler.reconcile([], [later, earlier]))

    assert shift.worked == timedelta(hours=8)
    override = reconciler.override_for(EMP, date(2026, 3, 3), [later, earlier])
    assert isinstance(override, ApprovedTimes)
    assert override.request_id == 2


def test_override_for_without_approval_is_no_override():
    pending = _request(1, date(2026, 3, 3), datetime(2026, 3, 3, 9, 0), None, RequestStatus.PENDING)

    assert ShiftReconciler().override_for(EMP, date(2026, 3, 3), [pending]) is NO_OVERRIDE


def test_out_after_midnight_belongs_to_previous_day():
    punches = [
        _punch("in", datetime(2026, 3, 2, 22, 0)),
        _punch("out", datetime(2026, 3, 3, 2, 0)),
    ]

    shift = _only(ShiftReconciler().reconcile(punches))

    assert shift.work_date == date(2026, 3, 2)
    assert shift.worked == timedelta(hours=4)


def test_out_after_midnight_stays_when_previous_day_was_closed():
    punches = [
        _punch("in", datetime(2026, 3, 2, 9, 0)),
        _punch("out", datetime(2026, 3, 2, 17, 0)),
        _punch("out", datetime(2026, 3, 3, 1, 0)),
    ]
    shifts = ShiftReconciler().reconcile(punches)

    assert _only(shifts, date(2026, 3, 2)).worked == timedelta(hours=8)
    stray = _only(shifts, date(2026, 3, 3))
    assert stray.clock_in is None
    assert stray.worked == timedelta(0)


def test_aware_timestamps_are_grouped_by_local_date():
    tokyo = ZoneInfo("Asia/Tokyo")
    punches = [
        _punch("in", datetime(2026, 3, 2, 23, 30, tzinfo=timezone.utc)),
        _punch("out", datetime(2026, 3, 3, 8, 30, tzinfo=timezone.utc)),
    ]

    shift = _only(ShiftReconciler(tz=tokyo).reconcile(punches))

    assert shift.work_date == date(2026, 3, 3)
    assert shift.worked == timedelta(hours=9)


def test_reconcile_logs_trusts_log_date():
    log = DailyLog(
        log_id=1,
        tenant_id=TENANT,
        employee_id=EMP,
        work_date=date(2026, 3, 2),
        punches=(
            _punch("in", datetime(2026, 3, 2, 21, 0)),
            _punch("out", datetime(2026, 3, 3, 1, 0)),
        ),
    )

    shift = _only(ShiftReconciler().reconcile_logs([log]))

    assert shift.work_date == date(2026, 3, 2)
    assert shift.worked == timedelta(hours=4)


def test_placeholder_day_counts_as_zero():
    log = DailyLog(
        log_id=1,
        tenant_id=TENANT,
        employee_id=EMP,
        work_date=date(2026, 3, 3),
        punches=(
            _punch("in", datetime(2026, 3, 3, 8, 0, 0), auto=True),
            _punch("out", datetime(2026, 3, 3, 8, 0, 1), auto=True),
        ),
    )

    shift = _only(ShiftReconciler().reconcile_logs([log]))

    assert shift.placeholder is True
    assert shift.worked == timedelta(0)


def test_auto_closed_day_still_counts():
    punches = [
        _punch("in", datetime(2026, 3, 3, 9, 0)),
        _punch("out", datetime(2026, 3, 3, 22, 0), auto=True),
    ]

    shift = _only(ShiftReconciler().reconcile(punches))

    assert shift.placeholder is False
    assert shift.worked == timedelta(hours=13)


def test_monthly_totals_and_month_to_date():
    punches = [
        _punch("in", datetime(2026, 2, 27, 9, 0)),
        _punch("out", datetime(2026, 2, 27, 17, 0)),
        _punch("in", datetime(2026, 3, 2, 9, 0)),
        _punch("out", datetime(2026, 3, 2, 13, 0)),
        _punch("in", datetime(2026, 3, 3, 9, 0)),
        _punch("out", datetime(2026, 3, 3, 15, 0)),
    ]
    shifts = ShiftReconciler().reconcile(punches)

    assert monthly_totals(shifts) == {"2026-02": timedelta(hours=8), "2026-03": timedelta(hours=10)}
    assert month_to_date(shifts, date(2026, 3, 2)) == timedelta(hours=4)
    assert month_to_date(shifts, date(2026, 3, 31)) == timedelta(hours=10)


def test_needs_adjustment_hints():
    reconciler = ShiftReconciler()
    today = date(2026, 3, 10)

    def day(start_h, end_h, extra=()):
        punches = [_punch("in", datetime(2026, 3, 3, start_h, 0)), _punch("out", datetime(2026, 3, 3, end_h, 0))]
        return _only(reconciler.reconcile(punches + list(extra)))

    assert reconciler.needs_adjustment(day(9, 17), today=today).needed is False
    assert reconciler.needs_adjustment(day(9, 14), today=today).reason == "Shift under 8 hours"
    assert reconciler.needs_adjustment(day(8, 19), today=today).reason == "Shift over 8 hours"

    odd = day(9, 17, extra=[_punch("in", datetime(2026, 3, 3, 12, 0))])
    assert reconciler.needs_adjustment(odd, today=today).reason == "Missing punch detected"

    # Never for today.
    assert reconciler.needs_adjustment(day(9, 14), today=date(2026, 3, 3)).needed is False


def test_needs_adjustment_respects_tolerance():
    reconciler = ShiftReconciler()
    punches = [_punch("in", datetime(2026, 3, 3, 9, 0)), _punch("out", datetime(2026, 3, 3, 16, 55))]
    shift = _only(reconciler.reconcile(punches))

    assert reconciler.needs_adjustment(shift, today=date(2026, 3, 4)).needed is False


def test_forgotten_out_is_not_carried_past_a_day():
    punches = [
        _punch("in", datetime(2026, 3, 2, 9, 0)),
        _punch("out", datetime(2026, 3, 3, 17, 0)),
    ]
    shifts = ShiftReconciler().reconcile(punches)

    monday = _only(shifts, date(2026, 3, 2))
    assert monday.clock_out is None
    assert monday.worked == timedelta(0)
    tuesday = _only(shifts, date(2026, 3, 3))
    assert tuesday.clock_in is None
    assert tuesday.worked == timedelta(0)


def test_naive_and_aware_punches_share_one_day():
    accra = ZoneInfo("Africa/Accra")
    punches = [
        _punch("in", datetime(2026, 3, 3, 9, 0)),
        _punch("out", datetime(2026, 3, 3, 22, 0, tzinfo=accra), auto=True),
    ]

    shift = _only(ShiftReconciler(tz=accra).reconcile(punches))

    assert shift.worked == timedelta(hours=13)
