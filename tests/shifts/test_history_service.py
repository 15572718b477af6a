from __future__ import annotations

from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from src.timesheet_payroll.timesheet_payroll.core.enums import PunchType, RequestStatus
from src.timesheet_payroll.timesheet_payroll.jobs.auto_close import AutoCloseJob
from src.timesheet_payroll.timesheet_payroll.punches.service import ClockService
from src.timesheet_payroll.timesheet_payroll.punches.model import DailyLog, Punch
from src.timesheet_payroll.timesheet_payroll.shifts.service import ShiftHistoryService
from tests.fakes import InMemoryAdjustments, InMemoryPunchStore

EMP = "11111111-1111-1111-1111-111111111111"
TENANT = "99999999-9999-9999-9999-999999999999"


def _log(work_date: date, start_h: int, end_h: int) -> DailyLog:
    def p(kind, hour):
        return Punch(
            employee_id=EMP,
            tenant_id=TENANT,
            type=PunchType(kind),
            timestamp=datetime.combine(work_date, datetime.min.time()).replace(hour=hour),
        )

    return DailyLog(
        log_id=None,
        tenant_id=TENANT,
        employee_id=EMP,
        work_date=work_date,
        punches=(p("in", start_h), p("out", end_h)),
    )


def test_history_without_store_is_empty():
    history = ShiftHistoryService(None, None).history(
        employee_id=EMP, start=date(2026, 3, 1), end=date(2026, 3, 31), today=date(2026, 3, 31)
    )

    assert history.configured is False
    assert history.days == []
    assert history.to_dict()["month_to_date_seconds"] == 0


def test_history_is_sorted_newest_first_and_clipped_to_range():
    store = InMemoryPunchStore(
        [_log(date(2026, 3, 2), 9, 17), _log(date(2026, 3, 4), 9, 13), _log(date(2026, 3, 3), 9, 18)]
    )
    svc = ShiftHistoryService(store, InMemoryAdjustments())

    history = svc.history(employee_id=EMP, start=date(2026, 3, 2), end=date(2026, 3, 3), today=date(2026, 3, 5))

    assert [d.shift.work_date for d in history.days] == [date(2026, 3, 3), date(2026, 3, 2)]
    assert history.month_to_date == timedelta(hours=17)
    assert history.days[0].hint.reason == "Shift over 8 hours"
    assert history.days[1].hint.needed is False


def test_history_applies_approved_adjustments():
    store = InMemoryPunchStore([_log(date(2026, 3, 2), 9, 12)])
    adjustments = InMemoryAdjustments()
    rid = adjustments.create(
        tenant_id=TENANT,
        employee_id=EMP,
        work_date=date(2026, 3, 2),
        requested_clock_in=datetime(2026, 3, 2, 9, 0),
        requested_clock_out=datetime(2026, 3, 2, 17, 0),
        reason="left badge at home",
    )
    adjustments.decide(request_id=rid, status=RequestStatus.APPROVED, decided_by="mgr")

    history = ShiftHistoryService(store, adjustments).history(
        employee_id=EMP, start=date(2026, 3, 1), end=date(2026, 3, 31), today=date(2026, 3, 10)
    )

    day = history.days[0]
    assert day.shift.has_adjustment is True
    assert day.shift.worked == timedelta(hours=8)
    assert day.hint.needed is False
    assert day.to_dict()["worked_seconds"] == 8 * 3600


def test_naive_punch_closed_by_scheduler_reconciles():
    accra = ZoneInfo("Africa/Accra")
    store = InMemoryPunchStore()
    ClockService(store, tz=accra).punch(
        tenant_id=TENANT, employee_id=EMP, punch_type=PunchType.IN, at=datetime(2026, 3, 3, 9, 0)
    )
    AutoCloseJob(store, tz=accra).run_once(datetime(2026, 3, 3, 22, 5, tzinfo=accra))

    history = ShiftHistoryService(store, InMemoryAdjustments(), tz=accra).history(
        employee_id=EMP, start=date(2026, 3, 1), end=date(2026, 3, 31), today=date(2026, 3, 4)
    )

    day = history.days[0].shift
    assert day.clock_in == datetime(2026, 3, 3, 9, 0, tzinfo=accra)
    assert day.worked == timedelta(hours=13)
    assert history.month_to_date == timedelta(hours=13)
