from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from .adjustments.mysql_adjustment_repository import MySQLAdjustmentRepository
from .adjustments.repository import AdjustmentRepository
from .adjustments.service import AdjustmentAuthority
from .common.datetime_utils import get_zone
from .core.constants import AUTO_CLOSE_HOUR, DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .jobs.auto_close import AutoCloseJob
from .jobs.backfill import MissingDayBackfill
from .jobs.mysql_job_run_ledger import MySQLJobRunLedger
from .jobs.repository import JobRunLedger
from .jobs.scheduler import JobScheduler
from .payroll.service import PayslipService
from .punches.mysql_punch_store import MySQLPunchStore
from .punches.repository import PunchStore
from .punches.service import ClockService
from .shifts.reconciler import ShiftReconciler
from .shifts.service import ShiftHistoryService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    tz: Optional[tzinfo]
    conn: Optional[DatabaseConnection]

    punch_store: Optional[PunchStore]
    adjustments_repo: Optional[AdjustmentRepository]
    employees_repo: Optional[EmployeeRepository]
    job_ledger: Optional[JobRunLedger]

    clock_service: Optional[ClockService]
    employee_service: Optional[EmployeeService]
    adjustment_authority: Optional[AdjustmentAuthority]
    shift_history_service: ShiftHistoryService
    payslip_service: PayslipService
    auto_close_job: AutoCloseJob
    backfill_job: MissingDayBackfill
    scheduler: JobScheduler


def build_container(
    *,
    db_config: Optional[dict],
    timezone: Optional[str] = DEFAULT_TIMEZONE,
    auto_close_hour: int = AUTO_CLOSE_HOUR,
) -> Container:
    """Wire repositories and services.

    Without ``db_config`` every store is ``None``: reads return empty results
    and jobs become no-ops instead of failing.
    """
    tz = get_zone(timezone)

    conn = None
    if db_config and db_config.get("host") and db_config.get("database"):
        config = DBConfig(
            host=str(db_config["host"]),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "")),
            password=str(db_config.get("password", "")),
            database=str(db_config["database"]),
            connection_timeout=int(db_config.get("connection_timeout", 10)),
        )
        conn = DatabaseConnection.get_instance(config)
    else:
        logger.warning("Database not configured; running without a punch store")

    return build_from_stores(
        tz=tz,
        conn=conn,
        punch_store=MySQLPunchStore(conn) if conn else None,
        adjustments_repo=MySQLAdjustmentRepository(conn) if conn else None,
        employees_repo=MySQLEmployeeRepository(conn) if conn else None,
        job_ledger=MySQLJobRunLedger(conn) if conn else None,
        auto_close_hour=auto_close_hour,
    )


def build_from_stores(
    *,
    tz: Optional[tzinfo],
    punch_store: Optional[PunchStore],
    adjustments_repo: Optional[AdjustmentRepository],
    employees_repo: Optional[EmployeeRepository],
    job_ledger: Optional[JobRunLedger] = None,
    conn: Optional[DatabaseConnection] = None,
    auto_close_hour: int = AUTO_CLOSE_HOUR,
) -> Container:
    auto_close_job = AutoCloseJob(punch_store, job_ledger, cutoff_hour=auto_close_hour, tz=tz)
    backfill_job = MissingDayBackfill(punch_store, employees_repo, tz=tz)

    return Container(
        tz=tz,
        conn=conn,
        punch_store=punch_store,
        adjustments_repo=adjustments_repo,
        employees_repo=employees_repo,
        job_ledger=job_ledger,
        clock_service=ClockService(punch_store, tz=tz) if punch_store else None,
        employee_service=EmployeeService(employees_repo) if employees_repo else None,
        adjustment_authority=AdjustmentAuthority(adjustments_repo, tz=tz) if adjustments_repo else None,
        shift_history_service=ShiftHistoryService(
            punch_store, adjustments_repo, reconciler=ShiftReconciler(tz=tz), tz=tz
        ),
        payslip_service=PayslipService(employees_repo),
        auto_close_job=auto_close_job,
        backfill_job=backfill_job,
        scheduler=JobScheduler(auto_close_job, backfill_job, tz=tz),
    )
