from __future__ import annotations

import json
from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_list
from .model import DailyLog, Punch
from .repository import PunchStore

_SELECT = """
    SELECT log_id, tenant_id, employee_id, work_date, punches
    FROM daily_logs
"""


def _to_log(r: dict) -> DailyLog:
    employee_id = str(r["employee_id"])
    tenant_id = str(r["tenant_id"])
    return DailyLog(
        log_id=int(r["log_id"]),
        tenant_id=tenant_id,
        employee_id=employee_id,
        work_date=r["work_date"],
        punches=tuple(
            Punch.from_wire(p, employee_id=employee_id, tenant_id=tenant_id) for p in load_json_list(r.get("punches"))
        ),
    )


class MySQLPunchStore(PunchStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_daily_log(self, employee_id: str, work_date: date) -> Optional[DailyLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE employee_id=%s AND work_date=%s", (employee_id, work_date))
            r = fetchone(cur)
            return _to_log(r) if r else None

    def list_logs_for_date(self, tenant_id: Optional[str], work_date: date) -> Sequence[DailyLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            if tenant_id is None:
                cur.execute(_SELECT + " WHERE work_date=%s ORDER BY log_id", (work_date,))
            else:
                cur.execute(_SELECT + " WHERE tenant_id=%s AND work_date=%s ORDER BY log_id", (tenant_id, work_date))
            return [_to_log(r) for r in fetchall(cur)]

    def list_logs_for_employee(self, employee_id: str, start: date, end: date) -> Sequence[DailyLog]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + " WHERE employee_id=%s AND work_date BETWEEN %s AND %s ORDER BY work_date DESC",
                (employee_id, start, end),
            )
            return [_to_log(r) for r in fetchall(cur)]

    def append_punch(self, log_id: int, punch: Punch) -> None:
        # JSON_ARRAY_APPEND keeps the append atomic at row level.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE daily_logs
                SET punches = JSON_ARRAY_APPEND(COALESCE(punches, JSON_ARRAY()), '$', CAST(%s AS JSON))
                WHERE log_id=%s
                """,
                (json.dumps(punch.to_wire()), int(log_id)),
            )
            if cur.rowcount == 0:
                raise LookupError(f"daily log {log_id} not found")

    def insert_log(self, log: DailyLog) -> Optional[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO daily_logs(tenant_id, employee_id, work_date, punches)
                VALUES(%s,%s,%s,%s)
                """,
                (
                    log.tenant_id,
                    log.employee_id,
                    log.work_date,
                    json.dumps([p.to_wire() for p in log.punches]),
                ),
            )
            if cur.rowcount == 0:
                return None
            return int(cur.lastrowid)
