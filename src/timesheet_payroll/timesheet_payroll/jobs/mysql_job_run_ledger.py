from __future__ import annotations

from datetime import date

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .repository import JobRunLedger


class MySQLJobRunLedger(JobRunLedger):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def claim(self, tenant_key: str, run_date: date, job_name: str) -> bool:
        # PRIMARY KEY (tenant_key, run_date, job_name) makes the claim atomic.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO job_runs(tenant_key, run_date, job_name) VALUES(%s,%s,%s)",
                (tenant_key, run_date, job_name),
            )
            return cur.rowcount == 1

    def release(self, tenant_key: str, run_date: date, job_name: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM job_runs WHERE tenant_key=%s AND run_date=%s AND job_name=%s",
                (tenant_key, run_date, job_name),
            )
