from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import RequestStatus
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_datetime, db_cursor, fetchall, fetchone
from .model import AdjustmentRequest
from .repository import AdjustmentRepository

_SELECT = """
    SELECT request_id, tenant_id, employee_id, work_date,
           original_clock_in, original_clock_out, requested_clock_in, requested_clock_out,
           reason, status, created_at, decided_by, decided_at
    FROM time_adjustment_requests
"""


def _to_request(r: dict) -> AdjustmentRequest:
    return AdjustmentRequest(
        request_id=int(r["request_id"]),
        tenant_id=str(r["tenant_id"]),
        employee_id=str(r["employee_id"]),
        work_date=r.get("work_date"),
        original_clock_in=as_datetime(r.get("original_clock_in")),
        original_clock_out=as_datetime(r.get("original_clock_out")),
        requested_clock_in=as_datetime(r["requested_clock_in"]),
        requested_clock_out=as_datetime(r.get("requested_clock_out")),
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        created_at=as_datetime(r["created_at"]),
        decided_by=r.get("decided_by"),
        decided_at=as_datetime(r.get("decided_at")),
    )


class MySQLAdjustmentRepository(AdjustmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        tenant_id: str,
        employee_id: str,
        work_date: date,
        requested_clock_in: datetime,
        requested_clock_out: Optional[datetime],
        reason: str,
        original_clock_in: Optional[datetime] = None,
        original_clock_out: Optional[datetime] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_adjustment_requests(
                    tenant_id, employee_id, work_date, original_clock_in, original_clock_out,
                    requested_clock_in, requested_clock_out, reason, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    tenant_id,
                    employee_id,
                    work_date,
                    original_clock_in,
                    original_clock_out,
                    requested_clock_in,
                    requested_clock_out,
                    reason,
                    RequestStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get(self, *, request_id: int) -> Optional[AdjustmentRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_adjustments(
        self,
        *,
        tenant_id: Optional[str],
        employee_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 500,
    ) -> Sequence[AdjustmentRequest]:
        where = []
        params: list = []
        if tenant_id is not None:
            where.append("tenant_id=%s")
            params.append(tenant_id)
        if employee_id is not None:
            where.append("employee_id=%s")
            params.append(employee_id)
        if status is not None:
            where.append("status=%s")
            params.append(status.value)

        sql = _SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY created_at DESC, request_id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_request(r) for r in fetchall(cur)]

    def decide(self, *, request_id: int, status: RequestStatus, decided_by: str) -> bool:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE time_adjustment_requests
                    SET status=%s, decided_by=%s, decided_at=NOW()
                    WHERE request_id=%s AND status=%s
                    """,
                    (status.value, decided_by, int(request_id), RequestStatus.PENDING.value),
                )
                return cur.rowcount > 0
        except mysql.connector.IntegrityError:
            # uq_approved_day: one approved request per employee and date.
            raise ConflictError("An approved adjustment already exists for this date")

    def delete_pending(self, *, request_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM time_adjustment_requests WHERE request_id=%s AND status=%s",
                (int(request_id), RequestStatus.PENDING.value),
            )
            return cur.rowcount > 0
