from __future__ import annotations

import logging
from datetime import datetime, tzinfo
from typing import Optional

from ..common.datetime_utils import local_date, now_local, to_local
from ..common.validators import require_uuid
from ..core.enums import PunchType
from .model import DailyLog, Punch
from .repository import PunchStore

logger = logging.getLogger(__name__)


class ClockService:
    """Records raw punches into the employee's DailyLog for the punch date."""

    def __init__(self, store: PunchStore, *, tz: Optional[tzinfo] = None):
        self._store = store
        self._tz = tz

    def punch(
        self,
        *,
        tenant_id: str,
        employee_id: str,
        punch_type: PunchType,
        at: Optional[datetime] = None,
        location: Optional[str] = None,
        photo_ref: Optional[str] = None,
    ) -> DailyLog:
        punch = Punch(
            employee_id=require_uuid(employee_id, "Employee id"),
            tenant_id=require_uuid(tenant_id, "Tenant id"),
            type=PunchType(punch_type),
            timestamp=to_local(at or now_local(self._tz), self._tz),
            location=location,
            photo_ref=photo_ref,
        )
        work_date = local_date(punch.timestamp, self._tz)

        log = self._store.get_daily_log(punch.employee_id, work_date)
        if log is None:
            log = DailyLog(log_id=None, tenant_id=punch.tenant_id, employee_id=punch.employee_id, work_date=work_date)
            log_id = self._store.insert_log(log.with_punch(punch))
            if log_id is not None:
                logger.info("Opened daily log %s for %s on %s", log_id, punch.employee_id, work_date)
                return self._store.get_daily_log(punch.employee_id, work_date) or log.with_punch(punch)
            # Lost the race to a concurrent first punch; append to the winner.
            log = self._store.get_daily_log(punch.employee_id, work_date)
            if log is None:
                raise LookupError(f"daily log for {punch.employee_id} on {work_date} vanished")

        self._store.append_punch(int(log.log_id), punch)
        return log.with_punch(punch)
