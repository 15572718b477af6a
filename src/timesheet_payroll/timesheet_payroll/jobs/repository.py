from __future__ import annotations

from datetime import date
from typing import Protocol


class JobRunLedger(Protocol):
    """Durable exactly-once marker per (tenant, date, job)."""

    def claim(self, tenant_key: str, run_date: date, job_name: str) -> bool:
        """Atomically record a run. Returns False if it was already recorded."""

        raise NotImplementedError

    def release(self, tenant_key: str, run_date: date, job_name: str) -> None:
        """Forget a recorded run so it can be claimed again."""

        raise NotImplementedError
