from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import AdjustmentRequest


class AdjustmentRepository(Protocol):
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
        raise NotImplementedError

    def get(self, *, request_id: int) -> Optional[AdjustmentRequest]:
        raise NotImplementedError

    def list_adjustments(
        self,
        *,
        tenant_id: Optional[str],
        employee_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
        limit: int = 500,
    ) -> Sequence[AdjustmentRequest]:
        raise NotImplementedError

    def decide(self, *, request_id: int, status: RequestStatus, decided_by: str) -> bool:
        """Move a PENDING request to ``status``. Returns False if it was not pending.

        Raises ``ConflictError`` if the store already holds an approved
        request for the same employee and date.
        """

        raise NotImplementedError

    def delete_pending(self, *, request_id: int) -> bool:
        raise NotImplementedError
