from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from typing import Optional, Sequence

from ..common.datetime_utils import to_local, to_local_or_none
from ..common.validators import require_non_empty, require_uuid
from ..core.enums import APPROVER_ROLES, RequestStatus, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from .model import NO_OVERRIDE, AdjustmentRequest, ApprovedTimes, Override
from .repository import AdjustmentRepository

logger = logging.getLogger(__name__)

_OPEN_STATUSES = (RequestStatus.PENDING, RequestStatus.APPROVED)


def first_approved(requests: Sequence[AdjustmentRequest]) -> Optional[AdjustmentRequest]:
    """Earliest decision wins; ties go to the lower request id."""
    approved = [r for r in requests if r.status is RequestStatus.APPROVED]
    if not approved:
        return None
    return min(approved, key=lambda r: (r.decided_at or datetime.max, r.request_id))


class AdjustmentAuthority:
    """Lifecycle of adjustment requests: Pending -> Approved | Rejected.

    An approved request is the permanent override of the reconciled shift for
    its date. Only one approved request may exist per employee and date.
    """

    def __init__(self, requests: AdjustmentRepository, *, tz: Optional[tzinfo] = None):
        self._requests = requests
        self._tz = tz

    def create(
        self,
        *,
        current_role: Role,
        tenant_id: str,
        employee_id: str,
        work_date: date,
        requested_clock_in: Optional[datetime],
        requested_clock_out: Optional[datetime],
        reason: str,
        original_clock_in: Optional[datetime] = None,
        original_clock_out: Optional[datetime] = None,
    ) -> int:
        if current_role is Role.SUPER_ADMIN:
            raise AuthorizationError("Super admins cannot file adjustment requests")

        tenant_id = require_uuid(tenant_id, "Tenant id")
        employee_id = require_uuid(employee_id, "Employee id")
        reason = require_non_empty(reason, "Reason")
        if work_date is None:
            raise ValidationError("Date is required")
        if requested_clock_in is None:
            raise ValidationError("Requested clock-in is required")
        requested_clock_in = to_local(requested_clock_in, self._tz)
        requested_clock_out = to_local_or_none(requested_clock_out, self._tz)
        original_clock_in = to_local_or_none(original_clock_in, self._tz)
        original_clock_out = to_local_or_none(original_clock_out, self._tz)
        if requested_clock_out is not None and requested_clock_out < requested_clock_in:
            raise ValidationError("Requested clock-out cannot be before clock-in")

        if self._open_requests_for(tenant_id, employee_id, work_date):
            raise ConflictError("You already have a time adjustment request for this date")

        request_id = self._requests.create(
            tenant_id=tenant_id,
            employee_id=employee_id,
            work_date=work_date,
            requested_clock_in=requested_clock_in,
            requested_clock_out=requested_clock_out,
            reason=reason,
            original_clock_in=original_clock_in,
            original_clock_out=original_clock_out,
        )
        logger.info("Adjustment request %s filed by %s for %s", request_id, employee_id, work_date)
        return request_id

    def approve(self, *, current_role: Role, approver_id: str, request_id: int) -> AdjustmentRequest:
        req = self._pending_for_decision(current_role, request_id)

        for other in self._open_requests_for(req.tenant_id, req.employee_id, *req.match_dates(self._tz)):
            if other.request_id != req.request_id and other.status is RequestStatus.APPROVED:
                raise ConflictError("An approved adjustment already exists for this date")

        return self._decide(req, RequestStatus.APPROVED, approver_id)

    def reject(self, *, current_role: Role, approver_id: str, request_id: int) -> AdjustmentRequest:
        req = self._pending_for_decision(current_role, request_id)
        return self._decide(req, RequestStatus.REJECTED, approver_id)

    def cancel(self, *, employee_id: str, request_id: int) -> None:
        """Withdraw a still-pending request. Decided requests stay as they are."""
        req = self._requests.get(request_id=int(request_id))
        if not req:
            raise NotFoundError("Request not found")
        if req.employee_id != employee_id:
            raise AuthorizationError("Only the requesting employee can cancel this request")
        if req.status.is_terminal:
            raise ValidationError("Request has already been decided")
        if not self._requests.delete_pending(request_id=req.request_id):
            raise ValidationError("Request has already been decided")
        logger.info("Adjustment request %s cancelled by %s", req.request_id, employee_id)

    def list_requests(
        self,
        *,
        tenant_id: Optional[str],
        employee_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
    ) -> Sequence[AdjustmentRequest]:
        return self._requests.list_adjustments(tenant_id=tenant_id, employee_id=employee_id, status=status)

    def approved_for(self, *, employee_id: str, tenant_id: Optional[str] = None) -> Sequence[AdjustmentRequest]:
        return self._requests.list_adjustments(
            tenant_id=tenant_id, employee_id=employee_id, status=RequestStatus.APPROVED
        )

    def override_for(self, *, employee_id: str, work_date: date, tenant_id: Optional[str] = None) -> Override:
        matching = [r for r in self.approved_for(employee_id=employee_id, tenant_id=tenant_id) if r.applies_to(work_date, self._tz)]
        winner = first_approved(matching)
        return ApprovedTimes.of(winner) if winner else NO_OVERRIDE

    def _open_requests_for(self, tenant_id: str, employee_id: str, *dates: date) -> list[AdjustmentRequest]:
        wanted = set(dates)
        return [
            r
            for r in self._requests.list_adjustments(tenant_id=tenant_id, employee_id=employee_id)
            if r.status in _OPEN_STATUSES and r.match_dates(self._tz) & wanted
        ]

    def _pending_for_decision(self, current_role: Role, request_id: int) -> AdjustmentRequest:
        if current_role not in APPROVER_ROLES:
            raise AuthorizationError("You are not allowed to decide adjustment requests")

        req = self._requests.get(request_id=int(request_id))
        if not req:
            raise NotFoundError("Request not found")
        if req.status.is_terminal:
            raise ValidationError("Request has already been decided")
        return req

    def _decide(self, req: AdjustmentRequest, status: RequestStatus, approver_id: str) -> AdjustmentRequest:
        if not self._requests.decide(request_id=req.request_id, status=status, decided_by=str(approver_id)):
            raise ValidationError("Request has already been decided")
        logger.info("Adjustment request %s %s by %s", req.request_id, status.value.lower(), approver_id)
        return self._requests.get(request_id=req.request_id) or req
