from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Caller role used for authorization checks."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    MANAGER = "manager"
    EMPLOYEE = "employee"


APPROVER_ROLES = frozenset({Role.SUPER_ADMIN, Role.ADMIN, Role.MANAGER})


class PunchType(str, Enum):
    IN = "in"
    OUT = "out"


class RequestStatus(str, Enum):
    """Adjustment request lifecycle. APPROVED and REJECTED are terminal."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not RequestStatus.PENDING
