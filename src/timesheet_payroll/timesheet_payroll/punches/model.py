from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_datetime
from ..core.enums import PunchType
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Punch:
    """A single clock-in or clock-out event. Immutable once recorded."""

    employee_id: str
    tenant_id: str
    type: PunchType
    timestamp: datetime
    location: Optional[str] = None
    photo_ref: Optional[str] = None
    auto_generated: bool = False

    @property
    def is_in(self) -> bool:
        return self.type is PunchType.IN

    @property
    def is_out(self) -> bool:
        return self.type is PunchType.OUT

    def to_wire(self) -> dict:
        """Serialize into the JSON shape stored in ``daily_logs.punches``."""
        out: dict[str, Any] = {
            "type": self.type.value,
            "time": self.timestamp.isoformat(),
            "location": self.location,
            "photo": self.photo_ref,
        }
        if self.auto_generated:
            out["auto_closed"] = True
        return out

    @classmethod
    def from_wire(cls, data: Mapping[str, Any], *, employee_id: str, tenant_id: str) -> "Punch":
        try:
            punch_type = PunchType(str(data.get("type", "")).lower())
        except ValueError:
            raise ValidationError(f"Unknown punch type: {data.get('type')!r}")
        return cls(
            employee_id=employee_id,
            tenant_id=tenant_id,
            type=punch_type,
            timestamp=parse_iso_datetime(str(data.get("time") or "")),
            location=data.get("location"),
            photo_ref=data.get("photo"),
            auto_generated=bool(data.get("auto_closed", False)),
        )


@dataclass(frozen=True)
class DailyLog:
    """Ordered punches for one employee on one calendar date."""

    log_id: Optional[int]
    tenant_id: str
    employee_id: str
    work_date: date
    punches: tuple[Punch, ...] = field(default_factory=tuple)

    @property
    def last_punch(self) -> Optional[Punch]:
        return self.punches[-1] if self.punches else None

    @property
    def is_empty(self) -> bool:
        return not self.punches

    @property
    def is_open(self) -> bool:
        last = self.last_punch
        return last is not None and last.is_in

    def with_punch(self, punch: Punch) -> "DailyLog":
        return replace(self, punches=self.punches + (punch,))
