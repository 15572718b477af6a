from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp, accepting a trailing ``Z`` for UTC."""
    v = (value or "").strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(v)
    except ValueError:
        raise ValidationError(f"Invalid ISO-8601 timestamp: {value!r}")


def get_zone(name: Optional[str]) -> Optional[tzinfo]:
    return ZoneInfo(name) if name else None


def to_local(ts: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Wall-clock time of ``ts`` in ``tz``.

    Naive values are read as local time already. With a zone the result is
    always aware in that zone; without one it is always naive server-local time.
    """
    if tz is None:
        return ts.astimezone().replace(tzinfo=None) if ts.tzinfo is not None else ts
    if ts.tzinfo is None:
        return ts.replace(tzinfo=tz)
    return ts.astimezone(tz)


def to_local_or_none(ts: Optional[datetime], tz: Optional[tzinfo] = None) -> Optional[datetime]:
    return to_local(ts, tz) if ts is not None else None


def local_date(ts: datetime, tz: Optional[tzinfo] = None) -> date:
    return to_local(ts, tz).date()


def month_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}"


def now_local(tz: Optional[tzinfo] = None) -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(tz) if tz is not None else datetime.now()
