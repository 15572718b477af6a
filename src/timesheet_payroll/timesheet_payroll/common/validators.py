from __future__ import annotations

import re
import uuid

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$")
_PHONE_RE = re.compile(r"^\+?\d{9,15}$")


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_uuid(value: str, field_name: str) -> str:
    try:
        return str(uuid.UUID(str(value or "").strip()))
    except ValueError:
        raise ValidationError(f"{field_name} must be a UUID")


def require_email(value: str, field_name: str = "Email") -> str:
    v = require_non_empty(value, field_name).lower()
    if not _EMAIL_RE.match(v):
        raise ValidationError(f"{field_name} is not a valid email address")
    return v


def require_phone(value: str, field_name: str = "Phone") -> str:
    v = re.sub(r"[\s\-()]", "", require_non_empty(value, field_name))
    if not _PHONE_RE.match(v):
        raise ValidationError(f"{field_name} is not a valid phone number")
    return v
