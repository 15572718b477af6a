from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_datetime
from ..common.http import current_tenant_id, domain_errors, json_body, json_ok, requires
from ..container import Container
from ..core.enums import PunchType
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/punches", methods=["POST"], endpoint="api_punch")
    @domain_errors
    def punch():
        data = json_body()
        try:
            punch_type = PunchType(str(data.get("type", "")).lower())
        except ValueError:
            raise ValidationError("type must be 'in' or 'out'")

        at = parse_iso_datetime(data["time"]) if data.get("time") else None
        log = requires(container.clock_service, "Clock").punch(
            tenant_id=current_tenant_id() or "",
            employee_id=str(data.get("employee_id") or ""),
            punch_type=punch_type,
            at=at,
            location=data.get("location"),
            photo_ref=data.get("photo"),
        )
        return json_ok(
            {
                "log_id": log.log_id,
                "date": log.work_date.isoformat(),
                "punches": [p.to_wire() for p in log.punches],
            },
            201,
        )
