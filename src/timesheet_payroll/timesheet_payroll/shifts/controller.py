from __future__ import annotations

from datetime import timedelta

from flask import Flask, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.http import domain_errors, json_ok
from ..common.validators import require_uuid
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_DAYS


def register(app: Flask, container: Container) -> None:
    @app.route("/api/shifts", methods=["GET"], endpoint="api_shifts")
    @domain_errors
    def shifts():
        employee_id = require_uuid(request.args.get("employee_id", ""), "employee_id")
        today = now_local(container.tz).date()
        end = parse_iso_date(request.args["end"]) if request.args.get("end") else today
        start = parse_iso_date(request.args["start"]) if request.args.get("start") else end - timedelta(days=DEFAULT_HISTORY_DAYS)

        history = container.shift_history_service.history(employee_id=employee_id, start=start, end=end, today=today)
        return json_ok(history.to_dict())
