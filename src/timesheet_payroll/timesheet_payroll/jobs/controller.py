from __future__ import annotations

from dataclasses import asdict

from flask import Flask

from ..common.http import current_role, domain_errors, json_ok
from ..container import Container
from ..core.enums import APPROVER_ROLES
from ..core.exceptions import AuthorizationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/jobs/auto-close/force", methods=["POST"], endpoint="api_force_auto_close")
    @domain_errors
    def force_auto_close():
        if current_role() not in APPROVER_ROLES:
            raise AuthorizationError("You are not allowed to run jobs")
        result = container.auto_close_job.force()
        return json_ok(asdict(result))
