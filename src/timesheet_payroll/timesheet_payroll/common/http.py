from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request

from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    StoreNotConfiguredError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS = (
    (ValidationError, 400),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (StoreNotConfiguredError, 503),
)


def json_ok(data: Any = None, status: int = 200):
    return jsonify({"success": True, "data": data}), status


def json_error(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def domain_errors(view):
    """Translate domain exceptions raised by services into JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except tuple(exc for exc, _ in _STATUS) as e:
            status = next(code for exc, code in _STATUS if isinstance(e, exc))
            return json_error(str(e), status)

    return wrapper


def requires(service: Any, name: str):
    if service is None:
        logger.warning("%s requested but the database is not configured", name)
        raise StoreNotConfiguredError("Database not configured")
    return service


def json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


def current_role() -> Role:
    try:
        return Role((request.headers.get("X-User-Role") or "").strip().lower())
    except ValueError:
        raise AuthorizationError("Unknown role")


def current_user_id() -> str:
    user_id = (request.headers.get("X-User-Id") or "").strip()
    if not user_id:
        raise AuthorizationError("Missing caller id")
    return user_id


def current_tenant_id() -> Optional[str]:
    return (request.headers.get("X-Tenant-Id") or "").strip() or None
