from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from functools import wraps

from flask import Flask, jsonify, session
from werkzeug.exceptions import HTTPException

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..employees.model import CurrentUser

logger = logging.getLogger(__name__)

SESSION_KEY = "current_user"

# Conflict is reported as 400 to stay compatible with existing clients.
_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (ConflictError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def current_user() -> CurrentUser:
    data = session.get(SESSION_KEY)
    if not data:
        raise AuthenticationError("Please log in to continue")
    return CurrentUser.from_session(data)


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if SESSION_KEY not in session:
            return error_response("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def to_json(value):
    """Make dataclass-derived dicts JSON friendly (dates, Decimals, enums)."""

    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, datetime):
        return value.isoformat(timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    if isinstance(value, Enum):
        return value.value
    return value


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(exc: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(exc, error_type):
                return error_response(str(exc), status)
        logger.error("unmapped domain error: %s", exc)
        return error_response(str(exc), 400)

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return error_response(exc.description or exc.name, exc.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        logger.exception("unhandled error")
        if bool(app.config.get("DEBUG", False)):
            return error_response(f"Internal server error: {exc}", 500)
        return error_response("Internal server error", 500)
