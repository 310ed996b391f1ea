from __future__ import annotations

import logging
from typing import Any, Optional

from flask import Flask, jsonify, request, session
from werkzeug.exceptions import HTTPException, InternalServerError

from ..core.constants import UNAUTHORIZED_MESSAGE
from ..core.enums import Role
from ..core.exceptions import (
    AuthorizationError,
    ConflictError,
    DependencyError,
    DomainError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from .auth import AuthorizationPredicate, Caller

logger = logging.getLogger(__name__)

PROCEDURE_PREFIX = "/api/trpc/"

_STATUS_BY_ERROR = {
    ValidationError: 400,
    AuthorizationError: 401,
    NotFoundError: 404,
    ConflictError: 409,
    DependencyError: 422,
    InternalError: 500,
}


def current_caller() -> Optional[Caller]:
    """Build the Caller from the session written by the login flow."""
    if "user_id" not in session:
        return None
    try:
        role = Role(session.get("role"))
    except ValueError:
        role = None
    return Caller(user_id=str(session["user_id"]), role=role)


def procedure_input() -> dict:
    """JSON body of a mutation; anything other than a JSON object is a validation error."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Input must be a JSON object")
    return data


def ok(data: Any):
    return jsonify({"success": True, "data": data})


def status_for(error: DomainError) -> int:
    return _STATUS_BY_ERROR.get(type(error), 500)


def register_procedure_gate(app: Flask, is_authorized: AuthorizationPredicate) -> None:
    """Reject unauthorized procedure calls before their input is even parsed."""

    @app.before_request
    def require_authorized_caller():
        if request.path.startswith(PROCEDURE_PREFIX) and not is_authorized(current_caller()):
            raise AuthorizationError(UNAUTHORIZED_MESSAGE)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = status_for(e)
        if status >= 500:
            logger.error("Procedure %s failed: %s", request.path, e)
        return jsonify({"success": False, "error": e.kind, "message": str(e)}), status

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error on %s", request.path)
        if not request.path.startswith(PROCEDURE_PREFIX):
            return InternalServerError()
        return jsonify({"success": False, "error": InternalError.kind, "message": "Internal server error"}), 500
