from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import Flask, current_app, g, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.enums import Shift
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    IntegrityError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from .validators import require_choice

logger = logging.getLogger(__name__)

CONTAINER_KEY = "epiviu.container"


def get_container():
    return current_app.extensions[CONTAINER_KEY]


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def login_required(view):
    """Resolve the bearer token into `g.actor` before running the view."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        g.actor = get_container().auth_service.resolve_actor(bearer_token())
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Corpo JSON inválido")
    return data


def first_of(data: dict, *keys: str) -> Any:
    """Accept both camelCase and snake_case field names."""
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _error(message: str, status: int):
    return jsonify({"success": False, "error": message}), status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return _error(str(e), 400)

    @app.errorhandler(AuthenticationError)
    def _authentication(e: AuthenticationError):
        return _error(str(e), 401)

    @app.errorhandler(AuthorizationError)
    def _authorization(e: AuthorizationError):
        return _error(str(e), 403)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return _error(str(e), 404)

    @app.errorhandler(IntegrityError)
    def _integrity(e: IntegrityError):
        logger.error("Integrity violation on %s %s (errno=%s)", request.method, request.path, e.errno, exc_info=e)
        return _error("Operação conflita com os dados atuais, tente novamente", 409)

    @app.errorhandler(StoreUnavailableError)
    def _store(e: StoreUnavailableError):
        logger.error("Store unavailable on %s %s", request.method, request.path, exc_info=e)
        return _error("Banco de dados indisponível no momento", 503)

    @app.errorhandler(DomainError)
    def _domain(e: DomainError):
        logger.error("Unhandled domain error on %s %s", request.method, request.path, exc_info=e)
        return _error("Erro interno", 500)

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        return _error(e.description or e.name, e.code or 500)

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        logger.exception("Unexpected error on %s %s", request.method, request.path)
        return _error("Erro interno", 500)


def shift_filter(value: Optional[str]) -> Optional[Shift]:
    if not value:
        return None
    return require_choice(value.strip().lower(), Shift, "Turno")
