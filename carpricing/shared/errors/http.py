# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from carpricing.interfaces.http.dto.envelope import ApiResponse
from carpricing.shared.logging import get_correlation_id, logger

from .base import AppError


def _client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def handle_app_error(
    error: AppError, *, action: str, user_id: int = 0
) -> tuple[Response, HTTPStatus]:
    envelope = ApiResponse.failure(action, error)
    envelope.meta.session.user_id = user_id
    envelope.meta.request_id = get_correlation_id()
    return jsonify(envelope.model_dump(mode="json")), error.status


def register_error_handler(
    app: Flask,
    *,
    debug_mode: bool = False,
    default_status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR,
) -> None:

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        logger.warning(f"Handled application error {exc.code} on {request.method} {request.path}")
        return handle_app_error(exc, action=request.endpoint or "unknown")

    @app.errorhandler(HTTPException)
    def _handle_http(exc: HTTPException):
        status = HTTPStatus(exc.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        error = AppError(
            code=status.phrase.lower().replace(" ", "_"),
            status=status,
            message=status.phrase,
        )
        return handle_app_error(error, action=request.endpoint or "unknown")

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        if debug_mode:
            logger.exception(
                f"Unhandled exception: {request.method} {request.path} "
                f"from {_client_ip()}, query={dict(request.args)}, body_size={len(request.data)}"
            )
        else:
            logger.error(f"Error: {type(exc).__name__} on {request.method} {request.path}")

        error = AppError(
            code="internal_error",
            status=default_status,
            message="Internal server error",
        )
        return handle_app_error(error, action=request.endpoint or "unknown")
