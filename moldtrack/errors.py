"""Typed API errors and the single routine that turns them into responses."""
from __future__ import annotations

from typing import Any

from flask import Flask, current_app, jsonify
from werkzeug.exceptions import HTTPException

from .extensions import db

__all__ = [
    "ApiError",
    "ValidationError",
    "MissingFields",
    "InvalidPayload",
    "EmptyPayload",
    "InvalidId",
    "InvalidEnum",
    "DanglingReference",
    "DuplicateKey",
    "NotFound",
    "Unauthorized",
    "Forbidden",
    "register_error_handlers",
]


class ApiError(Exception):
    """Base class for failures that map to a structured JSON response."""

    status_code = 400
    error = "BadRequest"

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.error, "message": self.message}
        payload.update(self.extra)
        return payload


class ValidationError(ApiError):
    """Raised when one or more payload fields fail validation.

    ``fields`` is a list of ``{"field", "error", "message"}`` entries. The
    top-level category is ``MissingFields`` when any required field is absent,
    the shared category when every failure agrees, and ``ValidationError``
    otherwise.
    """

    def __init__(self, fields: list[dict[str, str]]):
        categories = {item["error"] for item in fields}
        missing = [item["field"] for item in fields if item["error"] == "MissingFields"]

        if missing:
            error = "MissingFields"
            message = "Missing required fields: " + ", ".join(missing)
        elif len(categories) == 1:
            error = fields[0]["error"]
            message = "; ".join(item["message"] for item in fields)
        else:
            error = "ValidationError"
            message = "Validation failed for: " + ", ".join(item["field"] for item in fields)

        extra: dict[str, Any] = {"fields": fields}
        if missing:
            extra["missing"] = missing
        super().__init__(message, **extra)
        self.error = error
        self.fields = fields


class MissingFields(ValidationError):
    """Shortcut for a payload that lacks required fields."""

    def __init__(self, missing: list[str]):
        super().__init__(
            [
                {"field": name, "error": "MissingFields", "message": f"{name} is required"}
                for name in missing
            ]
        )


class InvalidPayload(ApiError):
    error = "InvalidPayload"


class EmptyPayload(ApiError):
    error = "EmptyPayload"

    def __init__(self, message: str = "No data provided for update"):
        super().__init__(message)


class InvalidId(ApiError):
    error = "InvalidId"

    def __init__(self, value: str):
        super().__init__(
            f"Invalid ID format: {value!r} is not a 24 character hex string", id=value
        )


class InvalidEnum(ApiError):
    """Raised for a query or path value outside its closed set."""

    error = "InvalidEnum"

    def __init__(self, field: str, value: Any, allowed: list[str]):
        super().__init__(
            f"{field} must be one of: {', '.join(allowed)}",
            field=field,
            value=value,
            allowed=allowed,
        )


class DanglingReference(ApiError):
    error = "DanglingReference"

    def __init__(self, references: list[dict[str, Any]]):
        described = ", ".join(f"{ref['field']}={ref['value']!r}" for ref in references)
        super().__init__(
            f"Referenced record not found: {described}",
            field=references[0]["field"],
            value=references[0]["value"],
            references=references,
        )


class DuplicateKey(ApiError):
    error = "DuplicateKey"

    def __init__(self, field: str, value: Any):
        super().__init__(f"{field} {value!r} already exists", field=field, value=value)


class NotFound(ApiError):
    status_code = 404
    error = "NotFound"


class Unauthorized(ApiError):
    status_code = 401
    error = "Unauthorized"

    def __init__(
        self,
        message: str = "Authentication required to access this resource",
        action: str = "Sign in via /auth/google",
    ):
        super().__init__(message, action=action)


class Forbidden(ApiError):
    status_code = 403
    error = "Forbidden"

    def __init__(self, capability: str):
        super().__init__(
            f"Role '{capability}' required to access this resource", capability=capability
        )


def register_error_handlers(app: Flask) -> None:
    """Attach the JSON error translation used by every blueprint."""

    @app.errorhandler(ApiError)
    def handle_api_error(exc: ApiError):
        db.session.rollback()
        return jsonify(exc.to_dict()), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc: HTTPException):
        payload: dict[str, Any] = {
            "error": (exc.name or "Error").replace(" ", ""),
            "message": exc.description,
        }
        if exc.code == 404:
            payload["availableEndpoints"] = current_app.config.get("AVAILABLE_ENDPOINTS", [])
        return jsonify(payload), exc.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(exc: Exception):
        db.session.rollback()
        current_app.logger.exception("Unhandled error: %s", exc)
        message = (
            str(exc) if current_app.config.get("EXPOSE_ERROR_DETAILS") else "Internal server error"
        )
        return jsonify({"error": "InternalServerError", "message": message}), 500
