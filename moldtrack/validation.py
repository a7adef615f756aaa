"""Shared payload validation built on pydantic.

Each entity declares a ``<Entity>Create`` / ``<Entity>Update`` pair of
:class:`Schema` models. :func:`parse_payload` runs one of them and converts
pydantic's error list into the API's validation categories so every failing
field is reported in one response.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, StringConstraints
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from .errors import EmptyPayload, InvalidEnum, InvalidId, InvalidPayload, ValidationError

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")
IDENTIFIER_PATTERN = r"^[A-Z0-9-]+$"
EMAIL_PATTERN = re.compile(r"^\w+([.-]\w+)*@\w+([.-]\w+)*(\.\w{2,3})+$")

# Upper bounds matching the column widths the values are stored in.
CODE_LENGTH = 64
NAME_LENGTH = 120
EMAIL_LENGTH = 255
MAX_COUNT = 2**63 - 1

_NUMBER_ERRORS = {
    "invalid_number",
    "finite_number",
    "float_parsing",
    "float_type",
    "int_parsing",
    "int_type",
    "int_from_float",
    "greater_than",
    "greater_than_equal",
    "less_than",
    "less_than_equal",
}
_LENGTH_ERRORS = {"string_too_short", "string_too_long", "too_short", "too_long"}
_ENUM_ERRORS = {"literal_error", "enum"}


def _reject_bool(value: Any) -> Any:
    if isinstance(value, bool):
        raise PydanticCustomError("invalid_number", "Input should be a number, not a boolean")
    return value


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _check_email(value: str) -> str:
    if not EMAIL_PATTERN.match(value):
        raise PydanticCustomError("invalid_email", "Please enter a valid email")
    return value.lower()


Number = Annotated[float, BeforeValidator(_reject_bool), Field(allow_inf_nan=False)]
PositiveNumber = Annotated[Number, Field(gt=0)]
NonNegativeNumber = Annotated[Number, Field(ge=0)]
Count = Annotated[int, BeforeValidator(_reject_bool), Field(ge=0, le=MAX_COUNT)]
Identifier = Annotated[
    str,
    StringConstraints(strip_whitespace=True, max_length=CODE_LENGTH, pattern=IDENTIFIER_PATTERN),
]
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=NAME_LENGTH)]
Label = Annotated[str, StringConstraints(strip_whitespace=True, max_length=NAME_LENGTH)]
Text = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]
Code = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=CODE_LENGTH)]
Reference = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
Email = Annotated[
    str,
    StringConstraints(strip_whitespace=True, max_length=EMAIL_LENGTH),
    AfterValidator(_check_email),
]
Timestamp = Annotated[datetime, AfterValidator(_to_naive_utc)]


def utcnow() -> datetime:
    """Return the current time as a naive UTC datetime."""

    return datetime.now(timezone.utc).replace(tzinfo=None)


class Schema(BaseModel):
    """Base model: camelCase on the wire, unknown keys ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )


def _field_path(loc: tuple[int | str, ...]) -> str:
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path += f".{part}" if path else str(part)
    return path or "body"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def describe_error(error: dict[str, Any]) -> dict[str, str]:
    """Map one pydantic error entry onto an API validation category."""

    field = _field_path(error.get("loc", ()))
    error_type = error.get("type", "")
    message = error.get("msg", "Invalid value")
    value = error.get("input")

    if error_type == "missing" or (
        _is_blank(value) and (error_type.endswith("_type") or error_type in _LENGTH_ERRORS
                              or error_type == "string_pattern_mismatch")
    ):
        return {"field": field, "error": "MissingFields", "message": f"{field} is required"}

    if error_type in _ENUM_ERRORS:
        expected = (error.get("ctx") or {}).get("expected", "")
        return {
            "field": field,
            "error": "InvalidEnum",
            "message": f"{field} must be one of: {expected}",
        }
    if error_type == "invalid_email":
        return {"field": field, "error": "InvalidEmail", "message": "Please provide a valid email address"}
    if error_type in _NUMBER_ERRORS:
        return {"field": field, "error": "InvalidNumber", "message": f"{field}: {message}"}
    if error_type in _LENGTH_ERRORS:
        return {"field": field, "error": "InvalidLength", "message": f"{field}: {message}"}
    if error_type == "string_pattern_mismatch":
        return {
            "field": field,
            "error": "InvalidFormat",
            "message": f"{field} must contain only uppercase letters, numbers, and hyphens",
        }
    return {"field": field, "error": "InvalidFormat", "message": f"{field}: {message}"}


def parse_payload(schema: type[Schema], payload: Any, *, partial: bool = False) -> dict[str, Any]:
    """Validate ``payload`` against ``schema`` and return attribute-named values.

    With ``partial`` only the keys present in the payload are returned, which is
    what update handlers apply.
    """

    if not isinstance(payload, dict):
        raise InvalidPayload("Request body must be a JSON object")
    if partial and not payload:
        raise EmptyPayload()

    try:
        model = schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError([describe_error(err) for err in exc.errors()]) from exc

    record = model.model_dump(exclude_unset=partial)
    if partial and not record:
        raise EmptyPayload("No updatable fields provided")
    return record


def require_object_id(value: str) -> str:
    """Return the normalised id or raise :class:`InvalidId`."""

    if not OBJECT_ID_PATTERN.match(value or ""):
        raise InvalidId(value)
    return value.lower()


def is_object_id(value: Any) -> bool:
    return isinstance(value, str) and bool(OBJECT_ID_PATTERN.match(value))


def parse_choice(field: str, value: str | None, allowed: tuple[str, ...]) -> str | None:
    """Validate an optional query/path value against a closed set."""

    if value is None or value == "":
        return None
    if value not in allowed:
        raise InvalidEnum(field, value, list(allowed))
    return value


def parse_timestamp_param(field: str, value: str | None) -> datetime | None:
    """Parse an ISO 8601 query parameter into a naive UTC datetime."""

    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValidationError(
            [{"field": field, "error": "InvalidFormat", "message": f"{field} must be an ISO 8601 date"}]
        ) from exc
    return _to_naive_utc(parsed)
