"""Route handlers for quality checks."""
from __future__ import annotations

from flask import current_app, jsonify, request

from ..routes.auth import role_required
from ..validation import parse_choice, parse_payload, parse_timestamp_param, require_object_id
from . import quality_checks_bp
from .schemas import CHECK_RESULTS, CHECK_TYPES, QualityCheckCreate, QualityCheckUpdate
from .service import quality_checks, serialize_check, serialize_checks


def _recent_limit(raw: str | None) -> int:
    """Return the ``limit`` query value, falling back to the configured default."""

    default = current_app.config.get("RECENT_CHECKS_DEFAULT", 10)
    maximum = current_app.config.get("RECENT_CHECKS_MAX", 100)
    try:
        limit = int(raw) if raw is not None else default
    except ValueError:
        limit = default
    if limit <= 0:
        limit = default
    return min(limit, maximum)


@quality_checks_bp.get("")
def list_checks():
    """List checks, most recent first, with optional date range, result and type filters."""

    checks = quality_checks.find_all(
        start_date=parse_timestamp_param("startDate", request.args.get("startDate")),
        end_date=parse_timestamp_param("endDate", request.args.get("endDate")),
        result=parse_choice("result", request.args.get("result"), CHECK_RESULTS),
        check_type=parse_choice("checkType", request.args.get("checkType"), CHECK_TYPES),
    )
    return jsonify(serialize_checks(checks))


@quality_checks_bp.get("/recent")
def recent_checks():
    limit = _recent_limit(request.args.get("limit"))
    return jsonify(serialize_checks(quality_checks.find_all(limit=limit)))


@quality_checks_bp.get("/result/<result>")
def checks_by_result(result: str):
    result = parse_choice("result", result, CHECK_RESULTS)
    return jsonify(serialize_checks(quality_checks.find_all(result=result)))


@quality_checks_bp.get("/<record_id>")
def get_check(record_id: str):
    return jsonify(serialize_check(quality_checks.find_by_id(record_id)))


@quality_checks_bp.post("")
@role_required("manager")
def create_check():
    record = parse_payload(QualityCheckCreate, request.get_json(silent=True))
    check = quality_checks.create(record)
    return jsonify(serialize_check(check)), 201


@quality_checks_bp.put("/<record_id>")
@role_required("manager")
def update_check(record_id: str):
    require_object_id(record_id)
    changes = parse_payload(QualityCheckUpdate, request.get_json(silent=True), partial=True)
    return jsonify(serialize_check(quality_checks.update(record_id, changes)))


@quality_checks_bp.delete("/<record_id>")
@role_required("admin")
def delete_check(record_id: str):
    summary = quality_checks.delete(record_id)
    return jsonify({"message": "Quality check deleted successfully", "deletedCheck": summary})
