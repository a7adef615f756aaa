"""Route handlers for production runs."""
from __future__ import annotations

from flask import jsonify, request

from ..validation import parse_choice, parse_payload, require_object_id
from . import production_runs_bp
from .schemas import RUN_STATUSES, ProductionRunCreate, ProductionRunUpdate
from .service import production_runs, serialize_run, serialize_runs


@production_runs_bp.get("")
def list_runs():
    """List runs, newest start first, optionally filtered by status and machine."""

    status = parse_choice("status", request.args.get("status"), RUN_STATUSES)
    machine_id = request.args.get("machineId")
    if machine_id:
        machine_id = require_object_id(machine_id)
    runs = production_runs.find_all(status=status, machine_id=machine_id)
    return jsonify(serialize_runs(runs))


@production_runs_bp.get("/<record_id>")
def get_run(record_id: str):
    return jsonify(serialize_run(production_runs.find_by_id(record_id)))


@production_runs_bp.post("")
def create_run():
    record = parse_payload(ProductionRunCreate, request.get_json(silent=True))
    run = production_runs.create(record)
    return jsonify(serialize_run(run)), 201


@production_runs_bp.put("/<record_id>")
def update_run(record_id: str):
    require_object_id(record_id)
    changes = parse_payload(ProductionRunUpdate, request.get_json(silent=True), partial=True)
    return jsonify(serialize_run(production_runs.update(record_id, changes)))


@production_runs_bp.delete("/<record_id>")
def delete_run(record_id: str):
    summary = production_runs.delete(record_id)
    return jsonify({"message": "Production run deleted successfully", "deletedRun": summary})
