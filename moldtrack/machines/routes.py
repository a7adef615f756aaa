"""Route handlers for machine records."""
from __future__ import annotations

from flask import jsonify, request

from ..validation import parse_choice, parse_payload, require_object_id
from . import machines_bp
from .schemas import MACHINE_STATUSES, MachineCreate, MachineUpdate
from .service import machines, serialize_machine


@machines_bp.get("")
def list_machines():
    """List machines ordered by machine identifier."""

    status = parse_choice("status", request.args.get("status"), MACHINE_STATUSES)
    return jsonify([serialize_machine(machine) for machine in machines.find_all(status=status)])


@machines_bp.get("/<record_id>")
def get_machine(record_id: str):
    return jsonify(serialize_machine(machines.find_by_id(record_id)))


@machines_bp.post("")
def create_machine():
    record = parse_payload(MachineCreate, request.get_json(silent=True))
    machine = machines.create(record)
    return jsonify(serialize_machine(machine)), 201


@machines_bp.put("/<record_id>")
def update_machine(record_id: str):
    require_object_id(record_id)
    changes = parse_payload(MachineUpdate, request.get_json(silent=True), partial=True)
    return jsonify(serialize_machine(machines.update(record_id, changes)))


@machines_bp.delete("/<record_id>")
def delete_machine(record_id: str):
    summary = machines.delete(record_id)
    return jsonify({"message": "Machine deleted successfully", "deletedMachine": summary})
