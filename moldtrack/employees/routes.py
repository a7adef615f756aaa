"""Route handlers for the employee roster."""
from __future__ import annotations

from flask import jsonify, request

from ..routes.auth import role_required
from ..validation import parse_choice, parse_payload, require_object_id
from . import employees_bp
from .schemas import DEPARTMENTS, EmployeeCreate, EmployeeUpdate
from .service import employees, serialize_employee, serialize_employees


@employees_bp.get("")
def list_employees():
    """List employees in surname order."""

    return jsonify(serialize_employees(employees.find_all()))


@employees_bp.get("/active")
def list_active_employees():
    return jsonify(serialize_employees(employees.find_all(active=True)))


@employees_bp.get("/department/<department>")
def list_department_employees(department: str):
    department = parse_choice("department", department, DEPARTMENTS)
    return jsonify(serialize_employees(employees.find_all(department=department)))


@employees_bp.get("/<record_id>")
def get_employee(record_id: str):
    return jsonify(serialize_employee(employees.find_by_id(record_id)))


@employees_bp.post("")
@role_required("manager")
def create_employee():
    record = parse_payload(EmployeeCreate, request.get_json(silent=True))
    employee = employees.create(record)
    return jsonify(serialize_employee(employee)), 201


@employees_bp.put("/<record_id>")
@role_required("manager")
def update_employee(record_id: str):
    require_object_id(record_id)
    changes = parse_payload(EmployeeUpdate, request.get_json(silent=True), partial=True)
    return jsonify(serialize_employee(employees.update(record_id, changes)))


@employees_bp.delete("/<record_id>")
@role_required("admin")
def delete_employee(record_id: str):
    summary = employees.delete(record_id)
    return jsonify({"message": "Employee deleted successfully", "deletedEmployee": summary})
