"""Persistence and serialisation helpers for employees."""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..machines.models import Machine
from ..machines.service import summarize_machine
from ..models import isoformat
from ..persistence import Repository, load_many
from .models import Employee

ASSIGNED_MACHINE_FIELDS = ("name", "machineId", "status")


class EmployeeRepository(Repository[Employee]):
    model = Employee
    label = "Employee"
    unique_fields = {"employee_id": "employeeId", "email": "email"}
    references = {"assigned_machine": (Machine, "assignedMachine")}

    def ordering(self):
        return (Employee.last_name.asc(), Employee.first_name.asc())

    def apply_filters(self, statement, filters: dict[str, Any]):
        if filters.get("active") is not None:
            statement = statement.where(Employee.active == filters["active"])
        if filters.get("department"):
            statement = statement.where(Employee.department == filters["department"])
        return statement

    def describe_deleted(self, instance: Employee) -> dict[str, Any]:
        return {
            "_id": instance.id,
            "employeeId": instance.employee_id,
            "firstName": instance.first_name,
            "lastName": instance.last_name,
            "email": instance.email,
        }


employees = EmployeeRepository()


def serialize_employee(employee: Employee, machine: Machine | None = None) -> dict[str, Any]:
    """Return ``employee`` with the assigned machine populated."""

    if machine is None and employee.assigned_machine:
        machine = load_many(Machine, [employee.assigned_machine]).get(employee.assigned_machine)

    return {
        "_id": employee.id,
        "employeeId": employee.employee_id,
        "firstName": employee.first_name,
        "lastName": employee.last_name,
        "email": employee.email,
        "phone": employee.phone,
        "department": employee.department,
        "role": employee.role,
        "hireDate": isoformat(employee.hire_date),
        "shift": employee.shift,
        "active": employee.active,
        "assignedMachine": summarize_machine(machine, ASSIGNED_MACHINE_FIELDS),
        **employee.timestamps(),
    }


def serialize_employees(rows: Iterable[Employee]) -> list[dict[str, Any]]:
    rows = list(rows)
    machines = load_many(Machine, (row.assigned_machine for row in rows))
    return [serialize_employee(row, machines.get(row.assigned_machine or "")) for row in rows]


def summarize_employee(employee: Employee | None, fields: tuple[str, ...]) -> dict[str, Any] | None:
    if employee is None:
        return None
    flat = {
        "employeeId": employee.employee_id,
        "firstName": employee.first_name,
        "lastName": employee.last_name,
        "email": employee.email,
        "department": employee.department,
        "role": employee.role,
    }
    return {"_id": employee.id, **{name: flat[name] for name in fields}}
