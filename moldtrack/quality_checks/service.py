"""Persistence and serialisation helpers for quality checks."""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..employees.models import Employee
from ..employees.service import summarize_employee
from ..machines.models import Machine
from ..machines.service import summarize_machine
from ..models import isoformat
from ..persistence import Repository, load_many
from ..production_runs.models import ProductionRun
from ..production_runs.service import summarize_run
from .models import QualityCheck, QualityMeasurement

# Populated reference fields: (run, machine, employee) summaries.
LIST_SUMMARY = (
    ("runId", "partName", "partNumber"),
    ("name", "machineId"),
    ("firstName", "lastName", "employeeId"),
)
DETAIL_SUMMARY = (
    ("runId", "partName", "partNumber", "targetQty", "actualQty"),
    ("name", "machineId", "model", "status"),
    ("firstName", "lastName", "employeeId", "department"),
)


class QualityCheckRepository(Repository[QualityCheck]):
    model = QualityCheck
    label = "Quality check"
    unique_fields = {"check_id": "checkId"}
    references = {
        "production_run_id": (ProductionRun, "productionRunId"),
        "machine_id": (Machine, "machineId"),
        "employee_id": (Employee, "employeeId"),
    }

    def ordering(self):
        return (QualityCheck.check_date.desc(), QualityCheck.created_at.desc())

    def apply_filters(self, statement, filters: dict[str, Any]):
        if filters.get("start_date") is not None:
            statement = statement.where(QualityCheck.check_date >= filters["start_date"])
        if filters.get("end_date") is not None:
            statement = statement.where(QualityCheck.check_date <= filters["end_date"])
        if filters.get("result"):
            statement = statement.where(QualityCheck.result == filters["result"])
        if filters.get("check_type"):
            statement = statement.where(QualityCheck.check_type == filters["check_type"])
        return statement

    def assign(self, instance: QualityCheck, changes: dict[str, Any]) -> None:
        changes = dict(changes)
        measurements = changes.pop("measurements", None)
        super().assign(instance, changes)
        if measurements is not None:
            # Supplied measurements replace the stored sequence.
            instance.measurements = [
                QualityMeasurement(position=index, **measurement)
                for index, measurement in enumerate(measurements)
            ]

    def describe_deleted(self, instance: QualityCheck) -> dict[str, Any]:
        return serialize_check(instance, summary=DETAIL_SUMMARY)


quality_checks = QualityCheckRepository()


def serialize_measurement(measurement: QualityMeasurement) -> dict[str, Any]:
    return {
        "parameter": measurement.parameter,
        "value": measurement.value,
        "unit": measurement.unit,
        "tolerance": measurement.tolerance,
        "actualValue": measurement.actual_value,
        "status": measurement.status,
    }


def serialize_check(
    check: QualityCheck,
    summary: tuple[tuple[str, ...], ...] = DETAIL_SUMMARY,
    lookups: tuple[dict[str, Any], dict[str, Any], dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Return ``check`` with its run, machine and employee populated.

    ``lookups`` holds pre-fetched rows keyed by id; without it each reference
    is loaded individually.
    """

    if lookups is None:
        lookups = (
            load_many(ProductionRun, [check.production_run_id]),
            load_many(Machine, [check.machine_id]),
            load_many(Employee, [check.employee_id]),
        )
    runs, machines, employees = lookups
    run_fields, machine_fields, employee_fields = summary

    return {
        "_id": check.id,
        "checkId": check.check_id,
        "productionRunId": summarize_run(runs.get(check.production_run_id), run_fields),
        "machineId": summarize_machine(machines.get(check.machine_id), machine_fields),
        "employeeId": summarize_employee(employees.get(check.employee_id), employee_fields),
        "checkDate": isoformat(check.check_date),
        "checkType": check.check_type,
        "result": check.result,
        "measurements": [serialize_measurement(item) for item in check.measurements],
        "notes": check.notes,
        "defectsFound": check.defects_found,
        "correctiveAction": check.corrective_action,
        "nextCheckDate": isoformat(check.next_check_date),
        **check.timestamps(),
    }


def serialize_checks(checks: Iterable[QualityCheck]) -> list[dict[str, Any]]:
    """Serialise a list of checks with the list-level summaries, batching lookups."""

    checks = list(checks)
    lookups = (
        load_many(ProductionRun, (check.production_run_id for check in checks)),
        load_many(Machine, (check.machine_id for check in checks)),
        load_many(Employee, (check.employee_id for check in checks)),
    )
    return [serialize_check(check, LIST_SUMMARY, lookups) for check in checks]
