"""Persistence and serialisation helpers for production runs."""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..machines.models import Machine
from ..machines.service import serialize_machine
from ..models import isoformat
from ..persistence import Repository, load_many
from .models import ProductionRun


class ProductionRunRepository(Repository[ProductionRun]):
    model = ProductionRun
    label = "Production run"
    unique_fields = {"run_id": "runId"}
    references = {"machine_id": (Machine, "machineId")}

    def ordering(self):
        return (ProductionRun.start_time.desc(), ProductionRun.created_at.desc())

    def apply_filters(self, statement, filters: dict[str, Any]):
        if filters.get("status"):
            statement = statement.where(ProductionRun.status == filters["status"])
        if filters.get("machine_id"):
            statement = statement.where(ProductionRun.machine_id == filters["machine_id"])
        return statement

    def describe_deleted(self, instance: ProductionRun) -> dict[str, Any]:
        return {
            "_id": instance.id,
            "runId": instance.run_id,
            "partName": instance.part_name,
            "partNumber": instance.part_number,
        }


production_runs = ProductionRunRepository()


def serialize_run(run: ProductionRun, machine: Machine | None = None) -> dict[str, Any]:
    """Return ``run`` with its machine populated (``None`` when it no longer exists)."""

    if machine is None:
        machine = load_many(Machine, [run.machine_id]).get(run.machine_id)

    return {
        "_id": run.id,
        "runId": run.run_id,
        "machineId": serialize_machine(machine) if machine else None,
        "partNumber": run.part_number,
        "partName": run.part_name,
        "material": run.material,
        "targetQty": run.target_qty,
        "actualQty": run.actual_qty,
        "status": run.status,
        "startTime": isoformat(run.start_time),
        "endTime": isoformat(run.end_time),
        "operator": run.operator,
        **run.timestamps(),
    }


def serialize_runs(runs: Iterable[ProductionRun]) -> list[dict[str, Any]]:
    runs = list(runs)
    machines = load_many(Machine, (run.machine_id for run in runs))
    return [serialize_run(run, machines.get(run.machine_id)) for run in runs]


def summarize_run(run: ProductionRun | None, fields: tuple[str, ...]) -> dict[str, Any] | None:
    """Return the populated summary of ``run`` without loading its machine."""

    if run is None:
        return None
    flat = {
        "runId": run.run_id,
        "partNumber": run.part_number,
        "partName": run.part_name,
        "material": run.material,
        "targetQty": run.target_qty,
        "actualQty": run.actual_qty,
        "status": run.status,
    }
    return {"_id": run.id, **{name: flat[name] for name in fields}}
