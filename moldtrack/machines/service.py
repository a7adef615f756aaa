"""Persistence and serialisation helpers for machines."""
from __future__ import annotations

from typing import Any

from ..persistence import Repository
from .models import Machine


class MachineRepository(Repository[Machine]):
    model = Machine
    label = "Machine"
    unique_fields = {"machine_id": "machineId"}

    def ordering(self):
        return (Machine.machine_id.asc(),)

    def apply_filters(self, statement, filters: dict[str, Any]):
        if filters.get("status"):
            statement = statement.where(Machine.status == filters["status"])
        return statement

    def describe_deleted(self, instance: Machine) -> dict[str, Any]:
        return summarize_machine(instance, ("machineId", "name"))


machines = MachineRepository()


def serialize_machine(machine: Machine) -> dict[str, Any]:
    """Return a JSON-serialisable representation of ``machine``."""

    return {
        "_id": machine.id,
        "machineId": machine.machine_id,
        "name": machine.name,
        "model": machine.model,
        "manufacturer": machine.manufacturer,
        "tonnage": machine.tonnage,
        "location": machine.location,
        "status": machine.status,
        **machine.timestamps(),
    }


def summarize_machine(machine: Machine | None, fields: tuple[str, ...]) -> dict[str, Any] | None:
    """Return the populated summary of ``machine`` restricted to ``fields``."""

    if machine is None:
        return None
    full = serialize_machine(machine)
    return {"_id": machine.id, **{name: full[name] for name in fields}}
