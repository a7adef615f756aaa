"""Payload schemas for machine endpoints."""
from __future__ import annotations

from typing import Literal, Optional, get_args

from ..validation import Identifier, Label, Name, PositiveNumber, Schema

MachineStatus = Literal["operational", "maintenance", "down", "idle"]
MACHINE_STATUSES: tuple[str, ...] = get_args(MachineStatus)


class MachineCreate(Schema):
    machine_id: Identifier
    name: Name
    model: Optional[Label] = None
    manufacturer: Optional[Label] = None
    tonnage: Optional[PositiveNumber] = None
    location: Optional[Label] = None
    status: MachineStatus = "operational"


class MachineUpdate(Schema):
    machine_id: Identifier = None
    name: Name = None
    model: Optional[Label] = None
    manufacturer: Optional[Label] = None
    tonnage: Optional[PositiveNumber] = None
    location: Optional[Label] = None
    status: MachineStatus = None
