"""Payload schemas for production run endpoints."""
from __future__ import annotations

from typing import Literal, Optional, get_args

from pydantic import Field

from ..validation import (
    Identifier,
    Label,
    Name,
    NonNegativeNumber,
    PositiveNumber,
    Reference,
    Schema,
    Timestamp,
    utcnow,
)

RunStatus = Literal["scheduled", "running", "completed", "paused", "cancelled"]
RUN_STATUSES: tuple[str, ...] = get_args(RunStatus)


class ProductionRunCreate(Schema):
    run_id: Identifier
    machine_id: Reference
    part_number: Name
    part_name: Name
    material: Name
    target_qty: PositiveNumber
    actual_qty: NonNegativeNumber = 0
    status: RunStatus = "scheduled"
    start_time: Timestamp = Field(default_factory=utcnow)
    end_time: Optional[Timestamp] = None
    operator: Optional[Label] = None


class ProductionRunUpdate(Schema):
    run_id: Identifier = None
    machine_id: Reference = None
    part_number: Name = None
    part_name: Name = None
    material: Name = None
    target_qty: PositiveNumber = None
    actual_qty: NonNegativeNumber = None
    status: RunStatus = None
    start_time: Timestamp = None
    end_time: Optional[Timestamp] = None
    operator: Optional[Label] = None
