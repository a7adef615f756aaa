"""Payload schemas for quality check endpoints."""
from __future__ import annotations

from typing import Literal, Optional, get_args

from pydantic import Field

from ..validation import Code, Count, Label, Number, Reference, Schema, Text, Timestamp, utcnow

CheckType = Literal["Visual", "Measurement", "Weight", "Dimensional", "Packaging", "Material"]
CheckResult = Literal["Pass", "Fail", "Rework", "Hold"]
MeasurementStatus = Literal["Within", "Out of Spec"]

CHECK_TYPES: tuple[str, ...] = get_args(CheckType)
CHECK_RESULTS: tuple[str, ...] = get_args(CheckResult)


class Measurement(Schema):
    parameter: Optional[Label] = None
    value: Optional[Number] = None
    unit: Optional[Label] = None
    tolerance: Optional[Label] = None
    actual_value: Optional[Number] = None
    status: Optional[MeasurementStatus] = None


class QualityCheckCreate(Schema):
    check_id: Code
    production_run_id: Reference
    machine_id: Reference
    employee_id: Reference
    check_date: Timestamp = Field(default_factory=utcnow)
    check_type: CheckType
    result: CheckResult
    measurements: list[Measurement] = Field(default_factory=list)
    notes: Optional[Text] = None
    defects_found: Count = 0
    corrective_action: Optional[Text] = None
    next_check_date: Optional[Timestamp] = None


class QualityCheckUpdate(Schema):
    check_id: Code = None
    production_run_id: Reference = None
    machine_id: Reference = None
    employee_id: Reference = None
    check_date: Timestamp = None
    check_type: CheckType = None
    result: CheckResult = None
    measurements: list[Measurement] = None
    notes: Optional[Text] = None
    defects_found: Count = None
    corrective_action: Optional[Text] = None
    next_check_date: Optional[Timestamp] = None
