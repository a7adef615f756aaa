"""Payload schemas for employee endpoints."""
from __future__ import annotations

from typing import Literal, Optional, get_args

from pydantic import Field, StrictBool

from ..validation import Code, Email, Label, Name, Reference, Schema, Timestamp, utcnow

Department = Literal["Production", "Quality", "Maintenance", "Shipping", "Administration"]
EmployeeRole = Literal["Operator", "Supervisor", "Manager", "Technician", "Inspector", "Administrator"]
Shift = Literal["Morning", "Evening", "Night", "Flexible"]

DEPARTMENTS: tuple[str, ...] = get_args(Department)
EMPLOYEE_ROLES: tuple[str, ...] = get_args(EmployeeRole)
SHIFTS: tuple[str, ...] = get_args(Shift)


class EmployeeCreate(Schema):
    employee_id: Code
    first_name: Name
    last_name: Name
    email: Email
    phone: Optional[Label] = None
    department: Department
    role: EmployeeRole
    hire_date: Timestamp = Field(default_factory=utcnow)
    shift: Shift = "Morning"
    active: StrictBool = True
    assigned_machine: Optional[Reference] = None


class EmployeeUpdate(Schema):
    employee_id: Code = None
    first_name: Name = None
    last_name: Name = None
    email: Email = None
    phone: Optional[Label] = None
    department: Department = None
    role: EmployeeRole = None
    hire_date: Timestamp = None
    shift: Shift = None
    active: StrictBool = None
    assigned_machine: Optional[Reference] = None
