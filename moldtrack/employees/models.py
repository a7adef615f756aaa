"""Database model for employees."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from ..extensions import db
from ..models import TimestampMixin
from ..validation import utcnow


class Employee(TimestampMixin, db.Model):
    """A member of staff, optionally assigned to a machine."""

    __tablename__ = "employees"

    employee_id: Mapped[str] = mapped_column(db.String(64), unique=True, nullable=False)
    first_name: Mapped[str] = mapped_column(db.String(120), nullable=False)
    last_name: Mapped[str] = mapped_column(db.String(120), nullable=False)
    email: Mapped[str] = mapped_column(db.String(255), unique=True, nullable=False)
    phone: Mapped[str | None] = mapped_column(db.String(120), nullable=True)
    department: Mapped[str] = mapped_column(db.String(32), nullable=False)
    role: Mapped[str] = mapped_column(db.String(32), nullable=False)
    hire_date: Mapped[datetime] = mapped_column(db.DateTime, nullable=False, default=utcnow)
    shift: Mapped[str] = mapped_column(db.String(16), nullable=False, default="Morning")
    active: Mapped[bool] = mapped_column(db.Boolean, nullable=False, default=True)
    assigned_machine: Mapped[str | None] = mapped_column(db.String(24), nullable=True)
