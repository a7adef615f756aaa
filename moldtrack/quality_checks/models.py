"""Database models for quality checks and their measurement lines."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..extensions import db
from ..models import TimestampMixin, new_object_id
from ..validation import utcnow


class QualityCheck(TimestampMixin, db.Model):
    """Inspection of a production run on a machine by an employee.

    The three reference columns carry no database constraint so deleting the
    referenced records leaves the check in place.
    """

    __tablename__ = "quality_checks"

    check_id: Mapped[str] = mapped_column(db.String(64), unique=True, nullable=False)
    production_run_id: Mapped[str] = mapped_column(db.String(24), nullable=False, index=True)
    machine_id: Mapped[str] = mapped_column(db.String(24), nullable=False, index=True)
    employee_id: Mapped[str] = mapped_column(db.String(24), nullable=False, index=True)
    check_date: Mapped[datetime] = mapped_column(
        db.DateTime, nullable=False, default=utcnow, index=True
    )
    check_type: Mapped[str] = mapped_column(db.String(16), nullable=False)
    result: Mapped[str] = mapped_column(db.String(8), nullable=False)
    notes: Mapped[str | None] = mapped_column(db.String(500), nullable=True)
    defects_found: Mapped[int] = mapped_column(db.Integer, nullable=False, default=0)
    corrective_action: Mapped[str | None] = mapped_column(db.String(500), nullable=True)
    next_check_date: Mapped[datetime | None] = mapped_column(db.DateTime, nullable=True)

    measurements: Mapped[list["QualityMeasurement"]] = relationship(
        "QualityMeasurement",
        cascade="all, delete-orphan",
        back_populates="check",
        order_by="QualityMeasurement.position",
    )


class QualityMeasurement(db.Model):
    """One measured parameter of a quality check, kept in submission order."""

    __tablename__ = "quality_measurements"

    id: Mapped[str] = mapped_column(db.String(24), primary_key=True, default=new_object_id)
    quality_check_id: Mapped[str] = mapped_column(
        db.String(24),
        ForeignKey("quality_checks.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(db.Integer, nullable=False, default=0)
    parameter: Mapped[str | None] = mapped_column(db.String(120), nullable=True)
    value: Mapped[float | None] = mapped_column(db.Float, nullable=True)
    unit: Mapped[str | None] = mapped_column(db.String(120), nullable=True)
    tolerance: Mapped[str | None] = mapped_column(db.String(120), nullable=True)
    actual_value: Mapped[float | None] = mapped_column(db.Float, nullable=True)
    status: Mapped[str | None] = mapped_column(db.String(16), nullable=True)

    check: Mapped[QualityCheck] = relationship("QualityCheck", back_populates="measurements")
