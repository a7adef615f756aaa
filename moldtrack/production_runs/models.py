"""Database model for production runs."""
from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from ..extensions import db
from ..models import TimestampMixin
from ..validation import utcnow


class ProductionRun(TimestampMixin, db.Model):
    """A batch of parts moulded on one machine.

    ``machine_id`` holds the machine's generated id without a database
    constraint; a deleted machine leaves the reference dangling.
    """

    __tablename__ = "production_runs"

    run_id: Mapped[str] = mapped_column(db.String(64), unique=True, nullable=False)
    machine_id: Mapped[str] = mapped_column(db.String(24), nullable=False, index=True)
    part_number: Mapped[str] = mapped_column(db.String(120), nullable=False)
    part_name: Mapped[str] = mapped_column(db.String(255), nullable=False)
    material: Mapped[str] = mapped_column(db.String(120), nullable=False)
    target_qty: Mapped[float] = mapped_column(db.Float, nullable=False)
    actual_qty: Mapped[float] = mapped_column(db.Float, nullable=False, default=0)
    status: Mapped[str] = mapped_column(db.String(16), nullable=False, default="scheduled")
    start_time: Mapped[datetime] = mapped_column(db.DateTime, nullable=False, default=utcnow)
    end_time: Mapped[datetime | None] = mapped_column(db.DateTime, nullable=True)
    operator: Mapped[str | None] = mapped_column(db.String(120), nullable=True)
