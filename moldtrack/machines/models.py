"""Database model for injection-moulding machines."""
from __future__ import annotations

from sqlalchemy.orm import Mapped, mapped_column

from ..extensions import db
from ..models import TimestampMixin


class Machine(TimestampMixin, db.Model):
    """A press on the line, identified by a human-assigned ``machine_id``."""

    __tablename__ = "machines"

    machine_id: Mapped[str] = mapped_column(db.String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(db.String(120), nullable=False)
    model: Mapped[str | None] = mapped_column(db.String(120), nullable=True)
    manufacturer: Mapped[str | None] = mapped_column(db.String(120), nullable=True)
    tonnage: Mapped[float | None] = mapped_column(db.Float, nullable=True)
    location: Mapped[str | None] = mapped_column(db.String(120), nullable=True)
    status: Mapped[str] = mapped_column(db.String(16), nullable=False, default="operational")
