"""Shared model helpers and the role vocabulary used for authorization."""
from __future__ import annotations

import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlalchemy.orm import Mapped, mapped_column

from .extensions import db
from .validation import utcnow


def new_object_id() -> str:
    """Return a 24 character lowercase hex identifier."""

    return uuid.uuid4().hex[:24]


class TimestampMixin:
    """Generated ``_id`` plus ``createdAt``/``updatedAt`` columns."""

    id: Mapped[str] = mapped_column(db.String(24), primary_key=True, default=new_object_id)
    created_at: Mapped[datetime] = mapped_column(db.DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        db.DateTime, nullable=False, default=utcnow, onupdate=utcnow
    )

    def timestamps(self) -> dict[str, str | None]:
        return {
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }


class Role(str, Enum):
    """Coarse roles derived from a signed-in identity."""

    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"


# Capabilities each role satisfies; admin implies manager.
ROLE_CAPABILITIES: dict[Role, frozenset[str]] = {
    Role.ADMIN: frozenset({"admin", "manager"}),
    Role.MANAGER: frozenset({"manager"}),
    Role.STAFF: frozenset(),
}


def isoformat(value: datetime | None) -> str | None:
    """Render a stored naive UTC datetime with an explicit UTC offset."""

    return value.replace(tzinfo=timezone.utc).isoformat() if value else None
