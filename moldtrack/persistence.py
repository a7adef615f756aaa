"""Repository base class mapping validated payloads onto SQLAlchemy rows."""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any, ClassVar, Generic, TypeVar

from flask import current_app
from sqlalchemy.exc import IntegrityError

from .errors import DanglingReference, DuplicateKey, NotFound
from .extensions import db
from .validation import is_object_id, require_object_id

ModelT = TypeVar("ModelT", bound=db.Model)


def load_many(model: type[db.Model], ids: Iterable[str | None]) -> dict[str, Any]:
    """Fetch ``model`` rows for ``ids`` in one query, keyed by id."""

    wanted = {value for value in ids if value}
    if not wanted:
        return {}
    rows = db.session.execute(db.select(model).where(model.id.in_(wanted))).scalars()
    return {row.id: row for row in rows}


class Repository(Generic[ModelT]):
    """CRUD adapter shared by every entity.

    Subclasses set ``model``, ``label``, ``unique_fields`` (attribute name to
    wire field name) and ``references`` (attribute name to ``(model, wire
    field)``), and may override :meth:`ordering`, :meth:`apply_filters` and
    :meth:`assign`.
    """

    model: ClassVar[type]
    label: ClassVar[str] = "Record"
    unique_fields: ClassVar[dict[str, str]] = {}
    references: ClassVar[dict[str, tuple[type, str]]] = {}

    # Queries

    def ordering(self) -> tuple[Any, ...]:
        return (self.model.created_at.desc(),)

    def apply_filters(self, statement, filters: dict[str, Any]):
        return statement

    def find_all(self, limit: int | None = None, **filters: Any) -> list[ModelT]:
        statement = self.apply_filters(db.select(self.model), filters).order_by(*self.ordering())
        if limit is not None:
            statement = statement.limit(limit)
        return list(db.session.execute(statement).scalars())

    def find_by_id(self, record_id: str) -> ModelT:
        instance = db.session.get(self.model, require_object_id(record_id))
        if instance is None:
            raise NotFound(f"{self.label} not found", id=record_id)
        return instance

    # Checks

    def check_references(self, record: dict[str, Any]) -> None:
        """Raise :class:`DanglingReference` for unresolved reference fields in ``record``."""

        dangling: list[dict[str, Any]] = []
        for attr, (target, wire_name) in self.references.items():
            value = record.get(attr)
            if value is None:
                continue
            if not is_object_id(value) or db.session.get(target, value.lower()) is None:
                dangling.append({"field": wire_name, "value": value})
        if dangling:
            raise DanglingReference(dangling)

    def ensure_unique(self, record: dict[str, Any], exclude_id: str | None = None) -> None:
        for attr, wire_name in self.unique_fields.items():
            value = record.get(attr)
            if value is None:
                continue
            statement = db.select(self.model.id).where(getattr(self.model, attr) == value)
            if exclude_id is not None:
                statement = statement.where(self.model.id != exclude_id)
            if db.session.execute(statement).first() is not None:
                raise DuplicateKey(wire_name, value)

    # Writes

    def assign(self, instance: ModelT, changes: dict[str, Any]) -> None:
        for attr, value in changes.items():
            setattr(instance, attr, value)

    def _normalise_references(self, record: dict[str, Any]) -> dict[str, Any]:
        for attr in self.references:
            if isinstance(record.get(attr), str):
                record[attr] = record[attr].lower()
        return record

    def _commit(self, record: dict[str, Any], exclude_id: str | None = None) -> None:
        try:
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            self.ensure_unique(record, exclude_id=exclude_id)
            raise

    def create(self, record: dict[str, Any]) -> ModelT:
        self.ensure_unique(record)
        self.check_references(record)
        record = self._normalise_references(dict(record))

        instance = self.model()
        self.assign(instance, record)
        db.session.add(instance)
        self._commit(record)
        current_app.logger.info("Created %s %s", self.label, instance.id)
        return instance

    def update(self, record_id: str, changes: dict[str, Any]) -> ModelT:
        instance = self.find_by_id(record_id)
        self.ensure_unique(changes, exclude_id=instance.id)
        self.check_references(changes)
        changes = self._normalise_references(dict(changes))

        self.assign(instance, changes)
        self._commit(changes, exclude_id=instance.id)
        current_app.logger.info(
            "Updated %s %s (%s)", self.label, instance.id, ", ".join(sorted(changes))
        )
        return instance

    def describe_deleted(self, instance: ModelT) -> dict[str, Any]:
        return {"_id": instance.id}

    def delete(self, record_id: str) -> dict[str, Any]:
        """Remove the row and return its summary; dependent rows are left untouched."""

        instance = self.find_by_id(record_id)
        summary = self.describe_deleted(instance)
        db.session.delete(instance)
        db.session.commit()
        current_app.logger.info("Deleted %s %s", self.label, summary["_id"])
        return summary
