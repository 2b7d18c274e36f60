"""Record store adapter: condition-based create/read/update/delete over SQLAlchemy.

Store errors never raise out of this module. Every method returns a
``StoreFailure`` instead, which services turn into a ``ControllerError`` (or a
``ConflictError`` when a unique constraint rejected the write).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Union

from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session, sessionmaker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreFailure:
    """Failure indicator returned instead of raising.

    ``conflict`` is set when a constraint (e.g. a unique email) rejected the write.
    """
    error: str
    failed: bool = True
    conflict: bool = False


@dataclass(frozen=True)
class UpdateAck:
    """Acknowledgment of a bulk update (or soft delete)."""
    matched_count: int
    modified_count: int
    ok: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ok": self.ok,
            "matched_count": self.matched_count,
            "modified_count": self.modified_count,
        }


Record = Dict[str, Any]
ReadResult = Union[List[Record], StoreFailure]
WriteResult = Union[UpdateAck, StoreFailure]


def to_column_value(value: Any) -> Any:
    """Aware datetimes are persisted as naive UTC (SQLite drops tzinfo)."""
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def row_to_dict(row) -> Record:
    """Convert an ORM row into a plain dict of its column values."""
    return {attr.key: getattr(row, attr.key) for attr in inspect(row).mapper.column_attrs}


class RecordStore:
    """Persistence boundary for one model.

    Conditions and data are plain dicts keyed by column name, e.g.
    ``{"id": 1, "is_active": True}``. A ``None`` condition value matches NULL.
    """

    def __init__(self, model, session_factory: sessionmaker):
        self.model = model
        self.session_factory = session_factory

    def _query(self, session: Session, conditions: Dict[str, Any]) -> Query:
        values = {key: to_column_value(value) for key, value in conditions.items()}
        return session.query(self.model).filter_by(**values)

    def _failure(self, operation: str, exc: Exception) -> StoreFailure:
        logger.error(f"{self.model.__name__}.{operation} failed: {exc}")
        return StoreFailure(error=str(exc), conflict=isinstance(exc, IntegrityError))

    def create_record(self, data: Dict[str, Any]) -> Union[Record, StoreFailure]:
        """Insert a record and return it with generated fields filled in."""
        try:
            with self.session_factory() as session:
                row = self.model(**{key: to_column_value(value) for key, value in data.items()})
                session.add(row)
                session.commit()
                session.refresh(row)
                return row_to_dict(row)
        except (SQLAlchemyError, TypeError) as exc:  # TypeError: unknown column keyword
            return self._failure("create_record", exc)

    def read_records(self, conditions: Dict[str, Any]) -> ReadResult:
        """Return every record matching all conditions (ordered by id)."""
        try:
            with self.session_factory() as session:
                rows = self._query(session, conditions).order_by(self.model.id).all()
                return [row_to_dict(row) for row in rows]
        except SQLAlchemyError as exc:
            return self._failure("read_records", exc)

    def update_records(self, conditions: Dict[str, Any], data: Dict[str, Any]) -> WriteResult:
        """Apply a partial update to every record matching all conditions."""
        try:
            with self.session_factory() as session:
                values = {key: to_column_value(value) for key, value in data.items()}
                matched = self._query(session, conditions).update(
                    values, synchronize_session=False
                )
                session.commit()
                # SQLite reports matched rows; every matched row is rewritten
                return UpdateAck(matched_count=matched, modified_count=matched)
        except SQLAlchemyError as exc:
            return self._failure("update_records", exc)

    def delete_records(self, conditions: Dict[str, Any]) -> WriteResult:
        """Soft delete: flag matching records as deleted and inactive."""
        return self.update_records(conditions, {"is_deleted": True, "is_active": False})
