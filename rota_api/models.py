"""SQLAlchemy models for users and samples."""
import time

from sqlalchemy import Boolean, Column, Integer, BigInteger, String, DateTime, func
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _now_ms() -> int:
    return int(time.time() * 1000)


class RecordMixin:
    """Lifecycle columns shared by every stored record."""

    id = Column(Integer, primary_key=True, index=True)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    is_deleted = Column(Boolean, nullable=False, default=False, index=True)
    time_stamp = Column(BigInteger, nullable=False, default=_now_ms)
    created_on = Column(DateTime, nullable=False, default=func.now())
    updated_on = Column(DateTime, nullable=False, default=func.now(), onupdate=func.now())


class User(RecordMixin, Base):
    """User with a single current shift (no history)."""
    __tablename__ = "users"

    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    password = Column(String, nullable=False)  # bcrypt hash
    shift_hours = Column(String, nullable=True)  # "0-8" | "8-16" | "16-24"
    shift_start_time = Column(Integer, nullable=True)
    shift_end_time = Column(Integer, nullable=True)
    shift_start_date = Column(DateTime, nullable=True)  # UTC, naive


class Sample(RecordMixin, Base):
    """Generic sample record."""
    __tablename__ = "samples"

    test = Column(Integer, nullable=False)
