"""Pydantic schemas for the user resource."""
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class ShiftBand(str, Enum):
    """Fixed 8-hour shift bands."""
    early = "0-8"
    day = "8-16"
    late = "16-24"


class UserCreateIn(BaseModel):
    """Schema for creating a user."""
    model_config = ConfigDict(extra="forbid")

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    password: str = Field(..., min_length=6, max_length=50)
    shift_hours: Optional[ShiftBand] = None


class UserUpdateIn(BaseModel):
    """Schema for updating a user (partial updates).

    Shift bounds are not accepted here; they only change through start-shift.
    """
    model_config = ConfigDict(extra="forbid")

    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN, max_length=254)
    password: Optional[str] = Field(None, min_length=6, max_length=50)
    shift_hours: Optional[ShiftBand] = None


class LoginIn(BaseModel):
    """Password-based login request."""
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=254)
    password: str = Field(..., min_length=6, max_length=16)


class StartShiftIn(BaseModel):
    """Start-shift request. The band is checked by the shift policy, not here."""
    shift_hours: Any = None
