"""Pydantic schemas for the sample resource."""
from pydantic import BaseModel, ConfigDict


class SampleCreateIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    test: int


class SampleUpdateIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    test: int
