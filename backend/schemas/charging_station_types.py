"""Pydantic schemas for charging station type API."""
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

CurrentType = Literal["AC", "DC"]

# Fields a PATCH may change. Anything else, id included, is rejected.
CHARGING_STATION_TYPE_MUTABLE_FIELDS = frozenset({"name", "plug_count", "efficiency", "current_type"})

# Seeded on first start when the type table is empty.
DEFAULT_CHARGING_STATION_TYPES: list[dict] = [
    {"name": "Type 1", "plug_count": 2, "efficiency": 0.9, "current_type": "AC"},
    {"name": "Type 2", "plug_count": 4, "efficiency": 0.8, "current_type": "DC"},
    {"name": "Type 3", "plug_count": 3, "efficiency": 0.7, "current_type": "AC"},
    {"name": "Type 4", "plug_count": 4, "efficiency": 0.6, "current_type": "DC"},
    {"name": "Type 5", "plug_count": 5, "efficiency": 0.88, "current_type": "AC"},
]


class ChargingStationTypeCreate(BaseModel):
    """Payload for creating a charging station type. id is optional and must be a UUID."""

    id: str | None = None
    name: str = Field(..., min_length=1)
    plug_count: int = Field(..., ge=0)
    efficiency: float
    current_type: CurrentType


class ChargingStationTypeUpdate(BaseModel):
    """Partial update; only fields present in the request are applied."""

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1)
    plug_count: int | None = Field(default=None, ge=0)
    efficiency: float | None = None
    current_type: CurrentType | None = None


class ChargingStationTypeResponse(BaseModel):
    """Charging station type in API responses."""

    id: str
    name: str
    plug_count: int
    efficiency: float
    current_type: CurrentType
