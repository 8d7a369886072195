"""Pydantic schemas for charging station API."""
from pydantic import BaseModel, ConfigDict, Field

from schemas.charging_station_types import ChargingStationTypeResponse

# name and id are fixed at creation.
CHARGING_STATION_MUTABLE_FIELDS = frozenset(
    {"device_id", "ip_address", "firmware_version", "charging_station_type_id"}
)


class ChargingStationCreate(BaseModel):
    """Payload for creating a charging station. UUID and IP formats are checked by the handler."""

    id: str | None = None
    name: str = Field(..., min_length=1)
    device_id: str
    ip_address: str
    firmware_version: str = Field(..., min_length=1)
    charging_station_type_id: str


class ChargingStationUpdate(BaseModel):
    """Partial update; only fields present in the request are applied."""

    model_config = ConfigDict(extra="forbid")

    device_id: str | None = None
    ip_address: str | None = None
    firmware_version: str | None = Field(default=None, min_length=1)
    charging_station_type_id: str | None = None


class ChargingStationResponse(BaseModel):
    """Charging station with its type embedded; charging_station_type_id is not exposed."""

    id: str
    name: str
    device_id: str
    ip_address: str
    firmware_version: str
    charging_station_type: ChargingStationTypeResponse
