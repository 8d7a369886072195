"""Pydantic schemas for connector API."""
from pydantic import BaseModel, ConfigDict, Field

from schemas.charging_stations import ChargingStationResponse

CONNECTOR_MUTABLE_FIELDS = frozenset({"priority", "charging_station_id"})


class ConnectorCreate(BaseModel):
    """Payload for creating a connector."""

    id: str | None = None
    name: str = Field(..., min_length=1)
    priority: bool
    charging_station_id: str


class ConnectorUpdate(BaseModel):
    """Partial update; only fields present in the request are applied."""

    model_config = ConfigDict(extra="forbid")

    priority: bool | None = None
    charging_station_id: str | None = None


class ConnectorResponse(BaseModel):
    """Connector with its station embedded; charging_station_id is not exposed."""

    id: str
    name: str
    priority: bool
    charging_station: ChargingStationResponse
