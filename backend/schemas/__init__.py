# Schemas package
from .charging_station_types import ChargingStationTypeCreate, ChargingStationTypeResponse, ChargingStationTypeUpdate
from .charging_stations import ChargingStationCreate, ChargingStationResponse, ChargingStationUpdate
from .connectors import ConnectorCreate, ConnectorResponse, ConnectorUpdate
from .health import HealthResponse
from .tokens import TokenResponse

__all__ = [
    "ChargingStationCreate",
    "ChargingStationResponse",
    "ChargingStationTypeCreate",
    "ChargingStationTypeResponse",
    "ChargingStationTypeUpdate",
    "ChargingStationUpdate",
    "ConnectorCreate",
    "ConnectorResponse",
    "ConnectorUpdate",
    "HealthResponse",
    "TokenResponse",
]
