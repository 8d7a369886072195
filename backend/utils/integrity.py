"""Cross-entity write rules that need the store: reference existence, connector priority and capacity.

The priority and capacity checks read, then the caller writes. On PostgreSQL the
target station row is locked (SELECT ... FOR UPDATE) until the write commits, so
concurrent connector writes to one station run one after another. SQLite has no
row locks: there two concurrent creates at the capacity boundary can both pass.
The priority rule is also backed by the uq_connector_priority_per_station index.

Capacity is only enforced on connector writes. Lowering a type's plug_count, or moving
a station to a type with fewer plugs, leaves connectors already over the new limit
in place; further connector writes to that station are then rejected.
"""
import logging

from sqlalchemy.orm import Session

from models.charging_station import ChargingStation
from models.charging_station_type import ChargingStationType
from repositories.charging_station_repository import get_charging_station
from repositories.charging_station_type_repository import get_charging_station_type
from repositories.connector_repository import count_connectors_by_station, find_priority_connector
from utils.errors import InvariantViolationError, UnprocessableReferenceError

LOG = logging.getLogger(__name__)


def require_type_exists(session: Session, type_id: str) -> ChargingStationType:
    """Return the referenced charging station type or raise UnprocessableReferenceError."""
    cs_type = get_charging_station_type(session, type_id)
    if cs_type is None:
        LOG.warning("ChargingStationType %s referenced but does not exist", type_id)
        raise UnprocessableReferenceError("Given UUID does not exist")
    return cs_type


def require_station_exists(session: Session, station_id: str) -> ChargingStation:
    """Return the referenced station (type loaded, row locked) or raise UnprocessableReferenceError."""
    station = get_charging_station(session, station_id, include_type=True, for_update=True)
    if station is None or station.charging_station_type is None:
        LOG.warning("ChargingStation %s referenced but does not exist", station_id)
        raise UnprocessableReferenceError("Given UUID does not exist or charging_station_type is missing")
    return station


def check_priority_invariant(
    session: Session,
    station_id: str,
    requested_priority: bool,
    *,
    exclude_connector_id: str | None = None,
) -> None:
    """A station may have at most one priority connector."""
    if not requested_priority:
        return
    existing = find_priority_connector(session, station_id, exclude_connector_id=exclude_connector_id)
    if existing is not None:
        message = f"Only 1 priority connector possible for ChargingStation with id: {station_id}."
        LOG.warning(message)
        raise InvariantViolationError(message)


def check_capacity_invariant(
    session: Session,
    station: ChargingStation,
    *,
    exclude_connector_id: str | None = None,
) -> None:
    """Reject one more connector once the station holds plug_count of them."""
    limit = station.charging_station_type.plug_count
    count = count_connectors_by_station(session, station.id, exclude_connector_id=exclude_connector_id)
    if count >= limit:
        message = f"Unable to add more connectors to ChargingStation with id: {station.id}"
        LOG.warning("%s (%d of %d plugs used)", message, count, limit)
        raise InvariantViolationError(message)
