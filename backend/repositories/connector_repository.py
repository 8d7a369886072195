"""Connector repository: create, get, list, update, count."""
from typing import Any, Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, selectinload

from models.charging_station import ChargingStation
from models.connector import Connector


def _with_station():
    """Load the station and its type alongside each connector."""
    return selectinload(Connector.charging_station).selectinload(ChargingStation.charging_station_type)


def create_connector(
    session: Session,
    *,
    name: str,
    priority: bool,
    charging_station_id: str,
    connector_id: str | None = None,
) -> Connector:
    """Create a connector, commit, and return it with its station loaded."""
    connector = Connector(name=name, priority=priority, charging_station_id=charging_station_id)
    if connector_id is not None:
        connector.id = connector_id
    session.add(connector)
    session.commit()
    return get_connector(session, connector.id, include_station=True)


def get_connector(
    session: Session,
    connector_id: str,
    *,
    include_station: bool = False,
) -> Optional[Connector]:
    """Return a connector by id or None. include_station loads the station and its type."""
    stmt = select(Connector).where(Connector.id == connector_id)
    if include_station:
        stmt = stmt.options(_with_station())
    return session.execute(stmt).scalar_one_or_none()


def list_connectors(
    session: Session,
    filters: dict[str, Any] | None = None,
    *,
    limit: int | None = None,
    offset: int | None = None,
) -> list[Connector]:
    """Return connectors matching equality filters, with their stations loaded."""
    stmt = select(Connector).options(_with_station())
    for field, value in (filters or {}).items():
        stmt = stmt.where(getattr(Connector, field) == value)
    if offset:
        stmt = stmt.offset(offset)
    if limit:
        stmt = stmt.limit(limit)
    return list(session.execute(stmt).scalars().all())


def update_connector(session: Session, connector_id: str, changes: dict[str, Any]) -> bool:
    """Apply a partial update and commit. Returns False if no row has that id."""
    if not changes:
        return get_connector(session, connector_id) is not None
    result = session.execute(
        update(Connector).where(Connector.id == connector_id).values(**changes)
    )
    session.commit()
    return result.rowcount > 0


def count_connectors_by_station(
    session: Session,
    charging_station_id: str,
    *,
    exclude_connector_id: str | None = None,
) -> int:
    """Return the number of connectors attached to a station."""
    stmt = select(func.count()).select_from(Connector).where(
        Connector.charging_station_id == charging_station_id
    )
    if exclude_connector_id is not None:
        stmt = stmt.where(Connector.id != exclude_connector_id)
    return session.execute(stmt).scalar() or 0


def find_priority_connector(
    session: Session,
    charging_station_id: str,
    *,
    exclude_connector_id: str | None = None,
) -> Optional[Connector]:
    """Return the station's priority connector, if any."""
    stmt = select(Connector).where(
        Connector.charging_station_id == charging_station_id,
        Connector.priority.is_(True),
    )
    if exclude_connector_id is not None:
        stmt = stmt.where(Connector.id != exclude_connector_id)
    return session.execute(stmt.limit(1)).scalar_one_or_none()
