"""Charging station repository: create, get, list, update."""
from typing import Any, Optional

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from models.charging_station import ChargingStation


def create_charging_station(
    session: Session,
    *,
    name: str,
    device_id: str,
    ip_address: str,
    firmware_version: str,
    charging_station_type_id: str,
    station_id: str | None = None,
) -> ChargingStation:
    """Create a station, commit, and return it with its type loaded."""
    station = ChargingStation(
        name=name,
        device_id=device_id,
        ip_address=ip_address,
        firmware_version=firmware_version,
        charging_station_type_id=charging_station_type_id,
    )
    if station_id is not None:
        station.id = station_id
    session.add(station)
    session.commit()
    return get_charging_station(session, station.id, include_type=True)


def get_charging_station(
    session: Session,
    station_id: str,
    *,
    include_type: bool = False,
    for_update: bool = False,
) -> Optional[ChargingStation]:
    """Return a station by id or None.

    include_type loads charging_station_type in the same round trip.
    for_update locks the row until the session commits (ignored by SQLite).
    """
    stmt = select(ChargingStation).where(ChargingStation.id == station_id)
    if include_type:
        stmt = stmt.options(selectinload(ChargingStation.charging_station_type))
    if for_update:
        stmt = stmt.with_for_update()
    return session.execute(stmt).scalar_one_or_none()


def list_charging_stations(
    session: Session,
    filters: dict[str, Any] | None = None,
    *,
    limit: int | None = None,
    offset: int | None = None,
) -> list[ChargingStation]:
    """Return stations matching equality filters, with their types loaded."""
    stmt = select(ChargingStation).options(selectinload(ChargingStation.charging_station_type))
    for field, value in (filters or {}).items():
        stmt = stmt.where(getattr(ChargingStation, field) == value)
    if offset:
        stmt = stmt.offset(offset)
    if limit:
        stmt = stmt.limit(limit)
    return list(session.execute(stmt).scalars().all())


def update_charging_station(session: Session, station_id: str, changes: dict[str, Any]) -> bool:
    """Apply a partial update and commit. Returns False if no row has that id."""
    if not changes:
        return get_charging_station(session, station_id) is not None
    result = session.execute(
        update(ChargingStation).where(ChargingStation.id == station_id).values(**changes)
    )
    session.commit()
    return result.rowcount > 0
