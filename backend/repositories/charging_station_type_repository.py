"""Charging station type repository: create, get, list, update, count, seed."""
import logging
from typing import Any, Optional

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from models.charging_station_type import ChargingStationType
from schemas.charging_station_types import DEFAULT_CHARGING_STATION_TYPES

LOG = logging.getLogger(__name__)


def create_charging_station_type(
    session: Session,
    *,
    name: str,
    plug_count: int,
    efficiency: float,
    current_type: str,
    type_id: str | None = None,
) -> ChargingStationType:
    """Create a type, commit, and return it. Id is generated if not provided."""
    cs_type = ChargingStationType(
        name=name,
        plug_count=plug_count,
        efficiency=efficiency,
        current_type=current_type,
    )
    if type_id is not None:
        cs_type.id = type_id
    session.add(cs_type)
    session.commit()
    session.refresh(cs_type)
    return cs_type


def get_charging_station_type(session: Session, type_id: str) -> Optional[ChargingStationType]:
    """Return a type by id or None."""
    return session.get(ChargingStationType, type_id)


def list_charging_station_types(
    session: Session,
    filters: dict[str, Any] | None = None,
    *,
    efficiency_range: tuple[float, float] | None = None,
    limit: int | None = None,
    offset: int | None = None,
) -> list[ChargingStationType]:
    """Return types matching equality filters. efficiency_range (inclusive) replaces an efficiency filter."""
    stmt = select(ChargingStationType)
    for field, value in (filters or {}).items():
        if field == "efficiency" and efficiency_range is not None:
            continue
        stmt = stmt.where(getattr(ChargingStationType, field) == value)
    if efficiency_range is not None:
        low, high = efficiency_range
        stmt = stmt.where(ChargingStationType.efficiency.between(low, high))
    if offset:
        stmt = stmt.offset(offset)
    if limit:
        stmt = stmt.limit(limit)
    return list(session.execute(stmt).scalars().all())


def update_charging_station_type(session: Session, type_id: str, changes: dict[str, Any]) -> bool:
    """Apply a partial update and commit. Returns False if no row has that id."""
    if not changes:
        return get_charging_station_type(session, type_id) is not None
    result = session.execute(
        update(ChargingStationType).where(ChargingStationType.id == type_id).values(**changes)
    )
    session.commit()
    return result.rowcount > 0


def count_charging_station_types(session: Session) -> int:
    """Return the number of types (for seeding)."""
    result = session.execute(select(func.count()).select_from(ChargingStationType))
    return result.scalar() or 0


def seed_default_charging_station_types(session: Session) -> int:
    """Insert the default types when the table is empty. Returns how many were created."""
    if count_charging_station_types(session) > 0:
        LOG.info("Charging station types already present, skipping seed")
        return 0
    for defaults in DEFAULT_CHARGING_STATION_TYPES:
        session.add(ChargingStationType(**defaults))
    session.commit()
    LOG.info("Seeded %d default charging station types", len(DEFAULT_CHARGING_STATION_TYPES))
    return len(DEFAULT_CHARGING_STATION_TYPES)
