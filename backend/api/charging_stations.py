"""Charging station API routes."""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from api.charging_station_types import type_to_response
from api.store_errors import store_errors
from auth.guards import require_bearer
from db import get_db
from models.charging_station import ChargingStation
from repositories.charging_station_repository import (
    create_charging_station as repo_create_station,
    get_charging_station as repo_get_station,
    list_charging_stations as repo_list_stations,
    update_charging_station as repo_update_station,
)
from schemas.charging_stations import (
    CHARGING_STATION_MUTABLE_FIELDS,
    ChargingStationCreate,
    ChargingStationResponse,
    ChargingStationUpdate,
)
from utils.errors import InvalidFormatError, NotFoundError
from utils.integrity import require_type_exists
from utils.validators import check_field_whitelist, is_valid_uuid, reject_nulls, require_ip, require_uuid

LOG = logging.getLogger(__name__)

MODEL = "ChargingStation"

router = APIRouter(prefix="/cs", tags=["charging stations"], dependencies=[Depends(require_bearer)])


def station_to_response(s: ChargingStation) -> ChargingStationResponse:
    """Build ChargingStationResponse with the type embedded in place of charging_station_type_id."""
    return ChargingStationResponse(
        id=s.id,
        name=s.name,
        device_id=s.device_id,
        ip_address=s.ip_address,
        firmware_version=s.firmware_version,
        charging_station_type=type_to_response(s.charging_station_type),
    )


@router.post("", response_model=ChargingStationResponse, status_code=status.HTTP_201_CREATED)
def create_charging_station(
    body: ChargingStationCreate,
    db: Session = Depends(get_db),
) -> ChargingStationResponse:
    """Create a charging station. Formats are checked first, then the referenced type."""
    LOG.info("POST /cs with body: %s", body.model_dump())
    station_id = require_uuid(body.id, "id") if body.id is not None else None
    device_id = require_uuid(body.device_id, "device_id")
    ip_address = require_ip(body.ip_address)
    type_id = require_uuid(body.charging_station_type_id, "charging_station_type_id")
    require_type_exists(db, type_id)
    with store_errors(db, MODEL, "creating"):
        station = repo_create_station(
            db,
            name=body.name,
            device_id=device_id,
            ip_address=ip_address,
            firmware_version=body.firmware_version,
            charging_station_type_id=type_id,
            station_id=station_id,
        )
    LOG.info("%s %s successfully created", MODEL, station.id)
    return station_to_response(station)


@router.get("", response_model=list[ChargingStationResponse])
def list_charging_stations(
    name: str | None = None,
    device_id: str | None = None,
    ip_address: str | None = None,
    firmware_version: str | None = None,
    charging_station_type_id: str | None = None,
    limit: int | None = Query(default=None, ge=0),
    offset: int | None = Query(default=None, ge=0),
    db: Session = Depends(get_db),
) -> list[ChargingStationResponse]:
    """List stations, each with its type embedded."""
    filters: dict[str, Any] = {
        field: value
        for field, value in (
            ("name", name),
            ("device_id", device_id.lower() if device_id else None),
            ("ip_address", ip_address),
            ("firmware_version", firmware_version),
            ("charging_station_type_id", charging_station_type_id.lower() if charging_station_type_id else None),
        )
        if value is not None
    }
    LOG.info("Fetching %ss with conditions: %s, limit: %s, offset: %s", MODEL, filters, limit, offset)
    with store_errors(db, MODEL, "fetching"):
        rows = repo_list_stations(db, filters, limit=limit, offset=offset)
    return [station_to_response(s) for s in rows]


@router.get("/{station_id}", response_model=ChargingStationResponse)
def get_charging_station(station_id: str, db: Session = Depends(get_db)) -> ChargingStationResponse:
    """Get a station by id, with its type embedded."""
    LOG.info("GET /cs/%s", station_id)
    station = repo_get_station(db, station_id.lower(), include_type=True) if is_valid_uuid(station_id) else None
    if station is None:
        LOG.info("%s not found for ID: %s", MODEL, station_id)
        raise NotFoundError()
    return station_to_response(station)


@router.patch("/{station_id}", response_class=Response)
def update_charging_station(
    station_id: str,
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
) -> Response:
    """Partially update a station. name and id cannot change."""
    LOG.info("PATCH /cs/%s with body: %s", station_id, payload)
    check_field_whitelist(CHARGING_STATION_MUTABLE_FIELDS, payload)
    try:
        body = ChargingStationUpdate.model_validate(payload)
    except ValidationError as e:
        raise InvalidFormatError(f"Given fields are invalid: {e.errors()[0]['msg']}") from e
    changes = body.model_dump(exclude_unset=True)
    reject_nulls(changes)
    if "device_id" in changes:
        changes["device_id"] = require_uuid(changes["device_id"], "device_id")
    if "ip_address" in changes:
        require_ip(changes["ip_address"])
    if "charging_station_type_id" in changes:
        changes["charging_station_type_id"] = require_uuid(
            changes["charging_station_type_id"], "charging_station_type_id"
        )
    if not is_valid_uuid(station_id):
        raise NotFoundError()
    if "charging_station_type_id" in changes:
        require_type_exists(db, changes["charging_station_type_id"])
    with store_errors(db, MODEL, "updating"):
        updated = repo_update_station(db, station_id.lower(), changes)
    if not updated:
        LOG.info("%s not found for ID: %s", MODEL, station_id)
        raise NotFoundError()
    LOG.info("%s with id: %s successfully updated", MODEL, station_id)
    return Response(status_code=status.HTTP_200_OK)
