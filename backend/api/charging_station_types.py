"""Charging station type API routes."""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from api.store_errors import store_errors
from auth.guards import require_bearer
from db import get_db
from models.charging_station_type import ChargingStationType
from repositories.charging_station_type_repository import (
    create_charging_station_type as repo_create_type,
    get_charging_station_type as repo_get_type,
    list_charging_station_types as repo_list_types,
    update_charging_station_type as repo_update_type,
)
from schemas.charging_station_types import (
    CHARGING_STATION_TYPE_MUTABLE_FIELDS,
    ChargingStationTypeCreate,
    ChargingStationTypeResponse,
    ChargingStationTypeUpdate,
    CurrentType,
)
from utils.errors import InvalidFormatError, NotFoundError
from utils.validators import check_field_whitelist, is_valid_uuid, reject_nulls, require_uuid

LOG = logging.getLogger(__name__)

MODEL = "ChargingStationType"

router = APIRouter(prefix="/cstype", tags=["charging station types"], dependencies=[Depends(require_bearer)])


def type_to_response(t: ChargingStationType) -> ChargingStationTypeResponse:
    """Build ChargingStationTypeResponse from model instance."""
    return ChargingStationTypeResponse(
        id=t.id,
        name=t.name,
        plug_count=t.plug_count,
        efficiency=t.efficiency,
        current_type=t.current_type,
    )


@router.post("", response_model=ChargingStationTypeResponse, status_code=status.HTTP_201_CREATED)
def create_charging_station_type(
    body: ChargingStationTypeCreate,
    db: Session = Depends(get_db),
) -> ChargingStationTypeResponse:
    """Create a charging station type. A client-supplied id must be a UUID."""
    LOG.info("POST /cstype with body: %s", body.model_dump())
    type_id = require_uuid(body.id, "id") if body.id is not None else None
    with store_errors(db, MODEL, "creating"):
        cs_type = repo_create_type(
            db,
            name=body.name,
            plug_count=body.plug_count,
            efficiency=body.efficiency,
            current_type=body.current_type,
            type_id=type_id,
        )
    LOG.info("%s %s successfully created", MODEL, cs_type.id)
    return type_to_response(cs_type)


@router.get("", response_model=list[ChargingStationTypeResponse])
def list_charging_station_types(
    name: str | None = None,
    plug_count: int | None = None,
    efficiency: float | None = None,
    current_type: CurrentType | None = None,
    min_efficiency: float | None = Query(default=None, alias="minEfficiency"),
    max_efficiency: float | None = Query(default=None, alias="maxEfficiency"),
    limit: int | None = Query(default=None, ge=0),
    offset: int | None = Query(default=None, ge=0),
    db: Session = Depends(get_db),
) -> list[ChargingStationTypeResponse]:
    """List types. minEfficiency and maxEfficiency together form an inclusive range on efficiency."""
    filters: dict[str, Any] = {
        field: value
        for field, value in (
            ("name", name),
            ("plug_count", plug_count),
            ("efficiency", efficiency),
            ("current_type", current_type),
        )
        if value is not None
    }
    efficiency_range = None
    if min_efficiency is not None and max_efficiency is not None:
        efficiency_range = (min_efficiency, max_efficiency)
    LOG.info(
        "Fetching %ss with conditions: %s, efficiency range: %s, limit: %s, offset: %s",
        MODEL, filters, efficiency_range, limit, offset,
    )
    with store_errors(db, MODEL, "fetching"):
        rows = repo_list_types(db, filters, efficiency_range=efficiency_range, limit=limit, offset=offset)
    return [type_to_response(t) for t in rows]


@router.get("/{type_id}", response_model=ChargingStationTypeResponse)
def get_charging_station_type(type_id: str, db: Session = Depends(get_db)) -> ChargingStationTypeResponse:
    """Get a type by id."""
    LOG.info("GET /cstype/%s", type_id)
    cs_type = repo_get_type(db, type_id.lower()) if is_valid_uuid(type_id) else None
    if cs_type is None:
        LOG.info("%s not found for ID: %s", MODEL, type_id)
        raise NotFoundError()
    return type_to_response(cs_type)


@router.patch("/{type_id}", response_class=Response)
def update_charging_station_type(
    type_id: str,
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
) -> Response:
    """Partially update a type. Allowed fields: name, plug_count, efficiency, current_type."""
    LOG.info("PATCH /cstype/%s with body: %s", type_id, payload)
    check_field_whitelist(CHARGING_STATION_TYPE_MUTABLE_FIELDS, payload)
    try:
        body = ChargingStationTypeUpdate.model_validate(payload)
    except ValidationError as e:
        raise InvalidFormatError(f"Given fields are invalid: {e.errors()[0]['msg']}") from e
    changes = body.model_dump(exclude_unset=True)
    reject_nulls(changes)
    if not is_valid_uuid(type_id):
        raise NotFoundError()
    with store_errors(db, MODEL, "updating"):
        updated = repo_update_type(db, type_id.lower(), changes)
    if not updated:
        LOG.info("%s not found for ID: %s", MODEL, type_id)
        raise NotFoundError()
    LOG.info("%s with id: %s successfully updated", MODEL, type_id)
    return Response(status_code=status.HTTP_200_OK)
