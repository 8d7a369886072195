"""Connector API routes."""
import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Response, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from api.charging_stations import station_to_response
from api.store_errors import store_errors
from auth.guards import require_bearer
from db import get_db
from models.connector import Connector
from repositories.connector_repository import (
    create_connector as repo_create_connector,
    get_connector as repo_get_connector,
    list_connectors as repo_list_connectors,
    update_connector as repo_update_connector,
)
from schemas.connectors import CONNECTOR_MUTABLE_FIELDS, ConnectorCreate, ConnectorResponse, ConnectorUpdate
from utils.errors import InvalidFormatError, NotFoundError
from utils.integrity import check_capacity_invariant, check_priority_invariant, require_station_exists
from utils.validators import check_field_whitelist, is_valid_uuid, reject_nulls, require_uuid

LOG = logging.getLogger(__name__)

MODEL = "Connector"

router = APIRouter(prefix="/connector", tags=["connectors"], dependencies=[Depends(require_bearer)])


def connector_to_response(c: Connector) -> ConnectorResponse:
    """Build ConnectorResponse with the station embedded in place of charging_station_id."""
    return ConnectorResponse(
        id=c.id,
        name=c.name,
        priority=c.priority,
        charging_station=station_to_response(c.charging_station),
    )


@router.post("", response_model=ConnectorResponse, status_code=status.HTTP_201_CREATED)
def create_connector(
    body: ConnectorCreate,
    db: Session = Depends(get_db),
) -> ConnectorResponse:
    """Create a connector: station must exist, then priority and plug capacity are checked."""
    LOG.info("POST /connector with body: %s", body.model_dump())
    connector_id = require_uuid(body.id, "id") if body.id is not None else None
    station_id = require_uuid(body.charging_station_id, "charging_station_id")
    with store_errors(db, MODEL, "creating"):
        station = require_station_exists(db, station_id)
        check_priority_invariant(db, station_id, body.priority)
        check_capacity_invariant(db, station)
        connector = repo_create_connector(
            db,
            name=body.name,
            priority=body.priority,
            charging_station_id=station_id,
            connector_id=connector_id,
        )
    LOG.info("%s %s successfully created", MODEL, connector.id)
    return connector_to_response(connector)


@router.get("", response_model=list[ConnectorResponse])
def list_connectors(
    name: str | None = None,
    priority: bool | None = None,
    charging_station_id: str | None = None,
    limit: int | None = Query(default=None, ge=0),
    offset: int | None = Query(default=None, ge=0),
    db: Session = Depends(get_db),
) -> list[ConnectorResponse]:
    """List connectors, each with its station embedded."""
    filters: dict[str, Any] = {
        field: value
        for field, value in (
            ("name", name),
            ("priority", priority),
            ("charging_station_id", charging_station_id.lower() if charging_station_id else None),
        )
        if value is not None
    }
    LOG.info("Fetching %ss with conditions: %s, limit: %s, offset: %s", MODEL, filters, limit, offset)
    with store_errors(db, MODEL, "fetching"):
        rows = repo_list_connectors(db, filters, limit=limit, offset=offset)
    return [connector_to_response(c) for c in rows]


@router.get("/{connector_id}", response_model=ConnectorResponse)
def get_connector(connector_id: str, db: Session = Depends(get_db)) -> ConnectorResponse:
    """Get a connector by id, with its station embedded."""
    LOG.info("GET /connector/%s", connector_id)
    connector = (
        repo_get_connector(db, connector_id.lower(), include_station=True) if is_valid_uuid(connector_id) else None
    )
    if connector is None:
        LOG.info("%s not found for ID: %s", MODEL, connector_id)
        raise NotFoundError()
    return connector_to_response(connector)


@router.patch("/{connector_id}", response_class=Response)
def update_connector(
    connector_id: str,
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
) -> Response:
    """Partially update a connector (priority, charging_station_id).

    When either field is present, the effective station (new, else current) and
    effective priority (new, else current) are re-checked. Capacity is checked
    only when the connector moves to a different station.
    """
    LOG.info("PATCH /connector/%s with body: %s", connector_id, payload)
    check_field_whitelist(CONNECTOR_MUTABLE_FIELDS, payload)
    try:
        body = ConnectorUpdate.model_validate(payload)
    except ValidationError as e:
        raise InvalidFormatError(f"Given fields are invalid: {e.errors()[0]['msg']}") from e
    changes = body.model_dump(exclude_unset=True)
    reject_nulls(changes)
    if "charging_station_id" in changes:
        changes["charging_station_id"] = require_uuid(changes["charging_station_id"], "charging_station_id")
    if not is_valid_uuid(connector_id):
        raise NotFoundError()
    connector_id = connector_id.lower()

    with store_errors(db, MODEL, "updating"):
        if changes:
            current = repo_get_connector(db, connector_id)
            if current is None:
                LOG.info("%s not found for ID: %s", MODEL, connector_id)
                raise NotFoundError()
            target_station_id = changes.get("charging_station_id", current.charging_station_id)
            moving = target_station_id != current.charging_station_id
            station = require_station_exists(db, target_station_id) if moving else None
            check_priority_invariant(
                db,
                target_station_id,
                changes.get("priority", current.priority),
                exclude_connector_id=connector_id,
            )
            if station is not None:
                check_capacity_invariant(db, station, exclude_connector_id=connector_id)
        updated = repo_update_connector(db, connector_id, changes)
    if not updated:
        LOG.info("%s not found for ID: %s", MODEL, connector_id)
        raise NotFoundError()
    LOG.info("%s with id: %s successfully updated", MODEL, connector_id)
    return Response(status_code=status.HTTP_200_OK)
