"""Integration tests: charging station and connector repositories."""
import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from repositories.charging_station_repository import (
    create_charging_station,
    get_charging_station,
    list_charging_stations,
    update_charging_station,
)
from repositories.charging_station_type_repository import create_charging_station_type
from repositories.connector_repository import (
    count_connectors_by_station,
    create_connector,
    find_priority_connector,
    get_connector,
    list_connectors,
    update_connector,
)

pytestmark = pytest.mark.integration


@pytest.fixture
def cs_type(db_session):
    return create_charging_station_type(
        db_session, name="Station Repo Type", plug_count=3, efficiency=0.7, current_type="AC"
    )


def _station(db_session, type_id, name="Station A"):
    return create_charging_station(
        db_session,
        name=name,
        device_id=str(uuid.uuid4()),
        ip_address="10.0.0.1",
        firmware_version="1.0.0",
        charging_station_type_id=type_id,
    )


def test_create_station_loads_type(db_session, cs_type):
    station = _station(db_session, cs_type.id)
    assert station.charging_station_type.name == "Station Repo Type"
    found = get_charging_station(db_session, station.id, include_type=True)
    assert found.charging_station_type_id == cs_type.id


def test_station_foreign_key_enforced(db_session):
    """The store rejects a station whose type does not exist."""
    with pytest.raises(IntegrityError):
        _station(db_session, str(uuid.uuid4()))
    db_session.rollback()


def test_list_and_update_station(db_session, cs_type):
    a = _station(db_session, cs_type.id, "A")
    _station(db_session, cs_type.id, "B")
    assert [s.name for s in list_charging_stations(db_session, {"name": "A"})] == ["A"]
    assert update_charging_station(db_session, a.id, {"firmware_version": "2.0.0"}) is True
    db_session.expire_all()
    assert get_charging_station(db_session, a.id).firmware_version == "2.0.0"
    assert update_charging_station(db_session, str(uuid.uuid4()), {"firmware_version": "x"}) is False


def test_connector_counts_and_priority_lookup(db_session, cs_type):
    station = _station(db_session, cs_type.id)
    c1 = create_connector(db_session, name="C1", priority=True, charging_station_id=station.id)
    create_connector(db_session, name="C2", priority=False, charging_station_id=station.id)
    assert count_connectors_by_station(db_session, station.id) == 2
    assert count_connectors_by_station(db_session, station.id, exclude_connector_id=c1.id) == 1
    assert find_priority_connector(db_session, station.id).id == c1.id
    assert find_priority_connector(db_session, station.id, exclude_connector_id=c1.id) is None


def test_priority_unique_index(db_session, cs_type):
    """The database itself refuses a second priority connector on one station."""
    station = _station(db_session, cs_type.id)
    create_connector(db_session, name="P1", priority=True, charging_station_id=station.id)
    with pytest.raises(IntegrityError):
        create_connector(db_session, name="P2", priority=True, charging_station_id=station.id)
    db_session.rollback()


def test_priority_index_allows_one_per_station(db_session, cs_type):
    a = _station(db_session, cs_type.id, "A")
    b = _station(db_session, cs_type.id, "B")
    create_connector(db_session, name="PA", priority=True, charging_station_id=a.id)
    create_connector(db_session, name="PB", priority=True, charging_station_id=b.id)
    create_connector(db_session, name="NA", priority=False, charging_station_id=a.id)
    assert len(list_connectors(db_session, {"priority": True})) == 2


def test_connector_with_station_and_update(db_session, cs_type):
    a = _station(db_session, cs_type.id, "A")
    b = _station(db_session, cs_type.id, "B")
    connector = create_connector(db_session, name="Mover", priority=False, charging_station_id=a.id)
    assert connector.charging_station.charging_station_type.id == cs_type.id
    assert update_connector(db_session, connector.id, {"charging_station_id": b.id}) is True
    db_session.expire_all()
    moved = get_connector(db_session, connector.id, include_station=True)
    assert moved.charging_station.name == "B"
