"""API tests: /cs endpoints."""
import uuid

import pytest

pytestmark = pytest.mark.api

URL = "/api/v1/cs"


@pytest.fixture
def type_id(client, auth_headers):
    """Id of the seeded 'Type 1' charging station type."""
    r = client.get("/api/v1/cstype", params={"name": "Type 1"}, headers=auth_headers)
    return r.json()[0]["id"]


def _station_body(type_id, **overrides):
    body = {
        "name": "CS-1",
        "device_id": str(uuid.uuid4()),
        "ip_address": "192.168.0.10",
        "firmware_version": "1.0.0",
        "charging_station_type_id": type_id,
    }
    body.update(overrides)
    return body


def test_create_embeds_type(client, auth_headers, type_id):
    """The response carries the type object and no charging_station_type_id."""
    r = client.post(URL, json=_station_body(type_id), headers=auth_headers)
    assert r.status_code == 201
    data = r.json()
    assert "charging_station_type_id" not in data
    assert data["charging_station_type"]["id"] == type_id
    assert data["charging_station_type"]["name"] == "Type 1"
    assert data["ip_address"] == "192.168.0.10"


def test_create_ipv6(client, auth_headers, type_id):
    r = client.post(URL, json=_station_body(type_id, ip_address="fe80::1"), headers=auth_headers)
    assert r.status_code == 201


def test_create_unknown_type_422(client, auth_headers):
    r = client.post(URL, json=_station_body(str(uuid.uuid4())), headers=auth_headers)
    assert r.status_code == 422
    assert r.json() == {"error": "Given UUID does not exist"}


@pytest.mark.parametrize(
    "overrides,message",
    [
        ({"ip_address": "999.1.1.1"}, "Given ip_address is invalid"),
        ({"ip_address": "localhost"}, "Given ip_address is invalid"),
        ({"device_id": "device-1"}, "Given device_id is invalid"),
        ({"id": "abc"}, "Given id is invalid"),
        ({"charging_station_type_id": "abc"}, "Given charging_station_type_id is invalid"),
    ],
)
def test_create_bad_format_400(client, auth_headers, type_id, overrides, message):
    r = client.post(URL, json=_station_body(type_id, **overrides), headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {"error": message}


def test_create_bad_format_wins_over_missing_type(client, auth_headers):
    """A malformed field is reported as 400 even when the type does not exist."""
    r = client.post(URL, json=_station_body(str(uuid.uuid4()), ip_address="nope"), headers=auth_headers)
    assert r.status_code == 400


def test_create_duplicate_name_400(client, auth_headers, type_id):
    assert client.post(URL, json=_station_body(type_id), headers=auth_headers).status_code == 201
    r = client.post(URL, json=_station_body(type_id), headers=auth_headers)
    assert r.status_code == 400


def test_create_with_colliding_id_400(client, auth_headers, type_id, db_session):
    """A valid id that already belongs to a station is rejected as 400, not 500."""
    station_id = client.post(URL, json=_station_body(type_id), headers=auth_headers).json()["id"]
    # Each production request gets its own session.
    db_session.expunge_all()
    r = client.post(URL, json=_station_body(type_id, id=station_id, name="CS-2"), headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Unique constraint violation."}
    assert client.get(f"{URL}/{station_id}", headers=auth_headers).json()["name"] == "CS-1"


def test_get_and_list(client, auth_headers, type_id):
    station_id = client.post(URL, json=_station_body(type_id), headers=auth_headers).json()["id"]
    client.post(URL, json=_station_body(type_id, name="CS-2", firmware_version="2.0"), headers=auth_headers)

    r_get = client.get(f"{URL}/{station_id}", headers=auth_headers)
    assert r_get.status_code == 200
    assert r_get.json()["name"] == "CS-1"

    r_list = client.get(URL, params={"firmware_version": "2.0"}, headers=auth_headers)
    assert [s["name"] for s in r_list.json()] == ["CS-2"]

    r_type = client.get(URL, params={"charging_station_type_id": type_id}, headers=auth_headers)
    assert len(r_type.json()) == 2


def test_get_unknown_404(client, auth_headers):
    r = client.get(f"{URL}/{uuid.uuid4()}", headers=auth_headers)
    assert r.status_code == 404
    assert r.content == b""


def test_patch_firmware_and_type(client, auth_headers, type_id):
    station_id = client.post(URL, json=_station_body(type_id), headers=auth_headers).json()["id"]
    other_type = client.get("/api/v1/cstype", params={"name": "Type 2"}, headers=auth_headers).json()[0]["id"]
    r = client.patch(
        f"{URL}/{station_id}",
        json={"firmware_version": "1.1.0", "charging_station_type_id": other_type},
        headers=auth_headers,
    )
    assert r.status_code == 200
    data = client.get(f"{URL}/{station_id}", headers=auth_headers).json()
    assert data["firmware_version"] == "1.1.0"
    assert data["charging_station_type"]["name"] == "Type 2"


@pytest.mark.parametrize("payload", [{"name": "Renamed"}, {"id": str(uuid.uuid4())}])
def test_patch_immutable_field_400(client, auth_headers, type_id, payload):
    station_id = client.post(URL, json=_station_body(type_id), headers=auth_headers).json()["id"]
    r = client.patch(f"{URL}/{station_id}", json=payload, headers=auth_headers)
    assert r.status_code == 400
    assert client.get(f"{URL}/{station_id}", headers=auth_headers).json()["name"] == "CS-1"


def test_patch_unknown_type_422(client, auth_headers, type_id):
    station_id = client.post(URL, json=_station_body(type_id), headers=auth_headers).json()["id"]
    r = client.patch(f"{URL}/{station_id}", json={"charging_station_type_id": str(uuid.uuid4())}, headers=auth_headers)
    assert r.status_code == 422


def test_patch_bad_ip_400(client, auth_headers, type_id):
    station_id = client.post(URL, json=_station_body(type_id), headers=auth_headers).json()["id"]
    r = client.patch(f"{URL}/{station_id}", json={"ip_address": "1.2.3"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json() == {"error": "Given ip_address is invalid"}


def test_patch_unknown_station_404(client, auth_headers):
    r = client.patch(f"{URL}/{uuid.uuid4()}", json={"firmware_version": "2"}, headers=auth_headers)
    assert r.status_code == 404


def test_requires_bearer(client):
    assert client.get(URL).status_code == 401
