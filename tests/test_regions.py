"""
Region (Wereda) endpoint tests.
"""

from datetime import datetime
from uuid import UUID, uuid4

import pytest

from geomonitor.controllers.region_controller import RegionController
from geomonitor.core.exceptions import GeospatialError, PersistenceError
from geomonitor.core.permissions import PermissionChecker
from geomonitor.schemas.principal import Principal
from geomonitor.schemas.region import RegionCreate, RegionUpdate
from geomonitor.services.audit_log_service import AuditLogService
from geomonitor.services.region_service import RegionService

from factories import auth_headers, create_branch, create_user, load_branch

BASE = "/geospatial/regions"


async def create_region(client, headers, w_name, w_code):
    response = await client.post(f"{BASE}/create", json={"w_name": w_name, "w_code": w_code}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_region_assigns_timestamps(test_client, admin_headers):
    response = await test_client.post(
        f"{BASE}/create",
        json={"w_name": "Kersa", "w_code": "W-01", "created_at": "1999-01-01T00:00:00"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["w_name"] == "Kersa"
    assert data["w_code"] == "W-01"
    assert UUID(data["id"])
    assert data["created_at"] == data["updated_at"]
    assert not data["created_at"].startswith("1999")


@pytest.mark.asyncio
async def test_create_region_reports_every_missing_field(test_client, admin_headers):
    response = await test_client.post(f"{BASE}/create", json={"w_code": "  "}, headers=admin_headers)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["type"] == "WEREDA_CREATION_ERROR"
    assert error["message"] == "Wereda Name is Empty!!; Wereda code is Empty!!"
    assert [item["field"] for item in error["details"]] == ["w_name", "w_code"]


@pytest.mark.asyncio
async def test_create_duplicate_region_is_rejected(test_client, admin_headers):
    await create_region(test_client, admin_headers, "Kersa", "W-01")

    response = await test_client.post(
        f"{BASE}/create", json={"w_name": "Other", "w_code": "W-01"}, headers=admin_headers
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["type"] == "WEREDA_CREATION_ERROR"
    assert error["message"] == "Wereda already exists!!"


@pytest.mark.asyncio
async def test_create_region_without_permission(test_client, test_session_maker):
    officer = await create_user(test_session_maker, "officer", role="field_officer")

    response = await test_client.post(
        f"{BASE}/create", json={"w_name": "Kersa", "w_code": "W-01"}, headers=auth_headers(officer)
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["type"] == "WEREDA_CREATION_ERROR"
    assert error["message"] == "You Don't have enough permissions to complete this action"


@pytest.mark.asyncio
async def test_fetch_region_records_view_event(test_client, test_session_maker, admin_user, admin_headers):
    region = await create_region(test_client, admin_headers, "Kersa", "W-01")

    response = await test_client.get(f"{BASE}/{region['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == region

    async with test_session_maker() as session:
        events = await AuditLogService(session).list_for_actor(admin_user.id)
    assert sorted(event.event_name for event in events) == ["view_wereda", "wereda_create"]
    assert {event.message for event in events} == {"Create Wereda - Kersa", "View Wereda - Kersa"}


@pytest.mark.asyncio
async def test_fetch_missing_region(test_client, admin_headers):
    response = await test_client.get(f"{BASE}/{uuid4()}", headers=admin_headers)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["type"] == "WEREDA_VIEW_ERROR"
    assert error["message"] == "Wereda does not exist"


@pytest.mark.asyncio
async def test_fetch_region_with_malformed_id(test_client, admin_headers):
    response = await test_client.get(f"{BASE}/not-a-uuid", headers=admin_headers)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["type"] == "WEREDA_VIEW_ERROR"
    assert [item["field"] for item in error["details"]] == ["region_id"]


@pytest.mark.asyncio
async def test_update_region_with_blank_name(test_client, admin_headers):
    region = await create_region(test_client, admin_headers, "Kersa", "W-01")

    response = await test_client.put(f"{BASE}/{region['id']}", json={"w_name": ""}, headers=admin_headers)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["type"] == "UPDATE_WEREDA_ERROR"
    assert error["details"][0]["field"] == "w_name"
    assert error["message"].startswith("w_name: ")

    unchanged = await test_client.get(f"{BASE}/{region['id']}", headers=admin_headers)
    assert unchanged.json()["w_name"] == "Kersa"


@pytest.mark.asyncio
async def test_create_region_with_wrong_type(test_client, admin_headers):
    response = await test_client.post(f"{BASE}/create", json={"w_name": ["Kersa"], "w_code": "W-01"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"]["type"] == "WEREDA_CREATION_ERROR"


@pytest.mark.asyncio
async def test_remove_region_with_malformed_id(test_client, admin_headers):
    response = await test_client.delete(f"{BASE}/12345", headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"]["type"] == "REMOVE_WEREDA_ERROR"


@pytest.mark.asyncio
async def test_partial_update_keeps_other_fields(test_client, test_session_maker, admin_user, admin_headers):
    region = await create_region(test_client, admin_headers, "Kersa", "W-01")

    response = await test_client.put(f"{BASE}/{region['id']}", json={"w_code": "99999"}, headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["w_code"] == "99999"
    assert data["w_name"] == "Kersa"
    assert data["created_at"] == region["created_at"]
    assert datetime.fromisoformat(data["updated_at"]) > datetime.fromisoformat(region["updated_at"])

    async with test_session_maker() as session:
        events = await AuditLogService(session).list_for_actor(admin_user.id)
    update_events = [event for event in events if event.event_name == "wereda_update"]
    assert len(update_events) == 1
    assert update_events[0].diff == {"w_code": "99999"}
    assert update_events[0].message == "Update Info for Kersa"


@pytest.mark.asyncio
async def test_update_missing_region(test_client, admin_headers):
    response = await test_client.put(f"{BASE}/{uuid4()}", json={"w_code": "1"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"]["type"] == "UPDATE_WEREDA_ERROR"


@pytest.mark.asyncio
async def test_update_to_duplicate_code(test_client, admin_headers):
    await create_region(test_client, admin_headers, "Kersa", "W-01")
    other = await create_region(test_client, admin_headers, "Haro", "W-02")

    response = await test_client.put(f"{BASE}/{other['id']}", json={"w_code": "W-01"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"]["type"] == "UPDATE_WEREDA_ERROR"


@pytest.mark.asyncio
async def test_search_without_query(test_client, admin_headers):
    response = await test_client.get(f"{BASE}/search", headers=admin_headers)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["type"] == "WEREDA_SEARCH_ERROR"
    assert error["message"] == "Search Query is missing"


@pytest.mark.asyncio
async def test_search_by_code(test_client, admin_headers):
    kersa = await create_region(test_client, admin_headers, "Kersa", "W-01")
    await create_region(test_client, admin_headers, "Haro", "W-02")

    response = await test_client.get(f"{BASE}/search", params={"w_code": "W-01"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == [kersa]


@pytest.mark.asyncio
async def test_search_by_unsupported_field(test_client, admin_headers):
    response = await test_client.get(f"{BASE}/search", params={"colour": "red"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"]["type"] == "WEREDA_SEARCH_ERROR"


@pytest.mark.asyncio
async def test_remove_region_detaches_it_from_branches(test_client, test_session_maker, admin_headers):
    r1 = await create_region(test_client, admin_headers, "Kersa", "W-01")
    r2 = await create_region(test_client, admin_headers, "Haro", "W-02")
    r3 = await create_region(test_client, admin_headers, "Gursum", "W-03")
    b1 = await create_branch(test_session_maker, "B1", [r1["id"], r2["id"], r3["id"]])
    b2 = await create_branch(test_session_maker, "B2", [r1["id"]])
    b3 = await create_branch(test_session_maker, "B3", [r3["id"]])

    response = await test_client.delete(f"{BASE}/{r1['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == r1
    assert (await load_branch(test_session_maker, b1.id)).weredas == [r2["id"], r3["id"]]
    assert (await load_branch(test_session_maker, b2.id)).weredas == []
    assert (await load_branch(test_session_maker, b3.id)).weredas == [r3["id"]]

    missing = await test_client.get(f"{BASE}/{r1['id']}", headers=admin_headers)
    assert missing.json()["error"]["type"] == "WEREDA_VIEW_ERROR"


@pytest.mark.asyncio
async def test_remove_missing_region(test_client, admin_headers):
    response = await test_client.delete(f"{BASE}/{uuid4()}", headers=admin_headers)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["type"] == "REMOVE_WEREDA_ERROR"
    assert error["message"] == "Wereda does not exist"


@pytest.mark.asyncio
async def test_typed_error_keeps_storage_cause(test_session_maker, admin_user):
    async with test_session_maker() as session:
        service = RegionService(session)
        await service.create(RegionCreate(w_name="Kersa", w_code="W-01"))
        other = await service.create(RegionCreate(w_name="Haro", w_code="W-02"))
        controller = RegionController(session, Principal(id=admin_user.id, role="admin"), PermissionChecker())

        with pytest.raises(GeospatialError) as raised:
            await controller.update(other.id, RegionUpdate(w_code="W-01"))
        await session.rollback()

    assert raised.value.error_type == "UPDATE_WEREDA_ERROR"
    assert isinstance(raised.value.__cause__, PersistenceError)
