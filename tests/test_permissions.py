"""
Permission checker tests.
"""

from uuid import uuid4

import pytest

from geomonitor.deps.di_container import get_permission_checker
from geomonitor.main import app
from geomonitor.core.permissions import PermissionAction, PermissionCategory, PermissionChecker
from geomonitor.schemas.principal import Principal


def principal(role: str) -> Principal:
    return Principal(id=uuid4(), role=role)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "role, category, action, expected",
    [
        ("super_admin", PermissionCategory.WEREDA, PermissionAction.DELETE, True),
        ("admin", PermissionCategory.USER, PermissionAction.VIEW_ALL, True),
        ("branch_manager", PermissionCategory.WEREDA, PermissionAction.VIEW, True),
        ("branch_manager", PermissionCategory.WEREDA, PermissionAction.UPDATE, False),
        ("branch_manager", PermissionCategory.USER, PermissionAction.VIEW_ALL, False),
        ("field_officer", PermissionCategory.USER, PermissionAction.CREATE, True),
        ("field_officer", PermissionCategory.USER, PermissionAction.DELETE, False),
        ("auditor", PermissionCategory.WEREDA, PermissionAction.VIEW, False),
    ],
)
async def test_default_policy(role, category, action, expected):
    checker = PermissionChecker()

    assert await checker.is_permitted(principal(role), category, action) is expected


@pytest.mark.asyncio
async def test_custom_policy_with_wildcard_action():
    checker = PermissionChecker({"auditor": {"WEREDA": ["*"]}})

    assert await checker.is_permitted(principal("auditor"), PermissionCategory.WEREDA, PermissionAction.DELETE)
    assert not await checker.is_permitted(principal("auditor"), PermissionCategory.USER, PermissionAction.VIEW)


@pytest.mark.asyncio
async def test_overridden_checker_denies_listing(test_client, admin_headers):
    app.dependency_overrides[get_permission_checker] = lambda: PermissionChecker({})

    response = await test_client.get("/geospatial/regions/paginate", headers=admin_headers)

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["type"] == "VIEW_WEREDAS_COLLECTION_ERROR"
    assert error["message"] == "You Don't have enough permissions to complete this action"


@pytest.mark.asyncio
async def test_denial_is_logged(caplog):
    checker = PermissionChecker()
    denied = principal("field_officer")

    with caplog.at_level("INFO", logger="geomonitor.core.permissions"):
        assert not await checker.is_permitted(denied, PermissionCategory.WEREDA, PermissionAction.DELETE)

    records = [record for record in caplog.records if record.name == "geomonitor.core.permissions"]
    assert [record.getMessage() for record in records] == ["Permission denied"]
    assert records[0].principal_id == str(denied.id)
    assert records[0].action == "DELETE"
