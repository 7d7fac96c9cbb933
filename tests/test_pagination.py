"""
Pagination tests for region listings.
"""

import pytest

from geomonitor.schemas.region import RegionCreate
from geomonitor.services.region_service import RegionService

BASE = "/geospatial/regions"


@pytest.fixture
async def regions(test_session_maker):
    async with test_session_maker() as session:
        service = RegionService(session)
        created = [
            await service.create(RegionCreate(w_name=f"Wereda {index:02d}", w_code=f"W-{index:02d}"))
            for index in range(23)
        ]
        await session.commit()
    return created


@pytest.mark.asyncio
async def test_pages_cover_every_region_once(test_client, admin_headers, regions):
    seen = []
    for page in (1, 2, 3):
        response = await test_client.get(f"{BASE}/paginate", params={"page": page, "per_page": 10}, headers=admin_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["total_pages"] == 3
        assert data["total_docs_count"] == 23
        assert data["current_page"] == page
        seen.extend(item["id"] for item in data["docs"])

    assert len(seen) == 23
    assert set(seen) == {str(region.id) for region in regions}


@pytest.mark.asyncio
async def test_default_page_is_newest_first(test_client, admin_headers, regions):
    response = await test_client.get(f"{BASE}/paginate", headers=admin_headers)

    data = response.json()
    assert data["current_page"] == 1
    assert len(data["docs"]) == 10
    assert data["docs"][0]["id"] == str(regions[-1].id)
    created = [item["created_at"] for item in data["docs"]]
    assert created == sorted(created, reverse=True)


@pytest.mark.asyncio
async def test_sort_by_code(test_client, admin_headers, regions):
    response = await test_client.get(
        f"{BASE}/paginate", params={"per_page": 3, "sort_by": "w_code"}, headers=admin_headers
    )

    assert [item["w_code"] for item in response.json()["docs"]] == ["W-22", "W-21", "W-20"]


@pytest.mark.asyncio
async def test_page_past_the_end_is_empty(test_client, admin_headers, regions):
    response = await test_client.get(f"{BASE}/paginate", params={"page": 4, "per_page": 10}, headers=admin_headers)

    data = response.json()
    assert data["docs"] == []
    assert data["total_docs_count"] == 23


@pytest.mark.asyncio
async def test_empty_collection(test_client, admin_headers):
    response = await test_client.get(f"{BASE}/paginate", headers=admin_headers)

    assert response.json() == {"total_pages": 0, "total_docs_count": 0, "current_page": 1, "docs": []}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params", [{"page": 0}, {"per_page": -5}, {"sort_by": "colour"}, {"page": "two"}, {"per_page": "ten"}]
)
async def test_invalid_pagination(test_client, admin_headers, params):
    response = await test_client.get(f"{BASE}/paginate", params=params, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["error"]["type"] == "VIEW_WEREDAS_COLLECTION_ERROR"
