"""
Unit tests for the university and scholarship catalogue endpoints.

Tests cover:
- University search with filters and page pagination
- Parameter validation errors
- Scholarship listing and lookup
- Favoriting from the catalogue routes
"""

import uuid

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


class TestSearchUniversities:
    """Test GET /universities."""

    async def test_search_orders_by_ranking(self, client: AsyncClient, catalogue):
        response = await client.get("/universities")
        assert response.status_code == 200

        data = response.json()
        names = [u["name"] for u in data["universities"]]
        assert names[0] == "Harvard University"
        rankings = [u["ranking"] for u in data["universities"]]
        assert rankings == sorted(rankings)
        assert data["pagination"] == {
            "total": 6,
            "limit": 20,
            "offset": 0,
            "totalPages": 1,
            "currentPage": 1,
            "hasNext": False,
            "hasPrev": False,
        }

    async def test_filter_by_country(self, client: AsyncClient, catalogue):
        response = await client.get("/universities", params={"country": "United States"})
        data = response.json()
        assert data["pagination"]["total"] == 2
        assert {u["name"] for u in data["universities"]} == {"Harvard University", "Stanford University"}

    async def test_filter_by_name_and_type(self, client: AsyncClient, catalogue):
        response = await client.get("/universities", params={"search": "university of", "type": "public"})
        names = [u["name"] for u in response.json()["universities"]]
        assert "Harvard University" not in names
        assert "University of Oxford" in names

    async def test_filter_by_ranking_range(self, client: AsyncClient, catalogue):
        response = await client.get("/universities", params={"minRanking": 2, "maxRanking": 21})
        rankings = [u["ranking"] for u in response.json()["universities"]]
        assert rankings == [3, 5, 21]

    async def test_pagination_window(self, client: AsyncClient, catalogue):
        response = await client.get("/universities", params={"limit": 2, "offset": 2})
        data = response.json()
        assert len(data["universities"]) == 2
        assert data["pagination"]["totalPages"] == 3
        assert data["pagination"]["currentPage"] == 2
        assert data["pagination"]["hasNext"] is True
        assert data["pagination"]["hasPrev"] is True

    @pytest.mark.parametrize(
        "params, error",
        [
            ({"limit": 0}, "Limit must be between 1 and 100"),
            ({"limit": 101}, "Limit must be between 1 and 100"),
            ({"offset": -1}, "Offset must be at least 0"),
            ({"minRanking": 10, "maxRanking": 5}, "Minimum ranking cannot be greater than maximum ranking"),
        ],
    )
    async def test_invalid_parameters(self, client: AsyncClient, params, error):
        response = await client.get("/universities", params=params)
        assert response.status_code == 400
        assert response.json() == {"error": error}


class TestGetUniversity:
    """Test single university lookups."""

    async def test_get_university(self, client: AsyncClient, catalogue):
        harvard = catalogue["universities"]["Harvard University"]

        response = await client.get(f"/universities/{harvard.id}")
        assert response.status_code == 200
        university = response.json()["university"]
        assert university["name"] == "Harvard University"
        assert university["acceptanceRate"] == "3.43"
        assert university["source"] == "manual"

    @pytest.mark.parametrize("university_id", [str(uuid.uuid4()), "not-a-uuid"])
    async def test_get_unknown_university(self, client: AsyncClient, university_id):
        response = await client.get(f"/universities/{university_id}")
        assert response.status_code == 404
        assert response.json() == {"error": "University not found"}

    async def test_university_scholarships(self, client: AsyncClient, catalogue):
        harvard = catalogue["universities"]["Harvard University"]

        response = await client.get(f"/universities/{harvard.id}/scholarships")
        assert response.status_code == 200
        names = {s["name"] for s in response.json()["scholarships"]}
        assert names == {
            "Presidential Excellence Scholarship",
            "Dean's Excellence Award",
            "Need-Based Financial Aid Grant",
            "STEM Innovation Scholarship",
        }


class TestScholarships:
    """Test the scholarship catalogue."""

    async def test_list_ordered_by_name(self, client: AsyncClient, catalogue):
        response = await client.get("/scholarships")
        assert response.status_code == 200

        data = response.json()
        names = [s["name"] for s in data["scholarships"]]
        assert names == sorted(names)
        assert data["pagination"] == {"total": 8, "limit": 20, "offset": 0, "hasNext": False, "hasPrev": False}

    async def test_filter_by_type_and_country(self, client: AsyncClient, catalogue):
        response = await client.get("/scholarships", params={"type": "fully-funded", "country": "United States"})
        names = {s["name"] for s in response.json()["scholarships"]}
        assert names == {"Presidential Excellence Scholarship", "STEM Innovation Scholarship"}

    async def test_list_rejects_negative_offset(self, client: AsyncClient):
        response = await client.get("/scholarships", params={"offset": -5})
        assert response.status_code == 400
        assert response.json() == {"error": "Offset must be at least 0"}

    async def test_get_scholarship(self, client: AsyncClient, catalogue):
        mext = catalogue["scholarships"]["MEXT Japanese Government Scholarship"]

        response = await client.get(f"/scholarships/{mext.id}")
        assert response.status_code == 200
        assert response.json()["scholarship"]["country"] == "Japan"

    async def test_get_unknown_scholarship(self, client: AsyncClient):
        response = await client.get(f"/scholarships/{uuid.uuid4()}")
        assert response.status_code == 404
        assert response.json() == {"error": "Scholarship not found"}


class TestCatalogueFavorites:
    """Test favoriting through the catalogue routes."""

    async def test_favorite_and_unfavorite_university(self, client: AsyncClient, catalogue, auth_headers):
        oxford = catalogue["universities"]["University of Oxford"]
        url = f"/universities/{oxford.id}/favorite"

        added = await client.post(url, headers=auth_headers)
        assert added.status_code == 200
        assert added.json() == {"message": "University added to favorites"}

        duplicate = await client.post(url, headers=auth_headers)
        assert duplicate.status_code == 409
        assert duplicate.json() == {"error": "University already in favorites"}

        removed = await client.delete(url, headers=auth_headers)
        assert removed.json() == {"message": "University removed from favorites"}

        again = await client.delete(url, headers=auth_headers)
        assert again.status_code == 404
        assert again.json() == {"error": "University not in favorites"}

    async def test_favorite_requires_auth(self, client: AsyncClient, catalogue):
        oxford = catalogue["universities"]["University of Oxford"]
        response = await client.post(f"/universities/{oxford.id}/favorite")
        assert response.status_code == 401

    async def test_favorite_scholarship(self, client: AsyncClient, catalogue, auth_headers):
        commonwealth = catalogue["scholarships"]["Commonwealth Scholarship"]
        url = f"/scholarships/{commonwealth.id}/favorite"

        added = await client.post(url, headers=auth_headers)
        assert added.json() == {"message": "Scholarship added to favorites"}

        removed = await client.delete(url, headers=auth_headers)
        assert removed.json() == {"message": "Scholarship removed from favorites"}

    async def test_favorite_unknown_scholarship(self, client: AsyncClient, auth_headers):
        response = await client.post(f"/scholarships/{uuid.uuid4()}/favorite", headers=auth_headers)
        assert response.status_code == 404
