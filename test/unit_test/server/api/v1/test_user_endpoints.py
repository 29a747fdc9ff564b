"""
Unit tests for the /user endpoints.

Tests cover:
- Reading and saving the academic profile, including its validation rules
- Renaming the account
- Favorite universities, catalogue and AI-suggested ids
- Favorite scholarships
"""

import uuid

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

EN = {"Accept-Language": "en-US,en;q=0.9"}


class TestProfile:
    """Test GET and PUT /user/profile."""

    async def test_profile_is_null_until_saved(self, client: AsyncClient, auth_headers):
        response = await client.get("/user/profile", headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["user"]["email"] == "student@example.com"
        assert data["profile"] is None

    async def test_save_profile(self, client: AsyncClient, auth_headers):
        response = await client.put(
            "/user/profile",
            json={
                "targetLevel": "master",
                "intendedMajor": "Computer Science",
                "budgetMin": 10000,
                "budgetMax": 50000,
                "academicScore": 3.8,
                "scoreScale": "gpa4",
                "graduationYear": 2024,
                "englishTests": [{"type": "IELTS", "score": "7.5"}],
            },
            headers={**auth_headers, **EN},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Profile updated successfully"
        assert data["profile"]["nationality"] == "Indonesia"
        assert data["profile"]["academicScore"] == "3.8"
        assert data["profile"]["englishTests"] == [{"type": "IELTS", "score": "7.5"}]

        stored = await client.get("/user/profile", headers=auth_headers)
        assert stored.json()["profile"]["intendedMajor"] == "Computer Science"

    async def test_message_defaults_to_indonesian(self, client: AsyncClient, auth_headers):
        response = await client.put("/user/profile", json={"intendedMajor": "Law"}, headers=auth_headers)
        assert response.json()["message"] == "Profil berhasil diperbarui"

    async def test_put_replaces_the_profile(self, client: AsyncClient, auth_headers):
        await client.put(
            "/user/profile",
            json={"intendedMajor": "Physics", "institution": "ITB", "targetLevel": "phd"},
            headers=auth_headers,
        )

        response = await client.put("/user/profile", json={"intendedMajor": "Chemistry"}, headers=auth_headers)
        profile = response.json()["profile"]
        assert profile["intendedMajor"] == "Chemistry"
        assert profile["institution"] is None
        assert profile["targetLevel"] == "phd"

    @pytest.mark.parametrize(
        "body, error",
        [
            ({"budgetMin": 500, "budgetMax": 100}, "Minimum budget cannot be greater than maximum budget"),
            ({"academicScore": "-1"}, "Academic score must be a positive number"),
            ({"academicScore": "abc"}, "Academic score must be a positive number"),
            ({"academicScore": "4.5", "scoreScale": "gpa4"}, "GPA on 4.0 scale cannot exceed 4.0"),
            ({"academicScore": "101", "scoreScale": "percentage"}, "Percentage score cannot exceed 100"),
            ({"academicScore": "85.000000001"}, "Academic score cannot be longer than 10 characters"),
            ({"graduationYear": 1900}, "Invalid graduation year"),
        ],
    )
    async def test_profile_validation(self, client: AsyncClient, auth_headers, body, error):
        response = await client.put("/user/profile", json=body, headers=auth_headers)
        assert response.status_code == 400
        assert response.json() == {"error": error}

    async def test_profile_requires_auth(self, client: AsyncClient):
        response = await client.get("/user/profile")
        assert response.status_code == 401
        assert response.json() == {"error": "No token provided"}


class TestUserInfo:
    """Test PUT /user/info."""

    async def test_rename(self, client: AsyncClient, auth_headers):
        response = await client.put("/user/info", json={"fullName": "  Budi Santoso "}, headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "User information updated successfully"
        assert data["user"]["fullName"] == "Budi Santoso"

    async def test_rename_too_short(self, client: AsyncClient, auth_headers):
        response = await client.put("/user/info", json={"fullName": "B"}, headers={**auth_headers, **EN})
        assert response.status_code == 400
        assert response.json() == {"error": "Full name must be at least 2 characters"}


class TestFavoriteUniversities:
    """Test /user/favorites."""

    async def test_add_list_check_remove(self, client: AsyncClient, catalogue, auth_headers):
        tokyo = catalogue["universities"]["University of Tokyo"]

        added = await client.post(f"/user/favorites/{tokyo.id}", headers=auth_headers)
        assert added.status_code == 200
        assert added.json()["favorite"]["universityId"] == str(tokyo.id)

        listed = await client.get("/user/favorites", headers=auth_headers)
        assert [f["university"]["name"] for f in listed.json()] == ["University of Tokyo"]

        check = await client.get(f"/user/favorites/check/{tokyo.id}", headers=auth_headers)
        assert check.json() == {"isFavorite": True}

        removed = await client.delete(f"/user/favorites/{tokyo.id}", headers=auth_headers)
        assert removed.json() == {"message": "University removed from favorites"}

        check = await client.get(f"/user/favorites/check/{tokyo.id}", headers=auth_headers)
        assert check.json() == {"isFavorite": False}

    async def test_favorites_are_per_user(self, client: AsyncClient, catalogue, register_user):
        alice = await register_user("alice@example.com")
        bob = await register_user("bob@example.com")
        tokyo = catalogue["universities"]["University of Tokyo"]
        await client.post(f"/user/favorites/{tokyo.id}", headers=alice)

        response = await client.get("/user/favorites", headers=bob)
        assert response.json() == []

    async def test_add_unknown_university(self, client: AsyncClient, auth_headers):
        response = await client.post(f"/user/favorites/{uuid.uuid4()}", headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "University not found"}

    async def test_add_ai_suggested_university(self, client: AsyncClient, catalogue, auth_headers):
        payload = {
            "name": "ETH Zurich",
            "country": "Switzerland",
            "location": "Zurich, Switzerland",
            "ranking": 7,
            "type": "public",
            "acceptanceRate": "27%",
            "specialties": ["Engineering"],
        }

        added = await client.post("/user/favorites/ai-suggested-ETH-Zurich", json=payload, headers=auth_headers)
        assert added.status_code == 200

        listed = await client.get("/user/favorites", headers=auth_headers)
        university = listed.json()[0]["university"]
        assert university["name"] == "ETH Zurich"
        assert university["acceptanceRate"] == "27.00"
        assert university["source"] == "ai_suggested"

        check = await client.get("/user/favorites/check/ai-suggested-ETH-Zurich", headers=auth_headers)
        assert check.json() == {"isFavorite": True}

        removed = await client.delete("/user/favorites/ai-suggested-ETH-Zurich", headers=auth_headers)
        assert removed.status_code == 200

    async def test_ai_suggested_reuses_existing_university(self, client: AsyncClient, catalogue, auth_headers):
        oxford = catalogue["universities"]["University of Oxford"]

        await client.post(
            "/user/favorites/ai-suggested-University-of-Oxford",
            json={"name": "University of Oxford"},
            headers=auth_headers,
        )

        check = await client.get(f"/user/favorites/check/{oxford.id}", headers=auth_headers)
        assert check.json() == {"isFavorite": True}

    async def test_ai_suggested_requires_payload(self, client: AsyncClient, auth_headers):
        response = await client.post("/user/favorites/ai-suggested-Unknown", headers=auth_headers)
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid university data for AI-suggested university"}

    async def test_unknown_ai_suggested_id(self, client: AsyncClient, catalogue, auth_headers):
        check = await client.get("/user/favorites/check/ai-suggested-Hogwarts", headers=auth_headers)
        assert check.status_code == 404
        assert check.json() == {"error": "AI-suggested university not found"}

        removed = await client.delete("/user/favorites/ai-suggested-Hogwarts", headers=auth_headers)
        assert removed.status_code == 404


class TestFavoriteScholarships:
    """Test /user/scholarship-favorites."""

    async def test_add_list_check_remove(self, client: AsyncClient, catalogue, auth_headers):
        stem = catalogue["scholarships"]["STEM Innovation Scholarship"]
        base = "/user/scholarship-favorites"

        added = await client.post(f"{base}/{stem.id}", headers=auth_headers)
        assert added.status_code == 200
        assert added.json()["favorite"]["scholarshipId"] == str(stem.id)

        listed = await client.get(base, headers=auth_headers)
        assert [s["name"] for s in listed.json()] == ["STEM Innovation Scholarship"]

        check = await client.get(f"{base}/check/{stem.id}", headers=auth_headers)
        assert check.json() == {"isFavorite": True}

        duplicate = await client.post(f"{base}/{stem.id}", headers=auth_headers)
        assert duplicate.status_code == 409

        removed = await client.delete(f"{base}/{stem.id}", headers=auth_headers)
        assert removed.json() == {"message": "Scholarship removed from favorites"}

    async def test_remove_not_saved(self, client: AsyncClient, catalogue, auth_headers):
        stem = catalogue["scholarships"]["STEM Innovation Scholarship"]
        response = await client.delete(f"/user/scholarship-favorites/{stem.id}", headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Scholarship not in favorites"}

    async def test_check_malformed_id(self, client: AsyncClient, auth_headers):
        response = await client.get("/user/scholarship-favorites/check/not-a-uuid", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"isFavorite": False}
