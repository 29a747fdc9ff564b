"""
Unit tests for POST /task-recommendations/recommendations.
"""

import json

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

URL = "/task-recommendations/recommendations"


async def _save_profile(client: AsyncClient, headers) -> None:
    response = await client.put(
        "/user/profile",
        json={"targetLevel": "master", "intendedMajor": "Data Science", "institution": "Universitas Indonesia"},
        headers=headers,
    )
    assert response.status_code == 200


async def test_requires_profile(client: AsyncClient, auth_headers):
    response = await client.post(URL, headers=auth_headers)
    assert response.status_code == 404
    assert response.json() == {"error": "User profile not found. Please complete your profile first."}


async def test_recommendations_use_profile_and_favorites(client: AsyncClient, llm, catalogue, auth_headers):
    await _save_profile(client, auth_headers)
    melbourne = catalogue["universities"]["University of Melbourne"]
    awards = catalogue["scholarships"]["Australia Awards Scholarship"]
    await client.post(f"/user/favorites/{melbourne.id}", headers=auth_headers)
    await client.post(f"/user/scholarship-favorites/{awards.id}", headers=auth_headers)
    llm.queue(
        json.dumps(
            {
                "tasks": [
                    {
                        "title": "Request academic transcripts",
                        "priority": "MUST",
                        "dueDate": "2027-01-15",
                        "tags": ["documents"],
                    },
                    {"title": "Apply for Australia Awards", "type": "UNIV_SPECIFIC", "priority": "NEED"},
                ]
            }
        )
    )

    response = await client.post(URL, headers=auth_headers)
    assert response.status_code == 200
    data = response.json()

    assert [t["title"] for t in data["recommendations"]] == [
        "Request academic transcripts",
        "Apply for Australia Awards",
    ]
    assert data["recommendations"][0]["type"] == "GLOBAL"
    assert data["recommendations"][0]["dueDate"] == "2027-01-15"
    assert data["recommendations"][1]["tags"] == []
    assert data["profile"] == {
        "targetLevel": "master",
        "intendedMajor": "Data Science",
        "institution": "Universitas Indonesia",
    }
    assert data["favoriteUniversities"] == ["University of Melbourne"]
    assert data["favoriteScholarships"] == ["Australia Awards Scholarship"]

    prompt = llm.prompts[0]
    assert "Data Science" in prompt
    assert "University of Melbourne" in prompt


async def test_unparseable_answer_gives_default_tasks(client: AsyncClient, llm, auth_headers):
    await _save_profile(client, auth_headers)
    llm.queue("Sorry, I cannot help with that.")

    response = await client.post(URL, headers=auth_headers)
    assert response.status_code == 200
    titles = [t["title"] for t in response.json()["recommendations"]]
    assert titles == ["Complete standardized test preparation", "Draft personal statement"]


async def test_model_failure_gives_no_tasks(client: AsyncClient, llm, auth_headers):
    await _save_profile(client, auth_headers)
    llm.queue(RuntimeError("timeout"))

    response = await client.post(URL, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["recommendations"] == []


async def test_loosely_typed_answer_is_coerced(client: AsyncClient, llm, auth_headers):
    await _save_profile(client, auth_headers)
    llm.queue(json.dumps({"tasks": [{"title": "Take IELTS", "priority": 1, "notes": 30, "tags": ["x", 5]}]}))

    response = await client.post(URL, headers=auth_headers)
    assert response.status_code == 200
    [task] = response.json()["recommendations"]
    assert task["title"] == "Take IELTS"
    assert task["priority"] == "1"
    assert task["notes"] == "30"
    assert task["tags"] == ["x", "5"]
