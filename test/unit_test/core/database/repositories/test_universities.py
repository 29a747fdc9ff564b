"""Unit tests for the university and scholarship repositories."""

from __future__ import annotations

from decimal import Decimal

from abroadly.core.database.entities import ScholarshipType, UniversityType
from abroadly.core.database.repositories import ScholarshipRepository, UniversityFilters, UniversityRepository


class TestUniversityRepository:
    """Tests for UniversityRepository operations."""

    async def test_search_returns_page_and_total(self, session, catalogue):
        universities, total = await UniversityRepository(session).search(UniversityFilters(), limit=2, offset=0)
        assert total == 6
        assert [u.ranking for u in universities] == [1, 3]

    async def test_search_by_acceptance_rate(self, session, catalogue):
        universities, total = await UniversityRepository(session).search(
            UniversityFilters(min_acceptance_rate=Decimal("10"), max_acceptance_rate=Decimal("50")),
            limit=20,
            offset=0,
        )
        assert total == 3
        assert {u.name for u in universities} == {
            "University of Oxford",
            "University of Tokyo",
            "University of Toronto",
        }

    async def test_search_is_case_insensitive(self, session, catalogue):
        universities, _ = await UniversityRepository(session).search(
            UniversityFilters(search="  STANFORD "), limit=20, offset=0
        )
        assert [u.name for u in universities] == ["Stanford University"]

    async def test_search_by_type(self, session, catalogue):
        _, total = await UniversityRepository(session).search(
            UniversityFilters(type=UniversityType.PRIVATE), limit=20, offset=0
        )
        assert total == 2

    async def test_find_by_name(self, session, catalogue):
        repo = UniversityRepository(session)
        assert (await repo.find_by_name("University of Tokyo")).country == "Japan"
        assert await repo.find_by_name("university of tokyo") is None
        assert await repo.find_by_name_and_country("University of Tokyo", "Korea") is None

    async def test_link_scholarship_once(self, session, catalogue):
        repo = UniversityRepository(session)
        tokyo = catalogue["universities"]["University of Tokyo"]
        stem = catalogue["scholarships"]["STEM Innovation Scholarship"]

        assert not await repo.is_linked(tokyo.id, stem.id)
        assert await repo.link_scholarship(tokyo.id, stem.id) is not None
        assert await repo.link_scholarship(str(tokyo.id), str(stem.id)) is None
        assert "STEM Innovation Scholarship" in [s.name for s in await repo.get_scholarships(tokyo.id)]

    async def test_get_scholarships_with_malformed_id(self, session):
        assert await UniversityRepository(session).get_scholarships("nope") == []

    async def test_get_by_id_with_malformed_id(self, session):
        assert await UniversityRepository(session).get_by_id("nope") is None


class TestScholarshipRepository:
    """Tests for ScholarshipRepository operations."""

    async def test_search_filters_and_orders_by_name(self, session, catalogue):
        scholarships, total = await ScholarshipRepository(session).search(
            limit=2, offset=0, type=ScholarshipType.FULLY_FUNDED
        )
        assert total == 5
        assert [s.name for s in scholarships] == ["Australia Awards Scholarship", "Commonwealth Scholarship"]

    async def test_list_by_country(self, session, catalogue):
        scholarships = await ScholarshipRepository(session).list_by_country("United States", limit=2)
        assert [s.name for s in scholarships] == ["Dean's Excellence Award", "Need-Based Financial Aid Grant"]

    async def test_find_by_name_and_provider(self, session, catalogue):
        repo = ScholarshipRepository(session)
        mext = catalogue["scholarships"]["MEXT Japanese Government Scholarship"]
        assert (await repo.find_by_name_and_provider(mext.name, mext.provider)).id == mext.id
        assert await repo.find_by_name_and_provider(mext.name, "Someone else") is None
