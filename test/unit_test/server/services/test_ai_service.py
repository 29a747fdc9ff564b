"""
Unit tests for the AI service.

Tests cover:
- Lenient parsing of model answers
- Operations run against a scripted Pydantic AI model
- Persisting suggested universities and linking their scholarships
"""

import json
from datetime import date
from decimal import Decimal

import pytest

from abroadly.core.database.entities import Scholarship, ScholarshipType, UniversitySource
from abroadly.core.database.repositories import ScholarshipRepository, UniversityRepository
from abroadly.server.core.config import AIConfig
from abroadly.server.services.ai_service import (
    CHAT_ERROR_RESPONSE,
    AIService,
    clean_json_text,
    coerce_int,
    default_task_recommendations,
    parse_acceptance_rate,
    parse_cv_response,
    parse_lenient_json,
    parse_suggestions,
    parse_task_recommendations,
    programs_overlap,
    resolve_matches,
)


class TestParsing:
    """Test the response parsing helpers."""

    def test_clean_json_text_repairs_model_output(self):
        raw = 'Here you go:\n```json\n{"a": [1, 2,], "b": "null",}\n```\nThanks!'
        assert json.loads(clean_json_text(raw)) == {"a": [1, 2], "b": None}

    def test_parse_lenient_json_rejects_non_objects(self):
        with pytest.raises(ValueError):
            parse_lenient_json("[1, 2, 3]")
        with pytest.raises(ValueError):
            parse_lenient_json("no json at all")

    @pytest.mark.parametrize(
        "value, expected",
        [(85, 85), (72.9, 72), ("85%", 85), (" 7 ", 7), ("n/a", None), (True, None), (None, None)],
    )
    def test_coerce_int(self, value, expected):
        assert coerce_int(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [("65.5%", "65.50"), (12, "12.00"), (None, "50.00"), ("", "50.00"), ("unknown", "50.00")],
    )
    def test_parse_acceptance_rate(self, value, expected):
        assert parse_acceptance_rate(value) == Decimal(expected)

    def test_parse_cv_response_keeps_valid_fields(self):
        text = json.dumps(
            {
                "fullName": " Siti ",
                "email": "",
                "phone": "0812",
                "targetLevel": "master",
                "scoreScale": "percentage",
                "graduationYear": "2020",
                "awards": [{"title": "Olympiad gold"}, {"year": "2019"}],
                "extracurriculars": "chess",
            }
        )
        assert parse_cv_response(text) == {
            "fullName": "Siti",
            "scoreScale": "percentage",
            "awards": [{"title": "Olympiad gold"}],
        }

    def test_parse_cv_response_without_json(self):
        assert parse_cv_response("nothing") == {}

    def test_parse_task_recommendations(self):
        text = 'Sure! {"tasks": [{"title": "Book TOEFL", "priority": "MUST"}, "junk"]}'
        assert parse_task_recommendations(text) == [
            {"title": "Book TOEFL", "type": "GLOBAL", "priority": "MUST", "dueDate": None, "notes": None, "tags": []}
        ]

    def test_parse_task_recommendations_coerces_values(self):
        text = json.dumps(
            {
                "tasks": [
                    {"title": "Take IELTS", "priority": 1, "notes": 7.5, "tags": ["exam", 2026, None, {"x": 1}]},
                    {"title": {"en": "nested"}, "type": "", "tags": "exam"},
                ]
            }
        )
        assert parse_task_recommendations(text) == [
            {
                "title": "Take IELTS",
                "type": "GLOBAL",
                "priority": "1",
                "dueDate": None,
                "notes": "7.5",
                "tags": ["exam", "2026"],
            },
            {"title": None, "type": "GLOBAL", "priority": None, "dueDate": None, "notes": None, "tags": []},
        ]

    def test_parse_task_recommendations_without_tasks_array(self):
        assert parse_task_recommendations('{"advice": "relax"}') == []

    def test_default_task_recommendations_are_dated_from_today(self):
        tasks = default_task_recommendations(date(2026, 1, 1))
        assert [t["dueDate"] for t in tasks] == ["2026-03-02", "2026-02-15"]
        assert all(t["priority"] == "MUST" for t in tasks)

    def test_parse_suggestions_coerces_numbers(self):
        text = '{"suggestions": [{"name": "KAIST", "ranking": "41", "specialties": "Engineering"}, 3]}'
        assert parse_suggestions(text) == [{"name": "KAIST", "ranking": 41, "specialties": []}]

    def test_programs_overlap(self):
        assert programs_overlap(["Engineering"], ["Electrical Engineering"])
        assert programs_overlap(["master's in computer science"], ["Computer Science"])
        assert not programs_overlap(["Medicine"], ["Law"])
        assert not programs_overlap([], ["Law"])


class TestResolveMatches:
    """Test joining model matches with catalogue universities."""

    async def test_resolve_matches(self, catalogue):
        universities = list(catalogue["universities"].values())
        oxford = catalogue["universities"]["University of Oxford"]
        toronto = catalogue["universities"]["University of Toronto"]

        matches = resolve_matches(
            {
                "matches": [
                    {"universityId": str(toronto.id), "matchScore": 60},
                    {"universityId": "unknown", "matchScore": 100},
                    {"universityId": str(oxford.id), "matchScore": "88%", "concerns": ["Cost"]},
                ]
            },
            universities,
        )

        assert [m["university"].name for m in matches] == ["University of Oxford", "University of Toronto"]
        assert matches[0]["match_score"] == 88
        assert matches[0]["concerns"] == ["Cost"]
        assert matches[1]["strengths"] == []


class TestAIServiceOperations:
    """Test the service against a scripted model."""

    async def test_analyze_cv_text(self, ai_service: AIService, llm):
        llm.queue('{"fullName": "Rina", "graduationYear": 2022}')

        result = await ai_service.analyze_cv_text("Rina, 2022")
        assert result.success is True
        assert result.data == {"fullName": "Rina", "graduationYear": 2022}

    async def test_analyze_cv_text_failure(self, ai_service: AIService, llm):
        llm.queue(RuntimeError("boom"))

        result = await ai_service.analyze_cv_text("Rina")
        assert result.success is False
        assert result.error == "boom"

    async def test_suggestion_failure_keeps_matches(self, ai_service: AIService, llm, catalogue):
        tokyo = catalogue["universities"]["University of Tokyo"]
        llm.queue(
            json.dumps({"matches": [{"universityId": str(tokyo.id), "matchScore": 80}]}),
            RuntimeError("suggestions down"),
        )

        result = await ai_service.match_universities({"intendedMajor": "Robotics"}, [tokyo])
        assert result.success is True
        assert [m["university"].name for m in result.matches] == ["University of Tokyo"]
        assert result.suggested_universities == []
        assert len(llm.prompts) == 2

    async def test_generate_chat_response(self, ai_service: AIService, llm):
        llm.queue("\nApply early.\n")

        reply = await ai_service.generate_chat_response("Tips?", {"intendedMajor": "Law"}, ["Oxford"], [], [])
        assert reply == {"response": "Apply early.", "suggestedTasks": []}
        assert "Oxford" in llm.prompts[0]
        assert "Law" in llm.prompts[0]

    async def test_generate_chat_response_failure(self, ai_service: AIService, llm):
        llm.queue(RuntimeError("boom"))

        reply = await ai_service.generate_chat_response("Tips?", None, [], [], [])
        assert reply["response"] == CHAT_ERROR_RESPONSE

    def test_missing_api_key(self):
        service = AIService(config=AIConfig(provider="google", google_api_key=None))
        with pytest.raises(RuntimeError):
            service.model

    def test_unsupported_provider(self):
        service = AIService(config=AIConfig(provider="ollama"))
        with pytest.raises(ValueError):
            service.model


class TestInsertSuggestedUniversities:
    """Test persisting suggested universities."""

    async def test_insert_new_and_reuse_existing(self, ai_service: AIService, session, catalogue):
        oxford = catalogue["universities"]["University of Oxford"]

        resolved = await ai_service.insert_suggested_universities(
            session,
            [
                {"name": "University of Oxford", "country": "United Kingdom"},
                {
                    "name": "University of Edinburgh",
                    "location": "Edinburgh, Scotland",
                    "country": "United Kingdom",
                    "specialties": ["Medicine", "Informatics"],
                    "scholarships": [
                        {"name": "Edinburgh Global Scholarship", "type": "tuition-only", "maxRecipients": "20"}
                    ],
                },
            ],
        )

        assert [u.name for u in resolved] == ["University of Oxford", "University of Edinburgh"]
        assert resolved[0].id == oxford.id

        edinburgh = resolved[1]
        assert edinburgh.source == UniversitySource.AI_SUGGESTED
        assert edinburgh.ranking == 999
        assert edinburgh.acceptance_rate == Decimal("50.00")
        assert edinburgh.website == "#"

        linked = {s.name for s in await UniversityRepository(session).get_scholarships(edinburgh.id)}
        # Commonwealth is limited to Master's and PhD programs
        assert linked == {"Edinburgh Global Scholarship"}

        created = await ScholarshipRepository(session).find_by_name_and_provider(
            "Edinburgh Global Scholarship", "Unknown"
        )
        assert created.type == ScholarshipType.TUITION_ONLY
        assert created.max_recipients == 20
        assert created.country == "United Kingdom"

    async def test_failed_suggestion_does_not_lose_resolved_ones(self, ai_service: AIService, session, catalogue):
        oxford_id = catalogue["universities"]["University of Oxford"].id

        resolved = await ai_service.insert_suggested_universities(
            session,
            [
                {"name": "University of Oxford", "country": "United Kingdom"},
                {"name": "Nowhere Institute", "country": "Narnia"},
                {"name": "University of Edinburgh", "location": "Edinburgh", "country": "United Kingdom"},
            ],
        )

        assert [u.name for u in resolved] == ["University of Oxford", "University of Edinburgh"]
        assert resolved[0].id == oxford_id
        universities = UniversityRepository(session)
        assert await universities.find_by_name("Nowhere Institute") is None
        assert await universities.find_by_name("University of Edinburgh") is not None

    async def test_failed_scholarship_keeps_university_and_other_scholarships(self, ai_service: AIService, session):
        resolved = await ai_service.insert_suggested_universities(
            session,
            [
                {
                    "name": "ETH Zurich",
                    "location": "Zurich",
                    "country": "Switzerland",
                    "scholarships": [
                        {"type": "fully-funded", "provider": "ETH"},
                        {"name": "Excellence Masters", "provider": "ETH"},
                    ],
                }
            ],
        )

        assert [u.name for u in resolved] == ["ETH Zurich"]
        linked = [s.name for s in await UniversityRepository(session).get_scholarships(resolved[0].id)]
        assert linked == ["Excellence Masters"]

    async def test_match_existing_scholarships_respects_programs(self, ai_service: AIService, session):
        scholarships = ScholarshipRepository(session)
        universities = UniversityRepository(session)
        await scholarships.create(
            Scholarship(
                name="Engineering Fund",
                type=ScholarshipType.FULLY_FUNDED,
                amount="Full",
                description="",
                requirements=[],
                deadline="March",
                provider="Gov",
                country="Germany",
                eligible_programs=["Engineering"],
            )
        )
        await scholarships.create(
            Scholarship(
                name="Arts Fund",
                type=ScholarshipType.PARTIALLY_FUNDED,
                amount="Half",
                description="",
                requirements=[],
                deadline="March",
                provider="Gov",
                country="Germany",
                eligible_programs=["Fine Arts"],
            )
        )
        resolved = await ai_service.insert_suggested_universities(
            session, [{"name": "TU Munich", "country": "Germany", "specialties": ["Mechanical Engineering"]}]
        )

        linked = [s.name for s in await universities.get_scholarships(resolved[0].id)]
        assert linked == ["Engineering Fund"]
