"""
AI Service.

This module wraps the LLM used for the study-abroad assistant features:
- CV text analysis for profile autofill
- university matching against the catalogue, plus new university suggestions
- persisting suggested universities and linking their scholarships
- task recommendations and advisor chat replies

Every operation is a single ``Agent.run`` call through Pydantic AI with its
own temperature and token budget. Model responses are free text that is
expected to contain JSON; parsing is deliberately lenient and each operation
defines what it returns when the answer cannot be used.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic_ai import Agent, ModelSettings
from pydantic_ai.models import Model
from pydantic_ai.models.anthropic import AnthropicModel
from pydantic_ai.models.google import GoogleModel
from pydantic_ai.models.openai import OpenAIResponsesModel
from pydantic_ai.providers.anthropic import AnthropicProvider
from pydantic_ai.providers.google import GoogleProvider
from pydantic_ai.providers.openai import OpenAIProvider
from sqlalchemy.ext.asyncio import AsyncSession

from abroadly.core.database.entities import (
    Profile,
    Scholarship,
    ScholarshipType,
    University,
    UniversitySource,
    UniversityType,
)
from abroadly.core.database.repositories import ScholarshipRepository, UniversityRepository
from abroadly.core.logging_config import get_logger
from abroadly.core.models.io import ProfileRead, UniversityRead
from abroadly.server.core.config import AIConfig, settings

from . import ai_prompts

logger = get_logger(__name__)

CHAT_ERROR_RESPONSE = "I'm sorry, I encountered an error while processing your message. Please try again."
SUPPORTED_PROVIDERS = ("google", "openai", "anthropic")

_EXTRACTED_TARGET_LEVELS = {"undergraduate", "graduate", "postgraduate"}
_EXTRACTED_SCORE_SCALES = {"gpa4", "gpa5", "percentage", "other"}
_EXTRACTED_TEXT_FIELDS = ("fullName", "email", "nationality", "intendedMajor", "institution", "academicScore")


# =====================================================================
# Result types
# =====================================================================


@dataclass
class CVAnalysisResult:
    """Outcome of a CV analysis."""

    success: bool
    data: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None


@dataclass
class MatchingResult:
    """Outcome of university matching.

    ``matches`` items hold the catalogue ``University`` entity under
    ``university`` together with its score, reasoning, strengths and
    concerns. ``suggested_universities`` are raw suggestion dictionaries.
    """

    success: bool
    matches: List[Dict[str, Any]] = field(default_factory=list)
    suggested_universities: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None


# =====================================================================
# Response parsing
# =====================================================================


def _first_json_object(text: str) -> Dict[str, Any]:
    """Parse the first ``{...}`` block of a response (greedy, up to the last brace)."""
    found = re.search(r"\{[\s\S]*\}", text or "")
    if not found:
        raise ValueError("No JSON found in AI response")
    parsed = json.loads(found.group(0), strict=False)
    if not isinstance(parsed, dict):
        raise ValueError("AI response JSON is not an object")
    return parsed


def clean_json_text(text: str) -> str:
    """
    Repair the usual defects of JSON produced by a language model.

    Markdown code fences are removed, the text is cut to the span between the
    first ``{`` and the last ``}``, and trailing commas before closing
    brackets are dropped.

    Args:
        text: Raw model response

    Returns:
        Text that is more likely to be accepted by ``json.loads``
    """
    cleaned = re.sub(r"```(?:json)?", "", text or "").strip()
    first, last = cleaned.find("{"), cleaned.rfind("}")
    if first != -1 and last > first:
        cleaned = cleaned[first : last + 1]
    cleaned = re.sub(r",(\s*[}\]])", r"\1", cleaned)
    cleaned = re.sub(r":\s*:", ":", cleaned)
    cleaned = cleaned.replace('"null"', "null")
    return cleaned


def parse_lenient_json(text: str) -> Dict[str, Any]:
    """Parse a model response with :func:`clean_json_text`; raises ``ValueError`` on failure."""
    parsed = json.loads(clean_json_text(text), strict=False)
    if not isinstance(parsed, dict):
        raise ValueError("AI response JSON is not an object")
    return parsed


def coerce_int(value: Any) -> Optional[int]:
    """
    Read an integer the way a lenient client would.

    Integers pass through, floats are truncated and strings contribute their
    leading integer (``"85%"`` reads as 85). Anything else gives None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        leading = re.match(r"\s*([+-]?\d+)", value)
        return int(leading.group(1)) if leading else None
    return None


def parse_acceptance_rate(value: Any) -> Decimal:
    """Normalize an acceptance rate such as ``"65.5%"`` to a two decimal value, defaulting to 50.00."""
    if value is None or value == "":
        return Decimal("50.00")
    try:
        return Decimal(str(value).replace("%", "").strip()).quantize(Decimal("0.01"))
    except InvalidOperation:
        return Decimal("50.00")


def parse_cv_response(text: str) -> Dict[str, Any]:
    """
    Extract profile fields from a CV analysis response.

    Only fields with the expected type are kept; strings are trimmed and
    list entries missing their identifying fields are dropped. Any parse
    error yields an empty dictionary.

    Args:
        text: Raw model response

    Returns:
        Profile fields keyed in camelCase
    """
    try:
        parsed = _first_json_object(text)
    except ValueError as e:
        logger.warning(f"Error parsing CV analysis response: {e}")
        return {}

    cleaned: Dict[str, Any] = {}
    for key in _EXTRACTED_TEXT_FIELDS:
        value = parsed.get(key)
        if value and isinstance(value, str):
            cleaned[key] = value.strip()

    if parsed.get("dateOfBirth") and isinstance(parsed["dateOfBirth"], str):
        cleaned["dateOfBirth"] = parsed["dateOfBirth"]
    if parsed.get("targetLevel") in _EXTRACTED_TARGET_LEVELS:
        cleaned["targetLevel"] = parsed["targetLevel"]
    if parsed.get("scoreScale") in _EXTRACTED_SCORE_SCALES:
        cleaned["scoreScale"] = parsed["scoreScale"]
    graduation_year = parsed.get("graduationYear")
    if graduation_year and isinstance(graduation_year, (int, float)) and not isinstance(graduation_year, bool):
        cleaned["graduationYear"] = graduation_year

    def _entries(key: str, *required: str) -> None:
        items = parsed.get(key)
        if isinstance(items, list):
            cleaned[key] = [
                item
                for item in items
                if isinstance(item, dict) and all(isinstance(item.get(name), str) for name in required)
            ]

    _entries("englishTests", "type", "score")
    _entries("standardizedTests", "type", "score")
    _entries("awards", "title")
    _entries("extracurriculars", "activity")
    return cleaned


def default_task_recommendations(today: Optional[date] = None) -> List[Dict[str, Any]]:
    """Recommendations returned when the model answer cannot be parsed."""
    today = today or date.today()
    return [
        {
            "title": "Complete standardized test preparation",
            "type": "GLOBAL",
            "priority": "MUST",
            "dueDate": (today + timedelta(days=60)).isoformat(),
            "notes": "Research requirements for target universities and prepare accordingly",
            "tags": ["preparation", "tests"],
        },
        {
            "title": "Draft personal statement",
            "type": "GLOBAL",
            "priority": "MUST",
            "dueDate": (today + timedelta(days=45)).isoformat(),
            "notes": "Write compelling personal statement highlighting your goals and experiences",
            "tags": ["essays", "applications"],
        },
    ]


def _text_or_none(value: Any) -> Optional[str]:
    """Scalars as text; None and nested JSON values give None."""
    if value is None or isinstance(value, (dict, list)):
        return None
    return value if isinstance(value, str) else str(value)


def _tags(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(tag) for tag in value if isinstance(tag, (str, int, float))]


def parse_task_recommendations(text: str) -> List[Dict[str, Any]]:
    """
    Extract recommended tasks from a model response.

    Returns:
        Task dictionaries; an empty list when the JSON has no ``tasks`` array
        and the default recommendations when the response cannot be parsed
    """
    try:
        parsed = _first_json_object(text)
    except ValueError as e:
        logger.warning(f"Error parsing task recommendations, using defaults: {e}")
        return default_task_recommendations()

    tasks = parsed.get("tasks")
    if not isinstance(tasks, list):
        return []
    return [
        {
            "title": _text_or_none(task.get("title")),
            "type": _text_or_none(task.get("type")) or "GLOBAL",
            "priority": _text_or_none(task.get("priority")),
            "dueDate": _text_or_none(task.get("dueDate")),
            "notes": _text_or_none(task.get("notes")),
            "tags": _tags(task.get("tags")),
        }
        for task in tasks
        if isinstance(task, dict)
    ]


def parse_suggestions(text: str) -> List[Dict[str, Any]]:
    """Extract suggested universities, coercing numeric fields sent as strings."""
    parsed = parse_lenient_json(text)
    suggestions = []
    for item in parsed.get("suggestions") or []:
        if not isinstance(item, dict):
            continue
        suggestion = dict(item)
        for key in ("ranking", "studentCount", "establishedYear", "estimatedMatchScore"):
            if isinstance(suggestion.get(key), str):
                suggestion[key] = coerce_int(suggestion[key])
        if not isinstance(suggestion.get("specialties"), list):
            suggestion["specialties"] = []
        suggestions.append(suggestion)
    return suggestions


def profile_to_prompt_dict(profile: Optional[Profile]) -> Optional[Dict[str, Any]]:
    """Dump a stored profile with the camelCase keys the prompt builders read."""
    if profile is None:
        return None
    return ProfileRead.model_validate(profile).model_dump(by_alias=True, mode="json")


def university_summary(university: University) -> Dict[str, Any]:
    """Compact view of a university used in the matching prompt."""
    return {
        "id": str(university.id),
        "name": university.name,
        "location": university.location,
        "country": university.country,
        "ranking": university.ranking,
        "type": getattr(university.type, "value", university.type),
        "tuitionRange": university.tuition_range,
        "acceptanceRate": str(university.acceptance_rate),
        "specialties": university.specialties or [],
        "description": university.description,
    }


def resolve_matches(parsed: Mapping[str, Any], universities: Sequence[University]) -> List[Dict[str, Any]]:
    """
    Join model matches with catalogue universities.

    Matches referring to unknown university ids are dropped; the result is
    sorted by score, best first.
    """
    by_id = {str(university.id): university for university in universities}
    matches = []
    for match in parsed.get("matches") or []:
        if not isinstance(match, dict):
            continue
        university = by_id.get(str(match.get("universityId")))
        if university is None:
            continue
        matches.append(
            {
                "university": university,
                "match_score": coerce_int(match.get("matchScore")) or 0,
                "reasoning": match.get("reasoning"),
                "strengths": match.get("strengths") or [],
                "concerns": match.get("concerns") or [],
            }
        )
    matches.sort(key=lambda item: item["match_score"], reverse=True)
    return matches


def programs_overlap(eligible_programs: Sequence[str], specialties: Sequence[str]) -> bool:
    """Whether any eligible program and specialty contain one another, ignoring case."""
    for program in eligible_programs:
        for specialty in specialties:
            program_l, specialty_l = str(program).lower(), str(specialty).lower()
            if program_l in specialty_l or specialty_l in program_l:
                return True
    return False


def _scholarship_type(value: Any) -> ScholarshipType:
    if value == ScholarshipType.FULLY_FUNDED.value:
        return ScholarshipType.FULLY_FUNDED
    if value == ScholarshipType.PARTIALLY_FUNDED.value:
        return ScholarshipType.PARTIALLY_FUNDED
    return ScholarshipType.TUITION_ONLY


def _max_recipients(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        try:
            return int(float(value))
        except ValueError:
            return None
    return None


# =====================================================================
# Service
# =====================================================================


class AIService:
    """LLM-backed operations of the study-abroad assistant."""

    def __init__(self, config: Optional[AIConfig] = None, model: Optional[Model] = None):
        """
        Initialize the AI service.

        Args:
            config: AI configuration, defaults to the application settings
            model: Pydantic AI model to use instead of the configured provider
        """
        self.config = config or settings.ai
        self._model = model

    @property
    def model(self) -> Model:
        """The Pydantic AI model, created from configuration on first use."""
        if self._model is None:
            self._model = self._create_model()
        return self._model

    def _create_model(self) -> Model:
        provider = self.config.provider.lower()
        api_key = self.config.api_key()
        if provider not in SUPPORTED_PROVIDERS:
            raise ValueError(f"Unsupported AI provider: {self.config.provider}")
        if not api_key:
            raise RuntimeError(f"API key for AI provider '{provider}' is not configured")

        logger.debug(f"Creating {provider} model: {self.config.model} with Pydantic AI")
        if provider == "openai":
            return OpenAIResponsesModel(self.config.model, provider=OpenAIProvider(api_key=api_key))
        if provider == "anthropic":
            return AnthropicModel(self.config.model, provider=AnthropicProvider(api_key=api_key))
        return GoogleModel(self.config.model, provider=GoogleProvider(api_key=api_key))

    async def _generate(self, prompt: str, *, temperature: float, max_tokens: int) -> str:
        """Run one prompt through the model and return its text answer."""
        agent = Agent(self.model)
        result = await agent.run(prompt, model_settings=ModelSettings(temperature=temperature, max_tokens=max_tokens))
        return result.output

    # --- CV autofill ---

    async def analyze_cv_text(self, cv_text: str) -> CVAnalysisResult:
        """
        Extract profile fields from CV text.

        Args:
            cv_text: Plain text of the CV

        Returns:
            Analysis result; ``success`` is False only when the model call fails
        """
        try:
            response = await self._generate(
                ai_prompts.build_profile_extraction_prompt(cv_text), temperature=0.1, max_tokens=2048
            )
        except Exception as e:
            logger.error(f"AI analysis error: {e}", exc_info=True)
            return CVAnalysisResult(success=False, error=str(e) or "AI analysis failed")

        return CVAnalysisResult(success=True, data=parse_cv_response(response))

    # --- matching ---

    async def match_universities(
        self, profile: Mapping[str, Any], universities: Sequence[University]
    ) -> MatchingResult:
        """
        Score catalogue universities against a profile and suggest new ones.

        Args:
            profile: Student profile (camelCase keys)
            universities: Catalogue universities to choose from

        Returns:
            Matching result; unparseable match answers give no matches and a
            failed suggestion step gives no suggestions
        """
        logger.info(f"Starting AI university matching over {len(universities)} universities")
        try:
            response = await self._generate(
                ai_prompts.build_match_prompt(profile, [university_summary(u) for u in universities]),
                temperature=0.0,
                max_tokens=8192,
            )
        except Exception as e:
            logger.error(f"University matching error: {e}", exc_info=True)
            return MatchingResult(success=False, error=str(e) or "Unknown error occurred")

        try:
            parsed = parse_lenient_json(response)
        except ValueError as e:
            logger.warning(f"Failed to parse match response, returning empty matches: {e}")
            parsed = {"matches": []}

        matches = resolve_matches(parsed, universities)
        suggestions = await self.suggest_universities(profile)
        return MatchingResult(success=True, matches=matches, suggested_universities=suggestions)

    async def suggest_universities(self, profile: Mapping[str, Any]) -> List[Dict[str, Any]]:
        """Ask for 2-3 universities outside the catalogue; any failure gives an empty list."""
        try:
            response = await self._generate(
                ai_prompts.build_suggestion_prompt(profile), temperature=0.7, max_tokens=2048
            )
            suggestions = parse_suggestions(response)
        except Exception as e:
            logger.warning(f"Suggestion generation failed: {e}")
            return []
        logger.info(f"Parsed {len(suggestions)} suggested universities")
        return suggestions

    async def insert_suggested_universities(
        self, session: AsyncSession, suggestions: Sequence[Mapping[str, Any]]
    ) -> List[UniversityRead]:
        """
        Persist suggested universities that are not in the catalogue yet.

        A suggestion matching an existing university by name and country
        resolves to that university. New universities get their nested
        scholarships created (or reused by name and provider) and linked, and
        are then linked to existing scholarships of the same country.
        Failures are logged per suggestion (and per scholarship) and skipped.

        A failed write rolls the session back, which expires every row it
        holds, so each university is read into a ``UniversityRead`` as soon
        as it is resolved.

        Args:
            session: Database session
            suggestions: Suggested universities (camelCase keys)

        Returns:
            Existing or newly created universities, in suggestion order
        """
        universities = UniversityRepository(session)
        resolved: List[UniversityRead] = []

        for suggested in suggestions:
            name = suggested.get("name")
            try:
                existing = await universities.find_by_name_and_country(name, suggested.get("country"))
                if existing is not None:
                    logger.info(f"University {name} already exists, skipping insert")
                    resolved.append(UniversityRead.model_validate(existing))
                    continue
                university = UniversityRead.model_validate(
                    await universities.create(self._university_from_suggestion(suggested))
                )
            except Exception as e:
                logger.error(f"Failed to insert university {name}: {e}", exc_info=True)
                await session.rollback()
                continue

            logger.info(f"Inserted AI suggested university: {name}")
            for scholarship_data in suggested.get("scholarships") or []:
                if isinstance(scholarship_data, Mapping):
                    await self._attach_suggested_scholarship(session, university, scholarship_data)

            await self.match_existing_scholarships(session, university.id, university.country, university.specialties)
            resolved.append(university)

        return resolved

    @staticmethod
    def _university_from_suggestion(suggested: Mapping[str, Any]) -> University:
        specialties = suggested.get("specialties") if isinstance(suggested.get("specialties"), list) else []
        description = (
            suggested.get("description")
            or suggested.get("reasoning")
            or "University recommended by AI matching system. "
            f"Specializes in {', '.join(specialties) or 'various fields'}."
        )
        return University(
            name=suggested.get("name"),
            location=suggested.get("location"),
            country=suggested.get("country"),
            ranking=coerce_int(suggested.get("ranking")) or 999,
            student_count=coerce_int(suggested.get("studentCount")) or 10000,
            established_year=coerce_int(suggested.get("establishedYear")) or 1900,
            type=UniversityType.PRIVATE if suggested.get("type") == "private" else UniversityType.PUBLIC,
            tuition_range=suggested.get("tuitionRange") or "Contact for details",
            acceptance_rate=parse_acceptance_rate(suggested.get("acceptanceRate")),
            description=description,
            website=suggested.get("website") or "#",
            image_url=None,
            specialties=specialties,
            campus_size=suggested.get("campusSize") or "Medium",
            room_board_cost=suggested.get("roomBoardCost"),
            books_supplies_cost=suggested.get("booksSuppliesCost"),
            personal_expenses_cost=suggested.get("personalExpensesCost"),
            facilities_info=suggested.get("facilitiesInfo") or {},
            housing_options=suggested.get("housingOptions") or [],
            student_organizations=suggested.get("studentOrganizations") or [],
            dining_options=suggested.get("diningOptions") or [],
            transportation_info=suggested.get("transportationInfo") or [],
            source=UniversitySource.AI_SUGGESTED,
        )

    async def _attach_suggested_scholarship(
        self, session: AsyncSession, university: UniversityRead, data: Mapping[str, Any]
    ) -> None:
        scholarships = ScholarshipRepository(session)
        provider = data.get("provider") or "Unknown"
        try:
            scholarship = await scholarships.find_by_name_and_provider(data.get("name"), provider)
            if scholarship is None:
                scholarship = await scholarships.create(
                    Scholarship(
                        name=data.get("name"),
                        type=_scholarship_type(data.get("type")),
                        amount=data.get("amount") or "Amount varies",
                        description=data.get("description") or "AI suggested scholarship opportunity.",
                        requirements=data.get("requirements") or [],
                        deadline=data.get("deadline") or "Contact for deadline",
                        provider=provider,
                        country=university.country,
                        application_url=data.get("applicationUrl"),
                        eligible_programs=data.get("eligiblePrograms") or [],
                        max_recipients=_max_recipients(data.get("maxRecipients")),
                    )
                )
                logger.info(f"Inserted scholarship: {scholarship.name}")
            await UniversityRepository(session).link_scholarship(university.id, scholarship.id)
        except Exception as e:
            logger.error(f"Failed to process scholarship {data.get('name')}: {e}")
            await session.rollback()

    async def match_existing_scholarships(
        self, session: AsyncSession, university_id: Any, country: str, specialties: Sequence[str]
    ) -> int:
        """
        Link up to five scholarships of the same country to a university.

        A scholarship qualifies when it has no eligible programs or when one
        of them overlaps a university specialty. Existing links are kept.

        Returns:
            Number of links created
        """
        linked = 0
        try:
            universities = UniversityRepository(session)
            for scholarship in await ScholarshipRepository(session).list_by_country(country, limit=5):
                programs = scholarship.eligible_programs or []
                if programs and not programs_overlap(programs, specialties):
                    continue
                if await universities.link_scholarship(university_id, scholarship.id) is not None:
                    linked += 1
                    logger.info(f"Matched existing scholarship {scholarship.name} to university {university_id}")
        except Exception as e:
            logger.error(f"Failed to match existing scholarships: {e}")
            await session.rollback()
        return linked

    # --- recommendations & chat ---

    async def generate_task_recommendations(
        self, profile: Mapping[str, Any], university_names: List[str], scholarship_names: List[str]
    ) -> List[Dict[str, Any]]:
        """
        Recommend application tasks for a profile and its favorites.

        Returns:
            Flat list of task dictionaries; empty when the model call fails
        """
        try:
            response = await self._generate(
                ai_prompts.build_task_recommendation_prompt(profile, university_names, scholarship_names),
                temperature=0.3,
                max_tokens=4000,
            )
        except Exception as e:
            logger.error(f"Task recommendation generation failed: {e}", exc_info=True)
            return []
        return parse_task_recommendations(response)

    async def generate_chat_response(
        self,
        message: str,
        profile: Optional[Mapping[str, Any]],
        university_names: List[str],
        scholarship_names: List[str],
        history: List[Mapping[str, Any]],
    ) -> Dict[str, Any]:
        """
        Reply to a chat message as the study-abroad advisor.

        Args:
            message: Latest user message
            profile: Student profile (camelCase keys), or None if not filled in
            university_names: Names of favorite universities
            scholarship_names: Names of favorite scholarships
            history: Prior turns as ``{"role", "content"}`` mappings, oldest first

        Returns:
            ``{"response": text, "suggestedTasks": []}``; the response is an
            apology text when the model call fails
        """
        try:
            response = await self._generate(
                ai_prompts.build_chat_prompt(message, profile, university_names, scholarship_names, history),
                temperature=0.7,
                max_tokens=2000,
            )
        except Exception as e:
            logger.error(f"Chat response generation failed: {e}", exc_info=True)
            return {"response": CHAT_ERROR_RESPONSE, "suggestedTasks": []}
        return {"response": response.strip(), "suggestedTasks": []}


_ai_service: Optional[AIService] = None


def get_ai_service() -> AIService:
    global _ai_service
    if _ai_service is None:
        _ai_service = AIService()
    return _ai_service
