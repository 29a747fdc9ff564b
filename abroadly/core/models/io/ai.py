"""
AI feature I/O models for API requests and responses.

The AI endpoints wrap their payloads in a ``{success, data}`` envelope. The
profile sent for matching is the client's camelCase profile object and is
passed to the AI service as a plain dictionary.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field

from .common import AIEnvelope, CamelModel
from .universities import UniversityRead


class CVTextRequest(CamelModel):
    """CV supplied as already extracted text."""

    cv_text: Optional[str] = None


class MatchRequest(CamelModel):
    profile: Optional[Dict[str, Any]] = Field(default=None, description="Student profile in camelCase")


class UniversityMatch(CamelModel):
    """One catalogue university scored against the profile."""

    university: UniversityRead
    match_score: int = Field(description="0-100, higher is better")
    reasoning: Optional[str] = None
    strengths: List[str] = Field(default_factory=list)
    concerns: List[str] = Field(default_factory=list)


class MatchData(CamelModel):
    matches: List[UniversityMatch]
    suggested_universities: List[Any]
    inserted_suggestions: List[UniversityRead]
    total_matches: int


class MatchResponse(AIEnvelope):
    data: MatchData


class ProfileAutofillResponse(AIEnvelope):
    data: Dict[str, Any]


class AIChatRequest(CamelModel):
    """Stateless chat message with optional prior turns."""

    message: Optional[str] = None
    conversation_history: Optional[List[Dict[str, Any]]] = None


class AIChatData(CamelModel):
    response: str
    conversation_id: str


class AIChatResponse(AIEnvelope):
    data: AIChatData


class TaskSuggestionsRequest(CamelModel):
    current_profile: Optional[Dict[str, Any]] = None
    goals: Optional[List[str]] = None


class TaskSuggestionsData(CamelModel):
    suggestions: List[str]


class TaskSuggestionsResponse(AIEnvelope):
    data: TaskSuggestionsData


class RecommendedTask(CamelModel):
    """Task proposed by the recommendation model."""

    title: Optional[str] = None
    type: str = "GLOBAL"
    priority: Optional[str] = None
    due_date: Optional[str] = None
    notes: Optional[str] = None
    tags: List[str] = Field(default_factory=list)


class RecommendationProfile(CamelModel):
    target_level: Optional[str] = None
    intended_major: Optional[str] = None
    institution: Optional[str] = None


class TaskRecommendationsResponse(CamelModel):
    """Recommended tasks together with the context they were derived from."""

    recommendations: List[RecommendedTask]
    profile: RecommendationProfile
    favorite_universities: List[str]
    favorite_scholarships: List[str]
