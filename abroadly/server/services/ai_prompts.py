"""
Prompt templates for the AI service.

Profiles are passed in as camelCase dictionaries, the shape the web client
sends for matching and the shape ``ProfileRead`` dumps to by alias.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Mapping, Optional

NOT_SPECIFIED = "Not specified"

PROFILE_EXTRACTION_SCHEMA = """{
  "fullName": "extracted full name",
  "email": "extracted email address",
  "phone": "extracted phone number",
  "dateOfBirth": "extracted date of birth in YYYY-MM-DD format",
  "nationality": "extracted nationality",
  "targetLevel": "undergraduate|graduate|postgraduate based on education level",
  "intendedMajor": "extracted field of study or major",
  "institution": "current or most recent educational institution",
  "graduationYear": "graduation year as number",
  "academicScore": "GPA or academic score if mentioned",
  "scoreScale": "gpa4|gpa5|percentage|other based on score type",
  "englishTests": [
    {
      "type": "TOEFL|IELTS|TOEIC|etc",
      "score": "score value",
      "date": "test date if available"
    }
  ],
  "standardizedTests": [
    {
      "type": "SAT|ACT|GRE|GMAT|etc",
      "score": "score value",
      "date": "test date if available"
    }
  ],
  "awards": [
    {
      "title": "award title",
      "year": "year received",
      "level": "local|national|international"
    }
  ],
  "extracurriculars": [
    {
      "activity": "activity name",
      "period": "time period",
      "description": "brief description"
    }
  ]
}"""


def _value(profile: Mapping[str, Any], key: str, default: str = NOT_SPECIFIED) -> Any:
    value = profile.get(key)
    return default if value is None or value == "" else value


def format_budget(budget_min: Any, budget_max: Any) -> str:
    """
    Render the yearly budget range for a prompt.

    Examples:
        >>> format_budget(10000, 25000)
        '$10,000 - $25,000 per year'
        >>> format_budget(None, 5000)
        'Maximum $5,000 per year'
    """
    budget_min, budget_max = _as_int(budget_min), _as_int(budget_max)
    if budget_min and budget_max:
        return f"${budget_min:,} - ${budget_max:,} per year"
    if budget_min:
        return f"Minimum ${budget_min:,} per year"
    if budget_max:
        return f"Maximum ${budget_max:,} per year"
    return NOT_SPECIFIED


def _as_int(value: Any) -> Optional[int]:
    try:
        return int(float(value)) if value not in (None, "") else None
    except (TypeError, ValueError):
        return None


def _bullets(items: Optional[Iterable[Any]], render, empty: str) -> str:
    lines = [render(item) for item in (items or []) if isinstance(item, Mapping)]
    return "\n".join(lines) if lines else empty


def build_profile_extraction_prompt(cv_text: str) -> str:
    return f"""
You are an expert CV/Resume analyzer. Extract academic and personal information from the following CV text and return it in JSON format.

CV Text:
{cv_text}

Please extract the following information and return it as a JSON object:

{PROFILE_EXTRACTION_SCHEMA}

Rules:
1. Only include fields that are clearly mentioned in the CV
2. Use null for missing information
3. Be conservative in your extractions - only include data you're confident about
4. For dates, use YYYY-MM-DD format when possible
5. Return only valid JSON, no additional text
6. If a field is not found, omit it from the JSON or set it to null
"""


def build_match_prompt(profile: Mapping[str, Any], universities: List[Dict[str, Any]]) -> str:
    """
    Build the prompt that scores catalogue universities against a profile.

    Args:
        profile: Student profile (camelCase keys)
        universities: University summaries to choose from

    Returns:
        Prompt text asking for a ``{"matches": [...]}`` JSON answer
    """
    english_tests = _bullets(
        profile.get("englishTests"),
        lambda t: f"- {t.get('type')}: {t.get('score')} ({t.get('date')})",
        "- No English test scores provided",
    )
    standardized_tests = _bullets(
        profile.get("standardizedTests"),
        lambda t: f"- {t.get('type')}: {t.get('score')} ({t.get('date')})",
        "- No standardized test scores provided",
    )
    awards = _bullets(
        profile.get("awards"),
        lambda a: f"- {a.get('title')} ({a.get('year')}) - {a.get('level')} level",
        "- No awards provided",
    )
    activities = _bullets(
        profile.get("extracurriculars"),
        lambda a: f"- {a.get('activity')} ({a.get('period')}): {a.get('description') or ''}",
        "- No extracurricular activities provided",
    )
    nationality = profile.get("nationality") or "the student's origin country"
    intended_country = profile.get("intendedCountry") or "any country"

    return f"""You are an expert university admissions counselor. Analyze the user profile and match them with the most suitable universities from the provided list.

USER PROFILE:
- Name: {_value(profile, "fullName", "Not provided")}
- Target Level: {_value(profile, "targetLevel")}
- Intended Major: {_value(profile, "intendedMajor")}
- Current Institution: {_value(profile, "institution")}
- Graduation Year: {_value(profile, "graduationYear")}
- Academic Score: {_value(profile, "academicScore", "Not provided")} (Scale: {_value(profile, "scoreScale")})
- Nationality: {_value(profile, "nationality")}
- Intended Study Abroad Country: {_value(profile, "intendedCountry")}
- Budget Range: {format_budget(profile.get("budgetMin"), profile.get("budgetMax"))}

English Test Scores:
{english_tests}

Standardized Test Scores:
{standardized_tests}

Awards & Achievements:
{awards}

Extracurricular Activities:
{activities}

AVAILABLE UNIVERSITIES:
{json.dumps(universities, indent=2, default=str)}

CRITICAL INSTRUCTIONS:
1. EXCLUDE any universities from {nationality}. Only suggest universities outside the student's origin country.
2. Only include universities that match the student's intended major and academic profile.
3. Prioritize universities in or near the intended study abroad country ({intended_country}).

TASK:
1. Analyze each available university and calculate a match score (0-100) based on academic fit, program alignment, cultural/geographic fit, financial fit, and admission probability.
2. For each matching university (excluding origin country), provide: match score, detailed reasoning, 2-3 key strengths, and 1-2 potential concerns.
3. Rank all matches by score (highest first).

CRITICAL: Respond ONLY with valid JSON. No text before or after. No markdown. Start with {{ and end with }}.

RESPONSE FORMAT (JSON only):
{{
  "matches": [
    {{
      "universityId": "string",
      "matchScore": number,
      "reasoning": "string",
      "strengths": ["string"],
      "concerns": ["string"]
    }}
  ]
}}

- All numbers must be actual numbers (not strings)"""


def build_suggestion_prompt(profile: Mapping[str, Any]) -> str:
    return f"""Based on this student profile, suggest 2-3 universities NOT in an existing database that would be excellent matches:

USER PROFILE:
- Target Level: {_value(profile, "targetLevel")}
- Intended Major: {_value(profile, "intendedMajor")}
- Academic Score: {_value(profile, "academicScore", "Not provided")} (Scale: {_value(profile, "scoreScale")})
- Intended Study Abroad Country: {_value(profile, "intendedCountry")}
- Budget Range: {format_budget(profile.get("budgetMin"), profile.get("budgetMax"))}

TASK: Suggest 2-3 real universities with complete, realistic information.

RESPOND ONLY with JSON (no markdown, no text before/after):
{{
  "suggestions": [
    {{
      "name": "string",
      "location": "string",
      "country": "string",
      "reasoning": "string",
      "estimatedMatchScore": number,
      "specialties": ["string"],
      "type": "public|private",
      "ranking": number,
      "studentCount": number,
      "establishedYear": number,
      "tuitionRange": "string",
      "acceptanceRate": "string",
      "description": "string",
      "website": "string"
    }}
  ]
}}"""


def build_task_recommendation_prompt(
    profile: Mapping[str, Any], university_names: List[str], scholarship_names: List[str]
) -> str:
    return f"""You are an expert academic advisor helping students with university applications and scholarship applications.

**Student Profile:**
- Target Level: {_value(profile, "targetLevel")}
- Intended Major: {_value(profile, "intendedMajor")}
- Current Institution: {_value(profile, "institution")}
- Graduation Year: {_value(profile, "graduationYear")}
- Academic Score: {_value(profile, "academicScore")} ({_value(profile, "scoreScale")})
- Nationality: {_value(profile, "nationality")}
- Intended Study Abroad Country: {_value(profile, "intendedCountry")}
- Budget Range: {format_budget(profile.get("budgetMin"), profile.get("budgetMax"))}

**Favorite Universities:** {", ".join(university_names) or "None selected"}
**Favorite Scholarships:** {", ".join(scholarship_names) or "None selected"}

**Instructions:**
Generate personalized task recommendations as a flat array. Each task should be actionable and specific to the student's profile and targets.

**Task Categories to consider:**
1. Academic Preparation (test scores, GPA improvement, coursework)
2. Application Materials (essays, CVs, portfolios, transcripts)
3. Documentation (visas, financial documents, recommendations)
4. Research (faculty research, program requirements, deadlines)
5. Financial Planning (scholarship applications, funding sources)

**Output Format (JSON only):**
{{
  "tasks": [
    {{
      "title": "Complete SAT/ACT with target score",
      "type": "GLOBAL",
      "priority": "MUST",
      "dueDate": "YYYY-MM-DD",
      "notes": "Target SAT 1540+ for competitive admission to top universities",
      "tags": ["standardized-tests"]
    }}
  ]
}}

**Important Guidelines:**
- Return tasks as a flat array (no grouping)
- The task's title should be concise and descriptive consists of 3-7 words
- Use realistic due dates (within 6-12 months)
- Priority: MUST (critical), NEED (important), NICE (optional)
- Type: GLOBAL (applies broadly), UNIV_SPECIFIC (specific institution), GROUP (project-based)
- Include specific, actionable advice in notes
- Use relevant tags for categorization
- Generate 1-5 tasks total based on student's targets

Generate 1-5 tasks focused on the student's specific favorite universities and scholarships. Make tasks specific and actionable."""


def format_history(history: List[Mapping[str, Any]], limit: int = 6) -> str:
    """Render the last ``limit`` chat turns as ``User:`` / ``Assistant:`` lines."""
    return "\n".join(
        f"{'User' if turn.get('role') == 'user' else 'Assistant'}: {turn.get('content', '')}"
        for turn in history[-limit:]
    )


def build_chat_prompt(
    message: str,
    profile: Optional[Mapping[str, Any]],
    university_names: List[str],
    scholarship_names: List[str],
    history: List[Mapping[str, Any]],
) -> str:
    if profile:
        profile_text = (
            f"- Target Level: {_value(profile, 'targetLevel')}\n"
            f"- Intended Major: {_value(profile, 'intendedMajor')}\n"
            f"- Current Institution: {_value(profile, 'institution')}\n"
            f"- Graduation Year: {_value(profile, 'graduationYear')}\n"
            f"- Academic Score: {_value(profile, 'academicScore')} ({_value(profile, 'scoreScale')})\n"
            f"- Nationality: {_value(profile, 'nationality')}"
        )
    else:
        profile_text = "Profile not yet completed"

    return f"""You are an expert academic advisor and AI assistant helping students with university applications, career guidance, and academic planning.

**User Profile:**
{profile_text}

**Favorite Universities:** {", ".join(university_names) or "None selected"}
**Favorite Scholarships:** {", ".join(scholarship_names) or "None selected"}

**Recent Conversation History:**
{format_history(history)}

**Current User Message:** {message}

**Instructions:**
Provide a helpful, personalized response based on the user's specific question or request. Focus on what they're asking for rather than making assumptions.

**Response Guidelines:**
- Answer their specific question directly and clearly
- Be conversational and friendly, but focused
- Reference their profile/interests only when relevant to their question
- Ask for clarification if their request is unclear or needs more details
- Provide specific, actionable advice when appropriate
- Keep responses focused and not too long
- Only suggest tasks or next steps if they specifically ask for advice or planning help
- Don't automatically suggest tasks unless they're asking for recommendations

**Important:**
- If they're asking a general question, give a direct answer
- If they're asking for advice, provide specific recommendations
- If they're asking for help with something specific, focus on that
- Ask for clarification when needed rather than making assumptions

Response:"""
