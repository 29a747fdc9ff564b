"""
API endpoints for the AI assistant features.

Responses use a ``{success, data}`` envelope; failures are answered with
``{success: false, error}`` and a localized message where one exists.
"""

from __future__ import annotations

import time
from typing import Any, Optional

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile
from pypdf.errors import PdfReadError

from abroadly.core.logging_config import get_logger
from abroadly.core.models.io import (
    AIChatRequest,
    AIChatResponse,
    MatchRequest,
    MatchResponse,
    ProfileAutofillResponse,
    TaskSuggestionsRequest,
    TaskSuggestionsResponse,
    UniversityMatch,
)
from abroadly.core.models.io.ai import AIChatData, MatchData, TaskSuggestionsData
from abroadly.server.core.config import settings
from abroadly.server.core.i18n import translate
from abroadly.server.services.deps import AIServiceDep, CurrentUserIdDep, LanguageDep, SessionDep
from abroadly.server.services.pdf_extraction import PDF_CONTENT_TYPES, extract_pdf_text
from abroadly.server.services.recommendations import NoUniversitiesError, UniversityMatchingService

logger = get_logger(__name__)

router = APIRouter(tags=["ai"])

DEFAULT_TASK_SUGGESTIONS = [
    "Complete your standardized test preparation",
    "Research target universities",
    "Prepare application essays",
]


def ai_error(status_code: int, message: str) -> JSONResponse:
    """Failure body of the AI endpoints."""
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


async def _read_cv_text(request: Request, lang: str) -> tuple[Optional[str], Optional[JSONResponse]]:
    """Get the CV text from a PDF upload or a ``{"cvText": ...}`` JSON body."""
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("multipart/form-data"):
        form = await request.form()
        upload = form.get("file")
        if not isinstance(upload, UploadFile):
            return None, ai_error(status.HTTP_400_BAD_REQUEST, translate("noFileUploaded", lang))
        if upload.content_type not in PDF_CONTENT_TYPES:
            return None, ai_error(status.HTTP_400_BAD_REQUEST, translate("invalidFileType", lang))
        data = await upload.read()
        if len(data) > settings.max_upload_bytes:
            return None, ai_error(status.HTTP_400_BAD_REQUEST, translate("fileTooLarge", lang))
        try:
            return extract_pdf_text(data), None
        except PdfReadError as e:
            logger.warning(f"Could not read uploaded PDF: {e}")
            return None, ai_error(status.HTTP_400_BAD_REQUEST, translate("fileProcessingError", lang))

    try:
        body = await request.json()
    except ValueError:
        body = None
    cv_text = body.get("cvText") if isinstance(body, dict) else None
    if not cv_text or not isinstance(cv_text, str):
        return None, ai_error(status.HTTP_400_BAD_REQUEST, translate("noFileUploaded", lang))
    if len(cv_text) > settings.max_upload_bytes:
        return None, ai_error(status.HTTP_400_BAD_REQUEST, translate("fileTooLarge", lang))
    return cv_text, None


@router.post(
    "/profile-autofill",
    response_model=ProfileAutofillResponse,
    summary="Autofill Profile From CV",
    description=(
        "Extract profile fields from a CV. Send either a multipart `file` (PDF, at most 10 MB) "
        'or a JSON body `{"cvText": "..."}`.'
    ),
    response_description="Extracted profile fields in camelCase.",
    responses={
        200: {"description": "Profile fields extracted"},
        400: {"description": "Missing, invalid, too large or empty CV"},
        500: {"description": "AI analysis failed"},
    },
)
async def profile_autofill(request: Request, lang: LanguageDep, ai_service: AIServiceDep):
    cv_text, error = await _read_cv_text(request, lang)
    if error is not None:
        return error
    if not cv_text.strip():
        return ai_error(status.HTTP_400_BAD_REQUEST, "Could not extract text from PDF")

    result = await ai_service.analyze_cv_text(cv_text)
    if not result.success:
        return ai_error(status.HTTP_500_INTERNAL_SERVER_ERROR, result.error or "Failed to process CV. Please try again.")

    return ProfileAutofillResponse(data=result.data, message=translate("profileAutofillSuccess", lang))


@router.post(
    "/match",
    response_model=MatchResponse,
    summary="Match Universities",
    description=(
        "Score the catalogue against a student profile, suggest universities outside the catalogue "
        "and store those suggestions."
    ),
    responses={
        200: {"description": "Matches generated"},
        400: {"description": "Profile missing"},
        401: {"description": "Missing or invalid token"},
        404: {"description": "Catalogue is empty"},
        500: {"description": "Matching failed"},
    },
)
async def match_universities(
    body: MatchRequest,
    user_id: CurrentUserIdDep,
    session: SessionDep,
    lang: LanguageDep,
    ai_service: AIServiceDep,
):
    if not body.profile:
        return ai_error(status.HTTP_400_BAD_REQUEST, translate("invalidProfileData", lang))

    try:
        outcome = await UniversityMatchingService(session, ai_service).match(body.profile)
    except NoUniversitiesError:
        return ai_error(status.HTTP_404_NOT_FOUND, translate("noUniversitiesFound", lang))
    except Exception as e:
        logger.error(f"University match error for user {user_id}: {e}", exc_info=True)
        return ai_error(status.HTTP_500_INTERNAL_SERVER_ERROR, translate("universityMatchError", lang))

    result = outcome.result
    if not result.success:
        return ai_error(status.HTTP_500_INTERNAL_SERVER_ERROR, result.error or translate("aiMatchingFailed", lang))

    matches = [
        UniversityMatch(
            university=match["university"],
            match_score=match["match_score"],
            reasoning=match["reasoning"],
            strengths=[str(s) for s in match["strengths"]],
            concerns=[str(c) for c in match["concerns"]],
        )
        for match in result.matches
    ]
    inserted = list(outcome.inserted)
    suggested: list[Any] = list(inserted) if inserted else result.suggested_universities
    return MatchResponse(
        data=MatchData(
            matches=matches,
            suggested_universities=suggested,
            inserted_suggestions=inserted,
            total_matches=len(matches),
        )
    )


@router.post(
    "/chat",
    response_model=AIChatResponse,
    summary="Ask The Advisor",
    description="Stateless advisor reply to a message with optional prior turns.",
    responses={400: {"description": "Message missing"}},
)
async def ai_chat(body: AIChatRequest, ai_service: AIServiceDep):
    if not body.message:
        return ai_error(status.HTTP_400_BAD_REQUEST, "Message is required")

    history = [turn for turn in (body.conversation_history or []) if isinstance(turn, dict)]
    reply = await ai_service.generate_chat_response(body.message, None, [], [], history)
    return AIChatResponse(
        data=AIChatData(response=reply["response"], conversation_id=str(int(time.time() * 1000)))
    )


@router.post(
    "/task-suggestions",
    response_model=TaskSuggestionsResponse,
    summary="Task Suggestions",
    description="General next steps for a study-abroad application.",
)
async def task_suggestions(body: Optional[TaskSuggestionsRequest] = None) -> TaskSuggestionsResponse:
    return TaskSuggestionsResponse(data=TaskSuggestionsData(suggestions=list(DEFAULT_TASK_SUGGESTIONS)))
