"""
API endpoint for AI generated task recommendations.
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from abroadly.core.logging_config import get_logger
from abroadly.core.models.io import RecommendedTask, TaskRecommendationsResponse
from abroadly.core.models.io.ai import RecommendationProfile
from abroadly.server.services.deps import AIServiceDep, CurrentUserIdDep, SessionDep
from abroadly.server.services.recommendations import TaskRecommendationService

logger = get_logger(__name__)

router = APIRouter(tags=["task-recommendations"])


@router.post(
    "/recommendations",
    response_model=TaskRecommendationsResponse,
    summary="Recommend Tasks",
    description=(
        "Recommend application tasks from the caller's profile, favorite universities and favorite "
        "scholarships. Nothing is stored; the client decides which tasks to create."
    ),
    responses={
        200: {"description": "Recommendations generated"},
        401: {"description": "Missing or invalid token"},
        404: {"description": "Profile not filled in yet"},
        500: {"description": "Recommendation failed"},
    },
)
async def recommend_tasks(
    user_id: CurrentUserIdDep, session: SessionDep, ai_service: AIServiceDep
) -> TaskRecommendationsResponse:
    try:
        recommended = await TaskRecommendationService(session, ai_service).recommend(user_id)
        tasks = [RecommendedTask.model_validate(task) for task in recommended.tasks]
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error generating task recommendations for user {user_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to generate recommendations"
        )

    profile = recommended.profile
    return TaskRecommendationsResponse(
        recommendations=tasks,
        profile=RecommendationProfile(
            target_level=profile.target_level.value if profile.target_level else None,
            intended_major=profile.intended_major,
            institution=profile.institution,
        ),
        favorite_universities=recommended.favorite_universities,
        favorite_scholarships=recommended.favorite_scholarships,
    )
