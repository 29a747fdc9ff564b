"""
API endpoints for the authenticated user's profile and favorites.

All endpoints require a bearer token. Favorite universities accept either a
catalogue id or an ``ai-suggested-<slug>`` id for universities proposed by
the matching flow that the client has not stored yet.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Body, HTTPException, status

from abroadly.core.models.io import (
    AccountRead,
    FavoriteAddedResponse,
    FavoriteCheckResponse,
    FavoriteRead,
    FavoriteWithUniversity,
    MessageResponse,
    ProfileRead,
    ProfileResponse,
    ProfileUpdate,
    ProfileUpdatedResponse,
    ScholarshipFavoriteAddedResponse,
    ScholarshipFavoriteRead,
    ScholarshipRead,
    SuggestedUniversityPayload,
    UniversityRead,
    UserInfoResponse,
    UserInfoUpdate,
    UserSummary,
)
from abroadly.server.core.i18n import translate
from abroadly.server.services.deps import CurrentUserIdDep, LanguageDep, SessionDep
from abroadly.server.services.favorites import FavoriteService
from abroadly.server.services.profiles import ProfileService

router = APIRouter(tags=["user"])


# =====================================================================
# Profile
# =====================================================================


@router.get(
    "/profile",
    response_model=ProfileResponse,
    summary="Get Profile",
    description="Retrieve the account together with its academic profile. The profile is null until it is saved once.",
    responses={
        200: {"description": "Profile retrieved"},
        404: {"description": "Account no longer exists"},
    },
)
async def get_profile(user_id: CurrentUserIdDep, session: SessionDep, lang: LanguageDep) -> ProfileResponse:
    user, profile = await ProfileService(session).get_profile(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=translate("userNotFound", lang))
    return ProfileResponse(
        user=AccountRead.model_validate(user),
        profile=ProfileRead.model_validate(profile) if profile is not None else None,
    )


@router.put(
    "/profile",
    response_model=ProfileUpdatedResponse,
    summary="Save Profile",
    description="Create the academic profile or replace the existing one.",
    response_description="The saved profile.",
    responses={
        200: {"description": "Profile saved"},
        400: {"description": "Profile data breaks a validation rule"},
    },
)
async def update_profile(
    body: ProfileUpdate, user_id: CurrentUserIdDep, session: SessionDep, lang: LanguageDep
) -> ProfileUpdatedResponse:
    """
    Save the academic profile.

    - **budgetMin** must not exceed **budgetMax**.
    - **academicScore** is a non-negative number, at most 4.0 on the gpa4 scale and 100 as a percentage.
    - **graduationYear** lies between 1950 and ten years from now.
    - **nationality** defaults to Indonesia.
    """
    profile = await ProfileService(session).upsert_profile(user_id, body)
    return ProfileUpdatedResponse(message=translate("profileUpdated", lang), profile=ProfileRead.model_validate(profile))


@router.put(
    "/info",
    response_model=UserInfoResponse,
    summary="Update Account",
    description="Rename the account.",
    responses={
        200: {"description": "Account updated"},
        400: {"description": "Full name too short"},
        404: {"description": "Account no longer exists"},
    },
)
async def update_info(
    body: UserInfoUpdate, user_id: CurrentUserIdDep, session: SessionDep, lang: LanguageDep
) -> UserInfoResponse:
    user = await ProfileService(session).update_full_name(user_id, body.full_name, translate("fullNameTooShort", lang))
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=translate("userNotFound", lang))
    return UserInfoResponse(message="User information updated successfully", user=UserSummary.model_validate(user))


# =====================================================================
# Favorite universities
# =====================================================================


@router.get(
    "/favorites",
    response_model=list[FavoriteWithUniversity],
    summary="List Favorite Universities",
    description="Retrieve the saved universities, oldest first.",
)
async def list_favorites(user_id: CurrentUserIdDep, session: SessionDep) -> list[FavoriteWithUniversity]:
    pairs = await FavoriteService(session).list_universities(user_id)
    return [
        FavoriteWithUniversity(
            id=favorite.id,
            university=UniversityRead.model_validate(university),
            created_at=favorite.created_at,
        )
        for favorite, university in pairs
    ]


@router.post(
    "/favorites/{university_id}",
    response_model=FavoriteAddedResponse,
    summary="Add Favorite University",
    description="Save a university. For `ai-suggested-` ids the university data is sent in the body.",
    responses={
        200: {"description": "University saved"},
        400: {"description": "Missing data for an AI-suggested university"},
        404: {"description": "University not found"},
        409: {"description": "University already saved"},
    },
)
async def add_favorite(
    university_id: str,
    user_id: CurrentUserIdDep,
    session: SessionDep,
    payload: Optional[SuggestedUniversityPayload] = Body(default=None),
) -> FavoriteAddedResponse:
    favorite = await FavoriteService(session).add_university(user_id, university_id, payload)
    return FavoriteAddedResponse(message="University added to favorites", favorite=FavoriteRead.model_validate(favorite))


@router.delete(
    "/favorites/{university_id}",
    response_model=MessageResponse,
    summary="Remove Favorite University",
    responses={
        200: {"description": "University removed"},
        404: {"description": "University not saved or AI-suggested university unknown"},
    },
)
async def remove_favorite(university_id: str, user_id: CurrentUserIdDep, session: SessionDep) -> MessageResponse:
    await FavoriteService(session).remove_university(user_id, university_id)
    return MessageResponse(message="University removed from favorites")


@router.get(
    "/favorites/check/{university_id}",
    response_model=FavoriteCheckResponse,
    summary="Check Favorite University",
)
async def check_favorite(university_id: str, user_id: CurrentUserIdDep, session: SessionDep) -> FavoriteCheckResponse:
    is_favorite = await FavoriteService(session).is_university_favorite(user_id, university_id)
    return FavoriteCheckResponse(is_favorite=is_favorite)


# =====================================================================
# Favorite scholarships
# =====================================================================


@router.get(
    "/scholarship-favorites",
    response_model=list[ScholarshipRead],
    summary="List Favorite Scholarships",
    description="Retrieve the saved scholarships, oldest favorite first.",
)
async def list_scholarship_favorites(user_id: CurrentUserIdDep, session: SessionDep) -> list[ScholarshipRead]:
    scholarships = await FavoriteService(session).list_scholarships(user_id)
    return [ScholarshipRead.model_validate(s) for s in scholarships]


@router.post(
    "/scholarship-favorites/{scholarship_id}",
    response_model=ScholarshipFavoriteAddedResponse,
    summary="Add Favorite Scholarship",
    responses={
        200: {"description": "Scholarship saved"},
        404: {"description": "Scholarship not found"},
        409: {"description": "Scholarship already saved"},
    },
)
async def add_scholarship_favorite(
    scholarship_id: str, user_id: CurrentUserIdDep, session: SessionDep
) -> ScholarshipFavoriteAddedResponse:
    favorite = await FavoriteService(session).add_scholarship(user_id, scholarship_id)
    return ScholarshipFavoriteAddedResponse(
        message="Scholarship added to favorites", favorite=ScholarshipFavoriteRead.model_validate(favorite)
    )


@router.delete(
    "/scholarship-favorites/{scholarship_id}",
    response_model=MessageResponse,
    summary="Remove Favorite Scholarship",
    responses={404: {"description": "Scholarship not saved"}},
)
async def remove_scholarship_favorite(
    scholarship_id: str, user_id: CurrentUserIdDep, session: SessionDep
) -> MessageResponse:
    await FavoriteService(session).remove_scholarship(user_id, scholarship_id)
    return MessageResponse(message="Scholarship removed from favorites")


@router.get(
    "/scholarship-favorites/check/{scholarship_id}",
    response_model=FavoriteCheckResponse,
    summary="Check Favorite Scholarship",
)
async def check_scholarship_favorite(
    scholarship_id: str, user_id: CurrentUserIdDep, session: SessionDep
) -> FavoriteCheckResponse:
    is_favorite = await FavoriteService(session).is_scholarship_favorite(user_id, scholarship_id)
    return FavoriteCheckResponse(is_favorite=is_favorite)
