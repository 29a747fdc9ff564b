"""
API endpoints for the university catalogue.

Browsing is public; saving a university as favorite requires a bearer token.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Query

from abroadly.core.database.entities import UniversityType
from abroadly.core.database.repositories import UniversityFilters
from abroadly.core.models.io import (
    MessageResponse,
    PagePagination,
    ScholarshipRead,
    ScholarshipsResponse,
    UniversityListResponse,
    UniversityRead,
    UniversityResponse,
)
from abroadly.server.services.catalog import UniversityService
from abroadly.server.services.deps import CurrentUserIdDep, SessionDep
from abroadly.server.services.favorites import FavoriteService

router = APIRouter(tags=["universities"])


@router.get(
    "",
    response_model=UniversityListResponse,
    summary="Search Universities",
    description="Search the catalogue with optional filters. Results are ordered by ranking and paginated by offset.",
    response_description="One page of universities with pagination metadata.",
    responses={
        200: {"description": "Universities retrieved"},
        400: {"description": "Invalid page size or ranking range"},
    },
)
async def list_universities(
    session: SessionDep,
    search: Optional[str] = None,
    country: Optional[str] = None,
    type: Optional[UniversityType] = None,
    min_ranking: Optional[int] = Query(default=None, alias="minRanking"),
    max_ranking: Optional[int] = Query(default=None, alias="maxRanking"),
    min_acceptance_rate: Optional[Decimal] = Query(default=None, alias="minAcceptanceRate"),
    max_acceptance_rate: Optional[Decimal] = Query(default=None, alias="maxAcceptanceRate"),
    limit: int = 20,
    offset: int = 0,
) -> UniversityListResponse:
    """
    Search universities.

    - **search**: Case-insensitive substring of the name.
    - **country** / **type**: Exact filters.
    - **minRanking** / **maxRanking**: Inclusive ranking range.
    - **minAcceptanceRate** / **maxAcceptanceRate**: Inclusive acceptance rate range, in percent.
    - **limit**: Page size between 1 and 100 (default 20).
    - **offset**: Rows to skip (default 0).
    """
    filters = UniversityFilters(
        search=search,
        country=country,
        type=type,
        min_ranking=min_ranking,
        max_ranking=max_ranking,
        min_acceptance_rate=min_acceptance_rate,
        max_acceptance_rate=max_acceptance_rate,
    )
    universities, total = await UniversityService(session).search(filters, limit, offset)
    return UniversityListResponse(
        universities=[UniversityRead.model_validate(u) for u in universities],
        pagination=PagePagination.build(total, limit, offset),
    )


@router.get(
    "/{university_id}",
    response_model=UniversityResponse,
    summary="Get University",
    responses={
        200: {"description": "University found"},
        404: {"description": "University not found"},
    },
)
async def get_university(university_id: str, session: SessionDep) -> UniversityResponse:
    university = await UniversityService(session).get(university_id)
    return UniversityResponse(university=UniversityRead.model_validate(university))


@router.get(
    "/{university_id}/scholarships",
    response_model=ScholarshipsResponse,
    summary="List University Scholarships",
    description="Retrieve the scholarships offered at a university.",
    responses={404: {"description": "University not found"}},
)
async def get_university_scholarships(university_id: str, session: SessionDep) -> ScholarshipsResponse:
    scholarships = await UniversityService(session).get_scholarships(university_id)
    return ScholarshipsResponse(scholarships=[ScholarshipRead.model_validate(s) for s in scholarships])


@router.post(
    "/{university_id}/favorite",
    response_model=MessageResponse,
    summary="Favorite University",
    responses={
        404: {"description": "University not found"},
        409: {"description": "University already saved"},
    },
)
async def favorite_university(university_id: str, user_id: CurrentUserIdDep, session: SessionDep) -> MessageResponse:
    await FavoriteService(session).add_university(user_id, university_id)
    return MessageResponse(message="University added to favorites")


@router.delete(
    "/{university_id}/favorite",
    response_model=MessageResponse,
    summary="Unfavorite University",
    responses={404: {"description": "University not saved"}},
)
async def unfavorite_university(
    university_id: str, user_id: CurrentUserIdDep, session: SessionDep
) -> MessageResponse:
    await FavoriteService(session).remove_university(user_id, university_id)
    return MessageResponse(message="University removed from favorites")
