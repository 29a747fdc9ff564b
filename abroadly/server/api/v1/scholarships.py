"""
API endpoints for the scholarship catalogue.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter

from abroadly.core.database.entities import ScholarshipType
from abroadly.core.models.io import (
    MessageResponse,
    OffsetPagination,
    ScholarshipListResponse,
    ScholarshipRead,
    ScholarshipResponse,
)
from abroadly.server.services.catalog import ScholarshipService
from abroadly.server.services.deps import CurrentUserIdDep, SessionDep
from abroadly.server.services.favorites import FavoriteService

router = APIRouter(tags=["scholarships"])


@router.get(
    "",
    response_model=ScholarshipListResponse,
    summary="List Scholarships",
    description="Page through scholarships, optionally filtered by type and country.",
    responses={
        200: {"description": "Scholarships retrieved"},
        400: {"description": "Invalid page size or offset"},
    },
)
async def list_scholarships(
    session: SessionDep,
    type: Optional[ScholarshipType] = None,
    country: Optional[str] = None,
    limit: int = 20,
    offset: int = 0,
) -> ScholarshipListResponse:
    scholarships, total = await ScholarshipService(session).list(limit, offset, type=type, country=country)
    return ScholarshipListResponse(
        scholarships=[ScholarshipRead.model_validate(s) for s in scholarships],
        pagination=OffsetPagination.build(total, limit, offset),
    )


@router.get(
    "/{scholarship_id}",
    response_model=ScholarshipResponse,
    summary="Get Scholarship",
    responses={404: {"description": "Scholarship not found"}},
)
async def get_scholarship(scholarship_id: str, session: SessionDep) -> ScholarshipResponse:
    scholarship = await ScholarshipService(session).get(scholarship_id)
    return ScholarshipResponse(scholarship=ScholarshipRead.model_validate(scholarship))


@router.post(
    "/{scholarship_id}/favorite",
    response_model=MessageResponse,
    summary="Favorite Scholarship",
    responses={
        404: {"description": "Scholarship not found"},
        409: {"description": "Scholarship already saved"},
    },
)
async def favorite_scholarship(scholarship_id: str, user_id: CurrentUserIdDep, session: SessionDep) -> MessageResponse:
    await FavoriteService(session).add_scholarship(user_id, scholarship_id)
    return MessageResponse(message="Scholarship added to favorites")


@router.delete(
    "/{scholarship_id}/favorite",
    response_model=MessageResponse,
    summary="Unfavorite Scholarship",
    responses={404: {"description": "Scholarship not saved"}},
)
async def unfavorite_scholarship(
    scholarship_id: str, user_id: CurrentUserIdDep, session: SessionDep
) -> MessageResponse:
    await FavoriteService(session).remove_scholarship(user_id, scholarship_id)
    return MessageResponse(message="Scholarship removed from favorites")
