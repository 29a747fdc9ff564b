"""
Health Check Endpoints.

This module provides basic system status endpoints (health, version, welcome)
used for monitoring and deployment verification.
"""

from fastapi import APIRouter

from abroadly import __version__

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Check the operational status of the API server.",
    response_description="Status object.",
)
async def health_check():
    """
    Health check endpoint.

    Returns a simple status indicator to confirm the server is running and reachable.
    """
    return {"status": "ok"}


@router.get(
    "/version",
    summary="Get Version",
    description="Retrieve version information for the API server.",
    response_description="Version object.",
)
async def version():
    """Returns the package version and the supported schema version."""
    return {"version": __version__, "schema_version": "v1"}


@router.get("/", summary="Welcome", include_in_schema=False)
async def root():
    return {"message": "Welcome to the Abroadly API", "version": __version__}
