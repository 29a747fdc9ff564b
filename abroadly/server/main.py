"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS),
exception handlers and monitoring, and includes all API routers.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from abroadly import __version__
from abroadly.core.database import dispose_engine
from abroadly.core.logging_config import get_logger, setup_logging
from abroadly.core.monitoring import initialize_logfire

from .api.v1 import (
    ai,
    auth,
    chat,
    health,
    scholarships,
    task_groups,
    task_recommendations,
    tasks,
    universities,
    user,
)
from .core.config import settings
from .exception_handlers import setup_exception_handlers

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    The schema is owned by Alembic migrations, so startup only logs; shutdown
    releases the pooled database connections.
    """
    logger.info("Starting up Abroadly Server...")

    yield

    logger.info("Shutting down Abroadly Server...")
    await dispose_engine()


app = FastAPI(
    title="Abroadly API",
    description="""
    Abroadly Server API

    Backend for planning study abroad: accounts and academic profiles, a university and
    scholarship catalogue with favorites, an application task tracker, and an AI advisor
    for chat, CV based profile autofill, university matching and task recommendations.
    """,
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors.origins,
    allow_credentials=settings.cors.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)
initialize_logfire(app)


app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix="/auth")
app.include_router(user.router, prefix="/user")
app.include_router(universities.router, prefix="/universities")
app.include_router(scholarships.router, prefix="/scholarships")
app.include_router(tasks.router, prefix="/tasks")
app.include_router(task_groups.router, prefix="/task-groups")
app.include_router(task_recommendations.router, prefix="/task-recommendations")
app.include_router(chat.router, prefix="/chat")
app.include_router(ai.router, prefix="/ai")


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    uvicorn.run(
        "abroadly.server.main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
