"""Abroadly.

Backend service for study-abroad planning: accounts and profiles, a
catalogue of universities and scholarships, favorites, an application task
tracker, and AI-assisted chat, CV autofill and university matching.

Core subpackages
----------------

- ``abroadly.core``:

  - Logging and optional Logfire monitoring.
  - The database layer (SQLModel entities, async repositories, engine and
    session management).
  - Pydantic I/O models shared by the API.

- ``abroadly.server``:

  - FastAPI application, routers and exception handlers.
  - Application services (auth, profiles, favorites, tasks, chat, AI).

- ``abroadly.scripts``:

  - Operational scripts such as catalogue seeding.
"""

__version__ = "0.1.0"
