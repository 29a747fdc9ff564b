"""
Seed the university and scholarship catalogue.

Loads ``data/catalogue.json`` and inserts its universities, scholarships and
the links between them. Rows that already exist (same university name and
country, same scholarship name and provider, same link) are skipped, so the
script can be run repeatedly.

Usage::

    python -m abroadly.scripts.seed [--database-url URL] [--data PATH]
"""

import argparse
import asyncio
import json
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic.alias_generators import to_snake
from sqlalchemy.ext.asyncio import AsyncSession

from abroadly.core.database import create_engine, create_sessionmaker
from abroadly.core.database.entities import Scholarship, ScholarshipType, University, UniversityType
from abroadly.core.database.repositories import ScholarshipRepository, UniversityRepository
from abroadly.core.logging_config import get_logger, setup_logging
from abroadly.server.core.config import settings

logger = get_logger(__name__)

DEFAULT_DATA_FILE = Path(__file__).parent / "data" / "catalogue.json"


@dataclass
class SeedReport:
    universities: int = 0
    scholarships: int = 0
    links: int = 0


def _snake_keys(record: Dict[str, Any]) -> Dict[str, Any]:
    return {to_snake(key): value for key, value in record.items()}


def university_from_record(record: Dict[str, Any]) -> University:
    values = _snake_keys(record)
    values["type"] = UniversityType(values["type"])
    values["acceptance_rate"] = Decimal(str(values["acceptance_rate"]))
    return University(**values)


def scholarship_from_record(record: Dict[str, Any]) -> Scholarship:
    values = _snake_keys(record)
    values["type"] = ScholarshipType(values["type"])
    return Scholarship(**values)


async def seed_catalogue(session: AsyncSession, catalogue: Dict[str, Any]) -> SeedReport:
    """
    Insert the catalogue rows that are not in the database yet.

    Args:
        session: Database session
        catalogue: Parsed catalogue with ``universities``, ``scholarships`` and ``links``

    Returns:
        Number of inserted rows per kind
    """
    report = SeedReport()
    universities = UniversityRepository(session)
    scholarships = ScholarshipRepository(session)

    university_ids: Dict[str, Any] = {}
    for record in catalogue.get("universities", []):
        existing = await universities.find_by_name_and_country(record["name"], record["country"])
        if existing is None:
            existing = await universities.create(university_from_record(record))
            report.universities += 1
        university_ids[existing.name] = existing.id

    scholarship_ids: Dict[str, Any] = {}
    for record in catalogue.get("scholarships", []):
        existing = await scholarships.find_by_name_and_provider(record["name"], record["provider"])
        if existing is None:
            existing = await scholarships.create(scholarship_from_record(record))
            report.scholarships += 1
        scholarship_ids[existing.name] = existing.id

    for university_name, scholarship_names in catalogue.get("links", {}).items():
        university_id = university_ids.get(university_name)
        if university_id is None:
            logger.warning(f"Skipping links of unknown university: {university_name}")
            continue
        for scholarship_name in scholarship_names:
            scholarship_id = scholarship_ids.get(scholarship_name)
            if scholarship_id is None:
                logger.warning(f"Skipping link to unknown scholarship: {scholarship_name}")
                continue
            if await universities.link_scholarship(university_id, scholarship_id) is not None:
                report.links += 1

    return report


def load_catalogue(path: Path) -> Dict[str, Any]:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


async def run_seed(database_url: str, data_file: Path) -> SeedReport:
    engine = create_engine(database_url)
    try:
        async with create_sessionmaker(engine)() as session:
            return await seed_catalogue(session, load_catalogue(data_file))
    finally:
        await engine.dispose()


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description="Seed the university and scholarship catalogue.")
    parser.add_argument("--database-url", default=settings.database_url, help="Database URL (default: DATABASE_URL)")
    parser.add_argument("--data", type=Path, default=DEFAULT_DATA_FILE, help="Catalogue JSON file")
    args = parser.parse_args(argv)

    setup_logging(enable_file=False)
    logger.info(f"Seeding catalogue from {args.data}")
    report = asyncio.run(run_seed(args.database_url, args.data))
    logger.info(
        f"Seeding completed: {report.universities} universities, "
        f"{report.scholarships} scholarships, {report.links} links inserted"
    )


if __name__ == "__main__":
    main()
