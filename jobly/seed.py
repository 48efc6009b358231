"""
Load companies and jobs from a JSON file into the database.

Input shape:
    {"companies": [{handle, name, description, numEmployees, logoUrl}, ...],
     "jobs": [{title, salary, equity, companyHandle}, ...]}

Records are validated with the API schemas and inserted through the
repositories, so seeding follows the same rules as the HTTP layer.
"""

import json
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from storage.repositories import CompanyRepository, JobRepository

from .api.schemas import CompanyNew, JobNew
from .database import Database
from .errors import BadRequestError
from .logger import get_logger


def load_seed_file(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Seed file must hold a JSON object: {path}")
    return data


def seed(db: Database, data: Dict[str, Any], dry_run: bool = False) -> Dict[str, int]:
    """
    Insert seed records.

    Args:
        db: Target database
        data: Parsed seed document
        dry_run: Validate only, don't write

    Returns:
        Counters: companies, jobs, skipped, errors
    """
    logger = get_logger()
    companies = CompanyRepository(db)
    jobs = JobRepository(db)
    counts = {"companies": 0, "jobs": 0, "skipped": 0, "errors": 0}

    for raw in data.get("companies", []):
        try:
            record = CompanyNew.model_validate(raw).model_dump(by_alias=True)
        except ValidationError as e:
            logger.warning("Skipping invalid company", record=raw, errors=e.error_count())
            counts["skipped"] += 1
            continue
        if dry_run:
            counts["companies"] += 1
            continue
        try:
            companies.create(record)
            counts["companies"] += 1
        except BadRequestError as e:
            logger.warning("Skipping company", handle=record["handle"], reason=e.message)
            counts["skipped"] += 1
        except IntegrityError as e:
            logger.error("Error seeding company", handle=record["handle"], error=str(e.orig))
            counts["errors"] += 1

    for raw in data.get("jobs", []):
        try:
            record = JobNew.model_validate(raw).model_dump(by_alias=True)
        except ValidationError as e:
            logger.warning("Skipping invalid job", record=raw, errors=e.error_count())
            counts["skipped"] += 1
            continue
        if dry_run:
            counts["jobs"] += 1
            continue
        try:
            jobs.create(record)
            counts["jobs"] += 1
        except IntegrityError as e:
            logger.error("Error seeding job", title=record["title"], error=str(e.orig))
            counts["errors"] += 1

    logger.info("Seed complete", dry_run=dry_run, **counts)
    return counts
