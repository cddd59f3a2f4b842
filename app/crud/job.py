"""
CRUD operations for jobs.

Statements are plain SQL assembled from the builders in app.core.sql and
executed through app.crud.base. Mutations are keyed by the immutable `id`;
`title` is only used to look a job up.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.exceptions import InvalidInputError, NotFoundError
from app.core.sql import sql_for_job_filters, sql_for_partial_update, where
from app.crud import base
from app.schemas.job import JobCreateRequest, JobFilter, JobUpdateRequest

logger = logging.getLogger(__name__)

# API field name -> column name
COLUMN_MAP = {"companyHandle": "company_handle"}

_COLUMNS = "id, title, salary, equity, company_handle"


def to_job(row: Dict[str, Any]) -> Dict[str, Any]:
    """NUMERIC equity is returned as float, never as text or Decimal."""
    if row.get("equity") is not None:
        row["equity"] = float(row["equity"])
    return row


def create(db: Session, job_data: JobCreateRequest) -> Dict[str, Any]:
    """
    Create a new job.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        Created job with its id

    Raises:
        InvalidInputError: If the company does not exist
        ConflictError: If the title is already taken
    """
    try:
        base.select_one(
            db,
            "SELECT handle FROM companies WHERE handle = $1",
            [job_data.company_handle],
            not_found=f"No company: {job_data.company_handle}",
        )
    except NotFoundError as e:
        raise InvalidInputError(e.message) from e

    job = base.insert_one(
        db,
        f"""INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {_COLUMNS}""",
        [job_data.title, job_data.salary, job_data.equity, job_data.company_handle],
        conflict=f"Duplicate job: {job_data.title}",
    )

    logger.info(f"Created job {job['id']}: {job['title']}")
    return to_job(job)


def find_all(db: Session, criteria: JobFilter) -> List[Dict[str, Any]]:
    """
    Find jobs matching the supplied criteria, ordered by title.

    Args:
        db: Database session
        criteria: Optional title substring, minimum salary and equity flag

    Returns:
        List of jobs (possibly empty)
    """
    filters = sql_for_job_filters(criteria)
    query = f"SELECT {_COLUMNS} FROM jobs{where(filters)} ORDER BY title"

    return [to_job(row) for row in base.select_all(db, query, filters.params)]


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Retrieve a job by its id.

    Raises:
        NotFoundError: If no job has this id
    """
    job = base.select_one(
        db,
        f"SELECT {_COLUMNS} FROM jobs WHERE id = $1",
        [job_id],
        not_found=f"No job with id: {job_id}",
    )
    return to_job(job)


def get_by_title(db: Session, title: str) -> Dict[str, Any]:
    """
    Retrieve a job by its title.

    Raises:
        NotFoundError: If no job has this title
    """
    job = base.select_one(
        db,
        f"SELECT {_COLUMNS} FROM jobs WHERE title = $1",
        [title],
        not_found=f"No job: {title}",
    )
    return to_job(job)


def update(db: Session, job_id: int, job_data: JobUpdateRequest) -> Dict[str, Any]:
    """
    Partially update a job.

    Only fields present in job_data are changed; explicit nulls are written
    as NULL.

    Args:
        db: Database session
        job_id: Id of the job to update
        job_data: Fields to change

    Returns:
        The updated job

    Raises:
        InvalidInputError: If job_data carries no fields
        NotFoundError: If no job has this id
        ConflictError: If the new title is already taken
    """
    set_clause = sql_for_partial_update(
        job_data.model_dump(by_alias=True, exclude_unset=True),
        COLUMN_MAP,
    )
    query = f"""UPDATE jobs
                SET {set_clause.sql}
                WHERE id = {set_clause.next_placeholder()}
                RETURNING {_COLUMNS}"""

    job = base.update_one(
        db,
        query,
        [*set_clause.params, job_id],
        not_found=f"No job with id: {job_id}",
        conflict=f"Duplicate job: {job_data.title}",
    )

    logger.info(f"Updated job {job_id}")
    return to_job(job)


def remove(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Delete a job by its id.

    Returns:
        The deleted job's id and title

    Raises:
        NotFoundError: If no job has this id
    """
    deleted = base.delete_one(
        db,
        "DELETE FROM jobs WHERE id = $1 RETURNING id, title",
        [job_id],
        not_found=f"No job with id: {job_id}",
    )

    logger.info(f"Deleted job {job_id}")
    return deleted
