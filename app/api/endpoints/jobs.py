import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_claims
from app.crud import job as job_crud
from app.schemas.job import (
    JobCreateRequest,
    JobDeleteOut,
    JobFilter,
    JobListOut,
    JobOut,
    JobUpdateRequest,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=JobOut)
def create_job(
    request: JobCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_admin_claims),
):
    """
    Create a new job posting.

    Requires an admin token. Returns 400 if the title is taken or the
    company does not exist.
    """
    new_job = job_crud.create(db, request)
    logger.info(f"Job '{new_job['title']}' created by {admin['sub']}")
    return {"job": new_job}


@router.get("", response_model=JobListOut)
def list_jobs(
    title: Optional[str] = Query(None, description="Case-insensitive title substring"),
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db),
):
    """
    List jobs ordered by title, optionally filtered.

    Args:
        title: Only jobs whose title contains this text
        minSalary: Only jobs paying at least this much
        hasEquity: When true, only jobs offering non-zero equity
    """
    criteria = JobFilter(title_contains=title, min_salary=min_salary, has_equity=has_equity)
    return {"jobs": job_crud.find_all(db, criteria)}


@router.get("/{title}", response_model=JobOut)
def get_job(title: str, db: Session = Depends(get_db)):
    """Retrieve a job by title."""
    return {"job": job_crud.get_by_title(db, title)}


@router.patch("/{title}", response_model=JobOut)
def update_job(
    title: str,
    request: JobUpdateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_admin_claims),
):
    """
    Partially update a job.

    The title is resolved to the job's id first; the update itself is keyed
    by id so a concurrent rename cannot redirect it to another row.
    """
    job = job_crud.get_by_title(db, title)
    updated = job_crud.update(db, job["id"], request)
    return {"job": updated}


@router.delete("/{title}", response_model=JobDeleteOut)
def delete_job(
    title: str,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_admin_claims),
):
    """Delete a job by title."""
    job = job_crud.get_by_title(db, title)
    job_crud.remove(db, job["id"])
    return {"deleted": title}
