"""
CRUD operations for companies.
"""

import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.sql import sql_for_company_filters, sql_for_partial_update, where
from app.crud import base
from app.crud.job import to_job
from app.schemas.company import CompanyCreateRequest, CompanyFilter, CompanyUpdateRequest

logger = logging.getLogger(__name__)

# API field name -> column name
COLUMN_MAP = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

_COLUMNS = "handle, name, description, num_employees, logo_url"


def create(db: Session, company_data: CompanyCreateRequest) -> Dict[str, Any]:
    """
    Create a new company.

    Raises:
        ConflictError: If the handle or name is already taken
    """
    company = base.insert_one(
        db,
        f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {_COLUMNS}""",
        [
            company_data.handle,
            company_data.name,
            company_data.description,
            company_data.num_employees,
            company_data.logo_url,
        ],
        conflict=f"Duplicate company: {company_data.handle}",
    )

    logger.info(f"Created company {company['handle']}")
    return company


def find_all(db: Session, criteria: CompanyFilter) -> List[Dict[str, Any]]:
    """
    Find companies matching the supplied criteria, ordered by name.

    Raises:
        InvalidInputError: If min_employees > max_employees
    """
    filters = sql_for_company_filters(criteria)
    query = f"SELECT {_COLUMNS} FROM companies{where(filters)} ORDER BY name"

    return base.select_all(db, query, filters.params)


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Retrieve a company with the jobs it currently offers.

    Raises:
        NotFoundError: If no company has this handle
    """
    company = base.select_one(
        db,
        f"SELECT {_COLUMNS} FROM companies WHERE handle = $1",
        [handle],
        not_found=f"No company: {handle}",
    )

    jobs = base.select_all(
        db,
        "SELECT id, title, salary, equity FROM jobs WHERE company_handle = $1 ORDER BY id",
        [handle],
    )
    company["jobs"] = [to_job(job) for job in jobs]

    return company


def update(db: Session, handle: str, company_data: CompanyUpdateRequest) -> Dict[str, Any]:
    """
    Partially update a company.

    Raises:
        InvalidInputError: If company_data carries no fields
        NotFoundError: If no company has this handle
        ConflictError: If the new name is already taken
    """
    set_clause = sql_for_partial_update(
        company_data.model_dump(by_alias=True, exclude_unset=True),
        COLUMN_MAP,
    )
    query = f"""UPDATE companies
                SET {set_clause.sql}
                WHERE handle = {set_clause.next_placeholder()}
                RETURNING {_COLUMNS}"""

    company = base.update_one(
        db,
        query,
        [*set_clause.params, handle],
        not_found=f"No company: {handle}",
        conflict=f"Duplicate company name: {company_data.name}",
    )

    logger.info(f"Updated company {handle}")
    return company


def remove(db: Session, handle: str) -> Dict[str, Any]:
    """
    Delete a company; its jobs are removed by the foreign key cascade.

    Raises:
        NotFoundError: If no company has this handle
    """
    deleted = base.delete_one(
        db,
        "DELETE FROM companies WHERE handle = $1 RETURNING handle",
        [handle],
        not_found=f"No company: {handle}",
    )

    logger.info(f"Deleted company {handle}")
    return deleted
