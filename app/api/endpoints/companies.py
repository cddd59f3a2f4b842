import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_admin_claims
from app.crud import company as company_crud
from app.schemas.company import (
    CompanyCreateRequest,
    CompanyDeleteOut,
    CompanyDetailOut,
    CompanyFilter,
    CompanyListOut,
    CompanyOut,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=CompanyOut)
def create_company(
    request: CompanyCreateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_admin_claims),
):
    """Create a new company. Requires an admin token."""
    company = company_crud.create(db, request)
    logger.info(f"Company '{company['handle']}' created by {admin['sub']}")
    return {"company": company}


@router.get("", response_model=CompanyListOut)
def list_companies(
    name_like: Optional[str] = Query(None, alias="nameLike"),
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    db: Session = Depends(get_db),
):
    """
    List companies ordered by name, optionally filtered.

    Returns 400 if minEmployees is greater than maxEmployees.
    """
    criteria = CompanyFilter(
        name_like=name_like,
        min_employees=min_employees,
        max_employees=max_employees,
    )
    return {"companies": company_crud.find_all(db, criteria)}


@router.get("/{handle}", response_model=CompanyDetailOut)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Retrieve a company and its jobs."""
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyOut)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_admin_claims),
):
    """Partially update a company. Requires an admin token."""
    return {"company": company_crud.update(db, handle, request)}


@router.delete("/{handle}", response_model=CompanyDeleteOut)
def delete_company(
    handle: str,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_admin_claims),
):
    """Delete a company and all of its jobs. Requires an admin token."""
    company_crud.remove(db, handle)
    return {"deleted": handle}
