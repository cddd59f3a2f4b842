from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional

from app.schemas.job import CamelModel


class CompanyCreateRequest(CamelModel):
    """Schema for creating a new company"""
    model_config = ConfigDict(extra="forbid")

    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str = ""
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None


class CompanyUpdateRequest(CamelModel):
    """Schema for a partial company update (handle is immutable)"""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None

    @field_validator("name", "description")
    @classmethod
    def not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("cannot be null")
        return v


class CompanyFilter(BaseModel):
    """Optional search criteria for listing companies"""
    name_like: Optional[str] = None
    min_employees: Optional[int] = Field(None, ge=0)
    max_employees: Optional[int] = Field(None, ge=0)


class CompanyJob(CamelModel):
    """Job as listed on its company's detail page"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None


class CompanyResponse(CamelModel):
    """Schema for company response"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyDetailResponse(CompanyResponse):
    jobs: List[CompanyJob] = []


class CompanyOut(BaseModel):
    company: CompanyResponse


class CompanyDetailOut(BaseModel):
    company: CompanyDetailResponse


class CompanyListOut(BaseModel):
    companies: List[CompanyResponse]


class CompanyDeleteOut(BaseModel):
    deleted: str
