from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional


class CamelModel(BaseModel):
    """Base schema: snake_case in Python, camelCase on the wire"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JobCreateRequest(CamelModel):
    """Schema for creating a new job"""
    model_config = ConfigDict(extra="forbid")

    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(CamelModel):
    """
    Schema for a partial job update.

    Only fields present in the request body are changed. An explicit null
    clears salary or equity; an omitted field is left untouched. The owning
    company cannot be changed.
    """
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v: Optional[str]) -> str:
        if v is None:
            raise ValueError("title cannot be null")
        return v


class JobFilter(BaseModel):
    """
    Optional search criteria for listing jobs.

    None means the criterion was not supplied.
    """
    title_contains: Optional[str] = None
    min_salary: Optional[int] = Field(None, ge=0)
    has_equity: Optional[bool] = None


class JobResponse(CamelModel):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company_handle: str


class JobOut(BaseModel):
    job: JobResponse


class JobListOut(BaseModel):
    jobs: List[JobResponse]


class JobDeleteOut(BaseModel):
    deleted: str
