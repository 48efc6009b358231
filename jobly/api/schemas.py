"""Pydantic schemas for FastAPI request / response models."""

from decimal import Decimal
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class _Request(BaseModel):
    # Unknown keys (e.g. an attempt to change a handle) are rejected.
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class _Response(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ---------------------------------------------------------------------------
# Companies
# ---------------------------------------------------------------------------

class CompanyNew(_Request):
    handle: str = Field(min_length=1, max_length=25)
    name: str = Field(min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class CompanyUpdate(_Request):
    # name/description default to None but are not nullable: null is rejected
    name: str = Field(None, min_length=1)
    description: str = None
    num_employees: Optional[int] = Field(None, ge=0, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class CompanyJob(_Response):
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None


class Company(_Response):
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = Field(None, alias="numEmployees")
    logo_url: Optional[str] = Field(None, alias="logoUrl")


class CompanyDetail(Company):
    jobs: List[CompanyJob] = []


class CompanyResponse(_Response):
    company: Company


class CompanyDetailResponse(_Response):
    company: CompanyDetail


class CompanyListResponse(_Response):
    companies: List[Company]


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------

class JobNew(_Request):
    title: str = Field(min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: str = Field(min_length=1, max_length=25, alias="companyHandle")


class JobUpdate(_Request):
    title: str = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)


class Job(_Response):
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company_handle: str = Field(alias="companyHandle")


class JobResponse(_Response):
    job: Job


class JobListResponse(_Response):
    jobs: List[Job]


class Deleted(_Response):
    deleted: Union[str, int]
