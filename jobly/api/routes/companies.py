"""Routes for companies."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from storage.repositories import CompanyRepository

from ...errors import BadRequestError
from ..deps import get_company_repository, require_admin
from ..schemas import (
    CompanyDetailResponse,
    CompanyListResponse,
    CompanyNew,
    CompanyResponse,
    CompanyUpdate,
    Deleted,
)

router = APIRouter(prefix="/companies", tags=["companies"])


@router.post("", status_code=201, response_model=CompanyResponse)
def create_company(
    body: CompanyNew,
    _admin: dict = Depends(require_admin),
    repo: CompanyRepository = Depends(get_company_repository),
):
    """Create a company. Admin only."""
    return {"company": repo.create(body.model_dump(by_alias=True))}


@router.get("", response_model=CompanyListResponse)
def list_companies(
    name: Optional[str] = Query(None, min_length=1),
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    repo: CompanyRepository = Depends(get_company_repository),
):
    """List companies, optionally filtered by name and employee count."""
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    companies = repo.find_all({
        "name": name,
        "minEmployees": min_employees,
        "maxEmployees": max_employees,
    })
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailResponse)
def get_company(handle: str, repo: CompanyRepository = Depends(get_company_repository)):
    return {"company": repo.get(handle)}


@router.patch("/{handle}", response_model=CompanyResponse)
def update_company(
    handle: str,
    body: CompanyUpdate,
    _admin: dict = Depends(require_admin),
    repo: CompanyRepository = Depends(get_company_repository),
):
    """Partially update a company. Admin only."""
    data = body.model_dump(by_alias=True, exclude_unset=True)
    return {"company": repo.update(handle, data)}


@router.delete("/{handle}", response_model=Deleted)
def delete_company(
    handle: str,
    _admin: dict = Depends(require_admin),
    repo: CompanyRepository = Depends(get_company_repository),
):
    repo.remove(handle)
    return {"deleted": handle}
