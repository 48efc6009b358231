"""Routes for jobs."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from storage.repositories import JobRepository

from ..deps import get_job_repository, require_admin
from ..schemas import Deleted, JobListResponse, JobNew, JobResponse, JobUpdate

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("", status_code=201, response_model=JobResponse)
def create_job(
    body: JobNew,
    _admin: dict = Depends(require_admin),
    repo: JobRepository = Depends(get_job_repository),
):
    """Create a job. Admin only."""
    return {"job": repo.create(body.model_dump(by_alias=True))}


@router.get("", response_model=JobListResponse)
def list_jobs(
    title: Optional[str] = Query(None, min_length=1),
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    repo: JobRepository = Depends(get_job_repository),
):
    """List jobs; hasEquity=true keeps only jobs with non-zero equity."""
    jobs = repo.find_all({
        "title": title,
        "minSalary": min_salary,
        "hasEquity": has_equity,
    })
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: int, repo: JobRepository = Depends(get_job_repository)):
    return {"job": repo.get(job_id)}


@router.patch("/{job_id}", response_model=JobResponse)
def update_job(
    job_id: int,
    body: JobUpdate,
    _admin: dict = Depends(require_admin),
    repo: JobRepository = Depends(get_job_repository),
):
    """Partially update a job. Admin only; the owning company cannot change."""
    data = body.model_dump(by_alias=True, exclude_unset=True)
    return {"job": repo.update(job_id, data)}


@router.delete("/{job_id}", response_model=Deleted)
def delete_job(
    job_id: int,
    _admin: dict = Depends(require_admin),
    repo: JobRepository = Depends(get_job_repository),
):
    repo.remove(job_id)
    return {"deleted": job_id}
