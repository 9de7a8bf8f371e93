import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.job import (
    JobCreate,
    JobEnvelope,
    JobListResponse,
    JobResponse,
    JobUpdate,
    MonthlyApplication,
    StatsResponse,
    StatusCounts,
)
from app.services.job_query import compile_job_query
from app.services.job_service import (
    JobNotFoundError,
    JobValidationError,
    create_job,
    delete_job,
    get_job,
    list_jobs,
    update_job,
)
from app.services.job_stats import show_stats

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/jobs", tags=["jobs"])


def _job_to_response(job) -> JobResponse:
    return JobResponse.model_validate(job)


def _not_found(e: JobNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("", response_model=JobListResponse)
def get_all_jobs(
    search: str | None = None,
    status_filter: str | None = Query(default=None, alias="status"),
    job_type: str | None = Query(default=None, alias="jobType"),
    sort: str | None = None,
    page: str | None = None,
    limit: str | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    List the caller's jobs.
    page/limit are taken as raw strings; anything non-numeric or below 1 falls back to 1/10.
    Unknown status, jobType or sort values are ignored rather than rejected.
    """
    query = compile_job_query(
        user.id,
        search=search,
        status=status_filter,
        job_type=job_type,
        sort=sort,
        page=page,
        limit=limit,
    )
    result = list_jobs(db, query)
    return JobListResponse(
        jobs=[_job_to_response(j) for j in result.jobs],
        total_jobs=result.total_jobs,
        num_of_pages=result.num_of_pages,
    )


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Status counts and the last six active months of applications."""
    stats = show_stats(db, user.id)
    return StatsResponse(
        default_stats=StatusCounts(**stats.default_stats),
        monthly_applications=[MonthlyApplication(date=m.date, count=m.count) for m in stats.monthly_applications],
    )


@router.post("", response_model=JobEnvelope, status_code=status.HTTP_201_CREATED)
def create(
    body: JobCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    job = create_job(db, user.id, body.model_dump())
    return JobEnvelope(job=_job_to_response(job))


@router.get("/{job_id}", response_model=JobEnvelope)
def get_one(
    job_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        job = get_job(db, user.id, job_id)
    except JobNotFoundError as e:
        raise _not_found(e) from e
    return JobEnvelope(job=_job_to_response(job))


@router.patch("/{job_id}", response_model=JobEnvelope)
def update(
    job_id: str,
    body: JobUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    fields = body.model_dump(exclude_unset=True, exclude_none=True)
    try:
        job = update_job(db, user.id, job_id, fields)
    except JobValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except JobNotFoundError as e:
        raise _not_found(e) from e
    return JobEnvelope(job=_job_to_response(job))


@router.delete("/{job_id}")
def delete(
    job_id: str,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    try:
        delete_job(db, user.id, job_id)
    except JobNotFoundError as e:
        raise _not_found(e) from e
    return Response(status_code=status.HTTP_200_OK)
