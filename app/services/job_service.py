import logging

from sqlalchemy.orm import Session

from app.models.job import Job
from app.repos import job_repo
from app.services.job_query import JobPage, JobQuery, count_pages

logger = logging.getLogger(__name__)


class JobValidationError(ValueError):
    """Rejected before the store is touched."""


class JobNotFoundError(LookupError):
    def __init__(self, job_id: str):
        super().__init__(f"No job with id {job_id}")
        self.job_id = job_id


def list_jobs(db: Session, query: JobQuery) -> JobPage:
    """Fetch one window of the user's jobs plus the total match count."""
    jobs, total = job_repo.find_page(db, query)
    logger.debug(
        "Job list user=%s page=%d limit=%d returned=%d total=%d",
        query.created_by,
        query.page,
        query.limit,
        len(jobs),
        total,
    )
    return JobPage(jobs=jobs, total_jobs=total, num_of_pages=count_pages(total, query.limit))


def get_job(db: Session, user_id: str, job_id: str) -> Job:
    job = job_repo.get_for_user(db, job_id, user_id)
    if not job:
        raise JobNotFoundError(job_id)
    return job


def create_job(db: Session, user_id: str, fields: dict) -> Job:
    # Owner always comes from the authenticated caller
    return job_repo.create(db, user_id, fields)


def update_job(db: Session, user_id: str, job_id: str, fields: dict) -> Job:
    if fields.get("company") == "" or fields.get("position") == "":
        raise JobValidationError("Company or Position fields cannot be empty")
    job = job_repo.update_for_user(db, job_id, user_id, fields)
    if not job:
        raise JobNotFoundError(job_id)
    return job


def delete_job(db: Session, user_id: str, job_id: str) -> None:
    if not job_repo.delete_for_user(db, job_id, user_id):
        raise JobNotFoundError(job_id)
