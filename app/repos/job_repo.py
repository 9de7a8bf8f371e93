import logging

from sqlalchemy import extract, func, select
from sqlalchemy.orm import Session

from app.core.security import generate_id
from app.models.job import Job
from app.services.job_query import EqualsValue, JobQuery
from app.services.pipeline import GroupKey, GroupStage, LimitStage, MatchStage, Pipeline, SortStage

logger = logging.getLogger(__name__)

_LIKE_ESCAPE = "\\"
# Ownership and store-assigned columns are never taken from caller-supplied fields
_PROTECTED_FIELDS = frozenset({"id", "created_by", "created_at", "updated_at"})
# Largest OFFSET/LIMIT the stores accept (signed 64-bit)
MAX_SQL_INT = 2**63 - 1


def _escape_like(term: str) -> str:
    return (
        term.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", _LIKE_ESCAPE + "%")
        .replace("_", _LIKE_ESCAPE + "_")
    )


def _filters(query: JobQuery) -> list:
    clauses = [Job.created_by == query.created_by]
    if query.search:
        clauses.append(Job.position.ilike(f"%{_escape_like(query.search)}%", escape=_LIKE_ESCAPE))
    if isinstance(query.status, EqualsValue):
        clauses.append(Job.status == query.status.value)
    if isinstance(query.job_type, EqualsValue):
        clauses.append(Job.job_type == query.job_type.value)
    return clauses


def _ordering(query: JobQuery) -> list:
    column = getattr(Job, query.sort.field)
    # id breaks ties so the window boundaries are repeatable
    if query.sort.descending:
        return [column.desc(), Job.id.desc()]
    return [column.asc(), Job.id.asc()]


def find_page(db: Session, query: JobQuery) -> tuple[list[Job], int]:
    """Return (jobs in the requested window, total jobs matching the filter)."""
    clauses = _filters(query)
    total = db.query(Job).filter(*clauses).count()
    if query.skip > MAX_SQL_INT:
        return [], total
    items = (
        db.query(Job)
        .filter(*clauses)
        .order_by(*_ordering(query))
        .offset(query.skip)
        .limit(min(query.limit, MAX_SQL_INT))
        .all()
    )
    return items, total


def _group_column(key: GroupKey):
    if key is GroupKey.STATUS:
        return Job.status
    if key is GroupKey.YEAR:
        return extract("year", Job.created_at)
    if key is GroupKey.MONTH:
        return extract("month", Job.created_at)
    raise ValueError(f"Unsupported group key: {key}")


def aggregate(db: Session, pipeline: Pipeline) -> list[dict]:
    """
    Run a grouped aggregation over jobs.
    Each row is {<group key name>: value, ..., "count": n}.
    """
    group: GroupStage = pipeline.group
    columns = {key: _group_column(key) for key in group.keys}
    stmt = select(
        *(col.label(key.value) for key, col in columns.items()),
        func.count(Job.id).label("count"),
    )
    for stage in pipeline.stages:
        if isinstance(stage, MatchStage):
            stmt = stmt.where(Job.created_by == stage.created_by)
        elif isinstance(stage, GroupStage):
            stmt = stmt.group_by(*columns.values())
        elif isinstance(stage, SortStage):
            stmt = stmt.order_by(
                *(columns[f.key].desc() if f.descending else columns[f.key].asc() for f in stage.fields)
            )
        elif isinstance(stage, LimitStage):
            stmt = stmt.limit(stage.count)
        else:
            raise ValueError(f"Unsupported pipeline stage: {stage!r}")
    return [dict(row) for row in db.execute(stmt).mappings().all()]


def get_for_user(db: Session, job_id: str, user_id: str) -> Job | None:
    return db.query(Job).filter(Job.id == job_id, Job.created_by == user_id).first()


def create(db: Session, user_id: str, fields: dict) -> Job:
    values = {k: v for k, v in fields.items() if k not in _PROTECTED_FIELDS}
    job = Job(id=generate_id(), created_by=user_id, **values)
    db.add(job)
    db.commit()
    db.refresh(job)
    logger.info("Job created: id=%s user=%s", job.id, user_id)
    return job


def update_for_user(db: Session, job_id: str, user_id: str, fields: dict) -> Job | None:
    job = get_for_user(db, job_id, user_id)
    if not job:
        return None
    for name, value in fields.items():
        if name in _PROTECTED_FIELDS:
            continue
        setattr(job, name, value)
    db.commit()
    db.refresh(job)
    logger.info("Job updated: id=%s user=%s fields=%s", job_id, user_id, sorted(fields))
    return job


def delete_for_user(db: Session, job_id: str, user_id: str) -> bool:
    job = get_for_user(db, job_id, user_id)
    if not job:
        return False
    db.delete(job)
    db.commit()
    logger.info("Job deleted: id=%s user=%s", job_id, user_id)
    return True
