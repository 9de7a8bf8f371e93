import logging
from dataclasses import dataclass, field
from datetime import date

from sqlalchemy.orm import Session

from app.models.job import JOB_STATUSES
from app.repos import job_repo
from app.services.pipeline import (
    GroupKey,
    GroupStage,
    LimitStage,
    MatchStage,
    Pipeline,
    SortField,
    SortStage,
)

logger = logging.getLogger(__name__)

TREND_MONTHS = 6


@dataclass(frozen=True)
class MonthlyCount:
    date: str
    count: int


@dataclass
class JobStats:
    default_stats: dict[str, int]
    monthly_applications: list[MonthlyCount] = field(default_factory=list)


def status_pipeline(user_id: str) -> Pipeline:
    return Pipeline(
        stages=(
            MatchStage(created_by=user_id),
            GroupStage(keys=(GroupKey.STATUS,)),
        )
    )


def monthly_pipeline(user_id: str, months: int = TREND_MONTHS) -> Pipeline:
    """Most recent `months` year/month buckets that have at least one job, newest first."""
    return Pipeline(
        stages=(
            MatchStage(created_by=user_id),
            GroupStage(keys=(GroupKey.YEAR, GroupKey.MONTH)),
            SortStage(
                fields=(
                    SortField(GroupKey.YEAR, descending=True),
                    SortField(GroupKey.MONTH, descending=True),
                )
            ),
            LimitStage(count=months),
        )
    )


def reshape_status_counts(rows: list[dict]) -> dict[str, int]:
    counts = {row["status"]: int(row["count"]) for row in rows}
    # Fixed keys only; a status outside the known set is dropped
    return {status: counts.get(status, 0) for status in JOB_STATUSES}


def month_label(year: int, month: int) -> str:
    """(2024, 1) -> "Jan 2024"."""
    return date(int(year), int(month), 1).strftime("%b %Y")


def reshape_monthly(rows: list[dict]) -> list[MonthlyCount]:
    """Rows arrive newest first; the report reads oldest first."""
    return [
        MonthlyCount(date=month_label(row["year"], row["month"]), count=int(row["count"]))
        for row in reversed(rows)
    ]


def show_stats(db: Session, user_id: str) -> JobStats:
    # Two independent reads; a write between them may show up in only one report
    default_stats = reshape_status_counts(job_repo.aggregate(db, status_pipeline(user_id)))
    monthly = reshape_monthly(job_repo.aggregate(db, monthly_pipeline(user_id)))
    logger.debug("Stats user=%s statuses=%s months=%d", user_id, default_stats, len(monthly))
    return JobStats(default_stats=default_stats, monthly_applications=monthly)
