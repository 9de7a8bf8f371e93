"""
Compile loosely-typed list parameters (search, status, jobType, sort, page, limit)
into a user-scoped JobQuery descriptor. Execution lives in app.repos.job_repo.
"""
import math
from dataclasses import dataclass
from enum import Enum

from app.models.job import JOB_STATUSES, JOB_TYPES, Job

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_PARAM = 2**63 - 1
ALL = "all"


class Unfiltered:
    """No constraint on this dimension."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "Unfiltered"

    def __eq__(self, other) -> bool:
        return isinstance(other, Unfiltered)

    def __hash__(self) -> int:
        return hash(Unfiltered)


UNFILTERED = Unfiltered()


@dataclass(frozen=True)
class EqualsValue:
    value: str


FilterValue = Unfiltered | EqualsValue


class SortOrder(str, Enum):
    LATEST = "latest"
    OLDEST = "oldest"
    A_Z = "a-z"
    Z_A = "z-a"

    @classmethod
    def parse(cls, raw: str | None) -> "SortOrder":
        try:
            return cls(raw)
        except ValueError:
            return cls.LATEST

    @property
    def field(self) -> str:
        return "created_at" if self in (SortOrder.LATEST, SortOrder.OLDEST) else "position"

    @property
    def descending(self) -> bool:
        return self in (SortOrder.LATEST, SortOrder.Z_A)


@dataclass(frozen=True)
class JobQuery:
    created_by: str
    search: str | None = None
    status: FilterValue = UNFILTERED
    job_type: FilterValue = UNFILTERED
    sort: SortOrder = SortOrder.LATEST
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class JobPage:
    jobs: list[Job]
    total_jobs: int
    num_of_pages: int


def parse_positive_int(raw, default: int) -> int:
    """Coerce a query value to a positive int; anything else yields default."""
    if raw is None or isinstance(raw, bool):
        return default
    text = str(raw).strip()
    # int() would also take "1_000", "+5" and non-ASCII digits
    if not (text.isascii() and text.isdigit()):
        return default
    digits = text.lstrip("0")
    if not digits:
        return default
    # Saturate instead of handing int() thousands of digits
    if len(digits) > len(str(MAX_PARAM)):
        return MAX_PARAM
    return min(int(digits), MAX_PARAM)


def parse_search(raw: str | None) -> str | None:
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def parse_filter(raw: str | None, allowed: tuple[str, ...]) -> FilterValue:
    # "all" and values outside the enumeration both mean no filter
    if raw is None or raw == ALL or raw not in allowed:
        return UNFILTERED
    return EqualsValue(raw)


def compile_job_query(
    user_id: str,
    *,
    search: str | None = None,
    status: str | None = None,
    job_type: str | None = None,
    sort: str | None = None,
    page=None,
    limit=None,
) -> JobQuery:
    return JobQuery(
        created_by=user_id,
        search=parse_search(search),
        status=parse_filter(status, JOB_STATUSES),
        job_type=parse_filter(job_type, JOB_TYPES),
        sort=SortOrder.parse(sort),
        page=parse_positive_int(page, DEFAULT_PAGE),
        limit=parse_positive_int(limit, DEFAULT_LIMIT),
    )


def count_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total > 0 else 0

