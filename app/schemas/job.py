from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

JobStatus = Literal["pending", "interview", "declined"]
JobType = Literal["full-time", "part-time", "remote", "internship"]


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JobCreate(CamelModel):
    company: str = Field(min_length=1, max_length=50)
    position: str = Field(min_length=1, max_length=100)
    status: JobStatus = "pending"
    job_type: JobType = "full-time"
    job_location: str = Field(default="my city", min_length=1)


class JobUpdate(CamelModel):
    # Empty company/position are let through so the service can reject them with a 400
    company: str | None = Field(default=None, max_length=50)
    position: str | None = Field(default=None, max_length=100)
    status: JobStatus | None = None
    job_type: JobType | None = None
    job_location: str | None = Field(default=None, min_length=1)


class JobResponse(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    company: str
    position: str
    status: str
    job_type: str
    job_location: str
    created_by: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListResponse(CamelModel):
    jobs: list[JobResponse]
    total_jobs: int
    num_of_pages: int


class StatusCounts(BaseModel):
    pending: int = 0
    interview: int = 0
    declined: int = 0


class MonthlyApplication(BaseModel):
    date: str
    count: int


class StatsResponse(CamelModel):
    default_stats: StatusCounts
    monthly_applications: list[MonthlyApplication]
