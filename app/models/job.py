from sqlalchemy import Column, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.database import Base

JOB_STATUSES = ("pending", "interview", "declined")
JOB_TYPES = ("full-time", "part-time", "remote", "internship")


class Job(Base):
    __tablename__ = "jobs"

    id = Column(String, primary_key=True, index=True)
    created_by = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    company = Column(String(50), nullable=False)
    position = Column(String(100), nullable=False)
    status = Column(String, nullable=False, default="pending")
    job_type = Column(String, nullable=False, default="full-time")
    job_location = Column(String, nullable=False, default="my city")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    owner = relationship("User", back_populates="jobs")
