"""SQLAlchemy models for profiles and job sources."""
import uuid

from sqlalchemy import JSON, Boolean, Column, String, Text
from sqlalchemy.orm import DeclarativeBase

from recommender.records import JobPosting, UserProfile


def generate_uuid() -> str:
    """Generate a UUID string."""
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Profile(Base):
    """A user's matching profile."""

    __tablename__ = "profiles"

    id = Column(String, primary_key=True, default=generate_uuid)
    skills = Column(JSON)  # list of strings, or a free-text string
    accessibility_needs = Column(JSON)  # list of strings

    def to_record(self) -> UserProfile:
        return UserProfile(
            id=self.id,
            skills=self.skills,
            accessibility_needs=self.accessibility_needs,
        )

    def __repr__(self) -> str:
        return f"<Profile {self.id}>"


class Job(Base):
    """Primary job postings source."""

    __tablename__ = "jobs"

    id = Column(String, primary_key=True, default=generate_uuid)
    title = Column(String)
    description = Column(Text)
    # Optional: older jobs tables only have id, title and description
    accessibility_features = Column(JSON)  # {"remoteWork": true, ...}

    def __repr__(self) -> str:
        return f"<Job {self.title}>"


class Post(Base):
    """Community posts; rows flagged is_job_post are the secondary job source."""

    __tablename__ = "posts"

    id = Column(String, primary_key=True, default=generate_uuid)
    title = Column(String)
    content = Column(Text)
    job_metadata = Column(JSON)  # may hold {"accessibility_features": {...}}
    is_job_post = Column(Boolean, default=False, index=True)

    def to_record(self) -> JobPosting:
        return JobPosting(
            id=self.id,
            title=self.title,
            content=self.content,
            job_metadata=self.job_metadata,
        )

    def __repr__(self) -> str:
        return f"<Post {self.title} job={self.is_job_post}>"
