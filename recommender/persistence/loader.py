"""Load profiles and candidate jobs, falling back to job-flagged posts."""
import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config.settings import MAX_CANDIDATE_ROWS
from recommender.persistence.models import Job, Post, Profile
from recommender.records import JobPosting, UserProfile

logger = logging.getLogger(__name__)


@dataclass
class CandidateSet:
    """Profiles and jobs for one ranking call, with job-source provenance."""

    profiles: list[UserProfile] = field(default_factory=list)
    jobs: list[JobPosting] = field(default_factory=list)
    used_fallback_source: bool = False


class CandidateLoader:
    """Read-only access to profiles and the two job sources.

    Jobs come from the ``jobs`` table when it can be read. If that query
    fails, the loader reads ``posts`` rows flagged as job posts instead and
    reports ``used_fallback_source=True``. A failure on the posts query, or
    on any profile query, propagates unchanged.
    """

    def __init__(self, session: Session, max_rows: int = MAX_CANDIDATE_ROWS):
        """
        Initialize candidate loader.

        Args:
            session: Database session
            max_rows: Row cap applied to either job source
        """
        self.session = session
        self.max_rows = max_rows

    def fetch_profiles(self) -> list[UserProfile]:
        rows = self.session.scalars(select(Profile)).all()
        return [row.to_record() for row in rows]

    def fetch_profile(self, user_id: str) -> Optional[UserProfile]:
        """Get one profile by id, or None if the user has no profile."""
        row = self.session.get(Profile, user_id)
        return row.to_record() if row else None

    def _jobs_have_accessibility_column(self) -> bool:
        columns = inspect(self.session.connection()).get_columns(Job.__tablename__)
        return any(col["name"] == "accessibility_features" for col in columns)

    def _fetch_primary_jobs(self) -> list[JobPosting]:
        """Read id, title and description, plus accessibility flags if the column exists.

        Raises NoSuchTableError (a SQLAlchemyError) when there is no jobs table.
        """
        columns = [Job.id, Job.title, Job.description]
        has_features = self._jobs_have_accessibility_column()
        if has_features:
            columns.append(Job.accessibility_features)

        rows = self.session.execute(select(*columns).limit(self.max_rows)).all()
        return [
            JobPosting(
                id=row.id,
                title=row.title,
                description=row.description,
                accessibility_features=row.accessibility_features if has_features else None,
            )
            for row in rows
        ]

    def _fetch_fallback_jobs(self) -> list[JobPosting]:
        stmt = (
            select(Post)
            .where(Post.is_job_post.is_(True))
            .limit(self.max_rows)
        )
        rows = self.session.scalars(stmt).all()
        return [row.to_record() for row in rows]

    def fetch_jobs(self) -> tuple[list[JobPosting], bool]:
        """
        Load candidate jobs.

        Returns:
            Tuple of (jobs, used_fallback_source)
        """
        try:
            jobs = self._fetch_primary_jobs()
            logger.debug("Loaded %d jobs from primary source", len(jobs))
            return jobs, False
        except SQLAlchemyError as e:
            logger.warning("Primary jobs source unavailable (%s); using job posts", e)
            # Clear the failed transaction before issuing the next query
            self.session.rollback()

        jobs = self._fetch_fallback_jobs()
        logger.debug("Loaded %d jobs from fallback source", len(jobs))
        return jobs, True

    def fetch_profiles_and_jobs(self) -> CandidateSet:
        """Load every profile plus the candidate jobs (bulk mode)."""
        profiles = self.fetch_profiles()
        jobs, used_fallback = self.fetch_jobs()
        return CandidateSet(
            profiles=profiles,
            jobs=jobs,
            used_fallback_source=used_fallback,
        )
