"""Plain records consumed by the ranking core."""
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class UserProfile:
    """A user's stated skills and accessibility needs.

    ``skills`` may be a list of strings, a single string, or missing;
    ``accessibility_needs`` is normally a list of strings.
    """

    id: str
    skills: Any = None
    accessibility_needs: Any = None


@dataclass(frozen=True)
class JobPosting:
    """A job posting from either the jobs table or a job-flagged post.

    Accessibility flags may live in ``accessibility_features`` (jobs table
    column) or under ``job_metadata["accessibility_features"]`` (posts).
    """

    id: str
    title: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    accessibility_features: Any = None
    job_metadata: Any = None


@dataclass(frozen=True)
class ScoredCandidate:
    """A job id with its score for one profile within one ranking call."""

    job_id: str
    score: float

    def to_dict(self) -> dict:
        return {"job_id": self.job_id, "score": self.score}
