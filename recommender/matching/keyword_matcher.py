"""Keyword-overlap scoring used when embeddings are unavailable."""
import re

from recommender.matching.accessibility import compute_accessibility_boost
from recommender.matching.normalizer import (
    accessibility_needs_to_text,
    job_accessibility_to_text,
    skills_to_text,
)
from recommender.records import JobPosting, UserProfile

# Lifts the [0, 0.2] accessibility boost into the range of small keyword
# overlap counts.
KEYWORD_BOOST_SCALE = 20

_TOKEN_SPLIT = re.compile(r"[\s,;]+")


def profile_keywords(profile: UserProfile) -> list[str]:
    """Lower-cased skill and need tokens, split on whitespace, commas and semicolons."""
    text = (
        f"{skills_to_text(profile.skills)} "
        f"{accessibility_needs_to_text(profile.accessibility_needs)}"
    ).lower()
    return [token for token in _TOKEN_SPLIT.split(text) if token]


def job_keyword_text(job: JobPosting) -> str:
    """All text fields of a job plus its accessibility features, lower-cased."""
    parts = [
        job.description or "",
        job.content or "",
        job.title or "",
        job_accessibility_to_text(job),
    ]
    return " ".join(parts).lower()


def keyword_overlap(keywords: list[str], text: str) -> int:
    """Number of keywords occurring anywhere in text (substring match)."""
    return sum(1 for word in keywords if word in text)


class KeywordFallbackScoring:
    """Overlap count plus scaled accessibility boost."""

    name = "keyword"

    def __init__(self, profile: UserProfile):
        """
        Initialize keyword scoring for a profile.

        Args:
            profile: Profile whose skills and needs supply the keywords
        """
        self.profile = profile
        self.keywords = profile_keywords(profile)

    def score(self, job: JobPosting, index: int) -> float:
        base = keyword_overlap(self.keywords, job_keyword_text(job))
        boost = compute_accessibility_boost(self.profile.accessibility_needs, job)
        return base + boost * KEYWORD_BOOST_SCALE
