"""Flatten profile and job fields into text for embedding or keyword matching."""
from collections.abc import Mapping
from typing import Any, Protocol

from recommender.records import JobPosting, UserProfile


def _sequence_or_string_to_text(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value if item)
    if isinstance(value, str):
        return value
    return ""


def skills_to_text(skills: Any) -> str:
    """Join a skills list with spaces; pass a string through; else ''."""
    return _sequence_or_string_to_text(skills)


def accessibility_needs_to_text(needs: Any) -> str:
    """Same contract as skills_to_text, applied to accessibility needs."""
    return _sequence_or_string_to_text(needs)


class AccessibilityFeatureSource(Protocol):
    """One place on a job record where accessibility flags can live."""

    name: str

    def extract(self, job: JobPosting) -> list[str]:
        """Return the names of features whose flag is truthy."""
        ...


def _enabled_keys(flags: Any) -> list[str]:
    if not isinstance(flags, Mapping):
        return []
    return [str(key) for key, value in flags.items() if value]


class MetadataFeatureSource:
    """Flags nested under ``job_metadata["accessibility_features"]`` (posts)."""

    name = "metadata"

    def extract(self, job: JobPosting) -> list[str]:
        metadata = job.job_metadata
        if not isinstance(metadata, Mapping):
            return []
        return _enabled_keys(metadata.get("accessibility_features"))


class ColumnFeatureSource:
    """Flags stored directly in the ``accessibility_features`` column (jobs)."""

    name = "column"

    def extract(self, job: JobPosting) -> list[str]:
        return _enabled_keys(job.accessibility_features)


# Tried in this order; results are concatenated.
FEATURE_SOURCES: tuple[AccessibilityFeatureSource, ...] = (
    MetadataFeatureSource(),
    ColumnFeatureSource(),
)


def job_accessibility_features(job: JobPosting) -> list[str]:
    """Union of enabled feature names across every feature source."""
    features: list[str] = []
    for source in FEATURE_SOURCES:
        features.extend(source.extract(job))
    return features


def job_accessibility_to_text(job: JobPosting) -> str:
    """Enabled accessibility feature names joined with spaces; '' when none."""
    return " ".join(job_accessibility_features(job))


def profile_text(profile: UserProfile) -> str:
    """Skills followed by accessibility needs, as one stripped string."""
    return (
        f"{skills_to_text(profile.skills)} "
        f"{accessibility_needs_to_text(profile.accessibility_needs)}"
    ).strip()


def job_text(job: JobPosting) -> str:
    """Best available body text followed by accessibility feature names.

    Field precedence is description, then content, then title.
    """
    body = job.description or job.content or job.title or ""
    return f"{body} {job_accessibility_to_text(job)}".strip()
