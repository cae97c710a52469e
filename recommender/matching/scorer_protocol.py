"""Scoring path protocol.

A ranking call picks exactly one scoring path up front and scores every
job with it. The semantic path and the keyword fallback produce scores
on different scales, so their results are never merged.
"""
from typing import Protocol, runtime_checkable

from recommender.records import JobPosting


@runtime_checkable
class Scorer(Protocol):
    """Scores jobs for one profile within one ranking call."""

    name: str

    def score(self, job: JobPosting, index: int) -> float:
        """Score the job at position ``index`` of the call's job list."""
        ...
