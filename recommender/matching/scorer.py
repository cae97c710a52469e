"""Semantic scoring and candidate ranking."""
from collections.abc import Sequence
from typing import Union

from recommender.matching.accessibility import compute_accessibility_boost
from recommender.matching.keyword_matcher import KeywordFallbackScoring
from recommender.matching.scorer_protocol import Scorer
from recommender.matching.similarity import cosine_similarity
from recommender.records import JobPosting, ScoredCandidate, UserProfile


class SemanticScoring:
    """Cosine similarity of embeddings plus accessibility boost."""

    name = "semantic"

    def __init__(
        self,
        profile: UserProfile,
        profile_vector: Sequence[float],
        job_vectors: Sequence[Sequence[float]],
    ):
        """
        Initialize semantic scoring for a profile.

        Args:
            profile: Profile being ranked for
            profile_vector: Embedding of the profile text
            job_vectors: Embeddings of the job texts, index-aligned with the jobs
        """
        self.profile = profile
        self.profile_vector = profile_vector
        self.job_vectors = job_vectors

    def score(self, job: JobPosting, index: int) -> float:
        base = cosine_similarity(self.profile_vector, self.job_vectors[index])
        boost = compute_accessibility_boost(self.profile.accessibility_needs, job)
        return base + boost


# Exactly one of these is chosen per ranking call.
ScoringPath = Union[SemanticScoring, KeywordFallbackScoring]


def rank_candidates(
    scorer: Scorer,
    jobs: Sequence[JobPosting],
    top_n: int,
) -> list[ScoredCandidate]:
    """
    Score every job and keep the best ``top_n``.

    Args:
        scorer: Scoring path for this profile
        jobs: Candidate jobs
        top_n: Maximum number of results

    Returns:
        Candidates sorted by score descending. Equal scores keep input order.
    """
    if top_n < 0:
        raise ValueError(f"top_n must be non-negative, got {top_n}")

    scored = [
        ScoredCandidate(job_id=job.id, score=scorer.score(job, index))
        for index, job in enumerate(jobs)
    ]

    # list.sort is stable, so ties stay in input order
    scored.sort(key=lambda c: c.score, reverse=True)

    return scored[:top_n]
