"""Ranking orchestration for one profile or for every profile.

Bulk and single-profile ranking share the scoring core but differ in how
they treat an embedding failure:

* ``rank_all_users`` lets it propagate. A bulk run either produces
  semantic rankings for everyone or fails as a whole.
* ``rank_single_profile`` catches it at the join point and re-ranks the
  profile with keyword overlap, so one user's request always gets an
  answer.
"""
import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from config.settings import DEFAULT_TOP_N
from recommender.embeddings.base import Embedder
from recommender.exceptions import EmbeddingError
from recommender.matching.keyword_matcher import KeywordFallbackScoring
from recommender.matching.normalizer import job_text, profile_text
from recommender.matching.scorer import ScoringPath, SemanticScoring, rank_candidates
from recommender.records import JobPosting, ScoredCandidate, UserProfile

logger = logging.getLogger(__name__)


@dataclass
class BulkRanking:
    """Top candidates for every profile, keyed by profile id."""

    results: dict[str, list[ScoredCandidate]] = field(default_factory=dict)
    used_fallback_source: bool = False

    def to_dict(self) -> dict:
        return {
            "results": {
                profile_id: [c.to_dict() for c in candidates]
                for profile_id, candidates in self.results.items()
            },
            "used_fallback_source": self.used_fallback_source,
        }


@dataclass
class UserRanking:
    """Top candidates for one profile.

    ``scoring_path`` is "semantic" or "keyword", or None when nothing was
    scored (no profile or no jobs).
    """

    results: list[ScoredCandidate] = field(default_factory=list)
    used_fallback_source: bool = False
    scoring_path: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "results": [c.to_dict() for c in self.results],
            "used_fallback_source": self.used_fallback_source,
            "scoring_path": self.scoring_path,
        }


async def _embed_checked(embedder: Embedder, texts: list[str]) -> list[list[float]]:
    vectors = await embedder.embed_texts(texts)
    if len(vectors) != len(texts):
        raise EmbeddingError(f"expected {len(texts)} vectors, got {len(vectors)}")
    return vectors


async def embed_profiles_and_jobs(
    embedder: Embedder,
    profile_texts: list[str],
    job_texts: list[str],
) -> tuple[list[list[float]], list[list[float]]]:
    """Embed both batches concurrently and wait for both to settle.

    If either batch fails, the first failure is raised only after the other
    batch has finished, so no request outlives the call.
    """
    logger.debug(
        "Embedding %d profile texts and %d job texts",
        len(profile_texts), len(job_texts),
    )
    results = await asyncio.gather(
        _embed_checked(embedder, profile_texts),
        _embed_checked(embedder, job_texts),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result

    profile_vectors, job_vectors = results
    return profile_vectors, job_vectors


class RankingOrchestrator:
    """Turn profiles and jobs into ranked top-N candidate lists."""

    def __init__(self, embedder: Embedder, default_top_n: int = DEFAULT_TOP_N):
        """
        Initialize orchestrator.

        Args:
            embedder: Embedding service client
            default_top_n: Results per profile when a call gives no top_n
        """
        self.embedder = embedder
        self.default_top_n = default_top_n

    async def rank_all_users(
        self,
        profiles: Sequence[UserProfile],
        jobs: Sequence[JobPosting],
        top_n: Optional[int] = None,
        used_fallback_source: bool = False,
    ) -> BulkRanking:
        """
        Rank every job for every profile with semantic scoring.

        Args:
            profiles: Profiles to rank for
            jobs: Candidate jobs
            top_n: Results per profile (defaults to default_top_n)
            used_fallback_source: Provenance flag passed through from the loader

        Returns:
            BulkRanking mapping each profile id to its top candidates

        Raises:
            EmbeddingError: Or any other error from the embedding service;
                no partial results are returned
        """
        top_n = self.default_top_n if top_n is None else top_n

        if not jobs:
            return BulkRanking(
                results={profile.id: [] for profile in profiles},
                used_fallback_source=used_fallback_source,
            )

        profile_vectors, job_vectors = await embed_profiles_and_jobs(
            self.embedder,
            [profile_text(p) for p in profiles],
            [job_text(j) for j in jobs],
        )

        results: dict[str, list[ScoredCandidate]] = {}
        for profile, profile_vector in zip(profiles, profile_vectors):
            scorer = SemanticScoring(profile, profile_vector, job_vectors)
            results[profile.id] = rank_candidates(scorer, jobs, top_n)

        logger.info(
            "Ranked %d jobs for %d profiles (fallback source: %s)",
            len(jobs), len(profiles), used_fallback_source,
        )
        return BulkRanking(results=results, used_fallback_source=used_fallback_source)

    async def _choose_scoring(
        self,
        profile: UserProfile,
        jobs: Sequence[JobPosting],
    ) -> ScoringPath:
        try:
            profile_vectors, job_vectors = await embed_profiles_and_jobs(
                self.embedder,
                [profile_text(profile)],
                [job_text(j) for j in jobs],
            )
        except Exception as e:
            logger.warning(
                "Embedding unavailable for profile %s (%s); using keyword overlap",
                profile.id, e,
            )
            return KeywordFallbackScoring(profile)

        return SemanticScoring(profile, profile_vectors[0], job_vectors)

    async def rank_single_profile(
        self,
        profile: UserProfile,
        jobs: Sequence[JobPosting],
        top_n: Optional[int] = None,
        used_fallback_source: bool = False,
    ) -> UserRanking:
        """
        Rank jobs for one profile, degrading to keyword overlap if needed.

        The embedding service is not called when there are no jobs.
        Embedding failures never reach the caller.
        """
        top_n = self.default_top_n if top_n is None else top_n

        if not jobs:
            return UserRanking(used_fallback_source=used_fallback_source)

        scorer = await self._choose_scoring(profile, jobs)
        return UserRanking(
            results=rank_candidates(scorer, jobs, top_n),
            used_fallback_source=used_fallback_source,
            scoring_path=scorer.name,
        )
