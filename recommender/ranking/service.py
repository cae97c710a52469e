"""Recommendation service wiring storage, embeddings and ranking."""
import logging
from typing import Optional

from recommender.persistence.loader import CandidateLoader
from recommender.ranking.orchestrator import BulkRanking, RankingOrchestrator, UserRanking

logger = logging.getLogger(__name__)


class RecommendationService:
    """Entry points used by callers: rank everyone, or rank one user."""

    def __init__(self, loader: CandidateLoader, orchestrator: RankingOrchestrator):
        """
        Initialize recommendation service.

        Args:
            loader: Candidate loader bound to a database session
            orchestrator: Ranking orchestrator bound to an embedder
        """
        self.loader = loader
        self.orchestrator = orchestrator

    async def rank_all_users(self, top_n: Optional[int] = None) -> BulkRanking:
        """Rank candidate jobs for every stored profile."""
        candidates = self.loader.fetch_profiles_and_jobs()
        return await self.orchestrator.rank_all_users(
            candidates.profiles,
            candidates.jobs,
            top_n=top_n,
            used_fallback_source=candidates.used_fallback_source,
        )

    async def rank_for_user(self, user_id: str, top_n: Optional[int] = None) -> UserRanking:
        """Rank candidate jobs for one user.

        A user without a stored profile gets an empty ranking, not an error.
        """
        profile = self.loader.fetch_profile(user_id)
        if profile is None:
            logger.info("No profile for user %s", user_id)
            return UserRanking(used_fallback_source=False)

        jobs, used_fallback = self.loader.fetch_jobs()
        return await self.orchestrator.rank_single_profile(
            profile,
            jobs,
            top_n=top_n,
            used_fallback_source=used_fallback,
        )
