"""Ranking orchestration."""
from .orchestrator import BulkRanking, RankingOrchestrator, UserRanking
from .service import RecommendationService

__all__ = ["BulkRanking", "RankingOrchestrator", "RecommendationService", "UserRanking"]
