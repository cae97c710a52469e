"""Command-line entry point for computing job recommendations."""
import argparse
import asyncio
import json
import logging
import sys
from typing import Optional

from config.settings import settings
from recommender.embeddings import get_embedder
from recommender.logging_config import setup_logging
from recommender.persistence.database import get_session, init_db
from recommender.persistence.loader import CandidateLoader
from recommender.ranking.orchestrator import BulkRanking, RankingOrchestrator, UserRanking
from recommender.ranking.service import RecommendationService

logger = logging.getLogger(__name__)


async def run_recommendations(
    user_id: Optional[str] = None,
    top_n: Optional[int] = None,
    embedding_backend: Optional[str] = None,
) -> BulkRanking | UserRanking:
    """Rank jobs for one user, or for every user when user_id is None."""
    orchestrator = RankingOrchestrator(
        get_embedder(embedding_backend),
        default_top_n=settings.default_top_n,
    )

    with get_session() as session:
        loader = CandidateLoader(session, max_rows=settings.max_candidate_rows)
        service = RecommendationService(loader, orchestrator)

        if user_id:
            return await service.rank_for_user(user_id, top_n=top_n)
        return await service.rank_all_users(top_n=top_n)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rank job postings against user profiles")
    parser.add_argument("--user", dest="user_id", help="Rank for this user id only")
    parser.add_argument("--top-n", type=int, default=None, help="Results per profile")
    parser.add_argument(
        "--embedding-backend",
        choices=["http", "hashing"],
        default=None,
        help="Override the configured embedding backend",
    )
    parser.add_argument("--init-db", action="store_true", help="Create tables before ranking")
    parser.add_argument("--log-level", default=None, help="Log level (defaults to LOG_LEVEL)")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level)

    if args.init_db:
        init_db()

    try:
        ranking = asyncio.run(
            run_recommendations(
                user_id=args.user_id,
                top_n=args.top_n,
                embedding_backend=args.embedding_backend,
            )
        )
    except KeyboardInterrupt:
        logger.info("Interrupted.")
        return 1
    except Exception as e:
        logger.error("Ranking failed: %s", e)
        return 1

    print(json.dumps(ranking.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
