"""Tests for the candidate loader and the recommendation service."""
import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from recommender.exceptions import EmbeddingError
from recommender.persistence.loader import CandidateLoader, CandidateSet
from recommender.persistence.models import Job, Post, Profile
from recommender.ranking.orchestrator import RankingOrchestrator
from recommender.ranking.service import RecommendationService
from recommender.records import JobPosting, UserProfile


class TestCandidateLoader:
    """Tests for CandidateLoader."""

    def test_fetch_profiles(self, seeded_db):
        profiles = CandidateLoader(seeded_db).fetch_profiles()
        assert {p.id for p in profiles} == {"user-1", "user-2"}
        assert all(isinstance(p, UserProfile) for p in profiles)

    def test_fetch_profile(self, seeded_db):
        profile = CandidateLoader(seeded_db).fetch_profile("user-1")
        assert profile == UserProfile(
            id="user-1",
            skills=["python", "accessibility"],
            accessibility_needs=["visual"],
        )

    def test_fetch_missing_profile(self, seeded_db):
        assert CandidateLoader(seeded_db).fetch_profile("nobody") is None

    def test_primary_source(self, seeded_db):
        jobs, used_fallback = CandidateLoader(seeded_db).fetch_jobs()
        assert used_fallback is False
        assert {j.id for j in jobs} == {"job-a", "job-b"}
        job_a = next(j for j in jobs if j.id == "job-a")
        assert job_a.accessibility_features == {"screenReaderSupport": True}

    def test_empty_primary_source_is_not_a_fallback(self, test_db):
        test_db.add(Post(id="post-1", title="Go", content="go", is_job_post=True))
        test_db.commit()
        jobs, used_fallback = CandidateLoader(test_db).fetch_jobs()
        assert jobs == []
        assert used_fallback is False

    def test_jobs_table_without_accessibility_column(self, test_db, test_engine):
        Job.__table__.drop(test_engine)
        with test_engine.begin() as conn:
            conn.execute(text(
                "CREATE TABLE jobs (id VARCHAR PRIMARY KEY, title VARCHAR, description TEXT)"
            ))
            conn.execute(text(
                "INSERT INTO jobs (id, title, description) VALUES ('job-1', 'Go Engineer', 'go services')"
            ))
        test_db.add(Post(id="post-1", title="Go", content="go", is_job_post=True))
        test_db.commit()

        jobs, used_fallback = CandidateLoader(test_db).fetch_jobs()

        assert used_fallback is False
        assert jobs == [
            JobPosting(id="job-1", title="Go Engineer", description="go services")
        ]

    def test_falls_back_to_job_posts(self, seeded_db, test_engine):
        Job.__table__.drop(test_engine)

        jobs, used_fallback = CandidateLoader(seeded_db).fetch_jobs()

        assert used_fallback is True
        assert jobs == [
            JobPosting(
                id="post-1",
                title="Go Engineer",
                content="We need a go engineer",
                job_metadata={"accessibility_features": {"remoteWork": True}},
            )
        ]

    def test_secondary_failure_propagates(self, seeded_db, test_engine):
        Job.__table__.drop(test_engine)
        Post.__table__.drop(test_engine)

        with pytest.raises(OperationalError):
            CandidateLoader(seeded_db).fetch_jobs()

    def test_row_cap_applies_to_both_sources(self, test_db, test_engine):
        test_db.add_all([Job(id=f"job-{i}", title="t") for i in range(5)])
        test_db.add_all([Post(id=f"post-{i}", title="t", is_job_post=True) for i in range(5)])
        test_db.commit()

        loader = CandidateLoader(test_db, max_rows=3)
        jobs, _ = loader.fetch_jobs()
        assert len(jobs) == 3

        test_db.rollback()
        Job.__table__.drop(test_engine)
        jobs, used_fallback = loader.fetch_jobs()
        assert used_fallback is True
        assert len(jobs) == 3

    def test_fetch_profiles_and_jobs(self, seeded_db):
        candidates = CandidateLoader(seeded_db).fetch_profiles_and_jobs()
        assert isinstance(candidates, CandidateSet)
        assert len(candidates.profiles) == 2
        assert len(candidates.jobs) == 2
        assert candidates.used_fallback_source is False


class TestRecommendationService:
    """End-to-end tests against an in-memory database."""

    def _service(self, session, embedder):
        return RecommendationService(CandidateLoader(session), RankingOrchestrator(embedder))

    @pytest.mark.asyncio
    async def test_rank_all_users(self, seeded_db, bow_embedder):
        ranking = await self._service(seeded_db, bow_embedder).rank_all_users()
        assert set(ranking.results) == {"user-1", "user-2"}
        assert ranking.results["user-1"][0].job_id == "job-a"
        assert ranking.used_fallback_source is False

    @pytest.mark.asyncio
    async def test_rank_all_users_on_fallback_source(self, seeded_db, test_engine, bow_embedder):
        Job.__table__.drop(test_engine)
        ranking = await self._service(seeded_db, bow_embedder).rank_all_users(top_n=1)
        assert ranking.used_fallback_source is True
        assert ranking.results["user-2"][0].job_id == "post-1"

    @pytest.mark.asyncio
    async def test_rank_all_users_fails_whole_batch(self, seeded_db, failing_embedder):
        with pytest.raises(EmbeddingError):
            await self._service(seeded_db, failing_embedder).rank_all_users()

    @pytest.mark.asyncio
    async def test_rank_for_user(self, seeded_db, bow_embedder):
        ranking = await self._service(seeded_db, bow_embedder).rank_for_user("user-1", top_n=1)
        assert ranking.scoring_path == "semantic"
        assert [c.job_id for c in ranking.results] == ["job-a"]

    @pytest.mark.asyncio
    async def test_rank_for_user_keyword_fallback(self, seeded_db, test_engine, failing_embedder):
        Job.__table__.drop(test_engine)
        ranking = await self._service(seeded_db, failing_embedder).rank_for_user("user-2")
        assert ranking.scoring_path == "keyword"
        assert ranking.used_fallback_source is True
        assert ranking.results[0].job_id == "post-1"
        assert ranking.results[0].score >= 1

    @pytest.mark.asyncio
    async def test_missing_profile(self, seeded_db, test_engine, failing_embedder):
        Job.__table__.drop(test_engine)
        ranking = await self._service(seeded_db, failing_embedder).rank_for_user("nobody")
        assert ranking.results == []
        assert ranking.used_fallback_source is False
        assert failing_embedder.calls == 0

    @pytest.mark.asyncio
    async def test_no_jobs_skips_embedding(self, test_db, failing_embedder):
        test_db.add(Profile(id="user-1", skills=["python"]))
        test_db.commit()

        ranking = await self._service(test_db, failing_embedder).rank_for_user("user-1")
        assert ranking.results == []
        assert failing_embedder.calls == 0
