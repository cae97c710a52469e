"""Pytest fixtures for recommendation tests."""
import asyncio
import re
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from recommender.exceptions import EmbeddingError
from recommender.persistence.models import Base, Job, Post, Profile
from recommender.records import JobPosting, UserProfile


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create a fresh in-memory database engine for each test."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def test_db(test_engine):
    """Session bound to the in-memory database."""
    Session = sessionmaker(bind=test_engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def seeded_db(test_db):
    """Database with two profiles, two jobs and a mix of posts."""
    test_db.add_all([
        Profile(id="user-1", skills=["python", "accessibility"], accessibility_needs=["visual"]),
        Profile(id="user-2", skills="go, rust", accessibility_needs=None),
        Job(
            id="job-a",
            title="Python Developer",
            description="python developer",
            accessibility_features={"screenReaderSupport": True},
        ),
        Job(id="job-b", title="Java Developer", description="java developer"),
        Post(
            id="post-1",
            title="Go Engineer",
            content="We need a go engineer",
            job_metadata={"accessibility_features": {"remoteWork": True}},
            is_job_post=True,
        ),
        Post(id="post-2", title="Weekend hike", content="Who is in?", is_job_post=False),
    ])
    test_db.commit()
    return test_db


# =============================================================================
# RECORD FIXTURES
# =============================================================================


@pytest.fixture
def visual_profile():
    return UserProfile(id="user-1", skills="python, accessibility", accessibility_needs=["visual"])


@pytest.fixture
def python_job():
    return JobPosting(
        id="job-a",
        title="Python Developer",
        description="python developer",
        accessibility_features={"screenReaderSupport": True},
    )


@pytest.fixture
def java_job():
    return JobPosting(id="job-b", title="Java Developer", description="java developer")


# =============================================================================
# EMBEDDER FAKES
# =============================================================================


VOCABULARY = [
    "python",
    "java",
    "go",
    "rust",
    "developer",
    "engineer",
    "accessibility",
    "visual",
    "screenreadersupport",
]


class BagOfWordsEmbedder:
    """Counts vocabulary words; texts without any known word embed to zeros."""

    def __init__(self, vocabulary=None):
        self.vocabulary = vocabulary or VOCABULARY
        self.calls: list[list[str]] = []

    async def embed_texts(self, texts):
        self.calls.append(list(texts))
        vectors = []
        for text in texts:
            words = re.findall(r"\w+", text.lower())
            vectors.append([float(words.count(term)) for term in self.vocabulary])
        return vectors


class FailingEmbedder:
    """Raises on every call."""

    def __init__(self, error=None):
        self.error = error or EmbeddingError("service unavailable")
        self.calls = 0

    async def embed_texts(self, texts):
        self.calls += 1
        raise self.error


class ShortEmbedder(BagOfWordsEmbedder):
    """Drops the last vector, breaking index alignment."""

    async def embed_texts(self, texts):
        vectors = await super().embed_texts(texts)
        return vectors[:-1]


class BarrierEmbedder(BagOfWordsEmbedder):
    """Only answers once two calls are in flight at the same time."""

    def __init__(self):
        super().__init__()
        self.in_flight = 0
        self.both_started = asyncio.Event()

    async def embed_texts(self, texts):
        self.in_flight += 1
        if self.in_flight >= 2:
            self.both_started.set()
        await asyncio.wait_for(self.both_started.wait(), timeout=1)
        return await super().embed_texts(texts)


@pytest.fixture
def bow_embedder():
    return BagOfWordsEmbedder()


@pytest.fixture
def failing_embedder():
    return FailingEmbedder()


@pytest.fixture
def short_embedder():
    return ShortEmbedder()


@pytest.fixture
def barrier_embedder():
    return BarrierEmbedder()


class FailFastEmbedder(BagOfWordsEmbedder):
    """First batch fails at once; later batches finish after a short delay."""

    def __init__(self, delay=0.05):
        super().__init__()
        self.delay = delay
        self.started = 0
        self.finished = 0

    async def embed_texts(self, texts):
        self.started += 1
        if self.started == 1:
            raise EmbeddingError("profile batch rejected")
        await asyncio.sleep(self.delay)
        vectors = await super().embed_texts(texts)
        self.finished += 1
        return vectors


@pytest.fixture
def fail_fast_embedder():
    return FailFastEmbedder()
