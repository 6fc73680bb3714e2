"""Test configuration."""
import os

# Set test environment before any imports
os.environ["ENV"] = "test"
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

from datetime import UTC, datetime, timedelta
from typing import Callable, Generator, List

import pytest
from faker import Faker
from sqlalchemy.orm import sessionmaker

# Import after environment setup
from ieltsprep.clock import FixedClock
from ieltsprep.models.base import create_db_engine, create_session_factory, init_db
from ieltsprep.models.vocab import PartOfSpeech, VocabCategory, VocabDifficulty, VocabWord
from ieltsprep.services.catalog_service import ContentCatalog
from ieltsprep.services.review_service import ReviewPolicy, ReviewStateTracker
from ieltsprep.services.review_store import InMemoryReviewStore

fake = Faker()
Faker.seed(1234)


@pytest.fixture
def make_words() -> Callable[..., List[VocabWord]]:
    """Factory for synthetic catalogs with ids w000, w001, ..."""

    def _make(count: int, category: VocabCategory = VocabCategory.ACADEMIC) -> List[VocabWord]:
        return [
            VocabWord(
                id=f"w{i:03d}",
                word=f"{fake.word()}-{i}",
                category=category,
                difficulty=VocabDifficulty.INTERMEDIATE,
                part_of_speech=PartOfSpeech.NOUN,
                english_meaning=f"{fake.sentence(nb_words=4)} ({i})",
                bangla_meaning=f"অর্থ {i}",
                example=fake.sentence(),
            )
            for i in range(count)
        ]

    return _make


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 19, 9, 30, tzinfo=UTC)


@pytest.fixture
def clock(now: datetime) -> FixedClock:
    return FixedClock(now)


@pytest.fixture
def policy() -> ReviewPolicy:
    """Policy used across tests: 1 day base, doubling, learned after 5."""
    return ReviewPolicy(
        base_interval=timedelta(days=1),
        growth_factor=2.0,
        max_interval=timedelta(days=180),
        learned_threshold=5,
    )


@pytest.fixture
def catalog(make_words) -> ContentCatalog:
    return ContentCatalog(make_words(20))


@pytest.fixture
def store() -> InMemoryReviewStore:
    return InMemoryReviewStore()


@pytest.fixture
def tracker(catalog, store, policy, clock) -> ReviewStateTracker:
    return ReviewStateTracker(catalog, store, policy=policy, clock=clock)


@pytest.fixture
def session_factory() -> Generator[sessionmaker, None, None]:
    """Fresh in-memory database per test."""
    engine = create_db_engine("sqlite://")
    init_db(engine)
    factory = create_session_factory(engine)
    yield factory
    engine.dispose()
