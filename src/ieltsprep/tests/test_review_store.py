"""Tests for review state stores."""
from datetime import UTC, datetime, timedelta
from unittest.mock import Mock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from ieltsprep.errors import PersistenceFailure
from ieltsprep.models.models import ReviewStateRecord
from ieltsprep.models.vocab import ReviewState
from ieltsprep.services.review_store import InMemoryReviewStore, SqlAlchemyReviewStore


@pytest.fixture
def state() -> ReviewState:
    reviewed = datetime(2026, 10, 19, 9, 30, tzinfo=UTC)
    return ReviewState(
        review_count=2,
        is_learned=False,
        next_review_date=reviewed + timedelta(days=4),
        last_reviewed_at=reviewed,
    )


def test_sql_load_missing(session_factory: sessionmaker) -> None:
    """Test loading a word that was never saved."""
    store = SqlAlchemyReviewStore(session_factory)
    assert store.load("default", "w000") is None


def test_sql_save_and_load(session_factory: sessionmaker, state: ReviewState) -> None:
    """Test that saved state reads back as aware UTC datetimes."""
    store = SqlAlchemyReviewStore(session_factory)
    store.save("default", "w000", state)

    loaded = store.load("default", "w000")
    assert loaded == state
    assert loaded.next_review_date.tzinfo is not None


def test_sql_save_updates_existing_row(session_factory: sessionmaker, state: ReviewState) -> None:
    """Test that saving twice updates a single row."""
    store = SqlAlchemyReviewStore(session_factory)
    store.save("default", "w000", state)
    store.save("default", "w000", ReviewState(0, False, state.next_review_date, state.last_reviewed_at))

    with session_factory() as session:
        assert session.query(ReviewStateRecord).count() == 1
    assert store.load("default", "w000").review_count == 0


def test_sql_list_states_per_learner(session_factory: sessionmaker, state: ReviewState) -> None:
    """Test listing states of one learner."""
    store = SqlAlchemyReviewStore(session_factory)
    store.save("alice", "w000", state)
    store.save("alice", "w001", state)
    store.save("bob", "w000", state)

    assert set(store.list_states("alice")) == {"w000", "w001"}
    assert set(store.list_states("bob")) == {"w000"}
    assert store.list_states("carol") == {}


def test_sql_failure_is_wrapped(state: ReviewState) -> None:
    """Test that driver errors surface as PersistenceFailure."""
    error = OperationalError("SELECT 1", {}, Exception("database is locked"))
    store = SqlAlchemyReviewStore(Mock(side_effect=error))

    with pytest.raises(PersistenceFailure) as exc_info:
        store.save("default", "w000", state)
    assert exc_info.value.__cause__ is error

    with pytest.raises(PersistenceFailure):
        store.load("default", "w000")

    with pytest.raises(PersistenceFailure):
        store.list_states("default")


def test_in_memory_store_copies(state: ReviewState) -> None:
    """Test that the in-memory store keeps its own copies."""
    store = InMemoryReviewStore()
    store.save("default", "w000", state)

    state.review_count = 99
    loaded = store.load("default", "w000")
    assert loaded.review_count == 2

    loaded.review_count = 42
    assert store.load("default", "w000").review_count == 2
    assert list(store.list_states("default")) == ["w000"]
