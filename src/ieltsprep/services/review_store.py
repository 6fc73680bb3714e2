"""Keyed stores for learner review state."""
import logging
import threading
from dataclasses import replace
from typing import Callable, Dict, Optional, Protocol, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ieltsprep import monitoring
from ieltsprep.clock import as_utc
from ieltsprep.errors import PersistenceFailure
from ieltsprep.models.models import ReviewStateRecord
from ieltsprep.models.vocab import ReviewState

logger = logging.getLogger(__name__)


class ReviewStore(Protocol):
    """Persistence collaborator for review state, keyed by learner and word."""

    def load(self, learner_id: str, word_id: str) -> Optional[ReviewState]:
        ...

    def save(self, learner_id: str, word_id: str, state: ReviewState) -> None:
        ...

    def list_states(self, learner_id: str) -> Dict[str, ReviewState]:
        ...


class InMemoryReviewStore:
    """Dict-backed store; keeps copies so callers cannot mutate stored state."""

    def __init__(self):
        self._states: Dict[Tuple[str, str], ReviewState] = {}
        self._lock = threading.Lock()

    def load(self, learner_id: str, word_id: str) -> Optional[ReviewState]:
        with self._lock:
            state = self._states.get((learner_id, word_id))
        return replace(state) if state is not None else None

    def save(self, learner_id: str, word_id: str, state: ReviewState) -> None:
        with self._lock:
            self._states[(learner_id, word_id)] = replace(state)

    def list_states(self, learner_id: str) -> Dict[str, ReviewState]:
        with self._lock:
            return {
                word_id: replace(state)
                for (learner, word_id), state in self._states.items()
                if learner == learner_id
            }


def _to_state(record: ReviewStateRecord) -> ReviewState:
    return ReviewState(
        review_count=record.review_count,
        is_learned=record.is_learned,
        next_review_date=as_utc(record.next_review_date),
        last_reviewed_at=as_utc(record.last_reviewed_at) if record.last_reviewed_at else None,
    )


class SqlAlchemyReviewStore:
    """Review store backed by the ``review_states`` table.

    Every call opens a session, commits and closes it. Driver errors are
    re-raised as PersistenceFailure and never retried here.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def load(self, learner_id: str, word_id: str) -> Optional[ReviewState]:
        try:
            with self.session_factory() as session:
                record = (
                    session.query(ReviewStateRecord)
                    .filter(
                        ReviewStateRecord.learner_id == learner_id,
                        ReviewStateRecord.word_id == word_id,
                    )
                    .first()
                )
                return _to_state(record) if record else None
        except SQLAlchemyError as e:
            monitoring.persistence_errors.labels(operation_type="load").inc()
            logger.error(f"Failed to load review state for {learner_id}/{word_id}: {e}")
            raise PersistenceFailure(f"Could not load review state for word {word_id!r}") from e

    def save(self, learner_id: str, word_id: str, state: ReviewState) -> None:
        try:
            with self.session_factory() as session, session.begin():
                record = (
                    session.query(ReviewStateRecord)
                    .filter(
                        ReviewStateRecord.learner_id == learner_id,
                        ReviewStateRecord.word_id == word_id,
                    )
                    .first()
                )
                if record is None:
                    record = ReviewStateRecord(learner_id=learner_id, word_id=word_id)
                    session.add(record)
                record.review_count = state.review_count
                record.is_learned = state.is_learned
                record.next_review_date = state.next_review_date
                record.last_reviewed_at = state.last_reviewed_at
        except SQLAlchemyError as e:
            monitoring.persistence_errors.labels(operation_type="save").inc()
            logger.error(f"Failed to save review state for {learner_id}/{word_id}: {e}")
            raise PersistenceFailure(f"Could not save review state for word {word_id!r}") from e

    def list_states(self, learner_id: str) -> Dict[str, ReviewState]:
        try:
            with self.session_factory() as session:
                records = (
                    session.query(ReviewStateRecord)
                    .filter(ReviewStateRecord.learner_id == learner_id)
                    .all()
                )
                return {record.word_id: _to_state(record) for record in records}
        except SQLAlchemyError as e:
            monitoring.persistence_errors.labels(operation_type="list").inc()
            logger.error(f"Failed to list review states for {learner_id}: {e}")
            raise PersistenceFailure(f"Could not list review states for learner {learner_id!r}") from e
