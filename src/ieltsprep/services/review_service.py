"""Spaced-repetition review tracking.

A word moves New -> Learning -> Review -> Learned, which in stored data is
just ``(review_count, is_learned)``:

* a correct answer increments ``review_count`` and schedules the next review
  ``base_interval * growth_factor ** review_count`` ahead, capped at
  ``max_interval``; reaching ``learned_threshold`` marks the word learned;
* an incorrect answer resets ``review_count`` to zero, clears the learned
  flag and schedules the next review one ``base_interval`` ahead.
"""
import logging
import math
import threading
import weakref
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Tuple

from ieltsprep import monitoring
from ieltsprep.clock import Clock, SystemClock, as_utc
from ieltsprep.config import ReviewSettings
from ieltsprep.errors import InvalidConfiguration
from ieltsprep.models.vocab import ReviewState
from ieltsprep.services.catalog_service import ContentCatalog
from ieltsprep.services.review_store import ReviewStore

logger = logging.getLogger(__name__)

DEFAULT_LEARNER = "default"


@dataclass(frozen=True)
class ReviewPolicy:
    """Interval and promotion parameters of the review schedule."""
    base_interval: timedelta = timedelta(days=1)
    growth_factor: float = 2.0
    max_interval: timedelta = timedelta(days=180)
    learned_threshold: int = 5

    def __post_init__(self):
        if self.base_interval <= timedelta(0):
            raise InvalidConfiguration("base_interval must be positive")
        if not math.isfinite(self.growth_factor) or self.growth_factor < 1:
            raise InvalidConfiguration("growth_factor must be at least 1")
        if self.max_interval < self.base_interval:
            raise InvalidConfiguration("max_interval cannot be shorter than base_interval")
        if self.learned_threshold < 1:
            raise InvalidConfiguration("learned_threshold must be positive")

    @classmethod
    def from_settings(cls, review: ReviewSettings) -> "ReviewPolicy":
        """Build a policy from review settings."""
        return cls(
            base_interval=timedelta(days=review.base_interval_days),
            growth_factor=review.growth_factor,
            max_interval=timedelta(days=review.max_interval_days),
            learned_threshold=review.learned_threshold,
        )

    def interval_for(self, review_count: int) -> timedelta:
        """Interval until the next review after ``review_count`` correct answers in a row."""
        base_days = self.base_interval / timedelta(days=1)
        max_days = self.max_interval / timedelta(days=1)
        try:
            days = base_days * self.growth_factor ** review_count
        except OverflowError:
            return self.max_interval
        if days >= max_days:
            return self.max_interval
        return timedelta(days=days)

    def next_state(self, state: ReviewState, correct: bool, now: datetime) -> ReviewState:
        """Apply one review outcome to ``state`` and return the new state."""
        # A clock that went backwards must not schedule into the past.
        if state.last_reviewed_at is not None and state.last_reviewed_at > now:
            now = state.last_reviewed_at

        if correct:
            review_count = state.review_count + 1
            return ReviewState(
                review_count=review_count,
                is_learned=review_count >= self.learned_threshold,
                next_review_date=now + self.interval_for(review_count),
                last_reviewed_at=now,
            )

        return ReviewState(
            review_count=0,
            is_learned=False,
            next_review_date=now + self.base_interval,
            last_reviewed_at=now,
        )


class ReviewStateTracker:
    """Records review outcomes against persisted per-learner word state.

    Outcomes for the same (learner, word) pair are serialised with a per-key
    lock; different pairs proceed in parallel. A lock lives only while some
    caller holds it.
    """

    def __init__(
        self,
        catalog: ContentCatalog,
        store: ReviewStore,
        policy: Optional[ReviewPolicy] = None,
        clock: Optional[Clock] = None,
    ):
        self.catalog = catalog
        self.store = store
        self.policy = policy or ReviewPolicy()
        self.clock = clock or SystemClock()
        self._locks: "weakref.WeakValueDictionary[Tuple[str, str], threading.Lock]" = (
            weakref.WeakValueDictionary()
        )
        self._locks_guard = threading.Lock()

    def _lock_for(self, learner_id: str, word_id: str) -> threading.Lock:
        key = (learner_id, word_id)
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    def _now(self, now: Optional[datetime]) -> datetime:
        return as_utc(now if now is not None else self.clock.now())

    def get_state(
        self, word_id: str, learner_id: str = DEFAULT_LEARNER, now: Optional[datetime] = None
    ) -> ReviewState:
        """Persisted state of a word, or a fresh unsaved state if never reviewed."""
        self.catalog.get_by_id(word_id)
        state = self.store.load(learner_id, word_id)
        return state if state is not None else ReviewState.initial(self._now(now))

    def record_review_outcome(
        self,
        word_id: str,
        correct: bool,
        learner_id: str = DEFAULT_LEARNER,
        now: Optional[datetime] = None,
    ) -> ReviewState:
        """Apply a correct/incorrect outcome to a word and persist the result.

        Raises:
            NotFound: the word is not in the catalog; nothing is read or written.
            PersistenceFailure: the store failed; propagated unchanged.
        """
        self.catalog.get_by_id(word_id)
        now = self._now(now)

        with self._lock_for(learner_id, word_id):
            current = self.store.load(learner_id, word_id)
            if current is None:
                current = ReviewState.initial(now)
            updated = self.policy.next_state(current, correct, now)
            self.store.save(learner_id, word_id, updated)

        monitoring.review_outcomes.labels(outcome="correct" if correct else "incorrect").inc()
        if updated.is_learned and not current.is_learned:
            monitoring.words_learned.inc()
            logger.info(f"Learner {learner_id} learned word {word_id}")
        logger.debug(
            f"Recorded {'correct' if correct else 'incorrect'} outcome for {learner_id}/{word_id}: "
            f"count={updated.review_count}, next={updated.next_review_date.isoformat()}"
        )
        return updated
