"""Application facade wiring the catalog, rotation and review tracking."""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Union

from ieltsprep import monitoring
from ieltsprep.clock import Clock, SystemClock, as_utc
from ieltsprep.config import Settings, settings as default_settings
from ieltsprep.models.base import create_db_engine, create_session_factory, init_db
from ieltsprep.models.vocab import ReviewState, VocabCategory, VocabWord
from ieltsprep.services.catalog_service import CategoryIndex, ContentCatalog
from ieltsprep.services.content_provider import ContentProvider, JsonContentProvider
from ieltsprep.services.exam_config_service import ExamConfigService, SqlAlchemyConfigStore
from ieltsprep.services.review_service import DEFAULT_LEARNER, ReviewPolicy, ReviewStateTracker
from ieltsprep.services.review_store import ReviewStore, SqlAlchemyReviewStore
from ieltsprep.services.rotation_service import DailyRotationSelector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressSummary:
    """Learner progress over the catalog."""
    total: int
    reviewed: int
    learned: int


class VocabularyApp:
    """Entry point used by presentation layers."""

    def __init__(
        self,
        provider: ContentProvider,
        store: ReviewStore,
        window_size: int = 10,
        policy: Optional[ReviewPolicy] = None,
        clock: Optional[Clock] = None,
        exam_config: Optional[ExamConfigService] = None,
    ):
        self.clock = clock or SystemClock()
        self.catalog = ContentCatalog.from_provider(provider)
        self.index = CategoryIndex(self.catalog)
        self.selector = DailyRotationSelector(window_size)
        self.tracker = ReviewStateTracker(self.catalog, store, policy=policy, clock=self.clock)
        self.exam_config = exam_config
        logger.info(f"Vocabulary app ready with {self.catalog.size()} words, window {window_size}")

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None, clock: Optional[Clock] = None) -> "VocabularyApp":
        """Default wiring: bundled JSON content and a SQLAlchemy store."""
        config = config or default_settings
        engine = create_db_engine(config.database.url, config.database.echo)
        init_db(engine)
        session_factory = create_session_factory(engine)
        clock = clock or SystemClock()

        return cls(
            provider=JsonContentProvider(config.content.vocabulary_file),
            store=SqlAlchemyReviewStore(session_factory),
            window_size=config.rotation.window_size,
            policy=ReviewPolicy.from_settings(config.review),
            clock=clock,
            exam_config=ExamConfigService(
                SqlAlchemyConfigStore(session_factory), clock=clock, exam_settings=config.exam
            ),
        )

    def get_todays_words(self, day: Optional[date] = None) -> List[VocabWord]:
        """Words in the daily window for ``day`` (defaults to today)."""
        day = day or as_utc(self.clock.now()).date()
        words = self.selector.select(day, self.catalog.get_all())
        monitoring.daily_selections.inc()
        return words

    def get_by_category(self, category: Union[VocabCategory, str]) -> List[VocabWord]:
        return [self.catalog.get_by_id(word_id) for word_id in self.index.get_by_category(category)]

    def record_review_outcome(
        self,
        word_id: str,
        correct: bool,
        learner_id: str = DEFAULT_LEARNER,
        now: Optional[datetime] = None,
    ) -> ReviewState:
        return self.tracker.record_review_outcome(word_id, correct, learner_id=learner_id, now=now)

    def get_review_state(self, word_id: str, learner_id: str = DEFAULT_LEARNER) -> ReviewState:
        return self.tracker.get_state(word_id, learner_id=learner_id)

    def get_due_words(self, learner_id: str = DEFAULT_LEARNER, now: Optional[datetime] = None) -> List[VocabWord]:
        """Reviewed words whose next review date has passed, in catalog order."""
        now = as_utc(now if now is not None else self.clock.now())
        states = self.tracker.store.list_states(learner_id)
        return [
            word for word in self.catalog.get_all()
            if word.id in states and states[word.id].is_due(now)
        ]

    def progress_summary(self, learner_id: str = DEFAULT_LEARNER) -> ProgressSummary:
        states = self.tracker.store.list_states(learner_id)
        known = [state for word_id, state in states.items() if word_id in self.catalog]
        return ProgressSummary(
            total=self.catalog.size(),
            reviewed=len(known),
            learned=sum(1 for state in known if state.is_learned),
        )
