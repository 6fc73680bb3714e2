"""Multiple-choice meaning quiz feeding review outcomes to the tracker."""
import logging
import random
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from ieltsprep.errors import InvalidConfiguration
from ieltsprep.models.vocab import ReviewState, VocabWord
from ieltsprep.services.review_service import DEFAULT_LEARNER, ReviewStateTracker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuizQuestion:
    """One question: pick the meaning of ``prompt``."""
    word_id: str
    prompt: str
    options: Tuple[str, ...]
    answer: str


@dataclass(frozen=True)
class QuizResult:
    """Outcome of an answered question."""
    question: QuizQuestion
    choice: str
    correct: bool
    state: ReviewState


class QuizService:
    """Builds meaning quizzes and records the answers."""

    def __init__(
        self,
        tracker: ReviewStateTracker,
        rng: Optional[random.Random] = None,
        use_bangla: bool = False,
    ):
        self.tracker = tracker
        self.rng = rng or random.Random()
        self.use_bangla = use_bangla

    def _meaning(self, word: VocabWord) -> str:
        return word.bangla_meaning if self.use_bangla else word.english_meaning

    def build_question(
        self, word: VocabWord, pool: Sequence[VocabWord], option_count: int = 4
    ) -> QuizQuestion:
        """Correct meaning plus up to ``option_count - 1`` distinct distractors from ``pool``."""
        if option_count < 2:
            raise InvalidConfiguration("A quiz question needs at least two options")

        answer = self._meaning(word)
        candidates = []
        for other in pool:
            meaning = self._meaning(other)
            if other.id == word.id or not meaning or meaning == answer or meaning in candidates:
                continue
            candidates.append(meaning)

        distractors = self.rng.sample(candidates, min(len(candidates), option_count - 1))
        options = [answer, *distractors]
        self.rng.shuffle(options)
        return QuizQuestion(word_id=word.id, prompt=word.word, options=tuple(options), answer=answer)

    def build_quiz(
        self,
        words: Sequence[VocabWord],
        pool: Optional[Sequence[VocabWord]] = None,
        option_count: int = 4,
    ) -> List[QuizQuestion]:
        """One question per distinct word, in the order given."""
        pool = pool if pool is not None else self.tracker.catalog.get_all()
        seen = set()
        questions = []
        for word in words:
            if word.id in seen:
                continue
            seen.add(word.id)
            questions.append(self.build_question(word, pool, option_count))
        return questions

    def submit_answer(
        self,
        question: QuizQuestion,
        choice: str,
        learner_id: str = DEFAULT_LEARNER,
        now: Optional[datetime] = None,
    ) -> QuizResult:
        """Grade ``choice`` and record the outcome for the question's word."""
        correct = choice == question.answer
        state = self.tracker.record_review_outcome(question.word_id, correct, learner_id=learner_id, now=now)
        logger.debug(f"Quiz answer for {question.word_id}: {'correct' if correct else 'incorrect'}")
        return QuizResult(question=question, choice=choice, correct=correct, state=state)
