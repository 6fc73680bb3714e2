"""Tests for the meaning quiz."""
import random

import pytest

from ieltsprep.errors import InvalidConfiguration
from ieltsprep.services.quiz_service import QuizService
from ieltsprep.services.review_service import ReviewStateTracker


@pytest.fixture
def quiz(tracker: ReviewStateTracker) -> QuizService:
    return QuizService(tracker, rng=random.Random(42))


def test_question_has_answer_and_distinct_distractors(quiz: QuizService, catalog) -> None:
    """Test option composition."""
    word = catalog.get_by_id("w000")
    question = quiz.build_question(word, catalog.get_all())

    assert question.word_id == "w000"
    assert question.prompt == word.word
    assert question.answer == word.english_meaning
    assert len(question.options) == 4
    assert len(set(question.options)) == 4
    assert question.answer in question.options
    meanings = {other.english_meaning for other in catalog.get_all() if other.id != "w000"}
    assert set(question.options) - {question.answer} <= meanings


def test_small_pool_gives_fewer_options(quiz: QuizService, catalog) -> None:
    """Test a pool with fewer distractors than requested."""
    pool = catalog.get_all()[:2]
    question = quiz.build_question(pool[0], pool)
    assert len(question.options) == 2


def test_option_count_must_allow_a_choice(quiz: QuizService, catalog) -> None:
    """Test that a question needs at least two options."""
    with pytest.raises(InvalidConfiguration):
        quiz.build_question(catalog.get_by_id("w000"), catalog.get_all(), option_count=1)


def test_build_quiz_skips_repeated_words(quiz: QuizService, catalog) -> None:
    """Test that a wrapped daily window yields one question per word."""
    words = [catalog[0], catalog[1], catalog[0]]
    questions = quiz.build_quiz(words)
    assert [question.word_id for question in questions] == ["w000", "w001"]


def test_bangla_meanings(tracker: ReviewStateTracker, catalog) -> None:
    """Test building questions from Bangla meanings."""
    quiz = QuizService(tracker, rng=random.Random(1), use_bangla=True)
    question = quiz.build_question(catalog.get_by_id("w003"), catalog.get_all())
    assert question.answer == "অর্থ 3"


def test_correct_answer_records_progress(quiz: QuizService, catalog) -> None:
    """Test that a correct choice advances the review count."""
    question = quiz.build_quiz([catalog.get_by_id("w002")])[0]

    result = quiz.submit_answer(question, question.answer)

    assert result.correct is True
    assert result.state.review_count == 1


def test_wrong_answer_resets_progress(quiz: QuizService, catalog) -> None:
    """Test that a wrong choice resets the review count."""
    question = quiz.build_quiz([catalog.get_by_id("w002")])[0]
    quiz.submit_answer(question, question.answer)
    wrong = next(option for option in question.options if option != question.answer)

    result = quiz.submit_answer(question, wrong)

    assert result.correct is False
    assert result.state.review_count == 0
    assert result.state.is_learned is False
