"""Command line entry point."""
import argparse
import logging
import sys
from datetime import date, datetime, time, UTC
from typing import List, Optional

from ieltsprep.app import VocabularyApp
from ieltsprep.clock import FixedClock, SystemClock, as_utc
from ieltsprep.config import settings
from ieltsprep.errors import IELTSPrepError
from ieltsprep.logging_config import setup_logging
from ieltsprep.monitoring import start_monitoring
from ieltsprep.services.quiz_service import QuizService
from ieltsprep.services.review_service import DEFAULT_LEARNER

logger = logging.getLogger(__name__)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid date {value!r}, expected YYYY-MM-DD") from e


def _format_word(position: int, word) -> str:
    return f"{position:>2}. {word.word} [{word.id}] ({word.category.value}, {word.difficulty.value}) - {word.english_meaning}"


def show_today(app: VocabularyApp, args: argparse.Namespace) -> None:
    day = args.date or as_utc(app.clock.now()).date()
    print(f"Words for {day.isoformat()}:")
    for position, word in enumerate(app.get_todays_words(day), start=1):
        print(_format_word(position, word))


def show_category(app: VocabularyApp, args: argparse.Namespace) -> None:
    words = app.get_by_category(args.name)
    if not words:
        print(f"No words in category {args.name}.")
        return
    for position, word in enumerate(words, start=1):
        print(_format_word(position, word))


def record_review(app: VocabularyApp, args: argparse.Namespace) -> None:
    state = app.record_review_outcome(args.word_id, args.correct, learner_id=args.learner)
    status = "learned" if state.is_learned else "learning"
    print(
        f"{args.word_id}: {status}, streak {state.review_count}, "
        f"next review {state.next_review_date.isoformat(timespec='minutes')}"
    )


def show_status(app: VocabularyApp, args: argparse.Namespace) -> None:
    summary = app.progress_summary(args.learner)
    print(f"Words: {summary.total}  Reviewed: {summary.reviewed}  Learned: {summary.learned}")
    if app.exam_config is not None:
        print(
            f"Exam in {app.exam_config.days_remaining()} days "
            f"(target band {app.exam_config.get_target_band()})"
        )


def show_due(app: VocabularyApp, args: argparse.Namespace) -> None:
    words = app.get_due_words(args.learner)
    if not words:
        print("Nothing due for review.")
        return
    for position, word in enumerate(words, start=1):
        print(_format_word(position, word))


def configure_exam(app: VocabularyApp, args: argparse.Namespace) -> None:
    exam_config = app.exam_config
    if args.set_date:
        exam_config.set_exam_date(args.set_date)
    if args.set_band is not None:
        exam_config.set_target_band(args.set_band)
    print(f"Exam date: {exam_config.get_exam_date().isoformat()}")
    print(f"Target band: {exam_config.get_target_band()}")
    print(f"Days remaining: {exam_config.days_remaining()} ({exam_config.countdown_stage()})")


def show_quiz(app: VocabularyApp, args: argparse.Namespace) -> None:
    quiz = QuizService(app.tracker)
    # Words due for this learner come first.
    words = app.get_due_words(args.learner) + app.get_todays_words(args.date)
    for position, question in enumerate(quiz.build_quiz(words), start=1):
        print(f"{position}. {question.prompt} [{question.word_id}]")
        for letter, option in zip("abcdefgh", question.options):
            print(f"   {letter}) {option}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ieltsprep", description="IELTS vocabulary trainer")
    parser.add_argument("--now", type=_parse_date, help="Pretend today is YYYY-MM-DD")
    sub = parser.add_subparsers(dest="command", required=True)

    today = sub.add_parser("today", help="Show today's words")
    today.add_argument("--date", type=_parse_date)
    today.set_defaults(func=show_today)

    category = sub.add_parser("category", help="List words of a category")
    category.add_argument("name")
    category.set_defaults(func=show_category)

    review = sub.add_parser("review", help="Record a review outcome")
    review.add_argument("word_id")
    outcome = review.add_mutually_exclusive_group(required=True)
    outcome.add_argument("--correct", dest="correct", action="store_true")
    outcome.add_argument("--incorrect", dest="correct", action="store_false")
    review.add_argument("--learner", default=DEFAULT_LEARNER)
    review.set_defaults(func=record_review)

    status = sub.add_parser("status", help="Show learning progress")
    status.add_argument("--learner", default=DEFAULT_LEARNER)
    status.set_defaults(func=show_status)

    due = sub.add_parser("due", help="List words due for review")
    due.add_argument("--learner", default=DEFAULT_LEARNER)
    due.set_defaults(func=show_due)

    exam = sub.add_parser("exam", help="Show or change exam settings")
    exam.add_argument("--set-date", type=_parse_date)
    exam.add_argument("--set-band", type=float)
    exam.set_defaults(func=configure_exam)

    quiz = sub.add_parser("quiz", help="Print a meaning quiz for due and today's words")
    quiz.add_argument("--learner", default=DEFAULT_LEARNER)
    quiz.add_argument("--date", type=_parse_date)
    quiz.set_defaults(func=show_quiz)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(level=settings.logging.level)

    if settings.monitoring.enabled:
        start_monitoring(settings.monitoring.port)

    clock = FixedClock(datetime.combine(args.now, time(12, 0), tzinfo=UTC)) if args.now else SystemClock()
    try:
        app = VocabularyApp.from_settings(settings, clock=clock)
        args.func(app, args)
    except IELTSPrepError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
