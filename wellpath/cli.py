"""
wellpath - Inspect progression state for a progress snapshot.

Usage:
  wellpath status --snapshot snapshot.json --as-of 2024-01-05
  wellpath access 6 --snapshot snapshot.json --catalog content/catalog.yaml
  wellpath score --catalog content/catalog.yaml --chapter chapter_1 --answers answers.json
  wellpath validate --catalog content/catalog.yaml
"""

import argparse
import json
import logging
import sys
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Optional

import yaml

from wellpath import __version__
from wellpath.config import ENV_PREFIX, Settings
from wellpath.content import (
    build_standard_catalog,
    load_catalog,
    load_snapshot,
    load_topic_reviews,
    read_structured_file,
    run_integrity_checks,
)
from wellpath.engine import Navigator, build_attempt, review_topics, score_quiz
from wellpath.schemas import ContentCatalog

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _emit(payload) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False, default=str))


def _catalog(args, settings: Settings) -> ContentCatalog:
    if args.catalog:
        return load_catalog(args.catalog)
    return build_standard_catalog(settings.total_days, settings.chapter_size, settings.days_per_phase)


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------


def cmd_status(args, settings: Settings) -> int:
    navigator = Navigator(
        _catalog(args, settings), load_snapshot(args.snapshot), settings, as_of=args.as_of
    )
    _emit(navigator.get_progress_summary())
    return 0


def cmd_access(args, settings: Settings) -> int:
    navigator = Navigator(
        _catalog(args, settings), load_snapshot(args.snapshot), settings, as_of=args.as_of
    )
    _emit(navigator.get_lesson_access(args.day).to_wire())
    return 0


def cmd_score(args, settings: Settings) -> int:
    catalog = load_catalog(args.catalog)
    quiz = catalog.quiz_for_chapter(args.chapter)
    if quiz is None:
        logger.error(f"No quiz found for chapter {args.chapter}")
        return 1

    answers = read_structured_file(args.answers) or {}
    result = score_quiz(quiz, answers, settings.passing_score)
    attempt = build_attempt(result, datetime.now(timezone.utc), settings.quiz_retry_hours)
    reviews = review_topics(result.missed_topics, load_topic_reviews(args.reviews))
    logger.info(f"{args.chapter}: {result.score}% ({'passed' if result.passed else 'not passed'})")
    _emit({
        "result": result.to_wire(),
        "attempt": attempt.to_wire(),
        "review": [review.to_wire() for review in reviews],
    })
    return 0


def cmd_validate(args, settings: Settings) -> int:
    catalog = load_catalog(args.catalog)
    issues = run_integrity_checks(catalog, load_topic_reviews(args.reviews), settings.passing_score)
    if issues:
        logger.warning(f"Found {len(issues)} integrity issues:")
        for issue in issues[:10]:
            logger.warning(f"  - {issue}")
        if len(issues) > 10:
            logger.warning(f"  ... and {len(issues) - 10} more")
    else:
        logger.info("All integrity checks passed!")
    _emit({"issues": issues})
    return 1 if issues else 0


# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wellpath",
        description="Inspect wellness journey progression for a progress snapshot",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--env-file", type=Path, default=None, help="Optional .env file with WELLPATH_* settings")
    parser.add_argument("--log-level", default=None, help="Logging level (default: WELLPATH_LOG_LEVEL or INFO)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    status = subparsers.add_parser("status", help="Overall progress summary")
    status.add_argument("--snapshot", type=Path, required=True)
    status.add_argument("--catalog", type=Path, default=None, help="Catalog file (default: standard curriculum)")
    status.add_argument("--as-of", type=date.fromisoformat, default=None, help="Evaluation date (YYYY-MM-DD)")
    status.set_defaults(func=cmd_status)

    access = subparsers.add_parser("access", help="Access decision for one lesson day")
    access.add_argument("day", type=int)
    access.add_argument("--snapshot", type=Path, required=True)
    access.add_argument("--catalog", type=Path, default=None, help="Catalog file (default: standard curriculum)")
    access.add_argument("--as-of", type=date.fromisoformat, default=None, help="Evaluation date (YYYY-MM-DD)")
    access.set_defaults(func=cmd_access)

    score = subparsers.add_parser("score", help="Score quiz answers for a chapter")
    score.add_argument("--catalog", type=Path, required=True)
    score.add_argument("--chapter", required=True)
    score.add_argument("--answers", type=Path, required=True, help="Question id -> answer (JSON or YAML)")
    score.add_argument("--reviews", type=Path, default=None, help="Topic review file (default: bundled)")
    score.set_defaults(func=cmd_score)

    validate = subparsers.add_parser("validate", help="Run catalog integrity checks")
    validate.add_argument("--catalog", type=Path, required=True)
    validate.add_argument("--reviews", type=Path, default=None, help="Topic review file (default: bundled)")
    validate.set_defaults(func=cmd_validate)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.from_env(args.env_file)
    except ValueError as e:
        logging.basicConfig(format=LOG_FORMAT)
        logger.error(f"Invalid {ENV_PREFIX}* settings: {e}")
        return 1

    logging.basicConfig(level=(args.log_level or settings.log_level).upper(), format=LOG_FORMAT)

    try:
        return args.func(args, settings)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
