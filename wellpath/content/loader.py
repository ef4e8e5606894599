"""
Content loading - catalogs, progress snapshots and topic reviews.

Provides read-only loading of:
- Content catalogs (YAML or JSON)
- Progress snapshots exported by the app
- Topic review cards (bundled YAML by default)
- The standard curriculum skeleton
- Integrity checks over a loaded catalog
"""

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from wellpath.config import CHAPTER_SIZE, DAYS_PER_PHASE, PASSING_SCORE, TOTAL_DAYS
from wellpath.schemas import (
    Chapter,
    ContentCatalog,
    DaysRange,
    Phase,
    ProgressSnapshot,
    TopicReview,
    lesson_id_for_day,
)

logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_TOPIC_REVIEWS = DATA_DIR / "topic_reviews.yaml"

PHASE_TITLES = {
    1: "Foundation",
    2: "Momentum",
    3: "Mastery",
}

YAML_SUFFIXES = {".yaml", ".yml"}


def read_structured_file(path: str | Path) -> Any:
    """
    Read a YAML or JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the extension is not .yaml, .yml or .json
        yaml.YAMLError / json.JSONDecodeError: If parsing fails
    """
    file_path = Path(path)
    suffix = file_path.suffix.lower()
    if suffix not in YAML_SUFFIXES and suffix != ".json":
        raise ValueError(f"Unsupported content format: {file_path.name}")
    if not file_path.exists():
        raise FileNotFoundError(f"Content file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        if suffix in YAML_SUFFIXES:
            return yaml.safe_load(f)
        return json.load(f)


# -----------------------------------------------------------------------------
# Catalog
# -----------------------------------------------------------------------------


def load_catalog(path: str | Path) -> ContentCatalog:
    """Load and validate a content catalog."""
    catalog = ContentCatalog.model_validate(read_structured_file(path) or {})
    logger.info(
        f"Loaded catalog {path}: {len(catalog.phases)} phases, "
        f"{len(catalog.all_chapters)} chapters, {catalog.total_lessons} lessons"
    )
    return catalog


def build_standard_catalog(
    total_days: int = TOTAL_DAYS,
    chapter_size: int = CHAPTER_SIZE,
    days_per_phase: int = DAYS_PER_PHASE,
) -> ContentCatalog:
    """
    Build the standard curriculum skeleton.

    Days are split into phases of days_per_phase and each phase into
    chapters of chapter_size (the last chunk may be shorter). With the
    defaults: 6 phases x 6 chapters x 5 lessons = 180 days.
    """
    phases = []
    day = 1
    chapter_number = 1
    phase_number = 1
    while day <= total_days:
        phase_id = f"phase_{phase_number}"
        phase_end = min(day + days_per_phase - 1, total_days)
        chapters = []
        while day <= phase_end:
            chapter_end = min(day + chapter_size - 1, phase_end)
            chapters.append(Chapter(
                id=f"chapter_{chapter_number}",
                number=chapter_number,
                phase_id=phase_id,
                days_range=DaysRange(start=day, end=chapter_end),
                quiz_id=f"quiz_chapter_{chapter_number}",
            ))
            chapter_number += 1
            day = chapter_end + 1
        phases.append(Phase(
            id=phase_id,
            number=phase_number,
            title=PHASE_TITLES.get(phase_number, f"Phase {phase_number}"),
            chapters=chapters,
        ))
        phase_number += 1
    return ContentCatalog(phases=phases)


# -----------------------------------------------------------------------------
# Snapshots and reviews
# -----------------------------------------------------------------------------


def load_snapshot(path: str | Path) -> ProgressSnapshot:
    """Load a progress snapshot ({completedLessons, quizScores, subscriptionStartDate, ...})."""
    return ProgressSnapshot.model_validate(read_structured_file(path) or {})


def load_topic_reviews(path: Optional[str | Path] = None) -> dict[str, TopicReview]:
    """
    Load topic review cards keyed by topic tag.

    Args:
        path: Optional review file (default: bundled topic_reviews.yaml)
    """
    data = read_structured_file(path or DEFAULT_TOPIC_REVIEWS) or {}
    return {
        topic: TopicReview.model_validate({"topic": topic, **fields})
        for topic, fields in (data.get("topics") or {}).items()
    }


# -----------------------------------------------------------------------------
# Integrity Checks
# -----------------------------------------------------------------------------


def run_integrity_checks(
    catalog: ContentCatalog,
    reviews: Optional[Mapping[str, TopicReview]] = None,
    passing_score: int = PASSING_SCORE,
) -> list[str]:
    """
    Report content issues that don't break the catalog structure.

    Returns:
        List of human-readable issues (empty when the content is clean)
    """
    issues = []
    chapter_ids = set(catalog.chapter_index)

    for lesson in catalog.lessons:
        if lesson.id != lesson_id_for_day(lesson.day_number):
            issues.append(f"Lesson {lesson.id} does not match its day ({lesson_id_for_day(lesson.day_number)})")

    for chapter in catalog.all_chapters:
        if catalog.quiz_for_chapter(chapter.id) is None:
            issues.append(f"Chapter {chapter.id} has no quiz")

    seen_quiz_chapters = set()
    for quiz in catalog.quizzes:
        if quiz.chapter_id not in chapter_ids:
            issues.append(f"Quiz for unknown chapter {quiz.chapter_id}")
        if quiz.chapter_id in seen_quiz_chapters:
            issues.append(f"Chapter {quiz.chapter_id} has more than one quiz")
        seen_quiz_chapters.add(quiz.chapter_id)

        if quiz.passing_score != passing_score:
            issues.append(
                f"Quiz for {quiz.chapter_id} passes at {quiz.passing_score}, expected {passing_score}"
            )
        if not quiz.questions:
            issues.append(f"Quiz for {quiz.chapter_id} has no questions")

        for question in quiz.questions:
            label = f"{quiz.chapter_id}/{question.id}"
            answer = question.correct_answer
            if question.type == "true_false" and not isinstance(answer, bool):
                issues.append(f"Question {label} needs a boolean answer")
            elif question.type == "multiple_choice":
                if isinstance(answer, bool) or not isinstance(answer, int):
                    issues.append(f"Question {label} needs an option index answer")
                elif question.options is not None and not 0 <= answer < len(question.options):
                    issues.append(f"Question {label} answer {answer} is not a valid option")
            if (
                reviews is not None
                and not question.is_reflection
                and question.topic_tag
                and question.topic_tag not in reviews
            ):
                issues.append(f"Question {label} topic {question.topic_tag} has no review card")

    return issues
