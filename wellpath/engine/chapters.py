"""
Chapter and phase progress.

Two predicates look alike but answer different questions:
- are_all_lessons_complete(): every lesson in the chapter is done. Drives
  whether the next chapter/phase is shown as navigable in the journey view.
- ChapterProgress.is_complete: lessons done AND quiz passed. Drives the
  completion badge and the quiz gate on the next chapter's lessons.
"""

import logging
from typing import Optional

from wellpath.config import PASSING_SCORE
from wellpath.schemas import (
    Chapter,
    ChapterProgress,
    ContentCatalog,
    OverallProgress,
    PhaseProgress,
    ProgressSnapshot,
)

logger = logging.getLogger(__name__)


def is_quiz_passed(score: Optional[float], passing_score: int = PASSING_SCORE) -> bool:
    """Missing or malformed scores never pass."""
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        return False
    return score >= passing_score


def _percent(part: int, whole: int) -> float:
    return (part / whole) * 100 if whole > 0 else 0.0


def count_completed_lessons(chapter: Chapter, catalog: ContentCatalog, snapshot: ProgressSnapshot) -> int:
    return sum(
        1 for lesson in catalog.lessons_for_chapter(chapter.id)
        if snapshot.is_completed(lesson.id)
    )


def are_all_lessons_complete(chapter: Chapter, catalog: ContentCatalog, snapshot: ProgressSnapshot) -> bool:
    """True when every lesson of the chapter is completed; quiz status is ignored."""
    lessons = catalog.lessons_for_chapter(chapter.id)
    return all(snapshot.is_completed(lesson.id) for lesson in lessons)


def is_chapter_unlocked(
    chapter: Chapter,
    catalog: ContentCatalog,
    snapshot: ProgressSnapshot,
    passing_score: int = PASSING_SCORE,
) -> bool:
    """Chapter 1 is always unlocked; chapter K needs chapter K-1's quiz passed."""
    if chapter.number == 1:
        return True
    previous = catalog.chapter_by_number(chapter.number - 1)
    if previous is None:
        return False
    return is_quiz_passed(snapshot.quiz_score(previous.id), passing_score)


def is_chapter_navigable(chapter: Chapter, catalog: ContentCatalog, snapshot: ProgressSnapshot) -> bool:
    """Chapter 1, or a chapter whose predecessor's lessons are all completed."""
    if chapter.number == 1:
        return True
    previous = catalog.chapter_by_number(chapter.number - 1)
    return previous is not None and are_all_lessons_complete(previous, catalog, snapshot)


def get_chapter_progress(
    chapter_id: str,
    catalog: ContentCatalog,
    snapshot: ProgressSnapshot,
    passing_score: int = PASSING_SCORE,
) -> ChapterProgress:
    """
    Progress for one chapter.

    Unknown chapter ids get a locked, zero-progress result so a stale
    deep link still renders.
    """
    chapter = catalog.chapter(chapter_id)
    if chapter is None:
        logger.debug(f"Progress requested for unknown chapter {chapter_id!r}")
        return ChapterProgress(id=chapter_id)

    total_lessons = len(catalog.lessons_for_chapter(chapter.id))
    lessons_completed = count_completed_lessons(chapter, catalog, snapshot)
    quiz_passed = is_quiz_passed(snapshot.quiz_score(chapter.id), passing_score)

    return ChapterProgress(
        id=chapter.id,
        is_unlocked=is_chapter_unlocked(chapter, catalog, snapshot, passing_score),
        is_complete=lessons_completed == total_lessons and quiz_passed,
        quiz_passed=quiz_passed,
        lessons_completed=lessons_completed,
        total_lessons=total_lessons,
        progress_percent=_percent(lessons_completed, total_lessons),
    )


def all_chapters_progress(
    catalog: ContentCatalog,
    snapshot: ProgressSnapshot,
    passing_score: int = PASSING_SCORE,
) -> list[ChapterProgress]:
    return [
        get_chapter_progress(chapter.id, catalog, snapshot, passing_score)
        for chapter in catalog.all_chapters
    ]


def get_phase_progress(
    phase_id: str,
    catalog: ContentCatalog,
    snapshot: ProgressSnapshot,
    passing_score: int = PASSING_SCORE,
) -> PhaseProgress:
    """
    Progress for one phase.

    A phase is navigable once every lesson of the previous phase is done;
    it is complete when all of its chapters are complete.
    """
    phase = catalog.phase(phase_id)
    if phase is None:
        logger.debug(f"Progress requested for unknown phase {phase_id!r}")
        return PhaseProgress(id=phase_id)

    chapters = [
        get_chapter_progress(chapter.id, catalog, snapshot, passing_score)
        for chapter in phase.chapters
    ]

    position = next(i for i, p in enumerate(catalog.phases) if p is phase)
    if position == 0:
        is_navigable = True
    else:
        previous = catalog.phases[position - 1]
        is_navigable = all(
            are_all_lessons_complete(chapter, catalog, snapshot)
            for chapter in previous.chapters
        )

    chapters_completed = sum(1 for c in chapters if c.is_complete)
    return PhaseProgress(
        id=phase.id,
        number=phase.number,
        is_navigable=is_navigable,
        is_complete=bool(chapters) and chapters_completed == len(chapters),
        chapters_completed=chapters_completed,
        total_chapters=len(chapters),
        lessons_completed=sum(c.lessons_completed for c in chapters),
        total_lessons=sum(c.total_lessons for c in chapters),
    )


def overall_progress(
    catalog: ContentCatalog,
    snapshot: ProgressSnapshot,
    passing_score: int = PASSING_SCORE,
) -> OverallProgress:
    """Journey-wide lesson and chapter completion ratios (unweighted)."""
    lessons_completed = len(snapshot.completed_lessons)
    total_lessons = catalog.total_lessons
    total_chapters = len(catalog.all_chapters)
    chapters_completed = sum(
        1 for progress in all_chapters_progress(catalog, snapshot, passing_score)
        if progress.is_complete
    )

    return OverallProgress(
        lessons_completed=lessons_completed,
        total_lessons=total_lessons,
        lessons_percent=_percent(lessons_completed, total_lessons),
        chapters_completed=chapters_completed,
        total_chapters=total_chapters,
        chapters_percent=_percent(chapters_completed, total_chapters),
    )


def current_day(catalog: ContentCatalog, snapshot: ProgressSnapshot) -> int:
    """Next lesson day to complete, capped at the last day."""
    return min(len(snapshot.completed_lessons) + 1, catalog.total_days)
