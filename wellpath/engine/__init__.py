"""
WellPath Engine - Pure progression rules over a catalog and a progress snapshot.

This module provides:
- Unlock: time-based day unlocks and lesson access checks
- Chapters: chapter/phase/overall progress and quiz gating
- Quiz: scoring, best scores, retries, review topics
- Milestones: earned milestone ids
- Navigator: lesson status and the journey tree
"""

from .unlock import (
    calculate_unlocked_day,
    evaluate_lesson_access,
    can_access_lesson_basic,
    can_access_lesson,
    CompletionLookup,
    StaticCompletionLookup,
)

from .chapters import (
    is_quiz_passed,
    count_completed_lessons,
    are_all_lessons_complete,
    is_chapter_unlocked,
    is_chapter_navigable,
    get_chapter_progress,
    all_chapters_progress,
    get_phase_progress,
    overall_progress,
    current_day,
)

from .quiz import (
    is_answer_correct,
    score_quiz,
    record_quiz_score,
    can_retry_immediately,
    retry_available_at,
    build_attempt,
    quiz_retry_status,
    review_topics,
)

from .milestones import earned_milestones

from .navigator import (
    Navigator,
    NavigationLesson,
    NavigationChapter,
    NavigationPhase,
)

__all__ = [
    # Unlock
    "calculate_unlocked_day",
    "evaluate_lesson_access",
    "can_access_lesson_basic",
    "can_access_lesson",
    "CompletionLookup",
    "StaticCompletionLookup",
    # Chapters
    "is_quiz_passed",
    "count_completed_lessons",
    "are_all_lessons_complete",
    "is_chapter_unlocked",
    "is_chapter_navigable",
    "get_chapter_progress",
    "all_chapters_progress",
    "get_phase_progress",
    "overall_progress",
    "current_day",
    # Quiz
    "is_answer_correct",
    "score_quiz",
    "record_quiz_score",
    "can_retry_immediately",
    "retry_available_at",
    "build_attempt",
    "quiz_retry_status",
    "review_topics",
    # Milestones
    "earned_milestones",
    # Navigator
    "Navigator",
    "NavigationLesson",
    "NavigationChapter",
    "NavigationPhase",
]
