"""
Navigator - Lesson sequencing, status derivation, and the journey tree.

Provides:
- Lesson status (locked / unlocked / in progress / completed)
- Today's lesson and next/previous navigation
- Journey tree with status indicators
- Progress summary for display
"""

from dataclasses import dataclass
from datetime import date
from typing import Mapping, Optional

from wellpath.config import Settings
from wellpath.schemas import (
    AccessDecision,
    Chapter,
    ChapterProgress,
    ContentCatalog,
    Lesson,
    LessonCompletionStatus,
    LessonStatus,
    Phase,
    PhaseProgress,
    ProgressSnapshot,
)

from .chapters import (
    all_chapters_progress,
    current_day,
    get_chapter_progress,
    get_phase_progress,
    is_chapter_navigable,
    overall_progress,
)
from .milestones import earned_milestones
from .unlock import calculate_unlocked_day, evaluate_lesson_access


@dataclass
class NavigationLesson:
    """Lesson with navigation metadata."""
    lesson: Lesson
    status: LessonStatus
    is_today: bool
    access: AccessDecision


@dataclass
class NavigationChapter:
    """Chapter with lessons and navigation metadata."""
    chapter: Chapter
    progress: ChapterProgress
    is_navigable: bool
    lessons: list[NavigationLesson]


@dataclass
class NavigationPhase:
    """Phase with chapters and navigation metadata."""
    phase: Phase
    progress: PhaseProgress
    chapters: list[NavigationChapter]


class Navigator:
    """
    Navigate the journey for one progress snapshot.

    Combines the content catalog with a snapshot (and optionally the
    journal/movement status of lessons) to derive lesson status. Nothing is
    cached between calls; build a new Navigator for a new snapshot.
    """

    def __init__(
        self,
        catalog: ContentCatalog,
        snapshot: ProgressSnapshot,
        settings: Optional[Settings] = None,
        as_of: Optional[date] = None,
        completion: Optional[Mapping[str, LessonCompletionStatus]] = None,
    ):
        """
        Initialize navigator.

        Args:
            catalog: Content catalog
            snapshot: Progress snapshot to evaluate
            settings: Engine settings (passing score)
            as_of: Evaluation date; enables the time-based unlock ceiling
            completion: Known journal/movement status keyed by lesson id
        """
        self.catalog = catalog
        self.snapshot = snapshot
        self.settings = settings or Settings()
        self.as_of = as_of
        self.completion = dict(completion or {})

    @property
    def unlocked_day(self) -> Optional[int]:
        """Time-based ceiling, or None when no evaluation date was given."""
        if self.as_of is None:
            return None
        return calculate_unlocked_day(
            self.snapshot.subscription_start_date, self.as_of, self.catalog.total_days
        )

    @property
    def current_day(self) -> int:
        return current_day(self.catalog, self.snapshot)

    # -------------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------------

    def get_lesson_access(self, day: int) -> AccessDecision:
        return evaluate_lesson_access(
            day,
            self.catalog,
            self.snapshot,
            unlocked_day=self.unlocked_day,
            passing_score=self.settings.passing_score,
        )

    def lesson_status(self, lesson_id: str) -> LessonStatus:
        """
        Status of a lesson; unknown ids are locked.

        Completed lessons stay completed. An accessible lesson whose journal
        or movement has been started is in progress.
        """
        lesson = self.catalog.lesson(lesson_id)
        if lesson is None:
            return LessonStatus.LOCKED

        if self.snapshot.is_completed(lesson.id):
            return LessonStatus.COMPLETED

        if not self.get_lesson_access(lesson.day_number).can_access:
            return LessonStatus.LOCKED

        status = self.completion.get(lesson.id)
        if status is not None and status.is_started:
            return LessonStatus.IN_PROGRESS
        return LessonStatus.UNLOCKED

    def is_lesson_available(self, lesson_id: str) -> bool:
        return self.lesson_status(lesson_id) != LessonStatus.LOCKED

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    @property
    def todays_lesson(self) -> Optional[Lesson]:
        return self.catalog.lesson_for_day(self.current_day)

    @property
    def is_today_complete(self) -> bool:
        lesson = self.todays_lesson
        return lesson is not None and self.snapshot.is_completed(lesson.id)

    def get_next_lesson_id(self, current_id: str) -> Optional[str]:
        lesson = self.catalog.lesson(current_id)
        if lesson is None:
            return None
        following = self.catalog.lesson_for_day(lesson.day_number + 1)
        return following.id if following else None

    def get_previous_lesson_id(self, current_id: str) -> Optional[str]:
        lesson = self.catalog.lesson(current_id)
        if lesson is None:
            return None
        preceding = self.catalog.lesson_for_day(lesson.day_number - 1)
        return preceding.id if preceding else None

    def get_recommended_lesson_id(self) -> Optional[str]:
        """
        Get the recommended lesson for the user.

        Priority:
        1. First lesson in progress
        2. First unlocked lesson not yet completed
        3. None when everything available is completed or locked
        """
        statuses = [
            (lesson.id, self.lesson_status(lesson.id))
            for lesson in sorted(self.catalog.lessons, key=lambda l: l.day_number)
        ]
        for lesson_id, status in statuses:
            if status == LessonStatus.IN_PROGRESS:
                return lesson_id
        for lesson_id, status in statuses:
            if status == LessonStatus.UNLOCKED:
                return lesson_id
        return None

    # -------------------------------------------------------------------------
    # Journey Tree
    # -------------------------------------------------------------------------

    def get_navigation_tree(self) -> list[NavigationPhase]:
        """
        Full journey tree: phases -> chapters -> lessons, each annotated with
        status, progress and navigability.
        """
        passing_score = self.settings.passing_score
        today = self.todays_lesson

        tree = []
        for phase in self.catalog.phases:
            nav_chapters = []
            for chapter in phase.chapters:
                nav_lessons = [
                    NavigationLesson(
                        lesson=lesson,
                        status=self.lesson_status(lesson.id),
                        is_today=today is not None and lesson.id == today.id,
                        access=self.get_lesson_access(lesson.day_number),
                    )
                    for lesson in self.catalog.lessons_for_chapter(chapter.id)
                ]
                nav_chapters.append(NavigationChapter(
                    chapter=chapter,
                    progress=get_chapter_progress(chapter.id, self.catalog, self.snapshot, passing_score),
                    is_navigable=is_chapter_navigable(chapter, self.catalog, self.snapshot),
                    lessons=nav_lessons,
                ))
            tree.append(NavigationPhase(
                phase=phase,
                progress=get_phase_progress(phase.id, self.catalog, self.snapshot, passing_score),
                chapters=nav_chapters,
            ))
        return tree

    def get_status_indicator(self, lesson_id: str) -> str:
        """
        Get status indicator for journey display.

        Returns:
            ✓ for completed
            → for in progress
            ○ for unlocked
            ◌ for locked
        """
        status = self.lesson_status(lesson_id)
        if status == LessonStatus.COMPLETED:
            return "✓"
        elif status == LessonStatus.IN_PROGRESS:
            return "→"
        elif status == LessonStatus.UNLOCKED:
            return "○"
        else:
            return "◌"

    # -------------------------------------------------------------------------
    # Progress Summary
    # -------------------------------------------------------------------------

    def get_progress_summary(self) -> dict:
        """Get progress summary for display."""
        passing_score = self.settings.passing_score
        overall = overall_progress(self.catalog, self.snapshot, passing_score)
        today = self.todays_lesson

        return {
            **overall.model_dump(),
            "current_day": self.current_day,
            "unlocked_day": self.unlocked_day,
            "todays_lesson_id": today.id if today else None,
            "is_today_complete": self.is_today_complete,
            "recommended_lesson_id": self.get_recommended_lesson_id(),
            "current_streak": self.snapshot.current_streak,
            "longest_streak": self.snapshot.longest_streak,
            "chapters": [
                progress.model_dump()
                for progress in all_chapters_progress(self.catalog, self.snapshot, passing_score)
            ],
            "milestones": earned_milestones(self.catalog, self.snapshot, passing_score),
        }
