"""
Progress schemas for WellPath.

Defines Pydantic models for:
- The read-only progress snapshot evaluated by the engine
- Lesson status and access decisions
- Chapter, phase and overall progress summaries
"""

import logging
from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from .base import WireModel

logger = logging.getLogger(__name__)


class LessonStatus(str, Enum):
    LOCKED = "locked"
    UNLOCKED = "unlocked"
    IN_PROGRESS = "in_progress"  # journal or movement partially done
    COMPLETED = "completed"


class SubscriptionTier(str, Enum):
    NONE = "none"
    FOUNDATION = "foundation"
    TRANSFORMATION = "transformation"
    LIFETIME = "lifetime"


# -----------------------------------------------------------------------------
# Snapshot
# -----------------------------------------------------------------------------


class ProgressSnapshot(WireModel):
    """
    Point-in-time read of a user's completion and quiz state.

    Supplied fresh by the caller on every evaluation and never mutated
    by the engine.
    """
    model_config = ConfigDict(frozen=True)

    completed_lessons: frozenset[str] = frozenset()
    quiz_scores: dict[str, Optional[float]] = {}  # best score per chapter id
    subscription_start_date: Optional[date] = None
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)

    @field_validator("quiz_scores", mode="before")
    @classmethod
    def drop_malformed_scores(cls, v):
        if v is None:
            return {}
        if not isinstance(v, dict):
            return v
        cleaned = {}
        for chapter_id, score in v.items():
            if isinstance(score, bool) or not isinstance(score, (int, float)):
                if score is not None:
                    logger.warning(f"Ignoring malformed quiz score for {chapter_id}: {score!r}")
                cleaned[chapter_id] = None
            else:
                cleaned[chapter_id] = score
        return cleaned

    @field_validator("subscription_start_date", mode="before")
    @classmethod
    def calendar_date_only(cls, v):
        # Day unlocking counts calendar days, so any time component is dropped
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
        return v

    def is_completed(self, lesson_id: str) -> bool:
        return lesson_id in self.completed_lessons

    def quiz_score(self, chapter_id: str) -> Optional[float]:
        return self.quiz_scores.get(chapter_id)


class LessonCompletionStatus(WireModel):
    """Journal and movement completion for a lesson, from the journal collaborator."""
    journal_complete: bool = False
    movement_complete: bool = False

    @property
    def is_complete(self) -> bool:
        return self.journal_complete and self.movement_complete

    @property
    def is_started(self) -> bool:
        return self.journal_complete or self.movement_complete


# -----------------------------------------------------------------------------
# Access decisions
# -----------------------------------------------------------------------------


class AccessReason(str, Enum):
    LESSON_NOT_FOUND = "lesson_not_found"
    PREVIOUS_LESSON_INCOMPLETE = "previous_lesson_incomplete"
    PREVIOUS_QUIZ_NOT_PASSED = "previous_quiz_not_passed"
    NOT_YET_AVAILABLE = "not_yet_available"
    PREVIOUS_ACTIVITIES_INCOMPLETE = "previous_activities_incomplete"
    ACTIVITY_STATUS_UNAVAILABLE = "activity_status_unavailable"


ACCESS_MESSAGES = {
    AccessReason.LESSON_NOT_FOUND: "This lesson could not be found.",
    AccessReason.PREVIOUS_LESSON_INCOMPLETE: "Complete the previous lesson to unlock this one.",
    AccessReason.PREVIOUS_QUIZ_NOT_PASSED: "Complete the chapter quiz to continue.",
    AccessReason.NOT_YET_AVAILABLE: "This lesson is not available yet. Come back tomorrow!",
    AccessReason.PREVIOUS_ACTIVITIES_INCOMPLETE: (
        "Complete the previous lesson's journal and movement to unlock this lesson."
    ),
    AccessReason.ACTIVITY_STATUS_UNAVAILABLE: (
        "We couldn't check the previous lesson's journal and movement. Please try again."
    ),
}


class AccessDecision(WireModel):
    can_access: bool
    reason: Optional[AccessReason] = None
    message: Optional[str] = None
    previous_lesson_status: Optional[LessonCompletionStatus] = None

    @classmethod
    def allow(cls) -> "AccessDecision":
        return cls(can_access=True)

    @classmethod
    def deny(
        cls,
        reason: AccessReason,
        previous_lesson_status: Optional[LessonCompletionStatus] = None,
    ) -> "AccessDecision":
        return cls(
            can_access=False,
            reason=reason,
            message=ACCESS_MESSAGES[reason],
            previous_lesson_status=previous_lesson_status,
        )


# -----------------------------------------------------------------------------
# Progress summaries
# -----------------------------------------------------------------------------


class ChapterProgress(WireModel):
    id: str
    is_unlocked: bool = False
    is_complete: bool = False
    quiz_passed: bool = False
    lessons_completed: int = 0
    total_lessons: int = 0
    progress_percent: float = 0.0


class PhaseProgress(WireModel):
    id: str
    number: int = 0
    is_navigable: bool = False
    is_complete: bool = False
    chapters_completed: int = 0
    total_chapters: int = 0
    lessons_completed: int = 0
    total_lessons: int = 0


class OverallProgress(WireModel):
    lessons_completed: int
    total_lessons: int
    lessons_percent: float
    chapters_completed: int
    total_chapters: int
    chapters_percent: float
