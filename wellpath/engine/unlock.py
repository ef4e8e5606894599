"""
Lesson unlocking - time-based day unlocks and lesson access checks.

Lessons unlock when:
1. It's day 1 (always accessible)
2. The previous day's lesson is completed
3. At a chapter boundary, the previous chapter's quiz is passed
4. The day has been reached since the subscription started (optional ceiling)
5. The previous lesson's journal and movement are done (full check only)

All rules live in evaluate_lesson_access(). The basic check applies rules
1-3 synchronously; the full check awaits the journal/movement collaborator.
"""

import logging
from datetime import date, datetime
from typing import Mapping, Optional, Protocol, Union

from wellpath.config import PASSING_SCORE, TOTAL_DAYS
from wellpath.schemas import (
    AccessDecision,
    AccessReason,
    ContentCatalog,
    LessonCompletionStatus,
    ProgressSnapshot,
)

from .chapters import is_quiz_passed

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str]


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.fromisoformat(value.replace("Z", "+00:00")).date()


def calculate_unlocked_day(
    subscription_start_date: Optional[DateLike],
    as_of: DateLike,
    total_days: int = TOTAL_DAYS,
) -> int:
    """
    Day unlocked by elapsed calendar days since the subscription started.

    Day 1 is the start date itself. The result is clamped to [1, total_days],
    so an as_of before the start date (clock skew) yields day 1. Malformed
    date strings also yield day 1.
    """
    if subscription_start_date is None:
        return 1
    try:
        elapsed = (_as_date(as_of) - _as_date(subscription_start_date)).days
    except ValueError:
        logger.debug(f"Unparseable dates {subscription_start_date!r} / {as_of!r}, using day 1")
        return 1
    return max(1, min(elapsed + 1, total_days))


# -----------------------------------------------------------------------------
# Access rules
# -----------------------------------------------------------------------------


def evaluate_lesson_access(
    day: int,
    catalog: ContentCatalog,
    snapshot: ProgressSnapshot,
    *,
    unlocked_day: Optional[int] = None,
    previous_status: Optional[LessonCompletionStatus] = None,
    passing_score: int = PASSING_SCORE,
) -> AccessDecision:
    """
    Decide whether the lesson for a day can be opened.

    Args:
        day: Journey day number of the lesson
        catalog: Content catalog
        snapshot: User progress snapshot
        unlocked_day: Time-based ceiling; days beyond it are not yet available
        previous_status: Journal/movement status of the previous lesson, if known
        passing_score: Minimum quiz score that unlocks the next chapter

    Returns:
        AccessDecision with the first failing rule as reason
    """
    if isinstance(day, bool) or not isinstance(day, int) or not 1 <= day <= catalog.total_days:
        logger.debug(f"Access check for out-of-range day {day!r}")
        return AccessDecision.deny(AccessReason.LESSON_NOT_FOUND)

    if day == 1:
        return AccessDecision.allow()

    previous_lesson = catalog.lesson_for_day(day - 1)
    if not snapshot.is_completed(previous_lesson.id):
        return AccessDecision.deny(AccessReason.PREVIOUS_LESSON_INCOMPLETE)

    # Finishing a chapter's lessons does not pass its quiz
    chapter = catalog.chapter_for_day(day)
    if chapter.number > 1 and day == chapter.days_range.start:
        previous_chapter = catalog.chapter_by_number(chapter.number - 1)
        if not is_quiz_passed(snapshot.quiz_score(previous_chapter.id), passing_score):
            return AccessDecision.deny(AccessReason.PREVIOUS_QUIZ_NOT_PASSED)

    if unlocked_day is not None and day > unlocked_day:
        return AccessDecision.deny(AccessReason.NOT_YET_AVAILABLE)

    if previous_status is not None and not previous_status.is_complete:
        return AccessDecision.deny(
            AccessReason.PREVIOUS_ACTIVITIES_INCOMPLETE,
            previous_lesson_status=previous_status,
        )

    return AccessDecision.allow()


def can_access_lesson_basic(
    day: int,
    catalog: ContentCatalog,
    snapshot: ProgressSnapshot,
    passing_score: int = PASSING_SCORE,
) -> AccessDecision:
    """Synchronous check for offline gating: sequence and quiz rules only."""
    return evaluate_lesson_access(day, catalog, snapshot, passing_score=passing_score)


# -----------------------------------------------------------------------------
# Journal/movement collaborator
# -----------------------------------------------------------------------------


class CompletionLookup(Protocol):
    """Source of per-lesson journal and movement completion."""

    async def get_completion(self, lesson_id: str) -> LessonCompletionStatus:
        ...


class StaticCompletionLookup:
    """CompletionLookup backed by a mapping; unknown lessons are incomplete."""

    def __init__(self, statuses: Optional[Mapping[str, LessonCompletionStatus]] = None):
        self.statuses = dict(statuses or {})

    async def get_completion(self, lesson_id: str) -> LessonCompletionStatus:
        return self.statuses.get(lesson_id, LessonCompletionStatus())


async def can_access_lesson(
    day: int,
    catalog: ContentCatalog,
    snapshot: ProgressSnapshot,
    lookup: CompletionLookup,
    *,
    as_of: Optional[DateLike] = None,
    passing_score: int = PASSING_SCORE,
) -> AccessDecision:
    """
    Full access check including the previous lesson's journal and movement.

    The collaborator is only consulted once the synchronous rules pass.
    If as_of is given, days beyond the time-based unlock are refused.
    A failing collaborator yields a locked decision rather than an error.
    """
    unlocked_day = None
    if as_of is not None:
        unlocked_day = calculate_unlocked_day(
            snapshot.subscription_start_date, as_of, catalog.total_days
        )

    decision = evaluate_lesson_access(
        day, catalog, snapshot, unlocked_day=unlocked_day, passing_score=passing_score
    )
    if not decision.can_access or day == 1:
        return decision

    previous_lesson = catalog.lesson_for_day(day - 1)
    try:
        status = await lookup.get_completion(previous_lesson.id)
    except Exception:
        logger.warning(f"Completion lookup failed for {previous_lesson.id}", exc_info=True)
        return AccessDecision.deny(AccessReason.ACTIVITY_STATUS_UNAVAILABLE)

    return evaluate_lesson_access(
        day,
        catalog,
        snapshot,
        unlocked_day=unlocked_day,
        previous_status=status,
        passing_score=passing_score,
    )
