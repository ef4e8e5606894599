"""
Chapter quiz scoring, best-score tracking and retry eligibility.

Provides:
- Quiz scoring with missed-topic extraction
- Best score retention per chapter
- 24 hour retry cool-down (immediate for lifetime members)
- Review cards for missed topics
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional, Sequence

from wellpath.config import QUIZ_RETRY_HOURS
from wellpath.schemas import (
    Quiz,
    QuizAttempt,
    QuizQuestion,
    QuizResult,
    RetryStatus,
    SubscriptionTier,
    TopicReview,
)

from .chapters import is_quiz_passed

IMMEDIATE_RETRY_TIERS = frozenset({SubscriptionTier.LIFETIME})


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def is_answer_correct(question: QuizQuestion, answer: Any) -> bool:
    """
    Reflection questions are always correct. Otherwise the answer must match
    the expected value and type, so True never equals option 1.
    """
    if question.is_reflection:
        return True
    if answer is None or question.correct_answer is None:
        return False
    return type(answer) is type(question.correct_answer) and answer == question.correct_answer


def score_quiz(
    quiz: Quiz,
    answers: Mapping[str, Any],
    passing_score: Optional[int] = None,
) -> QuizResult:
    """
    Score a completed quiz.

    Args:
        quiz: Quiz definition
        answers: Question id -> submitted answer (option index, bool, or free text)
        passing_score: Threshold for the pass flag (default: the quiz's own)

    Returns:
        QuizResult with score 0-100, pass flag and missed topics
    """
    correct_count = 0
    missed_topics: list[str] = []

    for question in quiz.questions:
        if is_answer_correct(question, answers.get(question.id)):
            correct_count += 1
        elif question.topic_tag and question.topic_tag not in missed_topics:
            missed_topics.append(question.topic_tag)

    total = len(quiz.questions)
    score = _round_half_up(correct_count / total * 100) if total > 0 else 100
    threshold = quiz.passing_score if passing_score is None else passing_score

    return QuizResult(
        chapter_id=quiz.chapter_id,
        score=score,
        passed=is_quiz_passed(score, threshold),
        correct_count=correct_count,
        total_questions=total,
        missed_topics=missed_topics,
    )


def record_quiz_score(
    quiz_scores: Mapping[str, Optional[float]],
    chapter_id: str,
    score: float,
) -> dict[str, Optional[float]]:
    """Return a new score mapping keeping the best score for the chapter."""
    updated = dict(quiz_scores)
    current = updated.get(chapter_id)
    if current is None or score > current:
        updated[chapter_id] = score
    return updated


# -----------------------------------------------------------------------------
# Retries
# -----------------------------------------------------------------------------


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def can_retry_immediately(tier: SubscriptionTier) -> bool:
    return tier in IMMEDIATE_RETRY_TIERS


def retry_available_at(
    passed: bool,
    attempted_at: datetime,
    retry_hours: int = QUIZ_RETRY_HOURS,
) -> Optional[datetime]:
    """Failed attempts may be retried after the cool-down; passed ones never need to."""
    if passed:
        return None
    return attempted_at + timedelta(hours=retry_hours)


def build_attempt(
    result: QuizResult,
    attempted_at: datetime,
    retry_hours: int = QUIZ_RETRY_HOURS,
) -> QuizAttempt:
    return QuizAttempt(
        chapter_id=result.chapter_id,
        score=result.score,
        passed=result.passed,
        missed_topics=list(result.missed_topics),
        attempted_at=attempted_at,
        can_retry_at=retry_available_at(result.passed, attempted_at, retry_hours),
    )


def quiz_retry_status(
    attempts: Sequence[QuizAttempt],
    now: datetime,
    *,
    tier: SubscriptionTier = SubscriptionTier.FOUNDATION,
) -> RetryStatus:
    """
    Whether the chapter quiz can be taken again.

    Priority:
    1. Lifetime members can always retry
    2. No attempts yet: allowed
    3. Latest attempt passed: nothing to retry
    4. Cool-down elapsed (or none recorded): allowed, else report the wait

    Naive timestamps are compared as UTC, so aware and naive values mix.
    """
    if can_retry_immediately(tier):
        return RetryStatus(can_retry=True)
    if not attempts:
        return RetryStatus(can_retry=True)

    latest = max(attempts, key=lambda attempt: _as_utc(attempt.attempted_at))
    if latest.passed:
        return RetryStatus(can_retry=False)
    if latest.can_retry_at is None:
        return RetryStatus(can_retry=True)

    remaining = (_as_utc(latest.can_retry_at) - _as_utc(now)).total_seconds()
    if remaining <= 0:
        return RetryStatus(can_retry=True)
    return RetryStatus(can_retry=False, wait_seconds=remaining)


# -----------------------------------------------------------------------------
# Review
# -----------------------------------------------------------------------------


def review_topics(
    missed_topics: Sequence[str],
    reviews: Mapping[str, TopicReview],
) -> list[TopicReview]:
    """Review cards for missed topics, in order; topics without a card are skipped."""
    return [reviews[topic] for topic in missed_topics if topic in reviews]
