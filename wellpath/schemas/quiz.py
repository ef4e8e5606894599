"""
Quiz result schemas for WellPath.

Defines Pydantic models for scored quizzes, recorded attempts and
retry eligibility.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .base import WireModel


class QuizResult(WireModel):
    chapter_id: str
    score: int = Field(..., ge=0, le=100)
    passed: bool
    correct_count: int = Field(..., ge=0)
    total_questions: int = Field(..., ge=0)
    missed_topics: list[str] = []  # first-appearance order, no duplicates


class QuizAttempt(WireModel):
    chapter_id: str
    score: int = Field(..., ge=0, le=100)
    passed: bool
    missed_topics: list[str] = []
    attempted_at: datetime
    can_retry_at: Optional[datetime] = None


class RetryStatus(WireModel):
    can_retry: bool
    wait_seconds: Optional[float] = None
