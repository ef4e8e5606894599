"""
WellPath Schemas - Pydantic models for the wellness journey engine.

This module exports all schema classes for:
- Catalog: phases, chapters, lessons, quizzes, topic reviews
- Progress: snapshot, lesson status, access decisions, progress summaries
- Quiz: scored results, attempts, retry eligibility
"""

from .base import WireModel

# Catalog schemas
from .catalog import (
    DaysRange,
    Chapter,
    Phase,
    JournalPrompt,
    MovementSuggestion,
    Lesson,
    QuizQuestion,
    Quiz,
    TopicReview,
    ContentCatalog,
    LESSON_ID_PREFIX,
    lesson_id_for_day,
)

# Progress schemas
from .progress import (
    LessonStatus,
    SubscriptionTier,
    ProgressSnapshot,
    LessonCompletionStatus,
    AccessReason,
    AccessDecision,
    ACCESS_MESSAGES,
    ChapterProgress,
    PhaseProgress,
    OverallProgress,
)

# Quiz schemas
from .quiz import (
    QuizResult,
    QuizAttempt,
    RetryStatus,
)

__all__ = [
    'WireModel',
    # Catalog
    'DaysRange',
    'Chapter',
    'Phase',
    'JournalPrompt',
    'MovementSuggestion',
    'Lesson',
    'QuizQuestion',
    'Quiz',
    'TopicReview',
    'ContentCatalog',
    'LESSON_ID_PREFIX',
    'lesson_id_for_day',
    # Progress
    'LessonStatus',
    'SubscriptionTier',
    'ProgressSnapshot',
    'LessonCompletionStatus',
    'AccessReason',
    'AccessDecision',
    'ACCESS_MESSAGES',
    'ChapterProgress',
    'PhaseProgress',
    'OverallProgress',
    # Quiz
    'QuizResult',
    'QuizAttempt',
    'RetryStatus',
]
