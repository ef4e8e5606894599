"""
Content catalog schemas for WellPath.

Defines Pydantic models for the bundled curriculum:
- Phases, chapters and their contiguous day ranges
- Daily lessons with journal prompt and movement content
- Chapter quizzes and topic review cards
"""

from functools import cached_property
from typing import Literal, Optional, Union

from pydantic import Field, StrictBool, StrictInt, field_validator, model_validator

from wellpath.config import PASSING_SCORE

from .base import WireModel


LESSON_ID_PREFIX = "lesson_day_"


def lesson_id_for_day(day: int) -> str:
    """Lesson ids are derived from the day number: lesson_day_{N}."""
    return f"{LESSON_ID_PREFIX}{day}"


# -----------------------------------------------------------------------------
# Curriculum structure
# -----------------------------------------------------------------------------


class DaysRange(WireModel):
    """Inclusive range of journey days covered by a chapter."""
    start: int = Field(..., ge=1)
    end: int = Field(..., ge=1)

    @model_validator(mode="after")
    def end_not_before_start(self):
        if self.end < self.start:
            raise ValueError(f"Invalid days range: end {self.end} < start {self.start}")
        return self

    @property
    def size(self) -> int:
        return self.end - self.start + 1

    def contains(self, day: int) -> bool:
        return self.start <= day <= self.end


class Chapter(WireModel):
    id: str
    number: int = Field(..., ge=1)  # global order across phases
    phase_id: Optional[str] = None
    title: Optional[str] = None
    subtitle: Optional[str] = None
    days_range: DaysRange
    quiz_id: Optional[str] = None

    @property
    def total_days(self) -> int:
        return self.days_range.size

    def contains(self, day: int) -> bool:
        return self.days_range.contains(day)


class Phase(WireModel):
    id: str
    number: int = Field(..., ge=1)
    title: Optional[str] = None
    subtitle: Optional[str] = None
    chapters: list[Chapter] = []


# -----------------------------------------------------------------------------
# Lessons
# -----------------------------------------------------------------------------


class JournalPrompt(WireModel):
    primary: str
    reflection: Optional[str] = None
    gratitude: Optional[str] = None


class MovementSuggestion(WireModel):
    basic: str
    personalized: Optional[str] = None
    video_url: Optional[str] = None


class Lesson(WireModel):
    id: str
    chapter_id: str
    day_number: int = Field(..., ge=1)
    title: Optional[str] = None
    journal_prompt: Optional[JournalPrompt] = None
    movement_suggestion: Optional[MovementSuggestion] = None


# -----------------------------------------------------------------------------
# Quizzes
# -----------------------------------------------------------------------------


class QuizQuestion(WireModel):
    """
    A chapter quiz question.

    correct_answer is an option index for multiple choice, a boolean for
    true/false, and None for reflection questions. Strict types keep
    True and 1 distinct.
    """
    id: str
    type: Literal["multiple_choice", "true_false", "reflection"]
    topic_tag: Optional[str] = None
    lesson_day_ref: Optional[int] = None
    question: Optional[str] = None
    options: Optional[list[str]] = None
    correct_answer: Union[StrictBool, StrictInt, None] = None
    explanation: Optional[str] = None

    @property
    def is_reflection(self) -> bool:
        return self.type == "reflection"


class Quiz(WireModel):
    id: Optional[str] = None
    chapter_id: str
    title: Optional[str] = None
    passing_score: int = Field(default=PASSING_SCORE, ge=0, le=100)
    questions: list[QuizQuestion] = []


class TopicReview(WireModel):
    """Review card shown for a topic missed in a quiz."""
    topic: str
    lesson_day: int = Field(..., ge=1)
    review_title: str
    key_points: list[str] = []


# -----------------------------------------------------------------------------
# Catalog
# -----------------------------------------------------------------------------


class ContentCatalog(WireModel):
    """
    Static curriculum: phases -> chapters -> one lesson per day.

    Chapter numbers run 1..K across all phases, chapter day ranges are
    contiguous from day 1, and every day maps to exactly one lesson.
    Lookup helpers return None for unknown ids instead of raising.
    """
    phases: list[Phase]
    lessons: list[Lesson] = []
    quizzes: list[Quiz] = []

    @field_validator("phases")
    @classmethod
    def phases_not_empty(cls, v):
        if not any(phase.chapters for phase in v):
            raise ValueError("Catalog must define at least one chapter")
        return v

    @model_validator(mode="after")
    def check_structure(self):
        chapters = [chapter for phase in self.phases for chapter in phase.chapters]

        numbers = [chapter.number for chapter in chapters]
        if numbers != list(range(1, len(chapters) + 1)):
            raise ValueError(f"Chapter numbers must run 1..{len(chapters)} in order, got {numbers}")

        expected_start = 1
        for chapter in chapters:
            if chapter.days_range.start != expected_start:
                raise ValueError(
                    f"Chapter {chapter.id} starts on day {chapter.days_range.start}, "
                    f"expected {expected_start} (ranges must be contiguous)"
                )
            expected_start = chapter.days_range.end + 1
        total_days = expected_start - 1

        chapters_by_id = {chapter.id: chapter for chapter in chapters}
        if len(chapters_by_id) != len(chapters):
            raise ValueError("Chapter ids must be unique")

        if not self.lessons:
            self.lessons = [
                Lesson(id=lesson_id_for_day(day), chapter_id=chapter.id, day_number=day)
                for chapter in chapters
                for day in range(chapter.days_range.start, chapter.days_range.end + 1)
            ]

        days = sorted(lesson.day_number for lesson in self.lessons)
        if days != list(range(1, total_days + 1)):
            raise ValueError(f"Lessons must cover days 1..{total_days} exactly once")

        for lesson in self.lessons:
            chapter = chapters_by_id.get(lesson.chapter_id)
            if chapter is None:
                raise ValueError(f"Lesson {lesson.id} references unknown chapter {lesson.chapter_id}")
            if not chapter.contains(lesson.day_number):
                raise ValueError(
                    f"Lesson {lesson.id} (day {lesson.day_number}) is outside "
                    f"chapter {chapter.id} range {chapter.days_range.start}-{chapter.days_range.end}"
                )
        return self

    # -------------------------------------------------------------------------
    # Indexes
    # -------------------------------------------------------------------------

    @cached_property
    def all_chapters(self) -> list[Chapter]:
        """All chapters in global order."""
        return [chapter for phase in self.phases for chapter in phase.chapters]

    @cached_property
    def chapter_index(self) -> dict[str, Chapter]:
        return {chapter.id: chapter for chapter in self.all_chapters}

    @cached_property
    def lesson_index(self) -> dict[str, Lesson]:
        return {lesson.id: lesson for lesson in self.lessons}

    @cached_property
    def day_index(self) -> dict[int, Lesson]:
        return {lesson.day_number: lesson for lesson in self.lessons}

    @property
    def total_days(self) -> int:
        return self.all_chapters[-1].days_range.end

    @property
    def total_lessons(self) -> int:
        return len(self.lessons)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def chapter(self, chapter_id: str) -> Optional[Chapter]:
        return self.chapter_index.get(chapter_id)

    def chapter_by_number(self, number: int) -> Optional[Chapter]:
        if 1 <= number <= len(self.all_chapters):
            return self.all_chapters[number - 1]
        return None

    def chapter_for_day(self, day: int) -> Optional[Chapter]:
        lesson = self.lesson_for_day(day)
        return self.chapter(lesson.chapter_id) if lesson else None

    def lesson(self, lesson_id: str) -> Optional[Lesson]:
        return self.lesson_index.get(lesson_id)

    def lesson_for_day(self, day: int) -> Optional[Lesson]:
        return self.day_index.get(day)

    def lessons_for_chapter(self, chapter_id: str) -> list[Lesson]:
        """Lessons of a chapter ordered by day."""
        return sorted(
            (lesson for lesson in self.lessons if lesson.chapter_id == chapter_id),
            key=lambda lesson: lesson.day_number,
        )

    def quiz_for_chapter(self, chapter_id: str) -> Optional[Quiz]:
        for quiz in self.quizzes:
            if quiz.chapter_id == chapter_id:
                return quiz
        return None

    def phase(self, phase_id: str) -> Optional[Phase]:
        for phase in self.phases:
            if phase.id == phase_id:
                return phase
        return None

    def phase_for_chapter(self, chapter_id: str) -> Optional[Phase]:
        for phase in self.phases:
            if any(chapter.id == chapter_id for chapter in phase.chapters):
                return phase
        return None
