"""Milestones earned from a progress snapshot."""

from wellpath.config import PASSING_SCORE
from wellpath.schemas import ContentCatalog, ProgressSnapshot

from .chapters import all_chapters_progress

DAY_MILESTONES = (7, 14, 30, 60, 90, 180, 365)
STREAK_MILESTONES = (7, 30)


def earned_milestones(
    catalog: ContentCatalog,
    snapshot: ProgressSnapshot,
    passing_score: int = PASSING_SCORE,
) -> list[str]:
    """
    Milestone ids the snapshot qualifies for, in display order:
    day_N, streak_N, chapter_N_complete, phase_N_complete.

    Chapter milestones follow the quiz pass (the chapter badge), phase
    milestones need every chapter of the phase fully complete.
    """
    completed_count = len(snapshot.completed_lessons)
    milestones = [f"day_{day}" for day in DAY_MILESTONES if completed_count >= day]
    milestones += [
        f"streak_{days}" for days in STREAK_MILESTONES
        if snapshot.current_streak >= days
    ]

    progress = {p.id: p for p in all_chapters_progress(catalog, snapshot, passing_score)}
    milestones += [
        f"chapter_{chapter.number}_complete" for chapter in catalog.all_chapters
        if progress[chapter.id].quiz_passed
    ]
    milestones += [
        f"phase_{phase.number}_complete" for phase in catalog.phases
        if phase.chapters and all(progress[c.id].is_complete for c in phase.chapters)
    ]
    return milestones
