"""Shared fixtures for WellPath tests."""

from pathlib import Path

import pytest

from wellpath.content import build_standard_catalog, load_catalog
from wellpath.schemas import ProgressSnapshot, lesson_id_for_day

DATA_DIR = Path(__file__).parent / "data"


def make_snapshot(days=(), scores=None, **kwargs) -> ProgressSnapshot:
    """Snapshot with lessons for the given day numbers completed."""
    return ProgressSnapshot(
        completed_lessons=frozenset(lesson_id_for_day(day) for day in days),
        quiz_scores=scores or {},
        **kwargs,
    )


@pytest.fixture
def data_dir() -> Path:
    return DATA_DIR


@pytest.fixture(scope="session")
def catalog():
    """Standard 180-day curriculum skeleton."""
    return build_standard_catalog()


@pytest.fixture(scope="session")
def phase_one():
    """Phase 1 content with the chapter 1 quiz."""
    return load_catalog(DATA_DIR / "phase_1.yaml")
