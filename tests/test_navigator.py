"""
Navigator tests.
"""

from datetime import date

from wellpath.config import Settings
from wellpath.engine import Navigator
from wellpath.schemas import AccessReason, LessonCompletionStatus, LessonStatus

from conftest import make_snapshot


class TestLessonStatus:
    """Test lesson status derivation."""

    def test_new_user(self, catalog):
        navigator = Navigator(catalog, make_snapshot())
        assert navigator.lesson_status("lesson_day_1") == LessonStatus.UNLOCKED
        assert navigator.lesson_status("lesson_day_2") == LessonStatus.LOCKED

    def test_completed(self, catalog):
        navigator = Navigator(catalog, make_snapshot(days=[1, 2]))
        assert navigator.lesson_status("lesson_day_1") == LessonStatus.COMPLETED
        assert navigator.lesson_status("lesson_day_3") == LessonStatus.UNLOCKED

    def test_in_progress(self, catalog):
        completion = {"lesson_day_2": LessonCompletionStatus(journal_complete=True)}
        navigator = Navigator(catalog, make_snapshot(days=[1]), completion=completion)
        assert navigator.lesson_status("lesson_day_2") == LessonStatus.IN_PROGRESS

    def test_started_but_locked(self, catalog):
        completion = {"lesson_day_3": LessonCompletionStatus(movement_complete=True)}
        navigator = Navigator(catalog, make_snapshot(days=[1]), completion=completion)
        assert navigator.lesson_status("lesson_day_3") == LessonStatus.LOCKED

    def test_unknown_lesson_locked(self, catalog):
        navigator = Navigator(catalog, make_snapshot(days=range(1, 181)))
        assert navigator.lesson_status("lesson_day_500") == LessonStatus.LOCKED
        assert not navigator.is_lesson_available("lesson_day_500")

    def test_quiz_gate_locks_next_chapter(self, catalog):
        navigator = Navigator(catalog, make_snapshot(days=range(1, 6), scores={"chapter_1": 65}))
        assert navigator.lesson_status("lesson_day_6") == LessonStatus.LOCKED
        assert navigator.get_lesson_access(6).reason == AccessReason.PREVIOUS_QUIZ_NOT_PASSED

    def test_custom_passing_score(self, catalog):
        snapshot = make_snapshot(days=range(1, 6), scores={"chapter_1": 65})
        navigator = Navigator(catalog, snapshot, settings=Settings(passing_score=60))
        assert navigator.lesson_status("lesson_day_6") == LessonStatus.UNLOCKED

    def test_time_ceiling_with_as_of(self, catalog):
        snapshot = make_snapshot(days=[1, 2], subscription_start_date=date(2024, 1, 1))
        navigator = Navigator(catalog, snapshot, as_of=date(2024, 1, 2))
        assert navigator.unlocked_day == 2
        assert navigator.lesson_status("lesson_day_3") == LessonStatus.LOCKED
        assert navigator.get_lesson_access(3).reason == AccessReason.NOT_YET_AVAILABLE

    def test_no_time_ceiling_without_as_of(self, catalog):
        navigator = Navigator(catalog, make_snapshot(days=[1, 2]))
        assert navigator.unlocked_day is None
        assert navigator.lesson_status("lesson_day_3") == LessonStatus.UNLOCKED

    def test_status_indicators(self, catalog):
        completion = {"lesson_day_2": LessonCompletionStatus(journal_complete=True)}
        navigator = Navigator(catalog, make_snapshot(days=[1]), completion=completion)
        assert navigator.get_status_indicator("lesson_day_1") == "✓"
        assert navigator.get_status_indicator("lesson_day_2") == "→"
        assert navigator.get_status_indicator("lesson_day_3") == "◌"
        assert Navigator(catalog, make_snapshot()).get_status_indicator("lesson_day_1") == "○"


class TestNavigation:

    def test_todays_lesson(self, catalog):
        navigator = Navigator(catalog, make_snapshot(days=[1, 2, 3]))
        assert navigator.current_day == 4
        assert navigator.todays_lesson.id == "lesson_day_4"
        assert not navigator.is_today_complete

    def test_journey_finished(self, catalog):
        navigator = Navigator(catalog, make_snapshot(days=range(1, 181)))
        assert navigator.todays_lesson.id == "lesson_day_180"
        assert navigator.is_today_complete
        assert navigator.get_recommended_lesson_id() is None

    def test_next_and_previous(self, catalog):
        navigator = Navigator(catalog, make_snapshot())
        assert navigator.get_next_lesson_id("lesson_day_5") == "lesson_day_6"
        assert navigator.get_previous_lesson_id("lesson_day_5") == "lesson_day_4"
        assert navigator.get_previous_lesson_id("lesson_day_1") is None
        assert navigator.get_next_lesson_id("lesson_day_180") is None
        assert navigator.get_next_lesson_id("missing") is None

    def test_recommended_prefers_in_progress(self, catalog):
        completion = {"lesson_day_3": LessonCompletionStatus(journal_complete=True)}
        navigator = Navigator(catalog, make_snapshot(days=[1, 2]), completion=completion)
        assert navigator.get_recommended_lesson_id() == "lesson_day_3"

    def test_recommended_first_unlocked(self, catalog):
        navigator = Navigator(catalog, make_snapshot(days=[1, 2]))
        assert navigator.get_recommended_lesson_id() == "lesson_day_3"

    def test_recommended_none_when_quiz_pending(self, catalog):
        navigator = Navigator(catalog, make_snapshot(days=range(1, 6)))
        assert navigator.get_recommended_lesson_id() is None


class TestNavigationTree:

    def test_tree_shape(self, catalog):
        tree = Navigator(catalog, make_snapshot()).get_navigation_tree()
        assert len(tree) == 6
        assert len(tree[0].chapters) == 6
        assert len(tree[0].chapters[0].lessons) == 5
        assert tree[0].chapters[0].lessons[0].is_today
        assert tree[0].progress.is_navigable
        assert not tree[1].progress.is_navigable

    def test_tree_navigability_and_unlock_differ(self, catalog):
        tree = Navigator(catalog, make_snapshot(days=range(1, 6))).get_navigation_tree()
        chapter_2 = tree[0].chapters[1]
        assert chapter_2.is_navigable
        assert not chapter_2.progress.is_unlocked
        assert chapter_2.lessons[0].status == LessonStatus.LOCKED
        assert chapter_2.lessons[0].access.reason == AccessReason.PREVIOUS_QUIZ_NOT_PASSED

    def test_progress_summary(self, catalog):
        snapshot = make_snapshot(
            days=range(1, 8),
            scores={"chapter_1": 85},
            subscription_start_date=date(2024, 1, 1),
            current_streak=7,
            longest_streak=9,
        )
        summary = Navigator(catalog, snapshot, as_of=date(2024, 1, 10)).get_progress_summary()
        assert summary["lessons_completed"] == 7
        assert summary["total_lessons"] == 180
        assert summary["chapters_completed"] == 1
        assert summary["current_day"] == 8
        assert summary["unlocked_day"] == 10
        assert summary["todays_lesson_id"] == "lesson_day_8"
        assert summary["recommended_lesson_id"] == "lesson_day_8"
        assert summary["longest_streak"] == 9
        assert len(summary["chapters"]) == 36
        assert summary["milestones"] == ["day_7", "streak_7", "chapter_1_complete"]
