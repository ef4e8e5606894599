"""
Quiz scoring and retry tests.
"""

import pytest
from datetime import datetime, timedelta, timezone

from wellpath.config import Settings
from wellpath.engine import (
    build_attempt,
    is_answer_correct,
    quiz_retry_status,
    record_quiz_score,
    retry_available_at,
    review_topics,
    score_quiz,
)
from wellpath.schemas import Quiz, QuizAttempt, QuizQuestion, SubscriptionTier, TopicReview

NOW = datetime(2024, 2, 1, 12, 0)


def _ten_question_quiz():
    questions = [
        QuizQuestion(id=f"q{n}", type="multiple_choice", topic_tag=f"topic_{n}", correct_answer=0)
        for n in range(1, 11)
    ]
    return Quiz(id="quiz_chapter_2", chapter_id="chapter_2", questions=questions)


def _attempt(passed, attempted_at, can_retry_at=None, score=50):
    return QuizAttempt(
        chapter_id="chapter_1",
        score=score,
        passed=passed,
        attempted_at=attempted_at,
        can_retry_at=can_retry_at,
    )


class TestAnswerChecking:

    def test_true_false_requires_boolean(self):
        question = QuizQuestion(id="q", type="true_false", correct_answer=True)
        assert is_answer_correct(question, True)
        assert not is_answer_correct(question, 1)
        assert not is_answer_correct(question, "true")

    def test_false_is_not_zero(self):
        question = QuizQuestion(id="q", type="true_false", correct_answer=False)
        assert is_answer_correct(question, False)
        assert not is_answer_correct(question, 0)

    def test_multiple_choice_requires_index(self):
        question = QuizQuestion(id="q", type="multiple_choice", correct_answer=1)
        assert is_answer_correct(question, 1)
        assert not is_answer_correct(question, True)
        assert not is_answer_correct(question, 2)

    def test_unanswered_is_wrong(self):
        question = QuizQuestion(id="q", type="multiple_choice", correct_answer=0)
        assert not is_answer_correct(question, None)

    def test_reflection_always_correct(self):
        question = QuizQuestion(id="q", type="reflection")
        assert is_answer_correct(question, "I asked a friend to walk with me.")
        assert is_answer_correct(question, None)


class TestScoreQuiz:
    """Test quiz scoring and missed-topic extraction."""

    def test_seven_of_ten_passes(self):
        quiz = _ten_question_quiz()
        answers = {f"q{n}": 0 if n <= 7 else 3 for n in range(1, 11)}
        result = score_quiz(quiz, answers)
        assert result.score == 70
        assert result.passed
        assert result.correct_count == 7
        assert result.missed_topics == ["topic_8", "topic_9", "topic_10"]

    def test_below_threshold_fails(self):
        quiz = _ten_question_quiz()
        answers = {f"q{n}": 0 for n in range(1, 7)}
        result = score_quiz(quiz, answers)
        assert result.score == 60
        assert not result.passed

    def test_chapter_one_quiz(self, phase_one):
        quiz = phase_one.quiz_for_chapter("chapter_1")
        result = score_quiz(quiz, {"q1": 2, "q2": True, "q3": 0, "q4": False, "q5": "Morning walks"})
        assert result.score == 80
        assert result.passed
        assert result.missed_topics == ["goal_setting"]

    def test_missed_topics_deduplicated(self):
        quiz = Quiz(chapter_id="chapter_1", questions=[
            QuizQuestion(id="a", type="true_false", topic_tag="sleep", correct_answer=True),
            QuizQuestion(id="b", type="true_false", topic_tag="hydration", correct_answer=True),
            QuizQuestion(id="c", type="true_false", topic_tag="sleep", correct_answer=False),
        ])
        result = score_quiz(quiz, {})
        assert result.missed_topics == ["sleep", "hydration"]
        assert result.score == 0

    def test_rounding_half_up(self):
        quiz = Quiz(chapter_id="chapter_1", questions=[
            QuizQuestion(id=f"q{n}", type="true_false", correct_answer=True) for n in range(8)
        ])
        # 5/8 = 62.5%
        result = score_quiz(quiz, {f"q{n}": True for n in range(5)})
        assert result.score == 63

    def test_configured_threshold_overrides_quiz(self):
        quiz = Quiz(chapter_id="chapter_1", questions=[
            QuizQuestion(id=f"q{n}", type="true_false", correct_answer=True) for n in range(4)
        ])
        answers = {"q0": True, "q1": True, "q2": True, "q3": False}
        settings = Settings(passing_score=80)

        assert score_quiz(quiz, answers).passed
        result = score_quiz(quiz, answers, settings.passing_score)
        assert result.score == 75
        assert not result.passed

    def test_empty_quiz(self):
        result = score_quiz(Quiz(chapter_id="chapter_1"), {})
        assert result.score == 100
        assert result.passed
        assert result.total_questions == 0


class TestBestScore:

    def test_first_score_recorded(self):
        assert record_quiz_score({}, "chapter_1", 60) == {"chapter_1": 60}

    def test_lower_score_does_not_replace(self):
        scores = {"chapter_1": 85}
        updated = record_quiz_score(scores, "chapter_1", 72)
        assert updated["chapter_1"] == 85

    def test_higher_score_replaces(self):
        scores = {"chapter_1": 60}
        updated = record_quiz_score(scores, "chapter_1", 90)
        assert updated["chapter_1"] == 90
        assert scores["chapter_1"] == 60

    def test_missing_score_replaced(self):
        assert record_quiz_score({"chapter_1": None}, "chapter_1", 0) == {"chapter_1": 0}


class TestRetry:
    """Test the retry cool-down."""

    def test_retry_available_at(self):
        assert retry_available_at(True, NOW) is None
        assert retry_available_at(False, NOW) == NOW + timedelta(hours=24)
        assert retry_available_at(False, NOW, retry_hours=1) == NOW + timedelta(hours=1)

    def test_build_attempt(self, phase_one):
        result = score_quiz(phase_one.quiz_for_chapter("chapter_1"), {})
        attempt = build_attempt(result, NOW)
        assert not attempt.passed
        assert attempt.can_retry_at == NOW + timedelta(hours=24)
        assert attempt.missed_topics == result.missed_topics

    def test_no_attempts(self):
        assert quiz_retry_status([], NOW).can_retry

    def test_failed_attempt_waits(self):
        attempt = _attempt(False, NOW - timedelta(hours=2), NOW + timedelta(hours=22))
        status = quiz_retry_status([attempt], NOW)
        assert not status.can_retry
        assert status.wait_seconds == pytest.approx(22 * 3600)

    def test_cool_down_elapsed(self):
        attempt = _attempt(False, NOW - timedelta(hours=25), NOW - timedelta(hours=1))
        assert quiz_retry_status([attempt], NOW).can_retry

    def test_missing_retry_time_allows_retry(self):
        assert quiz_retry_status([_attempt(False, NOW - timedelta(minutes=5))], NOW).can_retry

    def test_passed_attempt_no_retry(self):
        attempts = [
            _attempt(False, NOW - timedelta(days=3), NOW - timedelta(days=2)),
            _attempt(True, NOW - timedelta(hours=1), score=90),
        ]
        status = quiz_retry_status(attempts, NOW)
        assert not status.can_retry
        assert status.wait_seconds is None

    def test_latest_attempt_wins(self):
        attempts = [
            _attempt(False, NOW - timedelta(hours=1), NOW + timedelta(hours=23)),
            _attempt(False, NOW - timedelta(days=5), NOW - timedelta(days=4)),
        ]
        assert not quiz_retry_status(attempts, NOW).can_retry

    def test_aware_and_naive_timestamps(self):
        aware_now = NOW.replace(tzinfo=timezone.utc)
        attempt = _attempt(False, aware_now - timedelta(hours=1), aware_now + timedelta(hours=23))
        status = quiz_retry_status([attempt], NOW)
        assert not status.can_retry
        assert status.wait_seconds == pytest.approx(23 * 3600)

        later = _attempt(False, NOW, NOW + timedelta(hours=24))
        assert not quiz_retry_status([attempt, later], aware_now + timedelta(hours=23)).can_retry
        assert quiz_retry_status([attempt], NOW + timedelta(hours=23)).can_retry

    def test_lifetime_retries_immediately(self):
        attempt = _attempt(False, NOW - timedelta(minutes=1), NOW + timedelta(hours=24))
        assert quiz_retry_status([attempt], NOW, tier=SubscriptionTier.LIFETIME).can_retry
        assert not quiz_retry_status([attempt], NOW, tier=SubscriptionTier.TRANSFORMATION).can_retry


class TestReviewTopics:

    def test_cards_in_missed_order(self):
        reviews = {
            "sleep": TopicReview(topic="sleep", lesson_day=9, review_title="Sleep"),
            "hydration": TopicReview(topic="hydration", lesson_day=2, review_title="Hydration"),
        }
        cards = review_topics(["hydration", "unknown", "sleep"], reviews)
        assert [card.topic for card in cards] == ["hydration", "sleep"]

    def test_no_missed_topics(self):
        assert review_topics([], {}) == []
