"""Tests for the progress report."""
from datetime import datetime, timedelta
from typing import List

from vocabmaster.models.vocabulary import Word
from vocabmaster.services.learner_state import LearnerState
from vocabmaster.services.report_service import progress_report


def test_progress_report(animals: List[Word], now: datetime) -> None:
    """Test the report of a learner with one learned word and two due words."""
    animals[0].stats.learned = True
    animals[0].stats.next_review_at = now + timedelta(days=7)
    animals[1].stats.next_review_at = now + timedelta(days=1)
    learner = LearnerState(words=animals, clock=lambda: now)
    learner.progress.streak_count = 3
    learner.progress.xp = 40
    learner.progress.level = 2
    learner.progress.badges = ["first_word"]

    report = progress_report(learner)

    assert "Total Words: 4" in report
    assert "Learned Words: 1" in report
    assert "Progress: 25.0%" in report
    assert "Words for Review: 2" in report
    assert "Day Streak: 3" in report
    assert "Level 2: 40/200 XP" in report
    assert "Badges: 1/15" in report
    assert "Word of the day:" in report
    assert "waiting for review" in report


def test_progress_report_empty(now: datetime) -> None:
    report = progress_report(LearnerState(clock=lambda: now))
    assert "Total Words: 0" in report
    assert "Progress: 0.0%" in report
    assert "Word of the day" not in report
    assert "waiting for review" not in report
