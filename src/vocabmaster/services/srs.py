"""Spaced repetition scheduling for single words."""
import logging
import math
from datetime import datetime, timedelta
from typing import Optional

from vocabmaster.config import settings
from vocabmaster.models.training_models import ReviewOutcome, WordLearned
from vocabmaster.models.vocabulary import Word, utcnow

logger = logging.getLogger(__name__)


def next_interval(interval_days: int, ease_factor: float) -> int:
    """Interval after a correct answer.

    The first two reviews graduate to fixed intervals, later ones grow
    geometrically by the (already updated) ease factor.
    """
    first, second = settings.learning.graduation_intervals
    if interval_days <= 1:
        return first
    if interval_days <= first:
        return second
    # Halves round up
    return max(1, math.floor(interval_days * ease_factor + 0.5))


def adjust_ease(ease_factor: float, correct: bool) -> float:
    """Raise or lower the ease factor, never below the floor."""
    learning = settings.learning
    delta = learning.ease_bonus if correct else -learning.ease_penalty
    return max(learning.min_ease_factor, round(ease_factor + delta, 4))


def calculate_next_review(now: datetime, interval_days: int) -> datetime:
    """Due date `interval_days` calendar days after now.

    Timestamps are UTC, so a calendar day is always 24 hours and the
    time of day is preserved.
    """
    return now + timedelta(days=interval_days)


def record_answer(word: Word, correct: bool, now: Optional[datetime] = None) -> ReviewOutcome:
    """Update a word's review stats for one answer and return the outcome."""
    now = now or utcnow()
    stats = word.stats
    stats.times_shown += 1
    stats.last_practiced_at = now

    learned_now = False
    if correct:
        stats.times_correct += 1
        stats.current_streak += 1
        stats.ease_factor = adjust_ease(stats.ease_factor, True)
        stats.interval_days = next_interval(stats.interval_days, stats.ease_factor)
        # The flag latches: a later wrong answer does not reset it.
        if not stats.learned and stats.current_streak >= settings.learning.learned_streak:
            stats.learned = True
            learned_now = True
    else:
        stats.current_streak = 0
        stats.interval_days = 1
        stats.ease_factor = adjust_ease(stats.ease_factor, False)

    stats.next_review_at = calculate_next_review(now, stats.interval_days)
    word.touch(now)

    logger.debug(
        f"Recorded {'correct' if correct else 'wrong'} answer for word {word.id}: "
        f"interval={stats.interval_days}, ease={stats.ease_factor}, streak={stats.current_streak}"
    )

    outcome = ReviewOutcome(
        word_id=word.id,
        correct=correct,
        interval_days=stats.interval_days,
        ease_factor=stats.ease_factor,
        next_review_at=stats.next_review_at,
        learned_now=learned_now,
    )
    if learned_now:
        outcome.events.append(WordLearned(word.id))
    return outcome
