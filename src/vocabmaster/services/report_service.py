"""Plain-text progress report for a learner."""
from datetime import datetime
from typing import Optional

from vocabmaster.services.learner_state import LearnerState
from vocabmaster.services.progress_service import BADGES


def progress_report(learner: LearnerState, now: Optional[datetime] = None) -> str:
    """Generate a progress summary of the learner's vocabulary."""
    now = now or learner.clock()
    total_words = learner.words.count()
    learned_words = learner.words.learned_count()
    due_words = learner.words.due_count(now)
    progress = (learned_words / total_words * 100) if total_words > 0 else 0
    xp, needed = learner.progress_service.level_progress()

    message = (
        f"📊 Your Learning Progress:\n"
        f"• Total Words: {total_words}\n"
        f"• Learned Words: {learned_words}\n"
        f"• Progress: {progress:.1f}%\n"
        f"• Words for Review: {due_words}\n"
        f"• Day Streak: {learner.progress.streak_count}\n"
        f"• Level {learner.progress.level}: {xp}/{needed} XP\n"
        f"• Badges: {len(learner.progress.badges)}/{len(BADGES)}\n"
    )

    word = learner.words.word_of_the_day(now.date())
    if word is not None:
        message += f"\n☀️ Word of the day: {word.source} - {word.target}\n"
        if word.example:
            message += f"   {word.example}\n"

    if due_words:
        message += "\n💡 Some words are waiting for review!"
    return message
