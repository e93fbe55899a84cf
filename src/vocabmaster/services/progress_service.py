"""Experience points, levels, day streaks and badges."""
import logging
from datetime import date, timedelta
from typing import List, Optional, Tuple

from vocabmaster import monitoring
from vocabmaster.config import settings
from vocabmaster.models.progress_models import Badge, BadgeContext, ProgressState
from vocabmaster.models.training_models import BadgeUnlocked, Event, LevelUp, XpGained
from vocabmaster.models.vocabulary import utcnow

logger = logging.getLogger(__name__)

PERFECT_BADGE_ID = "perfect"

BADGES: List[Badge] = [
    Badge("first_word", "🌱", "First word", "Add 1 word", lambda c: c.word_count >= 1),
    Badge("words_10", "📖", "Beginner", "10 words in the vocabulary", lambda c: c.word_count >= 10),
    Badge("words_50", "📚", "Reader", "50 words in the vocabulary", lambda c: c.word_count >= 50),
    Badge("words_100", "🗂️", "Dictionary", "100 words in the vocabulary", lambda c: c.word_count >= 100),
    Badge("learned_1", "⭐", "First success", "Learn 1 word", lambda c: c.learned_count >= 1),
    Badge("learned_10", "🌟", "Diligent", "Learn 10 words", lambda c: c.learned_count >= 10),
    Badge("learned_50", "💫", "Word master", "Learn 50 words", lambda c: c.learned_count >= 50),
    Badge("streak_3", "🔥", "On fire", "3 days in a row", lambda c: c.streak_count >= 3),
    Badge("streak_7", "📅", "Week of practice", "7 days in a row", lambda c: c.streak_count >= 7),
    Badge("streak_30", "🏆", "Legend", "30 days in a row", lambda c: c.streak_count >= 30),
    Badge("xp_500", "💎", "Diamond", "Earn 500 XP", lambda c: c.total_xp >= 500),
    Badge("xp_1000", "🎖️", "Veteran", "Earn 1000 XP", lambda c: c.total_xp >= 1000),
    # Only unlocked by an explicit perfect-session flag
    Badge(PERFECT_BADGE_ID, "🎯", "Sniper", "A session without mistakes (5+ words)", lambda c: c.perfect_session),
    Badge("level_5", "🚀", "Levelled up", "Reach level 5", lambda c: c.level >= 5),
    Badge("level_10", "🦅", "Eagle", "Reach level 10", lambda c: c.level >= 10),
]


def xp_needed(level: int) -> int:
    """XP required to leave the given level."""
    return level * settings.progress.xp_per_level


class ProgressService:
    """Applies progress rules to a learner's ProgressState."""

    def __init__(self, progress: ProgressState):
        self.progress = progress

    @property
    def total_xp(self) -> int:
        """XP score of the XP badges: current XP plus a flat level allowance per level reached."""
        return self.progress.xp + (self.progress.level - 1) * settings.progress.xp_per_level

    def level_progress(self) -> Tuple[int, int]:
        """XP within the current level and XP needed to level up."""
        return self.progress.xp, xp_needed(self.progress.level)

    def gain_xp(self, amount: int, reason: str = "") -> List[Event]:
        """Add XP and level up as many times as the new total allows."""
        if amount <= 0:
            return []
        events: List[Event] = [XpGained(amount, reason)]
        self.progress.xp += amount
        while self.progress.xp >= xp_needed(self.progress.level):
            self.progress.xp -= xp_needed(self.progress.level)
            self.progress.level += 1
            events.append(LevelUp(self.progress.level))
            logger.info(f"Level up: {self.progress.level}")
        logger.debug(f"Gained {amount} XP ({reason}), now {self.progress.xp} at level {self.progress.level}")
        return events

    def touch_streak(self, today: Optional[date] = None) -> bool:
        """Count a day of activity. Returns True if the streak changed."""
        today = today or utcnow().date()
        last = self.progress.streak_last_date
        if last == today:
            return False
        if last == today - timedelta(days=1):
            self.progress.streak_count += 1
        else:
            self.progress.streak_count = 1
        self.progress.streak_last_date = today
        logger.debug(f"Day streak is now {self.progress.streak_count}")
        return True

    def check_badges(
        self,
        word_count: int,
        learned_count: int,
        perfect_session: bool = False,
    ) -> List[Event]:
        """Unlock every badge whose predicate now holds. Already unlocked badges are skipped."""
        context = BadgeContext(
            word_count=word_count,
            learned_count=learned_count,
            streak_count=self.progress.streak_count,
            total_xp=self.total_xp,
            level=self.progress.level,
            perfect_session=perfect_session,
        )
        events: List[Event] = []
        for badge in BADGES:
            if badge.id in self.progress.badges:
                continue
            if badge.check(context):
                self.progress.badges.append(badge.id)
                monitoring.badges_unlocked.labels(badge=badge.id).inc()
                logger.info(f"Badge unlocked: {badge.id}")
                events.append(BadgeUnlocked(badge.id, badge.name, badge.icon))
        return events
