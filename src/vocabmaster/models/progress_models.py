"""Models for account-level progress."""
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, List, Optional


@dataclass
class ProgressState:
    """Experience points, level, day streak and unlocked badges."""
    xp: int = 0
    level: int = 1
    badges: List[str] = field(default_factory=list)
    streak_count: int = 0
    streak_last_date: Optional[date] = None


@dataclass(frozen=True)
class BadgeContext:
    """Aggregate state a badge predicate is evaluated against."""
    word_count: int
    learned_count: int
    streak_count: int
    total_xp: int
    level: int
    perfect_session: bool = False


@dataclass(frozen=True)
class Badge:
    """A badge from the fixed catalog."""
    id: str
    icon: str
    name: str
    description: str
    check: Callable[[BadgeContext], bool]
