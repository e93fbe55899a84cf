"""Domain models for words and their review statistics."""
import re
import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Iterable, List, Optional

from vocabmaster.config import settings

TAG_INVALID_CHARS = re.compile(r"[^\w\-]")


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Lowercase tags, keep letters, digits, '-' and '_', drop empties and duplicates."""
    normalized: List[str] = []
    for tag in tags or []:
        clean = TAG_INVALID_CHARS.sub("", tag.strip().lower())
        if clean and clean not in normalized:
            normalized.append(clean)
    return normalized


class Side(Enum):
    """Which side of a word pair is meant."""
    SOURCE = "source"
    TARGET = "target"

    @property
    def opposite(self) -> "Side":
        return Side.TARGET if self is Side.SOURCE else Side.SOURCE


@dataclass
class ReviewStats:
    """Spaced repetition state of a single word."""
    times_shown: int = 0
    times_correct: int = 0
    current_streak: int = 0
    last_practiced_at: Optional[datetime] = None
    learned: bool = False
    interval_days: int = field(default_factory=lambda: settings.learning.initial_interval_days)
    ease_factor: float = field(default_factory=lambda: settings.learning.initial_ease_factor)
    next_review_at: datetime = field(default_factory=utcnow)

    def is_due(self, now: Optional[datetime] = None) -> bool:
        """A word is due when its next review is at or before now."""
        return self.next_review_at <= (now or utcnow())


@dataclass
class Word:
    """A source/target word pair with its review statistics."""
    id: str
    source: str
    target: str
    example: str = ""
    tags: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    stats: ReviewStats = field(default_factory=ReviewStats)

    @classmethod
    def create(
        cls,
        source: str,
        target: str,
        example: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
        now: Optional[datetime] = None,
    ) -> "Word":
        """Create a new word with a fresh id and default stats, due immediately."""
        now = now or utcnow()
        return cls(
            id=str(uuid.uuid4()),
            source=source.strip(),
            target=target.strip(),
            example=(example or "").strip(),
            tags=normalize_tags(tags),
            created_at=now,
            updated_at=now,
            stats=ReviewStats(next_review_at=now),
        )

    def text(self, side: Side) -> str:
        """Return the text shown for the given side."""
        return self.source if side is Side.SOURCE else self.target

    def touch(self, now: Optional[datetime] = None) -> None:
        """Mark the word as modified."""
        self.updated_at = now or utcnow()
