"""Database models for the persistence collaborator."""
from datetime import UTC, datetime
from typing import Optional

from sqlalchemy import JSON, Boolean, Column, Date, DateTime, Float, Integer, String, Text

from vocabmaster.models.base import Base
from vocabmaster.models.progress_models import ProgressState
from vocabmaster.models.vocabulary import ReviewStats, Word

PROGRESS_ROW_ID = 1


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite drops tzinfo, stored values are always UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


class WordRecord(Base):
    """Stored word with its review statistics."""

    __tablename__ = "words"

    id = Column(String(36), primary_key=True)
    source = Column(String, nullable=False, index=True)
    target = Column(String, nullable=False)
    example = Column(Text, default="")
    tags = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    times_shown = Column(Integer, default=0)
    times_correct = Column(Integer, default=0)
    current_streak = Column(Integer, default=0)
    last_practiced_at = Column(DateTime(timezone=True), nullable=True)
    learned = Column(Boolean, default=False)
    interval_days = Column(Integer, default=1)
    ease_factor = Column(Float, default=2.5)
    next_review_at = Column(DateTime(timezone=True), nullable=False)

    @classmethod
    def from_word(cls, word: Word) -> "WordRecord":
        record = cls(id=word.id)
        record.update_from(word)
        return record

    def update_from(self, word: Word) -> None:
        self.source = word.source
        self.target = word.target
        self.example = word.example
        self.tags = list(word.tags)
        self.created_at = word.created_at
        self.updated_at = word.updated_at
        stats = word.stats
        self.times_shown = stats.times_shown
        self.times_correct = stats.times_correct
        self.current_streak = stats.current_streak
        self.last_practiced_at = stats.last_practiced_at
        self.learned = stats.learned
        self.interval_days = stats.interval_days
        self.ease_factor = stats.ease_factor
        self.next_review_at = stats.next_review_at

    def to_word(self) -> Word:
        return Word(
            id=self.id,
            source=self.source,
            target=self.target,
            example=self.example or "",
            tags=list(self.tags or []),
            created_at=_as_utc(self.created_at),
            updated_at=_as_utc(self.updated_at),
            stats=ReviewStats(
                times_shown=self.times_shown or 0,
                times_correct=self.times_correct or 0,
                current_streak=self.current_streak or 0,
                last_practiced_at=_as_utc(self.last_practiced_at),
                learned=bool(self.learned),
                interval_days=self.interval_days or 1,
                ease_factor=self.ease_factor if self.ease_factor is not None else 2.5,
                next_review_at=_as_utc(self.next_review_at),
            ),
        )


class ProgressRecord(Base):
    """Single-row account progress."""

    __tablename__ = "learner_progress"

    id = Column(Integer, primary_key=True, default=PROGRESS_ROW_ID)
    xp = Column(Integer, default=0)
    level = Column(Integer, default=1)
    badges = Column(JSON, default=list)
    streak_count = Column(Integer, default=0)
    streak_last_date = Column(Date, nullable=True)

    def update_from(self, progress: ProgressState) -> None:
        self.xp = progress.xp
        self.level = progress.level
        self.badges = list(progress.badges)
        self.streak_count = progress.streak_count
        self.streak_last_date = progress.streak_last_date

    def to_progress(self) -> ProgressState:
        return ProgressState(
            xp=self.xp or 0,
            level=self.level or 1,
            badges=list(self.badges or []),
            streak_count=self.streak_count or 0,
            streak_last_date=self.streak_last_date,
        )
