"""Persistence collaborator for words and account progress."""
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from sqlalchemy.orm import Session

from vocabmaster.models.models import PROGRESS_ROW_ID, ProgressRecord, WordRecord
from vocabmaster.models.progress_models import ProgressState
from vocabmaster.models.vocabulary import Word

logger = logging.getLogger(__name__)


class WordRepository(ABC):
    """Storage used by the learner state. Failures are raised as exceptions."""

    @abstractmethod
    def load_words(self) -> List[Word]:
        """Load every stored word."""

    @abstractmethod
    def save_word(self, word: Word) -> None:
        """Insert or update a word."""

    @abstractmethod
    def delete_word(self, word_id: str) -> None:
        """Delete a word. Deleting an unknown id is not an error."""

    @abstractmethod
    def load_progress(self) -> Optional[ProgressState]:
        """Load account progress, None if nothing was stored yet."""

    @abstractmethod
    def save_progress(self, progress: ProgressState) -> None:
        """Store account progress."""


class SqlWordRepository(WordRepository):
    """Repository backed by a SQLAlchemy session."""

    def __init__(self, db: Session):
        """Initialize the repository with a database session."""
        self.db = db

    def load_words(self) -> List[Word]:
        records = self.db.query(WordRecord).order_by(WordRecord.created_at).all()
        logger.info(f"Loaded {len(records)} words")
        return [record.to_word() for record in records]

    def save_word(self, word: Word) -> None:
        record = self.db.get(WordRecord, word.id)
        try:
            if record is None:
                self.db.add(WordRecord.from_word(word))
            else:
                record.update_from(word)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def delete_word(self, word_id: str) -> None:
        record = self.db.get(WordRecord, word_id)
        if record is None:
            return
        try:
            self.db.delete(record)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def load_progress(self) -> Optional[ProgressState]:
        record = self.db.get(ProgressRecord, PROGRESS_ROW_ID)
        return record.to_progress() if record else None

    def save_progress(self, progress: ProgressState) -> None:
        record = self.db.get(ProgressRecord, PROGRESS_ROW_ID)
        try:
            if record is None:
                record = ProgressRecord(id=PROGRESS_ROW_ID)
                self.db.add(record)
            record.update_from(progress)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
