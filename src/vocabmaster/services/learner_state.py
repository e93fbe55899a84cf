"""The learner's words and progress, with their lifecycle."""
import logging
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Tuple

from vocabmaster import monitoring
from vocabmaster.config import settings
from vocabmaster.models.progress_models import ProgressState
from vocabmaster.models.training_models import (
    Event,
    ExerciseKind,
    PersistenceFailed,
    ReviewOutcome,
    SessionSummary,
)
from vocabmaster.models.vocabulary import Word, utcnow
from vocabmaster.services import srs
from vocabmaster.services.progress_service import ProgressService
from vocabmaster.services.word_repository import WordRepository
from vocabmaster.services.word_store import WordStore

logger = logging.getLogger(__name__)


class LearnerState:
    """Aggregate of a learner's words and account progress.

    Constructed at start-up from the repository and cleared on logout.
    Every mutation is written through to the repository; a failing write
    is logged and reported as a PersistenceFailed event, the in-memory
    state stays authoritative.
    """

    def __init__(
        self,
        words: Optional[Iterable[Word]] = None,
        progress: Optional[ProgressState] = None,
        repository: Optional[WordRepository] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.words = WordStore(words)
        self.progress = progress or ProgressState()
        self.progress_service = ProgressService(self.progress)
        self.repository = repository
        self.clock = clock
        self.persistence_errors: List[PersistenceFailed] = []

    @classmethod
    def load(cls, repository: WordRepository, clock: Callable[[], datetime] = utcnow) -> "LearnerState":
        """Build the state from what the repository holds."""
        words = repository.load_words()
        progress = repository.load_progress()
        logger.info(f"Learner state loaded with {len(words)} words")
        return cls(words=words, progress=progress, repository=repository, clock=clock)

    def clear(self) -> None:
        """Forget everything, e.g. on logout."""
        self.words.clear()
        self.progress = ProgressState()
        self.progress_service = ProgressService(self.progress)
        self.persistence_errors.clear()
        self.repository = None
        logger.info("Learner state cleared")

    def _persist(self, operation: str, *args) -> List[Event]:
        """Call a repository method, turning a failure into an event."""
        if self.repository is None:
            return []
        try:
            getattr(self.repository, operation)(*args)
        except Exception as e:
            logger.error(f"Persistence call {operation} failed: {e}")
            monitoring.persistence_errors.labels(operation=operation).inc()
            event = PersistenceFailed(operation, str(e))
            self.persistence_errors.append(event)
            return [event]
        return []

    def _save_word(self, word: Word) -> List[Event]:
        return self._persist("save_word", word)

    def _save_progress(self) -> List[Event]:
        return self._persist("save_progress", self.progress)

    def _check_badges(self, perfect_session: bool = False) -> List[Event]:
        return self.progress_service.check_badges(
            word_count=self.words.count(),
            learned_count=self.words.learned_count(),
            perfect_session=perfect_session,
        )

    def add_word(
        self,
        source: str,
        target: str,
        example: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> Tuple[Word, List[Event]]:
        """Create a word, award the new-word bonus and check badges."""
        if not source.strip() or not target.strip():
            raise ValueError("Both the word and its translation are required")
        word = self.words.add(Word.create(source, target, example, tags, now=self.clock()))
        monitoring.words_added.inc()

        events = self._save_word(word)
        events += self.progress_service.gain_xp(settings.progress.new_word_bonus, "new word")
        events += self._check_badges()
        events += self._save_progress()
        return word, events

    def update_word(self, word_id: str, **changes) -> Tuple[Word, List[Event]]:
        """Edit a word's text, example or tags."""
        word = self.words.update(word_id, now=self.clock(), **changes)
        return word, self._save_word(word)

    def delete_word(self, word_id: str) -> List[Event]:
        """Remove a word from the store and the repository."""
        self.words.remove(word_id)
        return self._persist("delete_word", word_id)

    def record_answer(
        self,
        word_id: str,
        correct: bool,
        kind: Optional[ExerciseKind] = None,
    ) -> ReviewOutcome:
        """Schedule the word's next review and update account progress."""
        word = self.words.get(word_id)
        now = self.clock()
        outcome = srs.record_answer(word, correct, now)
        monitoring.answers_recorded.labels(
            kind=kind.value if kind else "unknown",
            result="correct" if correct else "wrong",
        ).inc()

        self.progress_service.touch_streak(now.date())
        if outcome.learned_now:
            monitoring.words_learned.inc()
            logger.info(f"Word {word_id} learned")
            outcome.events += self.progress_service.gain_xp(settings.progress.word_learned_bonus, "word learned")
            outcome.events += self._check_badges()

        outcome.events += self._save_word(word)
        outcome.events += self._save_progress()
        return outcome

    def is_perfect(self, summary: SessionSummary) -> bool:
        """A long enough session without a single wrong answer."""
        return summary.total >= settings.progress.perfect_session_min_items and summary.wrong == 0

    def finish_session(self, summary: SessionSummary) -> Tuple[bool, List[Event]]:
        """Award session XP, count the day and check badges."""
        perfect = self.is_perfect(summary)
        events: List[Event] = []
        if summary.correct > 0:
            events += self.progress_service.gain_xp(
                summary.correct * settings.progress.xp_per_correct,
                f"{summary.correct} correct",
            )
        if perfect:
            events += self.progress_service.gain_xp(settings.progress.perfect_session_bonus, "perfect session")

        self.progress_service.touch_streak(self.clock().date())
        events += self._check_badges(perfect_session=perfect)
        events += self._save_progress()
        return perfect, events
