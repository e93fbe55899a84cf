"""Practice session: walks the pool one exercise at a time."""
import logging
import math
import random
import time
from collections import OrderedDict
from typing import Callable, Dict, List, Optional

from vocabmaster import monitoring
from vocabmaster.config import settings
from vocabmaster.exceptions import InsufficientDistractorsError, SessionStateError, WordNotFoundError
from vocabmaster.models.training_models import (
    AnswerResult,
    Event,
    ExerciseKind,
    PairSelection,
    Question,
    SessionPlan,
    SessionState,
    SessionSummary,
)
from vocabmaster.models.vocabulary import Word
from vocabmaster.services.learner_state import LearnerState
from vocabmaster.services.pair_matching import PairMatchBatch
from vocabmaster.services.speech import AudioOutput, SilentAudio
from vocabmaster.services.training_methods import (
    Answer,
    BaseExercise,
    ExerciseContext,
    exercise_registry,
)

logger = logging.getLogger(__name__)


def percentage(part: int, total: int) -> int:
    """Whole percent, halves rounded up."""
    if not total:
        return 0
    return math.floor(part * 100 / total + 0.5)


class PracticeSession:
    """State machine over a frozen pool of words.

    RUNNING -> (AWAITING_ANSWER <-> ADVANCING) -> COMPLETE. Call
    `next_question()` to present the exercise at the cursor, then either
    `submit_answer()` or, for a pairing batch, `select_source()` and
    `select_target()` until the batch is matched.
    """

    def __init__(
        self,
        plan: SessionPlan,
        learner: LearnerState,
        rng: Optional[random.Random] = None,
        audio: Optional[AudioOutput] = None,
        auto_pronounce: Optional[bool] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.plan = plan
        self.config = plan.config
        self.pool: List[Word] = list(plan.pool)
        self.kinds = plan.kinds
        self.learner = learner
        self.rng = rng or random.Random()
        self.audio = audio or SilentAudio()
        if auto_pronounce is None:
            auto_pronounce = settings.learning.auto_pronounce
        self.context = ExerciseContext(
            all_words=learner.words,
            direction=plan.direction,
            rng=self.rng,
            audio=self.audio,
            auto_pronounce=auto_pronounce and self.audio.available,
        )
        self._registry = exercise_registry()
        self._clock = clock

        self.state = SessionState.RUNNING
        self.cursor = 0
        self.question: Optional[Question] = None
        self.exercise: Optional[BaseExercise] = None
        self.batch: Optional[PairMatchBatch] = None
        self._correct: Dict[str, Word] = OrderedDict()
        self._wrong: Dict[str, Word] = OrderedDict()
        self.started_at = clock()
        self.finished_at: Optional[float] = None
        self.reported = False

    def __len__(self) -> int:
        return len(self.pool)

    @property
    def is_complete(self) -> bool:
        return self.state is SessionState.COMPLETE

    @property
    def progress(self) -> float:
        """Fraction of the pool already answered."""
        return min(1.0, self.cursor / len(self.pool)) if self.pool else 1.0

    @property
    def elapsed(self) -> float:
        end = self.finished_at if self.finished_at is not None else self._clock()
        return end - self.started_at

    def next_question(self) -> Optional[Question]:
        """Present the exercise at the cursor, or None once the session is complete."""
        if self.state is SessionState.COMPLETE:
            return None
        if self.state is SessionState.AWAITING_ANSWER:
            return self.question
        if self.cursor >= len(self.pool):
            self._complete()
            return None

        kind = self.rng.choice(self.kinds)
        if kind is ExerciseKind.PAIRING:
            size = min(settings.learning.pairing_batch_size, len(self.pool) - self.cursor)
            if size >= 2:
                self.batch = PairMatchBatch(self.pool[self.cursor:self.cursor + size], self.rng, self._clock)
                self.question = self.batch.to_question()
                self.state = SessionState.AWAITING_ANSWER
                logger.debug(f"Pairing batch of {size} words at position {self.cursor}")
                return self.question
            logger.debug("Fewer than two words left for pairing, falling back to flash card")
            kind = ExerciseKind.FLASH

        self.exercise, self.question = self._create_exercise(kind, self.pool[self.cursor])
        self.state = SessionState.AWAITING_ANSWER
        return self.question

    def _fallback_kinds(self, kind: ExerciseKind) -> List[ExerciseKind]:
        others = [k for k in self.kinds if k not in (kind, ExerciseKind.PAIRING, ExerciseKind.FLASH)]
        self.rng.shuffle(others)
        return [kind] + others + [ExerciseKind.FLASH]

    def _create_exercise(self, kind: ExerciseKind, word: Word):
        for candidate in self._fallback_kinds(kind):
            exercise = self._registry[candidate](self.context)
            try:
                question = exercise.create_question(word)
            except InsufficientDistractorsError as e:
                logger.debug(f"{candidate.value} unavailable for word {word.id}: {e}")
                continue
            if candidate is not kind:
                logger.debug(f"Substituted {candidate.value} for {kind.value} on word {word.id}")
            return exercise, question
        raise AssertionError("Flash cards can always be built")

    def submit_answer(self, answer: Answer) -> AnswerResult:
        """Check the answer to the current single-word exercise and advance."""
        if self.state is not SessionState.AWAITING_ANSWER or self.exercise is None:
            raise SessionStateError(f"No single-word exercise is awaiting an answer (state: {self.state.value})")

        word = self.pool[self.cursor]
        question = self.question
        correct = self.exercise.evaluate(question, answer)
        events = self._record(word, correct, self.exercise.kind)
        self._advance(1)
        return AnswerResult(word_id=word.id, correct=correct, expected=question.answer, events=events)

    def _require_batch(self) -> PairMatchBatch:
        if self.state is not SessionState.AWAITING_ANSWER or self.batch is None:
            raise SessionStateError("No pairing batch is active")
        return self.batch

    def select_source(self, word_id: str) -> PairSelection:
        """Select a source tile of the active pairing batch."""
        selection = self._require_batch().select_source(word_id)
        self.question = self.batch.to_question()
        return selection

    def select_target(self, word_id: str) -> PairSelection:
        """Select a target tile; records an answer when a source was active."""
        batch = self._require_batch()
        selection = batch.select_target(word_id)
        if selection.word_id is not None:
            selection.events = self._record(batch.word(selection.word_id), selection.matched, ExerciseKind.PAIRING)

        if selection.batch_complete:
            monitoring.pairing_duration.observe(selection.elapsed)
            self._advance(len(batch))
        else:
            self.question = batch.to_question()
        return selection

    def clear_flash(self) -> None:
        """End the wrong-pair highlight of the active batch, if any."""
        if self.batch is not None:
            self.batch.clear_flash()

    def _record(self, word: Word, correct: bool, kind: ExerciseKind) -> List[Event]:
        self._correct.pop(word.id, None)
        self._wrong.pop(word.id, None)
        (self._correct if correct else self._wrong)[word.id] = word
        try:
            return self.learner.record_answer(word.id, correct, kind).events
        except WordNotFoundError:
            logger.warning(f"Word {word.id} was deleted during the session, answer not scheduled")
            return []

    def _advance(self, step: int) -> None:
        self.state = SessionState.ADVANCING
        self.cursor += step
        self.question = None
        self.exercise = None
        self.batch = None
        if self.cursor >= len(self.pool):
            self._complete()

    def _complete(self) -> None:
        if self.state is SessionState.COMPLETE:
            return
        self.state = SessionState.COMPLETE
        self.finished_at = self._clock()
        logger.info(f"Session complete: {len(self._correct)} correct, {len(self._wrong)} wrong")

    def summary(self) -> SessionSummary:
        """Score of the session; each word counts once, by its last attempt."""
        correct = list(self._correct.values())
        wrong = list(self._wrong.values())
        return SessionSummary(
            correct=len(correct),
            wrong=len(wrong),
            percentage=percentage(len(correct), len(correct) + len(wrong)),
            correct_words=correct,
            wrong_words=wrong,
        )
