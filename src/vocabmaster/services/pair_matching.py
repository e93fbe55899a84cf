"""Pair-matching batch: match source terms to their translations."""
import logging
import random
import time
from typing import Callable, List, Optional, Sequence, Set, Tuple

from vocabmaster.config import settings
from vocabmaster.exceptions import SessionStateError
from vocabmaster.models.training_models import PairSelection, PairTile, PairingQuestion
from vocabmaster.models.vocabulary import Word
from vocabmaster.services import answer_evaluator

logger = logging.getLogger(__name__)


class PairMatchBatch:
    """Two independently shuffled columns of up to six words.

    Selecting a source tile makes it the active selection. Selecting a
    target tile while a source is active either matches the pair or
    flashes both tiles as wrong. The caller records the answer reported
    in the returned `PairSelection`.
    """

    def __init__(
        self,
        words: Sequence[Word],
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if not 2 <= len(words) <= settings.learning.pairing_batch_size:
            raise ValueError(
                f"A pairing batch needs between 2 and {settings.learning.pairing_batch_size} words, got {len(words)}"
            )
        rng = rng or random.Random()
        self.words: List[Word] = list(words)
        self._by_id = {word.id: word for word in self.words}
        self.sources: List[Word] = list(words)
        self.targets: List[Word] = list(words)
        rng.shuffle(self.sources)
        rng.shuffle(self.targets)

        self.matched: Set[str] = set()
        self.selected_source: Optional[str] = None
        self.flash: Optional[Tuple[str, str]] = None
        self._clock = clock
        self.started_at = clock()
        self.finished_at: Optional[float] = None

    def __len__(self) -> int:
        return len(self.words)

    @property
    def matched_count(self) -> int:
        return len(self.matched)

    @property
    def is_complete(self) -> bool:
        return self.matched_count == len(self.words)

    @property
    def elapsed(self) -> float:
        """Seconds since the batch started, frozen once it completes."""
        end = self.finished_at if self.finished_at is not None else self._clock()
        return max(0.0, end - self.started_at)

    def _check_tile(self, word_id: str) -> None:
        if word_id not in self._by_id:
            raise SessionStateError(f"Word {word_id} is not part of this batch")
        if self.is_complete:
            raise SessionStateError("Pairing batch is already complete")

    def select_source(self, word_id: str) -> PairSelection:
        """Make a source tile the active selection."""
        self._check_tile(word_id)
        self.flash = None
        if word_id in self.matched:
            return PairSelection(selected_source=self.selected_source)
        self.selected_source = word_id
        return PairSelection(selected_source=word_id)

    def select_target(self, word_id: str) -> PairSelection:
        """Try to match the active source with a target tile."""
        self._check_tile(word_id)
        if self.selected_source is None or word_id in self.matched:
            return PairSelection(selected_source=self.selected_source)

        source_id = self.selected_source
        self.selected_source = None
        if answer_evaluator.check_pair(source_id, word_id):
            self.flash = None
            self.matched.add(word_id)
            complete = self.is_complete
            if complete:
                self.finished_at = self._clock()
                logger.info(f"Pairing batch of {len(self.words)} completed in {self.elapsed:.1f}s")
            return PairSelection(
                word_id=source_id,
                matched=True,
                batch_complete=complete,
                elapsed=self.elapsed if complete else None,
            )

        self.flash = (source_id, word_id)
        return PairSelection(word_id=source_id, wrong=True, flash=self.flash)

    def clear_flash(self) -> None:
        """End the transient wrong-pair highlight."""
        self.flash = None

    def word(self, word_id: str) -> Word:
        return self._by_id[word_id]

    def to_question(self) -> PairingQuestion:
        return PairingQuestion(
            sources=tuple(PairTile(w.id, w.source, w.id in self.matched) for w in self.sources),
            targets=tuple(PairTile(w.id, w.target, w.id in self.matched) for w in self.targets),
        )
