"""In-memory collection of the learner's words."""
import logging
from collections import OrderedDict
from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional

from vocabmaster.exceptions import DuplicateWordError, WordNotFoundError
from vocabmaster.models.vocabulary import Word, normalize_tags, utcnow

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("source", "target", "example", "tags")
REQUIRED_FIELDS = ("source", "target")


def accuracy(word: Word) -> float:
    """Share of correct answers, an unseen word counts as fully correct."""
    stats = word.stats
    return stats.times_correct / stats.times_shown if stats.times_shown else 1.0


# Sort orders of the word list: key function and whether it is descending
SORT_ORDERS = {
    "date-asc": (lambda w: w.created_at, False),
    "date-desc": (lambda w: w.created_at, True),
    "alpha-asc": (lambda w: w.source.casefold(), False),
    "alpha-desc": (lambda w: w.source.casefold(), True),
    "progress-asc": (accuracy, False),
    "progress-desc": (accuracy, True),
}


class WordStore:
    """Ordered store of words keyed by id."""

    def __init__(self, words: Optional[Iterable[Word]] = None):
        self._words: "OrderedDict[str, Word]" = OrderedDict()
        for word in words or []:
            self._words[word.id] = word

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self):
        return iter(self._words.values())

    def __contains__(self, word_id: str) -> bool:
        return word_id in self._words

    def get(self, word_id: str) -> Word:
        """Get a word by its ID."""
        try:
            return self._words[word_id]
        except KeyError:
            raise WordNotFoundError(f"Word {word_id} not found") from None

    def get_by_source(self, source: str) -> Optional[Word]:
        """Get a word by its source text, ignoring case and surrounding spaces."""
        key = source.strip().lower()
        return next((w for w in self._words.values() if w.source.lower() == key), None)

    def all(self) -> List[Word]:
        return list(self._words.values())

    def add(self, word: Word) -> Word:
        """Add a word, refusing a duplicate source term."""
        if self.get_by_source(word.source) is not None:
            raise DuplicateWordError(f"Word '{word.source}' is already in the vocabulary")
        self._words[word.id] = word
        logger.info(f"Added word {word.id} ({word.source})")
        return word

    def update(self, word_id: str, now: Optional[datetime] = None, **changes) -> Word:
        """Update a word's content. Review stats are not editable here."""
        word = self.get(word_id)
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        if "source" in changes:
            duplicate = self.get_by_source(changes["source"])
            if duplicate is not None and duplicate.id != word_id:
                raise DuplicateWordError(f"Word '{changes['source']}' is already in the vocabulary")

        cleaned = {}
        for key, value in changes.items():
            if key == "tags":
                value = normalize_tags(value)
            elif isinstance(value, str):
                value = value.strip()
            if key in REQUIRED_FIELDS and not value:
                raise ValueError(f"The {key} text cannot be empty")
            cleaned[key] = value

        for key, value in cleaned.items():
            setattr(word, key, value)
        word.touch(now)
        return word

    def remove(self, word_id: str) -> Word:
        """Remove a word and return it."""
        word = self.get(word_id)
        del self._words[word_id]
        logger.info(f"Deleted word {word_id}")
        return word

    def clear(self) -> None:
        self._words.clear()

    def count(self) -> int:
        return len(self._words)

    def learned_count(self) -> int:
        return sum(1 for w in self._words.values() if w.stats.learned)

    def due_words(self, now: Optional[datetime] = None) -> List[Word]:
        """Words whose next review is at or before now, most overdue first."""
        now = now or utcnow()
        due = [w for w in self._words.values() if w.stats.is_due(now)]
        return sorted(due, key=lambda w: w.stats.next_review_at)

    def due_count(self, now: Optional[datetime] = None) -> int:
        return len(self.due_words(now))

    def filter(
        self,
        status: str = "all",
        tag: Optional[str] = None,
        query: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> List[Word]:
        """Filter words by learned status, tag and a text query, optionally sorted.

        The query matches the source, the target or any tag. `sort` is one
        of SORT_ORDERS, None keeps the insertion order.
        """
        if sort is not None and sort not in SORT_ORDERS:
            raise ValueError(f"Unknown sort order: {sort}")

        words = self.all()
        if status == "learning":
            words = [w for w in words if not w.stats.learned]
        elif status == "learned":
            words = [w for w in words if w.stats.learned]
        elif status != "all":
            raise ValueError(f"Unknown status filter: {status}")

        if tag:
            tag = tag.lower()
            words = [w for w in words if tag in w.tags]

        if query:
            needle = query.strip().lower()
            words = [
                w for w in words
                if needle in w.source.lower()
                or needle in w.target.lower()
                or any(needle in t for t in w.tags)
            ]

        if sort is not None:
            key, reverse = SORT_ORDERS[sort]
            words = sorted(words, key=key, reverse=reverse)
        return words

    def word_of_the_day(self, day: Optional[date] = None) -> Optional[Word]:
        """Pick the same word for everyone on a given calendar day."""
        if not self._words:
            return None
        day = day or utcnow().date()
        seed = 0
        for char in day.isoformat():
            seed = (seed * 31 + ord(char)) & 0xFFFF
        return self.all()[seed % len(self._words)]

    def added_per_day(self, today: Optional[date] = None, days: int = 7) -> Dict[date, int]:
        """Number of words created on each of the last `days` days, oldest first."""
        today = today or utcnow().date()
        counts = {today - timedelta(days=offset): 0 for offset in range(days - 1, -1, -1)}
        for word in self._words.values():
            created = word.created_at.date()
            if created in counts:
                counts[created] += 1
        return counts
