"""Correctness checks for the different answer types.

Typed and multiple-choice answers are always judged by exact equality.
The fuzzy policy (`check_similarity`) exists only for transcripts coming
from speech recognition and must not be used for typed input.
"""
import logging
import re
from typing import Optional

from vocabmaster.config import settings

logger = logging.getLogger(__name__)

# Articles and prepositions ignored when comparing spoken answers
FILLER_WORDS = frozenset({
    "a", "an", "the",
    "to", "of", "in", "on", "at", "for", "with", "by", "from",
})

PUNCTUATION = re.compile(r"[^\w\s'-]")


def normalize_typed(text: str) -> str:
    """Trim surrounding whitespace and lowercase."""
    return (text or "").strip().lower()


def check_typed(answer: str, expected: str) -> bool:
    """Case-insensitive, whitespace-trimmed exact match."""
    return normalize_typed(answer) == normalize_typed(expected)


def check_choice(selected: str, expected: str) -> bool:
    """The selected option must be the correct one."""
    return selected == expected


def check_self_report(knew_it: bool) -> bool:
    """Flash cards trust the learner."""
    return bool(knew_it)


def check_pair(source_word_id: str, target_word_id: str) -> bool:
    """Two pairing tiles match when they belong to the same word."""
    return source_word_id == target_word_id


def clean_spoken(text: str) -> str:
    """Lowercase, drop punctuation and filler words, collapse whitespace."""
    tokens = PUNCTUATION.sub(" ", (text or "").lower()).split()
    return " ".join(token for token in tokens if token not in FILLER_WORDS)


def levenshtein_distance(s1: str, s2: str) -> int:
    """Calculate Levenshtein distance between two strings."""
    if len(s1) < len(s2):
        return levenshtein_distance(s2, s1)

    if len(s2) == 0:
        return len(s1)

    previous_row = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1):
        current_row = [i + 1]
        for j, c2 in enumerate(s2):
            insertions = previous_row[j + 1] + 1
            deletions = current_row[j] + 1
            substitutions = previous_row[j] + (c1 != c2)
            current_row.append(min(insertions, deletions, substitutions))
        previous_row = current_row

    return previous_row[-1]


def similarity(a: str, b: str) -> float:
    """Normalized edit similarity in [0, 1]."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1 - levenshtein_distance(a, b) / longest


def check_similarity(spoken: str, expected: str, threshold: Optional[float] = None) -> bool:
    """Fuzzy match for speech transcripts."""
    if threshold is None:
        threshold = settings.learning.similarity_threshold

    a = clean_spoken(spoken)
    b = clean_spoken(expected)
    if not a or not b:
        return a == b
    if a == b:
        return True
    if a in b or b in a:
        return True

    score = similarity(a, b)
    logger.debug(f"Similarity between {a!r} and {b!r}: {score:.2f}")
    return score > threshold
