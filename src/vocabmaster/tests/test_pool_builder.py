"""Tests for session pool building."""
import random
from datetime import datetime, timedelta
from typing import List

import pytest

from vocabmaster.exceptions import ConfigurationError, EmptyPoolError
from vocabmaster.models.training_models import (
    ALL,
    Capabilities,
    Direction,
    ExerciseKind,
    PoolFilter,
    SessionConfig,
)
from vocabmaster.models.vocabulary import Word
from vocabmaster.services.pool_builder import build_pool, filter_words, resolve_count, resolve_kinds

NO_COLLABORATORS = Capabilities()
ALL_COLLABORATORS = Capabilities(audio_output=True, speech_input=True)


@pytest.fixture
def ten_words(make_word, now: datetime) -> List[Word]:
    """Ten words of which the first four are due."""
    words = [make_word() for _ in range(10)]
    for index, word in enumerate(words):
        if index < 4:
            word.stats.next_review_at = now - timedelta(hours=index)
        else:
            word.stats.next_review_at = now + timedelta(days=index)
    return words


def test_due_filter_selects_due_words(ten_words: List[Word], now: datetime, rng: random.Random) -> None:
    """Test that a due-only pool with count 'all' holds exactly the due words."""
    config = SessionConfig(kinds=frozenset({ExerciseKind.FLASH}), count=ALL, pool_filter=PoolFilter.DUE)
    plan = build_pool(ten_words, config, NO_COLLABORATORS, rng=rng, now=now)

    assert len(plan.pool) == 4
    assert {w.id for w in plan.pool} == {w.id for w in ten_words[:4]}


def test_learning_filter_excludes_learned(ten_words: List[Word]) -> None:
    ten_words[0].stats.learned = True
    ten_words[5].stats.learned = True
    pool = filter_words(ten_words, PoolFilter.LEARNING)
    assert len(pool) == 8
    assert ten_words[0] not in pool


def test_count_truncates_pool(ten_words: List[Word], rng: random.Random) -> None:
    config = SessionConfig(kinds=frozenset({ExerciseKind.FLASH}), count=3, pool_filter=PoolFilter.SHUFFLED)
    plan = build_pool(ten_words, config, NO_COLLABORATORS, rng=rng)
    assert len(plan.pool) == 3
    assert len({w.id for w in plan.pool}) == 3


def test_count_larger_than_pool(ten_words: List[Word], rng: random.Random) -> None:
    config = SessionConfig(kinds=frozenset({ExerciseKind.FLASH}), count=25)
    plan = build_pool(ten_words, config, NO_COLLABORATORS, rng=rng)
    assert len(plan.pool) == 10


def test_pool_does_not_modify_input(ten_words: List[Word], rng: random.Random) -> None:
    original = list(ten_words)
    build_pool(ten_words, SessionConfig(kinds=frozenset({ExerciseKind.TYPED})), NO_COLLABORATORS, rng=rng)
    assert ten_words == original


@pytest.mark.parametrize("count", [0, -1, "some", 2.5, True])
def test_invalid_count(count) -> None:
    with pytest.raises(ValueError):
        resolve_count(count, 10)


def test_empty_pool(ten_words: List[Word], now: datetime) -> None:
    """Test that an empty filter result is reported, not silently accepted."""
    for word in ten_words:
        word.stats.next_review_at = now + timedelta(days=1)
    config = SessionConfig(kinds=frozenset({ExerciseKind.FLASH}), pool_filter=PoolFilter.DUE)
    with pytest.raises(EmptyPoolError, match="No eligible words"):
        build_pool(ten_words, config, NO_COLLABORATORS, now=now)


def test_empty_vocabulary() -> None:
    with pytest.raises(EmptyPoolError):
        build_pool([], SessionConfig(kinds=frozenset({ExerciseKind.FLASH})), NO_COLLABORATORS)


def test_kinds_without_collaborators_are_dropped() -> None:
    """Test that dictation needs audio and speaking needs speech input."""
    kinds = {ExerciseKind.DICTATION, ExerciseKind.SPEAKING, ExerciseKind.TYPED, ExerciseKind.PAIRING}
    assert resolve_kinds(kinds, NO_COLLABORATORS) == (ExerciseKind.TYPED, ExerciseKind.PAIRING)
    assert resolve_kinds(kinds, ALL_COLLABORATORS) == (
        ExerciseKind.TYPED,
        ExerciseKind.DICTATION,
        ExerciseKind.PAIRING,
        ExerciseKind.SPEAKING,
    )


def test_no_usable_kind(ten_words: List[Word]) -> None:
    config = SessionConfig(kinds=frozenset({ExerciseKind.DICTATION}))
    with pytest.raises(ConfigurationError, match="No usable exercise type"):
        build_pool(ten_words, config, NO_COLLABORATORS)
    with pytest.raises(ConfigurationError):
        resolve_kinds(set(), ALL_COLLABORATORS)


def test_plan_keeps_direction(ten_words: List[Word], rng: random.Random) -> None:
    config = SessionConfig(kinds=frozenset({ExerciseKind.FLASH}), direction=Direction.TARGET_TO_SOURCE)
    plan = build_pool(ten_words, config, NO_COLLABORATORS, rng=rng)
    assert plan.direction is Direction.TARGET_TO_SOURCE
    assert plan.config is config
