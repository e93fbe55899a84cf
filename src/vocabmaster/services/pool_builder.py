"""Selection of the words for a practice session."""
import logging
import random
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from vocabmaster.exceptions import ConfigurationError, EmptyPoolError
from vocabmaster.models.training_models import (
    ALL,
    Capabilities,
    CountSpec,
    ExerciseKind,
    PoolFilter,
    SessionConfig,
    SessionPlan,
)
from vocabmaster.models.vocabulary import Word, utcnow
from vocabmaster.services.training_methods import exercise_registry

logger = logging.getLogger(__name__)

# Stable order so that a seeded random source always picks the same kind
KIND_ORDER = list(ExerciseKind)


def resolve_kinds(kinds: Iterable[ExerciseKind], capabilities: Capabilities) -> Tuple[ExerciseKind, ...]:
    """Drop kinds whose collaborator is unavailable."""
    requested = set(kinds)
    registry = exercise_registry()
    usable = []
    for kind in KIND_ORDER:
        if kind not in requested:
            continue
        exercise_class = registry.get(kind)
        if exercise_class is not None and not exercise_class.is_supported(capabilities):
            logger.info(f"Exercise kind {kind.value} disabled: collaborator not available")
            continue
        usable.append(kind)
    if not usable:
        raise ConfigurationError("No usable exercise type")
    return tuple(usable)


def filter_words(words: Iterable[Word], pool_filter: PoolFilter, now: Optional[datetime] = None) -> List[Word]:
    """Apply a pool filter."""
    words = list(words)
    if pool_filter is PoolFilter.LEARNING:
        return [w for w in words if not w.stats.learned]
    if pool_filter is PoolFilter.DUE:
        now = now or utcnow()
        return [w for w in words if w.stats.is_due(now)]
    return words


def resolve_count(count: CountSpec, pool_size: int) -> int:
    """Number of words to take from a pool of `pool_size`."""
    if count == ALL:
        return pool_size
    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        raise ValueError(f"Word count must be 'all' or a positive integer, got {count!r}")
    return min(count, pool_size)


def build_pool(
    words: Iterable[Word],
    config: SessionConfig,
    capabilities: Capabilities,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> SessionPlan:
    """Filter, shuffle and truncate the words for a new session."""
    rng = rng or random.Random()
    kinds = resolve_kinds(config.kinds, capabilities)

    pool = filter_words(words, config.pool_filter, now)
    if not pool:
        raise EmptyPoolError("No eligible words")

    rng.shuffle(pool)
    pool = pool[:resolve_count(config.count, len(pool))]

    logger.info(
        f"Built pool of {len(pool)} words (filter={config.pool_filter.value}, "
        f"kinds={[k.value for k in kinds]}, direction={config.direction.value})"
    )
    return SessionPlan(config=config, pool=pool, kinds=kinds, direction=config.direction)
