"""Models for practice sessions, exercise payloads and emitted events."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import ClassVar, FrozenSet, List, Optional, Tuple, Union

from vocabmaster.models.vocabulary import Side, Word


class ExerciseKind(Enum):
    """Available exercise kinds."""
    FLASH = "flash"  # Self-reported recall
    MULTIPLE_CHOICE = "multiple_choice"  # Choose from four options
    TYPED = "typed"  # Type the translation
    DICTATION = "dictation"  # Listen and type the source term
    PAIRING = "pairing"  # Match a batch of source and target terms
    SPEAKING = "speaking"  # Say the source term aloud


class Direction(Enum):
    """Which side of a word is shown as the prompt."""
    SOURCE_TO_TARGET = "source_to_target"
    TARGET_TO_SOURCE = "target_to_source"
    RANDOM = "random"  # Picked per item with 50% probability


class PoolFilter(Enum):
    """Word filters for building a session pool."""
    ALL = "all"
    LEARNING = "learning"  # Excludes learned words
    DUE = "due"
    SHUFFLED = "shuffled"


class SessionState(Enum):
    """Lifecycle states of a practice session."""
    RUNNING = "running"
    AWAITING_ANSWER = "awaiting_answer"
    ADVANCING = "advancing"
    COMPLETE = "complete"


ALL = "all"
CountSpec = Union[int, str]


@dataclass(frozen=True)
class Capabilities:
    """Collaborator features available to the session."""
    audio_output: bool = False
    speech_input: bool = False


@dataclass(frozen=True)
class SessionConfig:
    """Settings a learner picks when starting a session."""
    kinds: FrozenSet[ExerciseKind]
    count: CountSpec = ALL
    pool_filter: PoolFilter = PoolFilter.ALL
    direction: Direction = Direction.RANDOM


@dataclass
class SessionPlan:
    """A frozen pool together with the resolved exercise kinds."""
    config: SessionConfig
    pool: List[Word]
    kinds: Tuple[ExerciseKind, ...]
    direction: Direction


# Question payloads. Each carries only the fields its kind needs.

@dataclass(frozen=True)
class FlashQuestion:
    kind: ClassVar[ExerciseKind] = ExerciseKind.FLASH
    word_id: str
    prompt: str
    answer: str
    prompt_side: Side
    example: str = ""


@dataclass(frozen=True)
class MultipleChoiceQuestion:
    kind: ClassVar[ExerciseKind] = ExerciseKind.MULTIPLE_CHOICE
    word_id: str
    prompt: str
    options: Tuple[str, ...]
    answer: str
    prompt_side: Side


@dataclass(frozen=True)
class TypedQuestion:
    kind: ClassVar[ExerciseKind] = ExerciseKind.TYPED
    word_id: str
    prompt: str
    answer: str
    prompt_side: Side


@dataclass(frozen=True)
class DictationQuestion:
    kind: ClassVar[ExerciseKind] = ExerciseKind.DICTATION
    word_id: str
    answer: str


@dataclass(frozen=True)
class SpeakingQuestion:
    kind: ClassVar[ExerciseKind] = ExerciseKind.SPEAKING
    word_id: str
    prompt: str
    answer: str


@dataclass(frozen=True)
class PairTile:
    """A single tile of a pairing column."""
    word_id: str
    text: str
    matched: bool = False


@dataclass(frozen=True)
class PairingQuestion:
    kind: ClassVar[ExerciseKind] = ExerciseKind.PAIRING
    sources: Tuple[PairTile, ...]
    targets: Tuple[PairTile, ...]


Question = Union[
    FlashQuestion,
    MultipleChoiceQuestion,
    TypedQuestion,
    DictationQuestion,
    SpeakingQuestion,
    PairingQuestion,
]


# Events emitted to the presentation layer.

@dataclass(frozen=True)
class WordLearned:
    word_id: str


@dataclass(frozen=True)
class XpGained:
    amount: int
    reason: str


@dataclass(frozen=True)
class LevelUp:
    level: int


@dataclass(frozen=True)
class BadgeUnlocked:
    badge_id: str
    name: str
    icon: str


@dataclass(frozen=True)
class PersistenceFailed:
    operation: str
    message: str


Event = Union[WordLearned, XpGained, LevelUp, BadgeUnlocked, PersistenceFailed]


@dataclass
class ReviewOutcome:
    """Result of recording one answer for one word."""
    word_id: str
    correct: bool
    interval_days: int
    ease_factor: float
    next_review_at: datetime
    learned_now: bool = False
    events: List[Event] = field(default_factory=list)


@dataclass
class AnswerResult:
    """Feedback for a submitted answer."""
    word_id: str
    correct: bool
    expected: str
    events: List[Event] = field(default_factory=list)


@dataclass
class PairSelection:
    """Feedback for a pairing tile selection."""
    word_id: Optional[str] = None  # word whose answer was recorded
    matched: bool = False
    wrong: bool = False
    selected_source: Optional[str] = None
    flash: Optional[Tuple[str, str]] = None
    batch_complete: bool = False
    elapsed: Optional[float] = None
    events: List[Event] = field(default_factory=list)


@dataclass
class SessionSummary:
    """Score of a finished session."""
    correct: int
    wrong: int
    percentage: int
    correct_words: List[Word]
    wrong_words: List[Word]

    @property
    def total(self) -> int:
        return self.correct + self.wrong


@dataclass
class SessionReport:
    """Session summary together with the progress events it triggered."""
    summary: SessionSummary
    perfect: bool
    events: List[Event] = field(default_factory=list)
