"""Exercise kinds: question construction and answer checks."""
import logging
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Iterable, List, Type, Union, final

from vocabmaster.config import settings
from vocabmaster.exceptions import InsufficientDistractorsError
from vocabmaster.models.training_models import (
    Capabilities,
    DictationQuestion,
    Direction,
    ExerciseKind,
    FlashQuestion,
    MultipleChoiceQuestion,
    Question,
    SpeakingQuestion,
    TypedQuestion,
)
from vocabmaster.models.vocabulary import Side, Word
from vocabmaster.services import answer_evaluator
from vocabmaster.services.speech import AudioOutput

logger = logging.getLogger(__name__)

Answer = Union[bool, str]


def get_all_subclasses(cls):
    """Get all subclasses of a class."""
    all_subclasses = []
    for subclass in cls.__subclasses__():
        all_subclasses.append(subclass)
        all_subclasses.extend(get_all_subclasses(subclass))
    return all_subclasses


@dataclass
class ExerciseContext:
    """What an exercise needs besides the word itself."""
    all_words: Iterable[Word]
    direction: Direction
    rng: random.Random
    audio: AudioOutput
    auto_pronounce: bool = False


class BaseExercise(ABC):
    """Base class for the single-word exercise kinds."""

    kind: ExerciseKind
    requires_audio: bool = False
    requires_speech: bool = False

    @final
    def __init__(self, context: ExerciseContext):
        self.context = context

    @abstractmethod
    def _create_question(self, word: Word) -> Question:
        """Build the question payload. Must be implemented by subclasses."""
        raise NotImplementedError("Subclasses must implement this method")

    @abstractmethod
    def evaluate(self, question: Question, answer: Answer) -> bool:
        """Decide whether the answer is correct."""
        raise NotImplementedError("Subclasses must implement this method")

    @classmethod
    def is_supported(cls, capabilities: Capabilities) -> bool:
        """Whether the collaborators this kind needs are available."""
        if cls.requires_audio and not capabilities.audio_output:
            return False
        if cls.requires_speech and not capabilities.speech_input:
            return False
        return True

    @final
    def create_question(self, word: Word) -> Question:
        """Create a question for the word, pronouncing it when configured."""
        question = self._create_question(word)
        logger.debug(f"{type(self).__name__}: created question for word {word.id}")
        if self.context.auto_pronounce and getattr(question, "prompt_side", None) is Side.SOURCE:
            self.context.audio.speak(word.source)
        return question

    @final
    def prompt_side(self) -> Side:
        """Side shown as the prompt, following the session direction."""
        direction = self.context.direction
        if direction is Direction.SOURCE_TO_TARGET:
            return Side.SOURCE
        if direction is Direction.TARGET_TO_SOURCE:
            return Side.TARGET
        return Side.TARGET if self.context.rng.random() < 0.5 else Side.SOURCE


class FlashExercise(BaseExercise):
    """Show one side, the learner reports whether they knew the other."""
    kind = ExerciseKind.FLASH

    def _create_question(self, word: Word) -> FlashQuestion:
        side = self.prompt_side()
        return FlashQuestion(
            word_id=word.id,
            prompt=word.text(side),
            answer=word.text(side.opposite),
            prompt_side=side,
            example=word.example,
        )

    def evaluate(self, question: FlashQuestion, answer: Answer) -> bool:
        return answer_evaluator.check_self_report(answer)


class MultipleChoiceExercise(BaseExercise):
    """Choose the translation among four options."""
    kind = ExerciseKind.MULTIPLE_CHOICE

    def _distractors(self, word: Word, side: Side, count: int) -> List[str]:
        correct = word.text(side)
        candidates: List[str] = []
        for other in self.context.all_words:
            text = other.text(side)
            if other.id != word.id and text != correct and text not in candidates:
                candidates.append(text)
        if len(candidates) < count:
            raise InsufficientDistractorsError(
                f"Only {len(candidates)} distractors available for word {word.id}, need {count}"
            )
        return self.context.rng.sample(candidates, count)

    def _create_question(self, word: Word) -> MultipleChoiceQuestion:
        side = self.prompt_side()
        answer_side = side.opposite
        answer = word.text(answer_side)
        options = self._distractors(word, answer_side, settings.learning.choice_options - 1)
        options.append(answer)
        self.context.rng.shuffle(options)
        return MultipleChoiceQuestion(
            word_id=word.id,
            prompt=word.text(side),
            options=tuple(options),
            answer=answer,
            prompt_side=side,
        )

    def evaluate(self, question: MultipleChoiceQuestion, answer: Answer) -> bool:
        return answer_evaluator.check_choice(answer, question.answer)


class TypedExercise(BaseExercise):
    """Type the opposite side."""
    kind = ExerciseKind.TYPED

    def _create_question(self, word: Word) -> TypedQuestion:
        side = self.prompt_side()
        return TypedQuestion(
            word_id=word.id,
            prompt=word.text(side),
            answer=word.text(side.opposite),
            prompt_side=side,
        )

    def evaluate(self, question: TypedQuestion, answer: Answer) -> bool:
        return answer_evaluator.check_typed(str(answer), question.answer)


class DictationExercise(BaseExercise):
    """Listen to the source term and type it."""
    kind = ExerciseKind.DICTATION
    requires_audio = True

    def _create_question(self, word: Word) -> DictationQuestion:
        self.context.audio.speak(word.source)
        return DictationQuestion(word_id=word.id, answer=word.source)

    def evaluate(self, question: DictationQuestion, answer: Answer) -> bool:
        return answer_evaluator.check_typed(str(answer), question.answer)


class SpeakingExercise(BaseExercise):
    """See the translation, say the source term aloud."""
    kind = ExerciseKind.SPEAKING
    requires_speech = True

    def _create_question(self, word: Word) -> SpeakingQuestion:
        return SpeakingQuestion(word_id=word.id, prompt=word.target, answer=word.source)

    def evaluate(self, question: SpeakingQuestion, answer: Answer) -> bool:
        return answer_evaluator.check_similarity(str(answer), question.answer)


def exercise_registry() -> Dict[ExerciseKind, Type[BaseExercise]]:
    """Map every single-word exercise kind to its class."""
    return {cls.kind: cls for cls in get_all_subclasses(BaseExercise)}
