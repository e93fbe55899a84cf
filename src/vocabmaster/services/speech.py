"""Audio output and speech input collaborators."""
import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from gtts import gTTS

from vocabmaster.config import settings

logger = logging.getLogger(__name__)


class AudioOutput(ABC):
    """Best-effort text-to-speech."""

    available: bool = True

    @abstractmethod
    def speak(self, text: str) -> None:
        """Pronounce the text. Must never raise."""


class SilentAudio(AudioOutput):
    """Used when no audio output is available."""

    available = False

    def speak(self, text: str) -> None:
        logger.debug(f"Audio unavailable, not pronouncing: {text}")


class GttsAudio(AudioOutput):
    """Synthesizes pronunciations with gTTS and hands the file to a player."""

    def __init__(
        self,
        lang: Optional[str] = None,
        player: Optional[Callable[[Path], None]] = None,
        directory: Optional[Path] = None,
    ):
        self.lang = lang or settings.learning.source_lang
        self.player = player
        self.directory = directory or settings.paths.pronunciations_dir

    def pronunciation_file(self, text: str) -> Path:
        """Generate (or reuse) the pronunciation file for the text."""
        path = self.directory / f"{self._sanitize_filename(text)}.mp3"
        if not path.exists():
            self.directory.mkdir(parents=True, exist_ok=True)
            tts = gTTS(text=text, lang=self.lang)
            tts.save(str(path))
            logger.info(f"Pronunciation generated for: {text}, file: {path.name}")
        return path

    def speak(self, text: str) -> None:
        try:
            path = self.pronunciation_file(text)
            if self.player is not None:
                self.player(path)
        except Exception as e:
            logger.error(f"Error pronouncing {text!r}: {e}")

    @staticmethod
    def _sanitize_filename(text: str) -> str:
        """Sanitize text for use in filename."""
        # Replace any non-word characters with underscore
        return re.sub(r"\W", "_", text.strip().lower())


@dataclass(frozen=True)
class Recognition:
    """A speech-recognition result."""
    transcript: str
    confidence: float


class SpeechInput(ABC):
    """Best-effort speech recognition.

    Recognition runs in the embedding layer, which passes the transcript
    to the session as the answer. The core only needs to know whether it
    is available.
    """

    available: bool = True

    @abstractmethod
    def recognize(self) -> Recognition:
        """Capture a single utterance."""


class NoSpeechInput(SpeechInput):
    """Used when speech recognition is unavailable."""

    available = False

    def recognize(self) -> Recognition:
        """Nothing is heard: an empty transcript with no confidence."""
        return Recognition(transcript="", confidence=0.0)
