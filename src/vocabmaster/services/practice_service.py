"""Service for starting, finishing and repeating practice sessions."""
import logging
import random
import time
from typing import Callable, Optional

from vocabmaster import monitoring
from vocabmaster.exceptions import SessionStateError
from vocabmaster.models.training_models import Capabilities, SessionConfig, SessionReport
from vocabmaster.services.learner_state import LearnerState
from vocabmaster.services.pool_builder import build_pool
from vocabmaster.services.practice_session import PracticeSession
from vocabmaster.services.speech import AudioOutput, NoSpeechInput, SilentAudio, SpeechInput

logger = logging.getLogger(__name__)


class PracticeService:
    """Entry point for practice sessions of one learner."""

    def __init__(
        self,
        learner: LearnerState,
        audio: Optional[AudioOutput] = None,
        speech: Optional[SpeechInput] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.monotonic,
        auto_pronounce: Optional[bool] = None,
    ):
        """Initialize the service with the learner state and collaborators."""
        self.learner = learner
        self.audio = audio or SilentAudio()
        self.speech = speech or NoSpeechInput()
        self.rng = rng or random.Random()
        self.clock = clock
        self.auto_pronounce = auto_pronounce
        self.last_config: Optional[SessionConfig] = None

    @property
    def capabilities(self) -> Capabilities:
        return Capabilities(audio_output=self.audio.available, speech_input=self.speech.available)

    def start_session(self, config: SessionConfig) -> PracticeSession:
        """Build a pool and start a session.

        Raises ConfigurationError or EmptyPoolError when no session can be
        started with this configuration.
        """
        plan = build_pool(
            self.learner.words.all(),
            config,
            self.capabilities,
            rng=self.rng,
            now=self.learner.clock(),
        )
        self.last_config = config
        monitoring.practice_sessions.labels(stage="started").inc()
        logger.info(f"Starting session with {len(plan.pool)} words")
        return PracticeSession(
            plan,
            self.learner,
            rng=self.rng,
            audio=self.audio,
            auto_pronounce=self.auto_pronounce,
            clock=self.clock,
        )

    def finish_session(self, session: PracticeSession) -> SessionReport:
        """Produce the summary of a complete session and award its progress."""
        if not session.is_complete:
            raise SessionStateError("Session is not complete yet")
        if session.reported:
            raise SessionStateError("Session summary was already produced")

        summary = session.summary()
        perfect, events = self.learner.finish_session(summary)
        session.reported = True

        monitoring.practice_sessions.labels(stage="completed").inc()
        monitoring.session_duration.observe(session.elapsed)
        logger.info(f"Session finished: {summary.correct}/{summary.total} ({summary.percentage}%)")
        return SessionReport(summary=summary, perfect=perfect, events=events)

    def repeat_session(self, session: PracticeSession) -> PracticeSession:
        """Start a fresh session with the same configuration."""
        return self.start_session(session.config)
