"""Print the learner's progress report from the configured database."""
import logging

from vocabmaster.config import ensure_directories, settings
from vocabmaster.logging_config import setup_logging
from vocabmaster.models.base import SessionLocal, init_db
from vocabmaster.monitoring import start_monitoring
from vocabmaster.services.learner_state import LearnerState
from vocabmaster.services.report_service import progress_report
from vocabmaster.services.word_repository import SqlWordRepository

logger = logging.getLogger(__name__)


def main() -> None:
    """Load the learner state and print its progress report."""
    ensure_directories()
    setup_logging("Starting VocabMaster ...")

    if settings.monitoring.port is not None:
        start_monitoring(settings.monitoring.port)
        logger.info(f"Metrics available on port {settings.monitoring.port}")

    init_db()
    db = SessionLocal()
    try:
        learner = LearnerState.load(SqlWordRepository(db))
        print(progress_report(learner))
    finally:
        db.close()


if __name__ == "__main__":
    main()
