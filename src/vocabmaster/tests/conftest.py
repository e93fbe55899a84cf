"""Test configuration."""
import os
import random
import tempfile
from datetime import UTC, datetime
from pathlib import Path
from typing import Generator, List

import pytest
from dotenv import load_dotenv
from faker import Faker
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment before any imports
os.environ["ENV"] = "test"
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="vocabmaster-test-"))
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

# Load test environment variables
test_env_path = Path(__file__).parent.parent.parent.parent / ".env.test"
load_dotenv(test_env_path)

# Import after environment setup
from vocabmaster.config import ensure_directories
from vocabmaster.models.base import init_db
from vocabmaster.models.vocabulary import Word

fake = Faker()

NOW = datetime(2024, 3, 15, 9, 30, tzinfo=UTC)

ANIMALS = [
    ("cat", "кот"),
    ("dog", "собака"),
    ("bird", "птица"),
    ("fish", "рыба"),
]


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Set up test environment before each test."""
    # Ensure test directories exist
    ensure_directories()
    yield


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create a fresh in-memory database session for each test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    db = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(42)


@pytest.fixture
def animals(now: datetime) -> List[Word]:
    """The four-word vocabulary used by the session scenarios."""
    return [Word.create(source, target, now=now) for source, target in ANIMALS]


@pytest.fixture
def make_word(now: datetime):
    """Factory for words with random but distinct text."""
    used = set()

    def _make_word(**kwargs) -> Word:
        source = kwargs.pop("source", None)
        while source is None:
            candidate = f"{fake.word()}-{fake.random_int(1, 99999)}"
            if candidate not in used:
                source = candidate
        used.add(source)
        target = kwargs.pop("target", None) or f"{fake.word()}-{fake.random_int(1, 99999)}"
        return Word.create(source, target, now=kwargs.pop("now", now), **kwargs)

    return _make_word
