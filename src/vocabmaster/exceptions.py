"""Exceptions raised by the trainer core."""


class VocabError(Exception):
    """Base class for trainer errors."""


class ConfigurationError(VocabError):
    """No usable exercise type remains after capability filtering."""


class EmptyPoolError(VocabError):
    """No words match the requested session filter."""


class InsufficientDistractorsError(VocabError):
    """Not enough distinct words to build a multiple-choice question."""


class DuplicateWordError(VocabError):
    """A word with the same source term already exists."""


class WordNotFoundError(VocabError, KeyError):
    """No word with the given id exists in the store."""

    def __str__(self) -> str:
        return Exception.__str__(self)


class SessionStateError(VocabError):
    """The operation is not allowed in the session's current state."""
