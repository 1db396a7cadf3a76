# parrot/errors.py
from __future__ import annotations


class DictionaryError(Exception):
    """Base class for everything the knowledge store raises."""


class DictionaryIOError(DictionaryError):
    """Reading or writing the dictionary file failed (original OSError in __cause__)."""

    def __init__(self, path: str, action: str) -> None:
        super().__init__(f"could not {action} dictionary at {path}")
        self.path = path
        self.action = action


class DictionaryFormatError(DictionaryError, ValueError):
    """The persisted dictionary is not valid JSON or has the wrong shape."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"malformed dictionary {path}: {reason}")
        self.path = path
        self.reason = reason


class IndexConsistencyError(DictionaryError, RuntimeError):
    """The word index points at a sentence that does not contain the word."""


class DictionarySerializationError(DictionaryError, ValueError):
    """The in-memory dictionary could not be encoded as JSON text."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"could not serialize dictionary to {path}: {reason}")
        self.path = path
        self.reason = reason
