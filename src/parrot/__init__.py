"""
Parrot Chat Engine

A small conversational engine that learns sentences from the lines it is
shown and answers new lines by splicing two learned sentences together
around a word they share with the input.

The package is split into:
- Tokenization (sentences and words)
- The Dictionary: learned sentences plus a word -> sentence index
- Response generation with an injectable random source
- JSON persistence of the dictionary
- The Engine that front-ends (CLI, Flask) talk to

Example Usage:
    from parrot import Engine

    eng = Engine()
    eng.load("dictionary.json")
    eng.learn("Crabs are great. Everyone likes crabs!")
    print(eng.respond_to("tell me about crabs"))
    eng.shutdown()
"""

# src/parrot/__init__.py
from .dictionary import Dictionary  # re-export
from .engine import Engine
from .errors import (
    DictionaryError,
    DictionaryIOError,
    DictionaryFormatError,
    DictionarySerializationError,
    IndexConsistencyError,
)
from .rng import RandomSource, SystemRandomSource, StepRandomSource

__version__ = "1.0.0"
__all__ = [
    "Dictionary",
    "Engine",
    "DictionaryError",
    "DictionaryIOError",
    "DictionaryFormatError",
    "DictionarySerializationError",
    "IndexConsistencyError",
    "RandomSource",
    "SystemRandomSource",
    "StepRandomSource",
]
