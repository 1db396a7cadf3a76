"""
Knowledge store for the chat engine.

The dictionary keeps every sentence it has learned (lowercased, punctuation
kept) in an ordered list, plus an inverted index mapping each word to the
positions of the sentences that contain it. Responses are built by picking
a word shared between the input and the index (the "pivot") and splicing
the left half of one sentence onto the right half of another.
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, TypeVar

from .config import VERBOSE_ENV
from .errors import IndexConsistencyError
from .rng import RandomSource
from .tokenize import split_sentences, split_words
from .DB import storage

Indices = Dict[str, List[int]]
T = TypeVar("T")

log = logging.getLogger(__name__)


def _verbose() -> bool:
    # read on each call: Engine.load(verbose=True) sets it after import
    return os.environ.get(VERBOSE_ENV) == "1"


@dataclass
class Dictionary:
    """
    Sentences plus word -> sentence-position index.

    Attributes
    ----------
    sentences : List[str]
        Learned sentences in insertion order (or sorted, after a rebuild).
        A sentence is addressed by its position in this list.
    indices : Dict[str, List[int]]
        For each lowercase word, the positions of the sentences containing
        it. Each position appears once per word, in insertion order.
        Either empty or consistent with `sentences`.
    """
    sentences: List[str] = field(default_factory=list)
    indices: Indices = field(default_factory=dict)

    # ---- Persistence ----
    @classmethod
    def new_empty(cls) -> "Dictionary":
        return cls(sentences=[], indices={})

    @classmethod
    def load(cls, path: str) -> "Dictionary":
        """
        Load a dictionary from `path`.
        If there is no file there, an empty dictionary is created, written
        to `path` and returned.
        """
        if not os.path.isfile(path):
            log.info("No dictionary at %s, creating an empty one", path)
            d = cls.new_empty()
            d.write_to_disk(path)
            return d
        return storage.load_dictionary(path)

    def write_to_disk(self, path: str) -> None:
        storage.save_dictionary(self, path)

    # ---- Index maintenance ----
    def needs_index_rebuild(self) -> bool:
        """True when there are sentences but no index (e.g. an old file)."""
        return bool(self.sentences) and not self.indices

    def rebuild_indices(self) -> None:
        """
        Recompute the whole index.

        Sentences are sorted first (case-insensitive, stable), so positions
        change: do not hold on to positions across a rebuild.
        """
        self.indices = {}
        sort_sentences(self.sentences)

        indices: Indices = {}
        for i, sentence in enumerate(self.sentences):
            sentence = sentence.lower()
            log.debug("Indexing: %r", sentence)
            for word in split_words(sentence):
                insert_word_into_indices(indices, word, i)
        self.indices = indices
        if _verbose():
            print(f"[indexing done] sentences={len(self.sentences):,} words={len(indices):,}")

    # ---- Lookups ----
    def knows_sentence(self, sentence: str) -> bool:
        return sentence in self.sentences

    def knows_word(self, word: str) -> bool:
        return word in self.indices

    def sentences_with_word(self, word: str) -> List[str]:
        return [self.sentences[i] for i in self.indices.get(word, ())]

    def known_words(self, line: str) -> List[str]:
        # Repeated words stay repeated: they are more likely to be the pivot.
        return [w for w in split_words(line.lower()) if self.knows_word(w)]

    # ---- Learning ----
    def learn(self, line: str) -> bool:
        """
        Store every sentence of `line` that is not known yet.
        The index is updated in place for the new positions only (no resort).
        Returns True if at least one sentence was new.
        """
        learned_something = False
        for sentence in split_sentences(line.lower()):
            if self.knows_sentence(sentence):
                continue
            self.sentences.append(sentence)
            position = len(self.sentences) - 1
            for word in split_words(sentence):
                insert_word_into_indices(self.indices, word, position)
            learned_something = True
        return learned_something

    # ---- Responding ----
    def respond_to(self, line: str, rng: RandomSource) -> Optional[str]:
        """
        Build a reply to `line`, or None when nothing fits.

        A pivot is drawn from the known words of `line`; two sentences
        containing it are drawn (with replacement). The reply is the first
        one's words before the pivot followed by the second one's words from
        the pivot onwards.
        """
        known = self.known_words(line)
        if not known:
            return None

        pivot = pick_random(known, rng)
        candidates = self.sentences_with_word(pivot)
        if len(candidates) < 2:
            return None

        s1 = pick_random(candidates, rng)
        s2 = pick_random(candidates, rng)

        left = words_left_of_pivot(s1, pivot) or []
        right = words_right_of_pivot_inclusive(s2, pivot)
        if right is None:
            raise IndexConsistencyError(
                f"index lists {s2!r} under {pivot!r} but the word is not in it")

        left_text = " ".join(left)
        right_text = " ".join(right)
        if not left_text:
            return right_text
        return f"{left_text} {right_text}"


def sort_sentences(sentences: List[str]) -> None:
    sentences.sort(key=str.lower)


def insert_word_into_indices(indices: Indices, word: str, position: int) -> None:
    """Append `position` under `word` unless it is already listed there."""
    entry = indices.setdefault(word, [])
    if position not in entry:
        entry.append(position)


def pick_random(items: Sequence[T], rng: RandomSource) -> T:
    return items[rng.next_int() % len(items)]


def words_left_of_pivot(sentence: str, pivot: str) -> Optional[List[str]]:
    """Words before the first `pivot`; None if `pivot` is not a word of `sentence`."""
    words = split_words(sentence)
    try:
        i = words.index(pivot)
    except ValueError:
        return None
    return words[:i]


def words_right_of_pivot_inclusive(sentence: str, pivot: str) -> Optional[List[str]]:
    """Words from the first `pivot` to the end; None if `pivot` is missing."""
    words = split_words(sentence)
    try:
        i = words.index(pivot)
    except ValueError:
        return None
    return words[i:]
