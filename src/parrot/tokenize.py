from __future__ import annotations
import re
from typing import List

# A sentence ends at whitespace that follows '.', '!' or '?'.
# Punctuation glued to the next character (urls, "e.g.x") never splits.
_SENTENCE_RE = re.compile(r"(?<=[.!?])\s+")
_WORD_RE = re.compile(r"[,.!?:\s]+")

def split_sentences(text: str) -> List[str]:
    """
    Split raw text into sentences, keeping their punctuation.

    Rules:
      * a boundary is a whitespace run right after one of . ! ?
      * segments are trimmed, empty segments are dropped
      * order is preserved
    """
    out: List[str] = []
    for seg in _SENTENCE_RE.split(text):
        seg = seg.strip()
        if seg:
            out.append(seg)
    return out

def split_words(text: str) -> List[str]:
    """Split on runs of , . ! ? : and whitespace. Case is left untouched."""
    return [w for w in _WORD_RE.split(text) if w]
