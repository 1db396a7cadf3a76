# parrot/DB/storage.py
from __future__ import annotations
import json
import logging
import os
from typing import TYPE_CHECKING, Any, Dict, List

from ..config import ENCODING
from ..errors import DictionaryFormatError, DictionaryIOError, DictionarySerializationError

if TYPE_CHECKING:  # pragma: no cover
    from ..dictionary import Dictionary

log = logging.getLogger(__name__)


def save_dictionary(dictionary: "Dictionary", path: str) -> None:
    """
    Write the dictionary as JSON:
        {"sentences": [str, ...], "indices": {word: [int, ...], ...}}
    The document is encoded in memory, written to <path>.tmp and then moved
    into place. A failed write removes <path>.tmp.
    """
    doc = {"sentences": dictionary.sentences, "indices": dictionary.indices}
    try:
        data = json.dumps(doc, ensure_ascii=False).encode(ENCODING)
    except (TypeError, ValueError) as e:
        # ValueError covers UnicodeEncodeError (lone surrogates)
        raise DictionarySerializationError(path, str(e)) from e

    tmp = f"{path}.tmp"
    try:
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        with open(tmp, "wb") as f:
            f.write(data)
        os.replace(tmp, path)
    except OSError as e:
        _discard(tmp)
        raise DictionaryIOError(path, "write") from e
    log.info("Saved dictionary to %s: sentences=%d words=%d",
             path, len(dictionary.sentences), len(dictionary.indices))


def load_dictionary(path: str) -> "Dictionary":
    """Read and validate a JSON dictionary written by save_dictionary()."""
    # Lazy import to avoid a circular import with dictionary.py
    from ..dictionary import Dictionary

    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise DictionaryIOError(path, "read") from e

    try:
        doc = json.loads(raw.decode(ENCODING))
    except UnicodeDecodeError as e:
        raise DictionaryFormatError(path, f"not {ENCODING} text ({e})") from e
    except (ValueError, RecursionError) as e:
        raise DictionaryFormatError(path, f"invalid JSON ({e})") from e

    sentences = _check_sentences(path, doc)
    indices = _check_indices(path, doc, len(sentences))
    log.info("Loaded dictionary from %s: sentences=%d words=%d",
             path, len(sentences), len(indices))
    return Dictionary(sentences=sentences, indices=indices)


def _discard(tmp: str) -> None:
    try:
        os.remove(tmp)
    except FileNotFoundError:
        pass
    except OSError:
        log.warning("Could not remove temporary file %s", tmp)


# ---- shape checks ----

def _is_position(v: Any) -> bool:
    # bool is a subclass of int; JSON true/false are not positions
    return isinstance(v, int) and not isinstance(v, bool) and v >= 0


def _check_sentences(path: str, doc: Any) -> List[str]:
    if not isinstance(doc, dict):
        raise DictionaryFormatError(path, "top level must be an object")
    if "sentences" not in doc:
        raise DictionaryFormatError(path, "missing 'sentences'")
    sentences = doc["sentences"]
    if not isinstance(sentences, list) or not all(isinstance(s, str) for s in sentences):
        raise DictionaryFormatError(path, "'sentences' must be a list of strings")
    return sentences


def _check_indices(path: str, doc: Dict[str, Any], n_sentences: int) -> Dict[str, List[int]]:
    # Older files may carry sentences only; the caller rebuilds the index.
    indices = doc.get("indices", {})
    if not isinstance(indices, dict):
        raise DictionaryFormatError(path, "'indices' must be an object")
    for word, positions in indices.items():
        if not isinstance(positions, list) or not all(_is_position(p) for p in positions):
            raise DictionaryFormatError(
                path, f"index entry {word!r} must be a list of non-negative integers")
        for p in positions:
            if p >= n_sentences:
                raise DictionaryFormatError(
                    path, f"index entry {word!r} points past the last sentence ({p})")
    return indices
