# parrot/engine.py
from __future__ import annotations

import os
import logging
from typing import Optional

from . import config as CFG
from .dictionary import Dictionary
from .rng import RandomSource, SystemRandomSource

log = logging.getLogger(__name__)


class Engine:
    """
    Thin orchestration layer that glues together:
      - the Dictionary (sentences + word index),
      - its JSON file on disk,
      - a random source for responses.

    Public API (used by CLI/Flask):
      * load(path):        load or create the dictionary, rebuild a stale index
      * respond_to(line):  spliced reply or None
      * learn(line):       store unseen sentences
      * process(line):     reply first, then learn (one chat turn)
      * learn_file(path):  learn every line of a text file
      * save() / stats() / shutdown()
    """

    # ------------- lifecycle -------------

    def __init__(
        self,
        *,
        rng: Optional[RandomSource] = None,
        learn: bool = CFG.LEARN,
        save_on_shutdown: bool = CFG.SAVE_ON_SHUTDOWN,
    ) -> None:
        self.dictionary: Optional[Dictionary] = None
        self.path: Optional[str] = None
        self.rng: RandomSource = rng if rng is not None else SystemRandomSource(CFG.RANDOM_SEED)
        self.learning = learn
        self.save_on_shutdown = save_on_shutdown

    # /* ~~~ Load the dictionary file (created if missing) ~~~ */
    def load(
        self,
        path: Optional[str] = None,
        *,
        rebuild: Optional[bool] = None,
        verbose: bool = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)
            os.environ[CFG.VERBOSE_ENV] = "1"

        path = path or CFG.DICTIONARY_PATH
        log.info("Loading dictionary from %s", path)
        d = Dictionary.load(path)

        # rebuild=None -> only when the index is missing (config permitting)
        if rebuild is None:
            rebuild = CFG.REBUILD_ON_LOAD and d.needs_index_rebuild()
        if rebuild:
            log.info("Rebuilding word index for %d sentences", len(d.sentences))
            d.rebuild_indices()

        self.dictionary = d
        self.path = path
        log.info("Engine load() complete: sentences=%d words=%d",
                 len(d.sentences), len(d.indices))

    # ------------- chat -------------

    def respond_to(self, line: str) -> Optional[str]:
        return self._require().respond_to(line, self.rng)

    def learn(self, line: str) -> bool:
        d = self._require()
        if not self.learning:
            return False
        return d.learn(line)

    # /* ~~~ One chat turn: answer with what we knew before, then learn ~~~ */
    def process(self, line: str) -> Optional[str]:
        reply = self.respond_to(line)
        self.learn(line)
        return reply

    def learn_file(self, path: str) -> int:
        """Learn every line of a UTF-8 text file; returns lines that taught something."""
        self._require()
        taught = 0
        with open(path, "r", encoding=CFG.ENCODING, errors="ignore") as f:
            for raw in f:
                line = raw.rstrip("\r\n")
                if line.strip() and self.learn(line):
                    taught += 1
        log.info("Learned from %s: %d new lines", path, taught)
        return taught

    def rebuild(self) -> None:
        self._require().rebuild_indices()

    def stats(self) -> dict:
        d = self._require()
        return {
            "sentences": len(d.sentences),
            "words": len(d.indices),
            "path": self.path,
            "learning": self.learning,
        }

    # ------------- persistence / teardown -------------

    def save(self) -> None:
        d = self._require()
        assert self.path is not None
        d.write_to_disk(self.path)

    # /* ~~~ Save (if configured) and drop the dictionary ~~~ */
    def shutdown(self) -> None:
        try:
            if self.dictionary is not None and self.save_on_shutdown:
                self.save()
        finally:
            self.dictionary = None
            log.info("Engine shutdown complete")

    # ------------- internals -------------

    def _require(self) -> Dictionary:
        if self.dictionary is None:
            raise RuntimeError("Engine not initialized. Call load() first.")
        return self.dictionary
