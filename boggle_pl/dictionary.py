import logging
import time
from pathlib import Path

from boggle_pl.solver import Trie

logger = logging.getLogger("boggle_pl")


def load_words(path: str | Path, min_length: int = 2) -> list[str]:
    """Read a newline-delimited word list.

    Lines are trimmed and uppercased; blank lines and words shorter than
    ``min_length`` are dropped. A missing file raises FileNotFoundError.
    """
    t0 = time.perf_counter()
    words = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            word = line.strip().upper()
            if word and len(word) >= min_length:
                words.append(word)
    elapsed = (time.perf_counter() - t0) * 1000
    logger.info("Loaded %d words from %s in %.1fms", len(words), path, elapsed)
    return words


def load_trie(path: str | Path, min_length: int = 2) -> Trie:
    return Trie.build(load_words(path, min_length))
