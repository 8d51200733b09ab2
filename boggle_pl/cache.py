"""On-disk trie cache.

The built trie is stored next to the dictionary as gzip-compressed JSON in a
file named after a hash of the dictionary's content, so an edited dictionary
never picks up a stale trie. The payload also records the word-length filter
the trie was built with, and a load asking for another filter misses.
Caching is best-effort: every failure is logged and treated as a miss.
"""
import gzip
import hashlib
import json
import logging
import os
import tempfile
import time
from contextlib import nullcontext
from datetime import datetime, timezone
from pathlib import Path

from boggle_pl.dictionary import load_words
from boggle_pl.errors import DictionaryUnavailable
from boggle_pl.metrics import StageTimer
from boggle_pl.solver import Trie, TrieNode

logger = logging.getLogger("boggle_pl")

CACHE_PREFIX = ".trie_cache_"
CACHE_SUFFIX = ".bin"
HASH_LENGTH = 16
# Word-length filter of caches written before the filter was recorded
DEFAULT_MIN_LENGTH = 2


def _cache_file(dict_path: Path, digest: str) -> Path:
    return dict_path.parent / f"{CACHE_PREFIX}{digest[:HASH_LENGTH]}{CACHE_SUFFIX}"


def content_cache_path(dict_path: str | Path) -> Path:
    """Cache path keyed by the SHA-256 of the dictionary's bytes."""
    dict_path = Path(dict_path)
    digest = hashlib.sha256(dict_path.read_bytes()).hexdigest()
    return _cache_file(dict_path, digest)


def legacy_cache_path(dict_path: str | Path) -> Path:
    """Older cache path keyed by the dictionary's path string."""
    dict_path = Path(dict_path)
    digest = hashlib.sha256(str(dict_path).encode("utf-8")).hexdigest()
    return _cache_file(dict_path, digest)


def trie_to_dict(trie: Trie) -> dict:
    def encode(node: TrieNode) -> dict:
        return {
            "children": {ch: encode(child) for ch, child in node.children.items()},
            "is_word": node.is_word,
        }

    return encode(trie.root)


def trie_from_dict(data: dict) -> Trie:
    """Rebuild a trie from ``trie_to_dict`` output. Raises ValueError if malformed."""

    def decode(obj) -> TrieNode:
        if not isinstance(obj, dict):
            raise ValueError(f"trie node must be an object, got {type(obj).__name__}")
        children = obj.get("children", {})
        if not isinstance(children, dict):
            raise ValueError("trie node children must be an object")
        node = TrieNode()
        node.is_word = bool(obj.get("is_word", False))
        for ch, child in children.items():
            if len(ch) != 1:
                raise ValueError(f"trie edge must be a single character, got {ch!r}")
            node.children[ch] = decode(child)
        return node

    root = decode(data)
    if root.is_word:
        raise ValueError("trie root cannot be a word")
    return Trie(root)


def _find_cache_file(dict_path: Path) -> Path | None:
    cache_path = content_cache_path(dict_path)
    if cache_path.exists():
        return cache_path

    cache_path = legacy_cache_path(dict_path)
    if not cache_path.exists():
        logger.info("Cache not found: %s", cache_path)
        return None

    if cache_path.stat().st_mtime < dict_path.stat().st_mtime:
        logger.info("Cache is stale, removing: %s", cache_path)
        cache_path.unlink()
        return None
    return cache_path


def load_cached_trie(dict_path: str | Path, min_length: int | None = None) -> Trie | None:
    """Return the cached trie for ``dict_path``, or None on any miss or error.

    When ``min_length`` is given, a cache built with a different word-length
    filter is a miss.
    """
    dict_path = Path(dict_path)
    if not dict_path.is_file():
        logger.info("Dictionary not found, skipping cache: %s", dict_path)
        return None
    try:
        cache_path = _find_cache_file(dict_path)
        if cache_path is None:
            return None

        logger.info("Loading trie from cache: %s", cache_path)
        t0 = time.perf_counter()
        with gzip.open(cache_path, "rt", encoding="utf-8") as f:
            payload = json.load(f)
        if not isinstance(payload, dict):
            raise ValueError("cache payload must be an object")
        built_with = payload.get("min_length", DEFAULT_MIN_LENGTH)
        if min_length is not None and built_with != min_length:
            logger.info("Cache built with min_length=%s, need %d: %s",
                        built_with, min_length, cache_path)
            return None
        trie = trie_from_dict(payload["trie"])
        logger.info("Cache loaded in %.1fms", (time.perf_counter() - t0) * 1000)
        return trie
    except (OSError, EOFError, ValueError, KeyError, TypeError, RecursionError) as e:
        logger.warning("Error loading cache for %s: %s", dict_path, e)
        return None


def _write_atomic(cache_path: Path, data: bytes) -> None:
    fd, tmp_name = tempfile.mkstemp(dir=cache_path.parent, prefix=cache_path.name, suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        tmp_path.replace(cache_path)
    finally:
        tmp_path.unlink(missing_ok=True)


def save_trie_to_cache(dict_path: str | Path, trie: Trie, min_length: int = DEFAULT_MIN_LENGTH) -> Path | None:
    """Write ``trie`` to the content-keyed cache file. Returns the path, or None on failure.

    ``min_length`` is the dictionary filter the trie was built with; it is
    stored so loads with another filter miss.
    """
    dict_path = Path(dict_path)
    try:
        cache_path = content_cache_path(dict_path)
        payload = {
            "trie": trie_to_dict(trie),
            "min_length": min_length,
            "created": datetime.now(timezone.utc).isoformat(),
            "source": str(dict_path),
        }

        logger.info("Creating cache file: %s", cache_path)
        t0 = time.perf_counter()
        compressed = gzip.compress(json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8"))
        _write_atomic(cache_path, compressed)
        elapsed = (time.perf_counter() - t0) * 1000

        dict_size = dict_path.stat().st_size
        ratio = round((1 - len(compressed) / dict_size) * 100) if dict_size else 0
        logger.info(
            "Cache created in %.1fms. Dictionary: %dKB, Cache: %dKB (%d%% smaller)",
            elapsed, round(dict_size / 1024), round(len(compressed) / 1024), ratio,
        )
        return cache_path
    except (OSError, ValueError, TypeError, RecursionError) as e:
        logger.warning("Error saving cache for %s: %s", dict_path, e)
        return None


def load_or_build_trie(
    dict_path: str | Path,
    min_length: int = DEFAULT_MIN_LENGTH,
    use_cache: bool = True,
    timer: StageTimer | None = None,
) -> tuple[Trie, bool]:
    """Load the trie from cache, falling back to building it from the dictionary.

    Returns (trie, cache_hit). Raises DictionaryUnavailable when the cache
    misses and the dictionary is missing or has no usable words. Dictionary
    reading is recorded as the "dictionary" stage of ``timer``.
    """
    dict_path = Path(dict_path)
    if use_cache:
        trie = load_cached_trie(dict_path, min_length)
        if trie is not None:
            logger.info("Skipped loading dictionary - using cached trie")
            return trie, True

    with timer.stage("dictionary") if timer else nullcontext():
        try:
            words = load_words(dict_path, min_length)
        except OSError as e:
            raise DictionaryUnavailable(f"Could not load dictionary from {dict_path}: {e}") from e
    if not words:
        raise DictionaryUnavailable(f"Could not load dictionary from {dict_path}: no usable words")

    logger.info("Building trie from dictionary...")
    trie = Trie.build(words)
    if use_cache:
        save_trie_to_cache(dict_path, trie, min_length)
    return trie, False
