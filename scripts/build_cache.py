"""
Pre-build the trie cache for one or more dictionaries.

Usage:
    python -m scripts.build_cache [DICTIONARY ...] [--min-length N] [--force]

Examples:
    python -m scripts.build_cache
    python -m scripts.build_cache wordlists/pl_sjp.pl.txt --force

Each dictionary gets a .trie_cache_<hash>.bin file next to it, so the first
game or server start does not pay for building the trie.
"""
import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on path
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from boggle_pl.cache import content_cache_path, load_cached_trie, save_trie_to_cache
from boggle_pl.dictionary import load_words
from boggle_pl.metrics import StageTimer, format_duration
from boggle_pl.settings import settings
from boggle_pl.solver import Trie

logger = logging.getLogger("boggle_pl")


def build_one(dict_path: Path, min_length: int, force: bool) -> bool:
    if not dict_path.is_file():
        print(f"Error: {dict_path} does not exist")
        return False

    if not force and load_cached_trie(dict_path, min_length) is not None:
        print(f"{dict_path}: cache up to date ({content_cache_path(dict_path).name})")
        return True

    timer = StageTimer()
    with timer.stage("load"):
        words = load_words(dict_path, min_length)
    if not words:
        print(f"Error: {dict_path} has no usable words")
        return False

    with timer.stage("build"):
        trie = Trie.build(words)
    with timer.stage("save"):
        cache_path = save_trie_to_cache(dict_path, trie, min_length)
    if cache_path is None:
        print(f"Error: could not write cache for {dict_path}")
        return False

    print(f"{dict_path}: {trie.word_count()} words, {trie.node_count()} nodes")
    for name, ms in timer.timings.items():
        print(f"  {name:<6} {format_duration(ms)}")
    print(f"  -> {cache_path} ({cache_path.stat().st_size // 1024}KB)")
    return True


def main():
    parser = argparse.ArgumentParser(description="Build the Boggle trie cache")
    parser.add_argument("dictionaries", nargs="*", type=Path, default=[settings.DICTIONARY_PATH],
                        help=f"Word lists to cache (default: {settings.DICTIONARY_PATH})")
    parser.add_argument("--min-length", type=int, default=settings.DICT_MIN_WORD_LENGTH,
                        help=f"Drop shorter words (default: {settings.DICT_MIN_WORD_LENGTH})")
    parser.add_argument("--force", action="store_true",
                        help="Rebuild even when a valid cache exists")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    ok = all([build_one(path, args.min_length, args.force) for path in args.dictionaries])
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
