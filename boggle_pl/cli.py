"""
Polish Boggle in the terminal.

Usage:
    boggle-pl [-v] [-b ROWSxCOLS] [DICTIONARY_FILE]

Examples:
    boggle-pl                       # 4x4 board, default dictionary
    boggle-pl -v -b 5x5             # 5x5 board with performance logs
    boggle-pl /path/to/dict.txt     # custom dictionary

The first run builds a compressed trie cache (.trie_cache_<hash>.bin) next
to the dictionary; later runs load it instead of re-reading the word list.
Editing the dictionary changes its hash and so invalidates the cache.
"""
import argparse
import logging
import re
import sys
from pathlib import Path

import colorama

from boggle_pl.cache import load_or_build_trie
from boggle_pl.dice import dice_for_board_size, generate_board
from boggle_pl.errors import BoggleError
from boggle_pl.metrics import StageTimer, format_duration
from boggle_pl.settings import settings
from boggle_pl.solver import find_words, sort_words
from boggle_pl.terminal import countdown_and_wait, print_board, print_links, print_words

BOARD_SIZE_RE = re.compile(r"^\s*(\d+)x(\d+)\s*$")


def parse_board_size(value: str) -> tuple[int, int]:
    match = BOARD_SIZE_RE.match(value)
    if not match:
        raise argparse.ArgumentTypeError(f"invalid board size {value!r}, use ROWSxCOLS (e.g. 5x5)")
    rows, cols = int(match.group(1)), int(match.group(2))
    if rows < 1 or cols < 1:
        raise argparse.ArgumentTypeError("board dimensions must be positive integers")
    return rows, cols


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boggle-pl",
        description="Polish Boggle: roll a board, play against the clock, then see every word.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="Board sizes: 4x4 classic (16 dice), 5x5 (25 dice), 6x6 (36 dice); other sizes also work.",
    )
    parser.add_argument("dictionary", nargs="?", default=None,
                        help=f"Word list, one word per line (default: {settings.DICTIONARY_PATH})")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show performance timings and cache operations")
    parser.add_argument("-b", "--board", type=parse_board_size, default=None, metavar="ROWSxCOLS",
                        help=f"Board size (default: {settings.BOARD_ROWS}x{settings.BOARD_COLS})")
    parser.add_argument("--min-length", type=int, default=settings.MIN_WORD_LENGTH,
                        help=f"Shortest word to report (default: {settings.MIN_WORD_LENGTH})")
    parser.add_argument("--no-cache", action="store_true",
                        help="Neither read nor write the trie cache")
    parser.add_argument("--no-wait", action="store_true",
                        help="Skip the countdown and show the words immediately")
    return parser


def print_performance(timer: StageTimer, cache_hit: bool):
    t = timer.timings
    print("\nPerformance:")
    print(f"- Generating board: {format_duration(t['board'])}")
    if "dictionary" in t:
        print(f"- Loading dictionary: {format_duration(t['dictionary'])}")
    print(f"- {'Loading trie (cached)' if cache_hit else 'Building trie'}: {format_duration(t['trie'])}")
    print(f"- Finding words:    {format_duration(t['solve'])}")
    print(f"- Total time:       {format_duration(t['board'] + t['trie'] + t['solve'])}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    if settings.DEBUG:
        logging.getLogger("boggle_pl").setLevel(logging.DEBUG)
    colorama.just_fix_windows_console()

    if args.min_length < 1:
        print("Error: --min-length must be a positive integer", file=sys.stderr)
        return 2

    rows, cols = args.board or (settings.BOARD_ROWS, settings.BOARD_COLS)
    dict_path = Path(args.dictionary).resolve() if args.dictionary else settings.DICTIONARY_PATH
    use_cache = settings.CACHE_ENABLED and not args.no_cache
    timer = StageTimer()

    try:
        with timer.stage("board"):
            dice = dice_for_board_size(rows * cols)
            board = generate_board(dice, rows, cols, settings.FACES_PER_DIE)
        print_board(board)

        with timer.stage("trie"):
            trie, cache_hit = load_or_build_trie(dict_path, settings.DICT_MIN_WORD_LENGTH, use_cache, timer)

        with timer.stage("solve"):
            results = sort_words(find_words(board, trie, args.min_length))
    except BoggleError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not args.no_wait:
        countdown_and_wait(settings.COUNTDOWN_SECONDS)

    if args.verbose:
        print_performance(timer, cache_hit)

    print("\nFound words (sorted short->long):")
    print_words(results)

    print("\nLinks:")
    print_links(results, settings.LINK_URL_TEMPLATE)
    return 0


if __name__ == "__main__":
    sys.exit(main())
