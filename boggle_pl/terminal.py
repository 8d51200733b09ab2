import math
import shutil
import sys
import threading
from typing import Sequence, TextIO

from colorama import Fore, Style

COLUMN_COLORS = (Fore.GREEN, Fore.BLUE, Fore.YELLOW, Fore.MAGENTA, Fore.CYAN)


def format_board(board: Sequence[Sequence[str]]) -> str:
    lines = ["Board:"]
    for row in board:
        lines.append("  " + " ".join(face.ljust(2) for face in row))
    return "\n".join(lines)


def format_columns(items: Sequence[str], width: int | None = None, color: bool = True) -> list[str]:
    """Lay ``items`` out row by row in as many columns as fit ``width``.

    Each column gets its own color, cycling through COLUMN_COLORS.
    """
    if not items:
        return ["(none)"]

    width = width or shutil.get_terminal_size((80, 24)).columns
    max_len = max(len(item) for item in items)
    cols = max(1, width // (max_len + 3))
    rows = math.ceil(len(items) / cols)

    lines = []
    for r in range(rows):
        cells = []
        for c in range(cols):
            idx = r * cols + c
            if idx >= len(items):
                break
            text = items[idx].ljust(max_len)
            if color:
                text = f"{COLUMN_COLORS[c % len(COLUMN_COLORS)]}{text}{Style.RESET_ALL}"
            cells.append(text)
        lines.append("  ".join(cells).rstrip())
    return lines


def print_board(board: Sequence[Sequence[str]], stream: TextIO | None = None):
    print(format_board(board), file=stream or sys.stdout)


def print_words(words: Sequence[str], stream: TextIO | None = None, width: int | None = None, color: bool = True):
    for line in format_columns(words, width, color):
        print(line, file=stream or sys.stdout)


def print_links(
    words: Sequence[str],
    url_template: str = "http://sjp.pl/{word}",
    stream: TextIO | None = None,
    width: int | None = None,
    color: bool = True,
):
    urls = [url_template.format(word=word) for word in words]
    print_words(urls, stream, width, color)


def format_clock(seconds: int) -> str:
    minutes, seconds = divmod(max(seconds, 0), 60)
    return f"{minutes}:{seconds:02d}"


def wait_for_key(stdin: TextIO | None = None):
    """Block until a key is pressed (or a line is entered when stdin is not a TTY)."""
    stdin = stdin or sys.stdin
    if not stdin.isatty():
        stdin.readline()
        return

    try:
        import termios
        import tty
    except ImportError:  # Windows consoles
        stdin.readline()
        return

    fd = stdin.fileno()
    old_attrs = termios.tcgetattr(fd)
    try:
        tty.setcbreak(fd)
        stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old_attrs)


def countdown_and_wait(seconds: int, stream: TextIO | None = None, stdin: TextIO | None = None):
    """Show a m:ss countdown on one line until a key is pressed.

    Reaching zero stops the clock but still waits for the key.
    """
    stream = stream or sys.stdout
    stop = threading.Event()

    def tick():
        remaining = seconds
        while True:
            stream.write(f"\r{format_clock(remaining)}")
            stream.flush()
            remaining -= 1
            if remaining < 0:
                stream.write("\n")
                stream.flush()
                return
            if stop.wait(1.0):
                return

    ticker = threading.Thread(target=tick, name="countdown", daemon=True)
    ticker.start()
    try:
        wait_for_key(stdin)
    finally:
        stop.set()
        ticker.join()
        stream.write("\n")
        stream.flush()
