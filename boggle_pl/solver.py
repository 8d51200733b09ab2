from __future__ import annotations

import logging
from typing import Iterable, Iterator, Sequence

from boggle_pl.errors import InvalidBoard

logger = logging.getLogger("boggle_pl")

DEFAULT_MIN_LENGTH = 3


class TrieNode:
    __slots__ = ("children", "is_word")

    def __init__(self):
        self.children: dict[str, TrieNode] = {}
        self.is_word: bool = False


class Trie:
    """Character-indexed prefix tree over uppercase words."""

    def __init__(self, root: TrieNode | None = None):
        self.root = root or TrieNode()

    def insert(self, word: str) -> TrieNode:
        node = self.root
        for ch in word:
            if ch not in node.children:
                node.children[ch] = TrieNode()
            node = node.children[ch]
        node.is_word = True
        return node

    @classmethod
    def build(cls, words: Iterable[str]) -> Trie:
        """Build a trie from raw dictionary entries.

        Entries are trimmed and uppercased; blank entries are skipped. An empty
        iterable gives a trie whose root has no children.
        """
        trie = cls()
        for raw in words:
            if not raw or not isinstance(raw, str):
                continue
            word = raw.strip().upper()
            if word:
                trie.insert(word)
        return trie

    def advance(self, segment: str, node: TrieNode | None = None) -> TrieNode | None:
        return advance_by_segment(self.root if node is None else node, segment)

    def contains(self, word: str) -> bool:
        node = advance_by_segment(self.root, word)
        return node is not None and node.is_word

    def __contains__(self, word: str) -> bool:
        return self.contains(word)

    def iter_words(self) -> Iterator[str]:
        stack: list[tuple[TrieNode, str]] = [(self.root, "")]
        while stack:
            node, prefix = stack.pop()
            if node.is_word:
                yield prefix
            for ch, child in node.children.items():
                stack.append((child, prefix + ch))

    def word_count(self) -> int:
        return sum(1 for _ in self.iter_words())

    def node_count(self) -> int:
        count = 0
        stack = [self.root]
        while stack:
            node = stack.pop()
            count += 1
            stack.extend(node.children.values())
        return count


def build_trie(words: Iterable[str]) -> Trie:
    return Trie.build(words)


def advance_by_segment(node: TrieNode, segment: str) -> TrieNode | None:
    """Descend one trie level per character of ``segment``.

    A tile either matches in full or not at all: the first missing child
    returns None.
    """
    current = node
    for ch in segment.upper():
        current = current.children.get(ch)
        if current is None:
            return None
    return current


def validate_board(board: Sequence[Sequence[str]]) -> tuple[int, int]:
    """Return (rows, cols) or raise InvalidBoard."""
    if isinstance(board, str) or not isinstance(board, Sequence) or not board:
        raise InvalidBoard("board must be a non-empty matrix")

    cols = None
    for r, row in enumerate(board):
        if isinstance(row, str) or not isinstance(row, Sequence) or len(row) == 0:
            raise InvalidBoard(f"row {r} must be a non-empty sequence of faces")
        if cols is None:
            cols = len(row)
        elif len(row) != cols:
            raise InvalidBoard(f"row {r} has {len(row)} cells, expected {cols}")
        for c, face in enumerate(row):
            if not isinstance(face, str) or not face:
                raise InvalidBoard(f"cell ({r}, {c}) must be a non-empty string, got {face!r}")
    return len(board), cols


def find_words(board: Sequence[Sequence[str]], trie: Trie, min_length: int = DEFAULT_MIN_LENGTH) -> set[str]:
    """Find every dictionary word spelled by a path of adjacent, unused cells.

    Paths may move in all 8 directions. A branch is pruned as soon as the
    trie has no continuation for the cell's face.
    """
    if isinstance(min_length, bool) or not isinstance(min_length, int) or min_length < 1:
        raise ValueError(f"min_length must be a positive integer, got {min_length!r}")

    rows, cols = validate_board(board)
    faces = [[face.upper() for face in row] for row in board]
    found: set[str] = set()
    visited = [[False] * cols for _ in range(rows)]

    def dfs(r: int, c: int, node: TrieNode, word: str):
        if r < 0 or r >= rows or c < 0 or c >= cols:
            return
        if visited[r][c]:
            return

        face = faces[r][c]
        next_node = advance_by_segment(node, face)
        if next_node is None:
            return

        next_word = word + face
        if next_node.is_word and len(next_word) >= min_length:
            found.add(next_word)

        if not next_node.children:
            return

        visited[r][c] = True
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                dfs(r + dr, c + dc, next_node, next_word)
        visited[r][c] = False

    for r in range(rows):
        for c in range(cols):
            dfs(r, c, trie.root, "")

    return found


def sort_words(words: Iterable[str]) -> list[str]:
    """Shortest first, then alphabetical."""
    return sorted(words, key=lambda w: (len(w), w))


def solve(
    board: Sequence[Sequence[str]],
    dictionary: Iterable[str],
    min_length: int = DEFAULT_MIN_LENGTH,
    max_results: int = 0,
) -> list[str]:
    """Build a trie from ``dictionary`` and return the board's words, sorted."""
    trie = Trie.build(dictionary or [])
    result = sort_words(find_words(board, trie, min_length))
    logger.info("Found %d words", len(result))
    return result[:max_results] if max_results > 0 else result
