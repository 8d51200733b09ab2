import random
from collections import Counter

import pytest

from boggle_pl.dice import (
    DEFAULT_POLISH_DICE,
    EXTENDED_POLISH_DICE,
    dice_for_board_size,
    generate_board,
    shuffle_in_place,
)
from boggle_pl.errors import InvalidDiceConfiguration, InvalidDie


def _assign_faces_to_dice(faces: list[str], dice: list[list[str]]) -> bool:
    """True if every face can come from a distinct die (bipartite matching)."""
    owner: dict[int, int] = {}

    def try_assign(face_idx, seen):
        for die_idx, die in enumerate(dice):
            if faces[face_idx] in die and die_idx not in seen:
                seen.add(die_idx)
                if die_idx not in owner or try_assign(owner[die_idx], seen):
                    owner[die_idx] = face_idx
                    return True
        return False

    return all(try_assign(i, set()) for i in range(len(faces)))


def test_catalog_sizes():
    assert len(DEFAULT_POLISH_DICE) == 16
    assert len(EXTENDED_POLISH_DICE) == 36
    assert EXTENDED_POLISH_DICE[:16] == DEFAULT_POLISH_DICE
    assert all(len(die) == 6 for die in EXTENDED_POLISH_DICE)


@pytest.mark.parametrize("cells", [1, 9, 16, 20, 25, 36, 49, 100])
def test_dice_for_board_size_count(cells):
    assert len(dice_for_board_size(cells)) == cells


def test_dice_for_board_size_policy():
    assert dice_for_board_size(16) == [list(d) for d in DEFAULT_POLISH_DICE]
    assert dice_for_board_size(25) == [list(d) for d in EXTENDED_POLISH_DICE[:25]]
    large = dice_for_board_size(49)
    assert large[:36] == [list(d) for d in EXTENDED_POLISH_DICE]
    assert large[36:] == [list(d) for d in EXTENDED_POLISH_DICE[:13]]


def test_dice_for_board_size_returns_copies():
    dice = dice_for_board_size(16)
    dice[0][0] = "X"
    assert DEFAULT_POLISH_DICE[0][0] == "A"


def test_dice_for_board_size_rejects_empty_board():
    with pytest.raises(InvalidDiceConfiguration):
        dice_for_board_size(0)


@pytest.mark.parametrize("rows,cols", [(4, 4), (5, 5), (6, 6), (2, 8), (1, 1)])
def test_generate_board_shape(rows, cols):
    board = generate_board(dice_for_board_size(rows * cols), rows, cols, rng=random.Random(rows * cols))
    assert len(board) == rows
    assert all(len(row) == cols for row in board)


def test_generate_board_uses_each_die_once():
    dice = dice_for_board_size(16)
    for seed in range(20):
        board = generate_board(dice, 4, 4, rng=random.Random(seed))
        faces = [face for row in board for face in row]
        assert _assign_faces_to_dice(faces, dice)


def test_generate_board_distinct_dice_are_all_used():
    dice = [[letter] * 6 for letter in "ABCDEFGHI"]
    board = generate_board(dice, 3, 3, rng=random.Random(5))
    assert sorted(face for row in board for face in row) == list("ABCDEFGHI")


def test_generate_board_does_not_mutate_input():
    dice = dice_for_board_size(16)
    snapshot = [list(die) for die in dice]
    generate_board(dice, 4, 4, rng=random.Random(1))
    assert dice == snapshot


def test_generate_board_is_immutable():
    board = generate_board(dice_for_board_size(4), 2, 2, rng=random.Random(1))
    assert isinstance(board, tuple)
    assert all(isinstance(row, tuple) for row in board)


def test_generate_board_default_rng():
    board = generate_board(dice_for_board_size(16))
    assert len(board) == 4


def test_wrong_die_count():
    with pytest.raises(InvalidDiceConfiguration):
        generate_board(dice_for_board_size(15), 4, 4)


def test_wrong_face_count():
    dice = dice_for_board_size(16)
    dice[7] = dice[7][:5]
    with pytest.raises(InvalidDie):
        generate_board(dice, 4, 4)


def test_custom_face_count():
    dice = [["A", "B", "C", "D"]] * 4
    board = generate_board(dice, 2, 2, faces_per_die=4, rng=random.Random(2))
    assert all(face in "ABCD" for row in board for face in row)
    with pytest.raises(InvalidDie):
        generate_board(dice, 2, 2)


def test_string_die_is_rejected():
    dice = ["ABCDEF"] * 4
    with pytest.raises(InvalidDie):
        generate_board(dice, 2, 2)


@pytest.mark.parametrize("rows,cols", [(0, 4), (4, 0), (-1, -1)])
def test_non_positive_dimensions(rows, cols):
    with pytest.raises(InvalidDiceConfiguration):
        generate_board([], rows, cols)


class _RecordingRng:
    def __init__(self, seed):
        self._rng = random.Random(seed)
        self.calls: list[tuple[int, int]] = []

    def randrange(self, n):
        value = self._rng.randrange(n)
        self.calls.append((n, value))
        return value


def test_rng_stays_in_range():
    rng = _RecordingRng(3)
    generate_board(dice_for_board_size(25), 5, 5, rng=rng)
    shuffle_calls, roll_calls = rng.calls[:24], rng.calls[24:]
    # Fisher-Yates draws j in [0, i] for i from last index down to 1
    assert [n for n, _ in shuffle_calls] == list(range(25, 1, -1))
    assert len(roll_calls) == 25
    assert all(n == 6 for n, _ in roll_calls)
    assert all(0 <= value < n for n, value in rng.calls)


def test_shuffle_is_a_permutation():
    items = list(range(50))
    shuffle_in_place(items, random.Random(9))
    assert sorted(items) == list(range(50))


def test_shuffle_is_roughly_uniform():
    rng = random.Random(1234)
    counts = Counter(tuple(shuffle_in_place([0, 1, 2], rng)) for _ in range(6000))
    assert len(counts) == 6
    assert all(800 < count < 1200 for count in counts.values())
