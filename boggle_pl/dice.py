import logging
import secrets
from typing import Sequence

from boggle_pl.errors import InvalidDiceConfiguration, InvalidDie

logger = logging.getLogger("boggle_pl")

Die = Sequence[str]
Board = tuple[tuple[str, ...], ...]

FACES_PER_DIE = 6

# Polish-oriented set, not an official distribution. Digraphs sit on a
# single face the same way "Qu" does in English Boggle.
DEFAULT_POLISH_DICE: tuple[tuple[str, ...], ...] = (
    ("A", "A", "Ą", "E", "I", "O"),
    ("N", "R", "S", "T", "L", "K"),
    ("E", "E", "A", "O", "I", "Y"),
    ("M", "N", "R", "D", "T", "P"),
    ("S", "Z", "SZ", "CZ", "DZ", "RZ"),
    ("C", "H", "CH", "K", "L", "W"),
    ("P", "B", "D", "G", "M", "T"),
    ("Ł", "Ś", "Ź", "Ż", "Ć", "Ń"),
    ("U", "Ó", "Y", "E", "A", "I"),
    ("O", "O", "A", "E", "I", "U"),
    ("J", "R", "L", "N", "S", "Z"),
    ("K", "G", "H", "W", "F", "R"),
    ("Z", "Z", "S", "R", "N", "L"),
    ("D", "DŹ", "DŻ", "DZ", "R", "T"),
    ("C", "CZ", "SZ", "RZ", "CH", "Ż"),
    ("E", "A", "I", "O", "U", "Y"),
)

# 36 dice: enough for a 6x6 board without repeats.
EXTENDED_POLISH_DICE: tuple[tuple[str, ...], ...] = DEFAULT_POLISH_DICE + (
    ("A", "Ą", "E", "Ę", "I", "O"),
    ("Ó", "U", "Y", "A", "E", "I"),
    ("B", "C", "D", "F", "G", "H"),
    ("J", "K", "L", "M", "N", "P"),
    ("R", "S", "T", "W", "Z", "Ż"),
    ("CH", "CZ", "DZ", "DŻ", "DŹ", "RZ"),
    ("SZ", "Ś", "Ź", "Ć", "Ń", "Ł"),
    ("A", "E", "I", "O", "U", "Y"),
    ("B", "C", "D", "F", "G", "H"),
    ("J", "K", "L", "M", "N", "P"),
    ("R", "S", "T", "W", "Z", "Ż"),
    ("A", "Ą", "E", "Ę", "I", "O"),
    ("Ó", "U", "Y", "A", "E", "I"),
    ("CH", "CZ", "DZ", "DŻ", "DŹ", "RZ"),
    ("SZ", "Ś", "Ź", "Ć", "Ń", "Ł"),
    ("B", "C", "D", "F", "G", "H"),
    ("J", "K", "L", "M", "N", "P"),
    ("R", "S", "T", "W", "Z", "Ż"),
    ("A", "E", "I", "O", "U", "Y"),
    ("B", "C", "D", "F", "G", "H"),
)

_system_rng = secrets.SystemRandom()


def dice_for_board_size(total_cells: int) -> list[list[str]]:
    """Pick a die set with exactly ``total_cells`` dice.

    Boards up to 4x4 draw from the classic set, up to 6x6 from the extended
    set, and anything larger repeats the extended set.
    """
    if total_cells < 1:
        raise InvalidDiceConfiguration(f"board must have at least one cell, got {total_cells}")

    if total_cells <= len(DEFAULT_POLISH_DICE):
        catalog = DEFAULT_POLISH_DICE[:total_cells]
    elif total_cells <= len(EXTENDED_POLISH_DICE):
        catalog = EXTENDED_POLISH_DICE[:total_cells]
    else:
        repeats = -(-total_cells // len(EXTENDED_POLISH_DICE))
        catalog = (EXTENDED_POLISH_DICE * repeats)[:total_cells]
    return [list(die) for die in catalog]


def shuffle_in_place(items: list, rng=None) -> list:
    """Fisher-Yates shuffle. ``rng`` only needs ``randrange``."""
    rng = rng or _system_rng
    for i in range(len(items) - 1, 0, -1):
        j = rng.randrange(i + 1)
        items[i], items[j] = items[j], items[i]
    return items


def generate_board(
    dice: Sequence[Die],
    rows: int = 4,
    cols: int = 4,
    faces_per_die: int = FACES_PER_DIE,
    rng=None,
) -> Board:
    """Shuffle the dice, roll each one and lay the faces out row-major.

    The caller's die set is never modified. Raises InvalidDiceConfiguration
    when the number of dice does not match ``rows * cols`` and InvalidDie
    when a die has the wrong number of faces.
    """
    if rows < 1 or cols < 1:
        raise InvalidDiceConfiguration(f"board dimensions must be positive, got {rows}x{cols}")

    total_cells = rows * cols
    if len(dice) != total_cells:
        raise InvalidDiceConfiguration(
            f"dice must be a sequence of {total_cells} dice "
            f"(each with {faces_per_die} faces), got {len(dice)}"
        )

    dice_copy = []
    for idx, faces in enumerate(dice):
        if isinstance(faces, str) or len(faces) != faces_per_die:
            raise InvalidDie(f"die #{idx} must have exactly {faces_per_die} faces: {faces!r}")
        dice_copy.append(tuple(faces))

    rng = rng or _system_rng
    shuffle_in_place(dice_copy, rng)

    faces = [die[rng.randrange(faces_per_die)] for die in dice_copy]
    board = tuple(tuple(faces[r * cols:(r + 1) * cols]) for r in range(rows))
    logger.debug("Generated %dx%d board: %s", rows, cols, " / ".join(" ".join(row) for row in board))
    return board
